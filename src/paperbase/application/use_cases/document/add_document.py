"""Add document use case."""

import asyncio
import logging
from pathlib import PurePath
from uuid import uuid4

from paperbase.application.dto.document_dto import AddDocumentInput, DocumentOutput
from paperbase.application.ports import BlobStore, KnowledgeCache, MetadataExtractor
from paperbase.application.use_cases.trash.collect_garbage import CollectGarbageUseCase
from paperbase.domain.clock import Clock, utcnow
from paperbase.domain.entities import Document, Knowledge
from paperbase.domain.exceptions import ExtractionFailed, MetadataInsertFailed, ValidationError
from paperbase.domain.value_objects import ContentDigest, StorageLimits, compute_digest

logger = logging.getLogger(__name__)


def _title_from_filename(filename: str) -> str:
    return PurePath(filename).stem or filename


class AddDocumentUseCase:
    """Add a file to a project: dedup, limits, upload, knowledge, registry."""

    def __init__(
        self,
        unit_of_work_factory: type,
        blob_store: BlobStore,
        knowledge_cache: KnowledgeCache,
        metadata_extractor: MetadataExtractor,
        storage_limits: StorageLimits,
        collect_garbage: CollectGarbageUseCase | None = None,
        clock: Clock = utcnow,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._blob_store = blob_store
        self._knowledge_cache = knowledge_cache
        self._extractor = metadata_extractor
        self._storage_limits = storage_limits
        self._collect_garbage = collect_garbage
        self._clock = clock

    async def execute(self, input_data: AddDocumentInput) -> DocumentOutput:
        """Add document to project.

        Bytes already stored under the same digest are reused without an upload
        and without counting against the quota. Extraction runs at most once per
        digest; its failure leaves the document without enrichment.
        """
        if not input_data.data:
            raise ValidationError("File is empty")

        if self._collect_garbage is not None:
            await self._collect_garbage.execute(input_data.project_id)

        digest = await asyncio.to_thread(compute_digest, input_data.data)

        if await self._blob_store.exists(digest):
            logger.debug("Reusing stored blob %s", digest)
        else:
            usage = await self._blob_store.usage()
            self._storage_limits.check_upload(len(input_data.data), usage)
            try:
                await self._blob_store.put(digest, input_data.data, input_data.media_type)
            except MetadataInsertFailed as e:
                logger.warning("Continuing upload of %s without a blob record: %s", digest, e)

        knowledge = await self._resolve_knowledge(digest, input_data.data, input_data.filename)

        title = _title_from_filename(input_data.filename)
        metadata: dict = {}
        if knowledge is not None:
            metadata = knowledge.to_document_metadata()
            title = knowledge.title or title

        document = Document(
            id=input_data.document_id or str(uuid4()),
            project_id=input_data.project_id,
            file_digest=digest.value,
            title=title,
            file_name=input_data.filename,
            media_type=input_data.media_type,
            added_at=self._clock(),
            metadata=metadata,
        )
        async with self._uow_factory() as uow:
            await uow.documents.create(document)

        return DocumentOutput.from_entity(document)

    async def _resolve_knowledge(
        self, digest: ContentDigest, data: bytes, filename: str
    ) -> Knowledge | None:
        """Cached knowledge for the digest, extracting and caching it on a miss."""
        if await self._knowledge_cache.has(digest):
            entry = await self._knowledge_cache.get(digest)
            return entry.knowledge
        try:
            knowledge = await self._extractor.extract(data, filename)
        except ExtractionFailed as e:
            logger.warning("Metadata extraction failed for %s (%s): %s", filename, digest, e)
            return None
        entry = await self._knowledge_cache.put(digest, knowledge)
        return entry.knowledge
