"""Collect garbage use case."""

import logging

from paperbase.application.dto.garbage_collection import GarbageCollectionReport
from paperbase.application.ports import (
    BlobStore,
    KnowledgeCache,
    ReferenceChecker,
    ReferenceStatus,
)
from paperbase.domain.clock import Clock, utcnow
from paperbase.domain.entities import Document
from paperbase.domain.value_objects import ContentDigest

logger = logging.getLogger(__name__)


def _document_key(document: Document) -> str:
    return f"{document.project_id}/{document.id}"


class CollectGarbageUseCase:
    """Hard-delete documents whose retention has elapsed.

    Shared blobs are deleted only when no active document anywhere references
    them. A document whose blob could not be resolved stays in the registry
    and is retried on the next sweep. Errors are reported, never raised.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        blob_store: BlobStore,
        knowledge_cache: KnowledgeCache,
        reference_checker: ReferenceChecker,
        clock: Clock = utcnow,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._blob_store = blob_store
        self._knowledge_cache = knowledge_cache
        self._reference_checker = reference_checker
        self._clock = clock

    async def execute(self, project_id: str | None = None) -> GarbageCollectionReport:
        """Run one sweep, optionally limited to a project."""
        report = GarbageCollectionReport()
        now = self._clock()
        try:
            async with self._uow_factory() as uow:
                expired = await uow.documents.list_expired(now, project_id)
        except Exception as e:
            logger.warning("Garbage collection could not list expired documents: %s", e)
            report.failures["*"] = str(e)
            return report

        report.expired = len(expired)
        for document in expired:
            key = _document_key(document)
            try:
                await self._collect(document, report)
            except Exception as e:
                logger.warning("Garbage collection failed for %s: %s", key, e)
                report.failures[key] = str(e)

        if report.removed:
            logger.info(
                "Garbage collection removed %d document(s), deleted %d blob(s)",
                report.removed_count,
                len(report.blobs_deleted),
            )
        return report

    async def _collect(self, document: Document, report: GarbageCollectionReport) -> None:
        key = _document_key(document)
        if document.file_digest:
            digest = ContentDigest(document.file_digest)
            status = await self._reference_checker.check(
                digest, exclude=[(document.project_id, document.id)]
            )
            if status is ReferenceStatus.UNKNOWN:
                logger.warning("Keeping %s: references to blob %s are unknown", key, digest)
                report.failures[key] = "reference status unknown"
                return
            if status is ReferenceStatus.UNREFERENCED:
                await self._blob_store.delete(digest)
                await self._knowledge_cache.delete(digest)
                report.blobs_deleted.append(digest.value)
            else:
                report.blobs_retained.append(digest.value)

        async with self._uow_factory() as uow:
            await uow.annotations.delete_by_document(document.project_id, document.id)
            await uow.documents.hard_delete(document.project_id, document.id)
        report.removed.append(key)
