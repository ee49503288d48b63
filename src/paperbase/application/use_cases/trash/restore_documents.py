"""Restore documents use case."""

import logging

from paperbase.application.dto.document_dto import TrashOperationResult
from paperbase.application.ports import BlobStore
from paperbase.domain.clock import Clock, utcnow
from paperbase.domain.value_objects import ContentDigest, LifecycleState

logger = logging.getLogger(__name__)


class RestoreDocumentsUseCase:
    """Return trashed documents to active before their retention elapses."""

    def __init__(
        self,
        unit_of_work_factory: type,
        blob_store: BlobStore,
        clock: Clock = utcnow,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._blob_store = blob_store
        self._clock = clock

    async def execute(self, project_id: str, document_ids: list[str]) -> TrashOperationResult:
        """Restore each trashed id; active, unknown and expired ids are skipped.

        A trashed document whose blob is gone stays in the trash and is
        reported in ``blob_missing``.
        """
        result = TrashOperationResult()
        now = self._clock()
        async with self._uow_factory() as uow:
            for document_id in dict.fromkeys(document_ids):
                document = await uow.documents.get(project_id, document_id)
                if document is None or document.state_at(now) is not LifecycleState.TRASHED:
                    result.skipped.append(document_id)
                    continue
                if document.file_digest and not await self._blob_store.exists(
                    ContentDigest(document.file_digest)
                ):
                    logger.warning(
                        "Not restoring %s/%s: blob %s was already collected",
                        project_id,
                        document_id,
                        document.file_digest,
                    )
                    result.blob_missing.append(document_id)
                    continue
                document.restore(now)
                await uow.documents.update(document)
                result.updated.append(document_id)
        return result
