"""Delete (trash) documents use case."""

import logging

from paperbase.application.dto.document_dto import TrashOperationResult
from paperbase.domain.clock import Clock, utcnow

logger = logging.getLogger(__name__)


class DeleteDocumentsUseCase:
    """Move documents to the trash for the retention period."""

    def __init__(self, unit_of_work_factory: type, clock: Clock = utcnow) -> None:
        self._uow_factory = unit_of_work_factory
        self._clock = clock

    async def execute(self, project_id: str, document_ids: list[str]) -> TrashOperationResult:
        """Trash each active id. Already trashed documents keep their markers and are skipped."""
        result = TrashOperationResult()
        now = self._clock()
        async with self._uow_factory() as uow:
            for document_id in dict.fromkeys(document_ids):
                document = await uow.documents.get(project_id, document_id)
                if document is None or not document.trash(now):
                    result.skipped.append(document_id)
                    continue
                await uow.documents.update(document)
                result.updated.append(document_id)
        logger.debug("Trashed %d document(s) in %s", len(result.updated), project_id)
        return result
