"""Get document use case."""

from paperbase.application.dto.document_dto import DocumentOutput
from paperbase.domain.clock import Clock, utcnow
from paperbase.domain.exceptions import NotFound
from paperbase.domain.value_objects import LifecycleState


class GetDocumentUseCase:
    """Get an active or trashed document of a project."""

    def __init__(self, unit_of_work_factory: type, clock: Clock = utcnow) -> None:
        self._uow_factory = unit_of_work_factory
        self._clock = clock

    async def execute(self, project_id: str, document_id: str) -> DocumentOutput:
        async with self._uow_factory() as uow:
            document = await uow.documents.get(project_id, document_id)
        if document is None or document.state_at(self._clock()) is LifecycleState.EXPIRED:
            raise NotFound("Document", document_id)
        return DocumentOutput.from_entity(document)
