"""List documents use case."""

from paperbase.application.dto.document_dto import DocumentOutput
from paperbase.application.use_cases.trash.collect_garbage import CollectGarbageUseCase
from paperbase.domain.clock import Clock, utcnow
from paperbase.domain.value_objects import DocumentView, LifecycleState


class ListDocumentsUseCase:
    """List the active or the trashed documents of a project.

    Expired documents appear in neither view. Loading a project first sweeps
    its expired documents.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        collect_garbage: CollectGarbageUseCase | None = None,
        clock: Clock = utcnow,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._collect_garbage = collect_garbage
        self._clock = clock

    async def execute(
        self, project_id: str, view: DocumentView = DocumentView.ACTIVE
    ) -> list[DocumentOutput]:
        if self._collect_garbage is not None:
            await self._collect_garbage.execute(project_id)

        wanted = LifecycleState.ACTIVE if view is DocumentView.ACTIVE else LifecycleState.TRASHED
        now = self._clock()
        async with self._uow_factory() as uow:
            documents = await uow.documents.list(
                project_id, include_deleted=view is DocumentView.TRASHED
            )
        return [
            DocumentOutput.from_entity(d) for d in documents if d.state_at(now) is wanted
        ]
