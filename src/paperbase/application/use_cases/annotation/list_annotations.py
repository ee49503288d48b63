"""List annotations use case."""

from paperbase.application.dto.annotation_dto import AnnotationOutput
from paperbase.domain.exceptions import NotFound


class ListAnnotationsUseCase:
    """Annotations of one document, ordered by page."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, project_id: str, document_id: str) -> list[AnnotationOutput]:
        async with self._uow_factory() as uow:
            document = await uow.documents.get(project_id, document_id)
            if document is None:
                raise NotFound("Document", document_id)
            annotations = await uow.annotations.list_by_document(project_id, document_id)
        return [AnnotationOutput.from_entity(a) for a in annotations]
