"""Add annotation use case."""

from uuid import uuid4

from paperbase.application.dto.annotation_dto import AnnotationCreateInput, AnnotationOutput
from paperbase.domain.clock import Clock, utcnow
from paperbase.domain.entities import Annotation
from paperbase.domain.exceptions import NotFound, ValidationError


class AddAnnotationUseCase:
    """Attach a note or highlight to an active document."""

    def __init__(self, unit_of_work_factory: type, clock: Clock = utcnow) -> None:
        self._uow_factory = unit_of_work_factory
        self._clock = clock

    async def execute(self, input_data: AnnotationCreateInput) -> AnnotationOutput:
        if input_data.page_number < 1:
            raise ValidationError("page_number must be >= 1")
        if not input_data.content.strip():
            raise ValidationError("content must not be empty")

        async with self._uow_factory() as uow:
            document = await uow.documents.get(input_data.project_id, input_data.document_id)
            if document is None or not document.is_active:
                raise NotFound("Document", input_data.document_id)
            annotation = Annotation(
                id=uuid4(),
                project_id=input_data.project_id,
                document_id=input_data.document_id,
                kind=input_data.kind,
                page_number=input_data.page_number,
                content=input_data.content,
                created_at=self._clock(),
                color=input_data.color,
                position=dict(input_data.position),
            )
            await uow.annotations.create(annotation)
        return AnnotationOutput.from_entity(annotation)
