"""Read document file use case."""

from paperbase.application.dto.document_dto import DocumentFileOutput
from paperbase.application.ports import BlobStore
from paperbase.domain.clock import Clock, utcnow
from paperbase.domain.exceptions import NotFound
from paperbase.domain.value_objects import ContentDigest, LifecycleState


class ReadDocumentFileUseCase:
    """Return the stored bytes a document references."""

    def __init__(
        self,
        unit_of_work_factory: type,
        blob_store: BlobStore,
        clock: Clock = utcnow,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._blob_store = blob_store
        self._clock = clock

    async def execute(self, project_id: str, document_id: str) -> DocumentFileOutput:
        """Raises NotFound for unknown or expired documents, BlobNotFound for missing bytes."""
        async with self._uow_factory() as uow:
            document = await uow.documents.get(project_id, document_id)
        if document is None or document.state_at(self._clock()) is LifecycleState.EXPIRED:
            raise NotFound("Document", document_id)
        if not document.file_digest:
            raise NotFound("File", document_id)
        data = await self._blob_store.get(ContentDigest(document.file_digest))
        return DocumentFileOutput(
            file_name=document.file_name,
            media_type=document.media_type,
            data=data,
        )
