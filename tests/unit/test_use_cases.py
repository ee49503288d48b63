"""Unit tests for use cases."""

from datetime import timedelta
from uuid import uuid4

import pytest

from paperbase.application.dto.annotation_dto import AnnotationCreateInput
from paperbase.application.dto.document_dto import AddDocumentInput
from paperbase.application.use_cases.annotation.add_annotation import AddAnnotationUseCase
from paperbase.application.use_cases.annotation.list_annotations import ListAnnotationsUseCase
from paperbase.application.use_cases.document.add_document import AddDocumentUseCase
from paperbase.application.use_cases.document.get_document import GetDocumentUseCase
from paperbase.application.use_cases.document.list_documents import ListDocumentsUseCase
from paperbase.application.use_cases.document.read_document_file import (
    ReadDocumentFileUseCase,
)
from paperbase.application.use_cases.storage.storage_usage import StorageUsageUseCase
from paperbase.application.use_cases.trash.delete_documents import DeleteDocumentsUseCase
from paperbase.application.use_cases.trash.restore_documents import RestoreDocumentsUseCase
from paperbase.domain.exceptions import (
    DuplicateId,
    DurableUploadFailed,
    ExtractionFailed,
    FileTooLarge,
    NotFound,
    QuotaExceeded,
    ValidationError,
)
from paperbase.domain.value_objects import (
    RETENTION_PERIOD,
    AnnotationKind,
    DocumentView,
    StorageLimits,
    compute_digest,
)

from tests.conftest import T0, pdf_bytes

DATA = pdf_bytes("attention")
DIGEST = compute_digest(DATA)


def _input(project_id: str = "p1", data: bytes = DATA, **kwargs) -> AddDocumentInput:
    return AddDocumentInput(
        project_id=project_id,
        data=data,
        filename=kwargs.pop("filename", "attention.pdf"),
        **kwargs,
    )


@pytest.fixture
def list_documents(uow_factory, collect_garbage, clock) -> ListDocumentsUseCase:
    return ListDocumentsUseCase(
        unit_of_work_factory=uow_factory, collect_garbage=collect_garbage, clock=clock
    )


@pytest.fixture
def delete_documents(uow_factory, clock) -> DeleteDocumentsUseCase:
    return DeleteDocumentsUseCase(unit_of_work_factory=uow_factory, clock=clock)


@pytest.fixture
def restore_documents(uow_factory, blob_store, clock) -> RestoreDocumentsUseCase:
    return RestoreDocumentsUseCase(
        unit_of_work_factory=uow_factory, blob_store=blob_store, clock=clock
    )


def _ids(documents) -> list[str]:
    return [d.id for d in documents]


# --- AddDocumentUseCase ---


@pytest.mark.asyncio
async def test_add_document_stores_blob_and_enriches(
    add_document, blob_store, knowledge_cache, mock_extractor
) -> None:
    result = await add_document.execute(_input(document_id="d1"))

    assert result.id == "d1"
    assert result.file_digest == DIGEST.value
    assert result.title == "Attention Is All You Need"
    assert result.metadata["authors"] == ["Ashish Vaswani", "Noam Shazeer"]
    assert result.metadata["tags"] == ["transformers", "attention"]
    assert "keywords" not in result.metadata
    assert result.added_at == T0
    assert result.deleted_at is None
    assert await blob_store.exists(DIGEST)
    assert await knowledge_cache.has(DIGEST)
    mock_extractor.extract.assert_awaited_once_with(DATA, "attention.pdf")


@pytest.mark.asyncio
async def test_add_document_generates_id_when_missing(add_document) -> None:
    result = await add_document.execute(_input())
    assert result.id


@pytest.mark.asyncio
async def test_same_bytes_in_two_projects_deduplicated(
    add_document, blob_store, durable_storage, mock_extractor, fake_uow
) -> None:
    """Second upload reuses the blob and knowledge without extraction or quota use."""
    await add_document.execute(_input("p1", document_id="d1"))
    usage_after_first = await blob_store.usage()

    second = await add_document.execute(_input("p2", document_id="d2"))

    assert second.file_digest == DIGEST.value
    assert durable_storage.upload_calls == 1
    assert len(durable_storage.objects) == 1
    assert mock_extractor.extract.await_count == 1
    assert await blob_store.usage() == usage_after_first
    assert second.title == "Attention Is All You Need"
    assert len(fake_uow.documents.all()) == 2


@pytest.mark.asyncio
async def test_extraction_failure_creates_plain_document(
    add_document, mock_extractor, knowledge_cache
) -> None:
    mock_extractor.extract.side_effect = ExtractionFailed("no text")

    result = await add_document.execute(_input(filename="notes/scan 01.pdf"))

    assert result.title == "scan 01"
    assert result.metadata == {}
    assert not await knowledge_cache.has(DIGEST)


@pytest.mark.asyncio
async def test_extraction_retried_after_earlier_failure(add_document, mock_extractor) -> None:
    mock_extractor.extract.side_effect = [ExtractionFailed("timeout"), mock_extractor.extract.return_value]

    await add_document.execute(_input("p1"))
    second = await add_document.execute(_input("p2"))

    assert mock_extractor.extract.await_count == 2
    assert second.title == "Attention Is All You Need"


@pytest.mark.asyncio
async def test_quota_exceeded_rejects_new_file_but_allows_dedup(
    uow_factory, blob_store, knowledge_cache, mock_extractor, durable_storage
) -> None:
    """Quota 100, usage 95: a new 10-byte file is refused, an existing one is reused."""
    existing = b"e" * 10
    await blob_store.put(compute_digest(existing), existing, "application/pdf")
    await blob_store.put(compute_digest(b"f" * 85), b"f" * 85, "application/pdf")
    uploads_before = durable_storage.upload_calls
    use_case = AddDocumentUseCase(
        unit_of_work_factory=uow_factory,
        blob_store=blob_store,
        knowledge_cache=knowledge_cache,
        metadata_extractor=mock_extractor,
        storage_limits=StorageLimits(max_file_size_bytes=50, max_storage_bytes=100),
    )

    with pytest.raises(QuotaExceeded) as exc_info:
        await use_case.execute(_input(data=b"n" * 10))
    assert exc_info.value.reason == "quota_exceeded"
    assert durable_storage.upload_calls == uploads_before
    assert not await blob_store.exists(compute_digest(b"n" * 10))

    result = await use_case.execute(_input(data=existing))
    assert result.file_digest == compute_digest(existing).value
    assert await blob_store.usage() == 95


@pytest.mark.asyncio
async def test_file_too_large_rejected_before_any_write(
    add_document, durable_storage, fake_uow, mock_extractor
) -> None:
    with pytest.raises(FileTooLarge):
        await add_document.execute(_input(data=b"x" * 2048))

    assert durable_storage.upload_calls == 0
    assert fake_uow.documents.all() == []
    mock_extractor.extract.assert_not_awaited()


@pytest.mark.asyncio
async def test_durable_upload_failure_leaves_no_document(
    add_document, durable_storage, fake_uow
) -> None:
    durable_storage.fail_upload = True

    with pytest.raises(DurableUploadFailed):
        await add_document.execute(_input())

    assert fake_uow.documents.all() == []


@pytest.mark.asyncio
async def test_metadata_insert_failure_does_not_abort_upload(
    add_document, fake_uow, durable_storage
) -> None:
    fake_uow.files.fail_create = True

    result = await add_document.execute(_input(document_id="d1"))

    assert result.id == "d1"
    assert DIGEST.storage_path in durable_storage.objects


@pytest.mark.asyncio
async def test_duplicate_id_in_project_rejected(add_document) -> None:
    await add_document.execute(_input(document_id="d1"))
    with pytest.raises(DuplicateId):
        await add_document.execute(_input(document_id="d1", data=pdf_bytes("other")))


@pytest.mark.asyncio
async def test_empty_file_rejected(add_document) -> None:
    with pytest.raises(ValidationError, match="empty"):
        await add_document.execute(_input(data=b""))


@pytest.mark.asyncio
async def test_upload_sweeps_expired_documents_of_project(
    add_document, delete_documents, fake_uow, blob_store, clock
) -> None:
    await add_document.execute(_input(document_id="old"))
    await delete_documents.execute("p1", ["old"])
    clock.advance(RETENTION_PERIOD)

    await add_document.execute(_input(document_id="new", data=pdf_bytes("new")))

    assert _ids(fake_uow.documents.all()) == ["new"]
    assert not await blob_store.exists(DIGEST)


# --- Trash lifecycle ---


@pytest.mark.asyncio
async def test_retention_window_listing(
    add_document, delete_documents, list_documents, clock
) -> None:
    await add_document.execute(_input(document_id="d1"))
    await delete_documents.execute("p1", ["d1"])

    assert _ids(await list_documents.execute("p1", DocumentView.ACTIVE)) == []
    assert _ids(await list_documents.execute("p1", DocumentView.TRASHED)) == ["d1"]

    clock.advance(RETENTION_PERIOD - timedelta(microseconds=1))
    assert _ids(await list_documents.execute("p1", DocumentView.TRASHED)) == ["d1"]

    clock.advance(timedelta(microseconds=1))
    assert _ids(await list_documents.execute("p1", DocumentView.TRASHED)) == []
    assert _ids(await list_documents.execute("p1", DocumentView.ACTIVE)) == []


@pytest.mark.asyncio
async def test_delete_sets_markers_and_is_idempotent(
    add_document, delete_documents, fake_uow, clock
) -> None:
    await add_document.execute(_input(document_id="d1"))

    first = await delete_documents.execute("p1", ["d1", "missing"])
    clock.advance(timedelta(days=2))
    second = await delete_documents.execute("p1", ["d1"])

    assert first.updated == ["d1"]
    assert first.skipped == ["missing"]
    assert second.updated == []
    doc = await fake_uow.documents.get("p1", "d1")
    assert doc.deleted_at == T0
    assert doc.trash_until == T0 + RETENTION_PERIOD


@pytest.mark.asyncio
async def test_restore_before_expiry(
    add_document, delete_documents, restore_documents, list_documents, fake_uow, clock
) -> None:
    await add_document.execute(_input(document_id="d1"))
    await delete_documents.execute("p1", ["d1"])
    clock.advance(timedelta(days=9))

    result = await restore_documents.execute("p1", ["d1", "unknown"])

    assert result.updated == ["d1"]
    assert result.skipped == ["unknown"]
    doc = await fake_uow.documents.get("p1", "d1")
    assert doc.deleted_at is None
    assert doc.trash_until is None
    assert _ids(await list_documents.execute("p1")) == ["d1"]


@pytest.mark.asyncio
async def test_restore_after_expiry_refused(
    add_document, delete_documents, restore_documents, clock
) -> None:
    await add_document.execute(_input(document_id="d1"))
    await delete_documents.execute("p1", ["d1"])
    clock.advance(RETENTION_PERIOD)

    result = await restore_documents.execute("p1", ["d1"])

    assert result.updated == []
    assert result.skipped == ["d1"]


@pytest.mark.asyncio
async def test_restore_active_document_skipped(add_document, restore_documents) -> None:
    await add_document.execute(_input(document_id="d1"))
    result = await restore_documents.execute("p1", ["d1"])
    assert result.skipped == ["d1"]


@pytest.mark.asyncio
async def test_restore_refused_when_shared_blob_was_collected(
    add_document,
    delete_documents,
    restore_documents,
    list_documents,
    fake_uow,
    blob_store,
    clock,
) -> None:
    await add_document.execute(_input("p1", document_id="d1"))
    await add_document.execute(_input("p2", document_id="d2"))
    await delete_documents.execute("p1", ["d1"])
    clock.advance(timedelta(days=5))
    await delete_documents.execute("p2", ["d2"])
    clock.advance(timedelta(days=5))

    # d1 expired, d2 still trashed: nothing active references the blob
    assert await list_documents.execute("p1", DocumentView.TRASHED) == []
    assert not await blob_store.exists(DIGEST)

    clock.advance(timedelta(days=1))
    result = await restore_documents.execute("p2", ["d2"])

    assert result.updated == []
    assert result.blob_missing == ["d2"]
    doc = await fake_uow.documents.get("p2", "d2")
    assert doc.deleted_at is not None
    assert await list_documents.execute("p2") == []


@pytest.mark.asyncio
async def test_shared_blob_readable_after_other_project_collected(
    add_document, delete_documents, list_documents, uow_factory, blob_store, clock
) -> None:
    await add_document.execute(_input("p1", document_id="d1"))
    await add_document.execute(_input("p2", document_id="d2"))
    await delete_documents.execute("p1", ["d1"])
    clock.advance(RETENTION_PERIOD)

    assert await list_documents.execute("p1", DocumentView.TRASHED) == []
    read_file = ReadDocumentFileUseCase(uow_factory, blob_store, clock=clock)
    result = await read_file.execute("p2", "d2")

    assert result.data == DATA
    assert result.media_type == "application/pdf"


# --- Queries ---


@pytest.mark.asyncio
async def test_get_document_active_and_trashed(
    add_document, delete_documents, uow_factory, clock
) -> None:
    get_document = GetDocumentUseCase(uow_factory, clock=clock)
    await add_document.execute(_input(document_id="d1"))
    await delete_documents.execute("p1", ["d1"])

    trashed = await get_document.execute("p1", "d1")
    assert trashed.deleted_at == T0

    clock.advance(RETENTION_PERIOD)
    with pytest.raises(NotFound):
        await get_document.execute("p1", "d1")


@pytest.mark.asyncio
async def test_get_document_other_project_not_found(add_document, uow_factory) -> None:
    await add_document.execute(_input("p1", document_id="d1"))
    with pytest.raises(NotFound):
        await GetDocumentUseCase(uow_factory).execute("p2", "d1")


@pytest.mark.asyncio
async def test_storage_usage(blob_store) -> None:
    await blob_store.put(compute_digest(b"a" * 512), b"a" * 512, "application/pdf")
    use_case = StorageUsageUseCase(
        blob_store=blob_store,
        storage_limits=StorageLimits(max_file_size_bytes=1024, max_storage_bytes=2048),
    )

    usage = await use_case.execute()

    assert usage.used_bytes == 512
    assert usage.limit_bytes == 2048
    assert usage.percentage == 25
    assert usage.used_display == "512.0 B"
    assert usage.limit_display == "2.0 KB"


# --- Annotations ---


@pytest.mark.asyncio
async def test_add_and_list_annotations(add_document, uow_factory, clock) -> None:
    await add_document.execute(_input(document_id="d1"))
    add = AddAnnotationUseCase(uow_factory, clock=clock)
    listing = ListAnnotationsUseCase(uow_factory)

    await add.execute(
        AnnotationCreateInput(
            project_id="p1",
            document_id="d1",
            kind=AnnotationKind.HIGHLIGHT,
            page_number=3,
            content="self-attention",
            color="#ffeb3b",
            position={"rects": [[10, 20, 30, 40]]},
        )
    )
    await add.execute(
        AnnotationCreateInput(
            project_id="p1",
            document_id="d1",
            kind=AnnotationKind.NOTE,
            page_number=1,
            content="read first",
        )
    )

    items = await listing.execute("p1", "d1")
    assert [a.page_number for a in items] == [1, 3]
    assert items[1].position == {"rects": [[10, 20, 30, 40]]}
    assert items[1].kind is AnnotationKind.HIGHLIGHT


@pytest.mark.asyncio
async def test_annotation_requires_active_document(
    add_document, delete_documents, uow_factory
) -> None:
    await add_document.execute(_input(document_id="d1"))
    await delete_documents.execute("p1", ["d1"])
    add = AddAnnotationUseCase(uow_factory)

    with pytest.raises(NotFound):
        await add.execute(
            AnnotationCreateInput(
                project_id="p1",
                document_id="d1",
                kind=AnnotationKind.NOTE,
                page_number=1,
                content="late note",
            )
        )


@pytest.mark.asyncio
async def test_annotation_validation(uow_factory) -> None:
    add = AddAnnotationUseCase(uow_factory)
    with pytest.raises(ValidationError, match="page_number"):
        await add.execute(
            AnnotationCreateInput(
                project_id="p1",
                document_id=str(uuid4()),
                kind=AnnotationKind.NOTE,
                page_number=0,
                content="x",
            )
        )
