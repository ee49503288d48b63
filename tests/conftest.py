"""Pytest fixtures for Paperbase tests."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Collection
from contextlib import asynccontextmanager
from dataclasses import replace
from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

import pytest

from paperbase.application.use_cases.document.add_document import AddDocumentUseCase
from paperbase.application.use_cases.trash.collect_garbage import CollectGarbageUseCase
from paperbase.domain.entities import Annotation, Document, FileBlob, Knowledge, KnowledgeEntry
from paperbase.domain.exceptions import (
    BlobNotFound,
    DuplicateId,
    DurableStorageError,
    DurableUploadFailed,
    ReferenceCheckFailed,
)
from paperbase.domain.value_objects import LifecycleState, StorageLimits
from paperbase.infrastructure.knowledge.knowledge_cache import RepositoryKnowledgeCache
from paperbase.infrastructure.reference.reference_checker import PaperbaseReferenceChecker
from paperbase.infrastructure.storage.blob_store import ContentAddressedBlobStore
from paperbase.infrastructure.storage.local_cache import LocalBlobCache

T0 = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


def pdf_bytes(label: str) -> bytes:
    """Distinct PDF-looking payload per label."""
    return f"%PDF-1.7\n% {label}\n%%EOF\n".encode()


# --- Clock ---


class FakeClock:
    """Settable clock; call it to get the current time."""

    def __init__(self, now: datetime = T0) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


# --- Fake repositories ---


def _copy(document: Document) -> Document:
    return replace(document, metadata=dict(document.metadata))


class FakeDocumentRepository:
    """In-memory document repository keyed by (project_id, id)."""

    def __init__(self) -> None:
        self._by_key: dict[tuple[str, str], Document] = {}

    def add(self, document: Document) -> None:
        self._by_key[(document.project_id, document.id)] = _copy(document)

    def all(self) -> list[Document]:
        return [_copy(d) for d in self._by_key.values()]

    async def get(self, project_id: str, document_id: str) -> Document | None:
        doc = self._by_key.get((project_id, document_id))
        return _copy(doc) if doc else None

    async def list(self, project_id: str, *, include_deleted: bool = False) -> list[Document]:
        items = [
            _copy(d)
            for (p, _), d in self._by_key.items()
            if p == project_id and (include_deleted or d.is_active)
        ]
        items.sort(key=lambda d: (d.added_at, d.id))
        return items

    async def list_expired(self, now: datetime, project_id: str | None = None) -> list[Document]:
        return [
            _copy(d)
            for d in self._by_key.values()
            if d.state_at(now) is LifecycleState.EXPIRED
            and (project_id is None or d.project_id == project_id)
        ]

    async def count_active_by_digest(
        self, digest: str, exclude: Collection[tuple[str, str]] = ()
    ) -> int:
        excluded = set(exclude)
        return sum(
            1
            for key, d in self._by_key.items()
            if d.file_digest == digest and d.is_active and key not in excluded
        )

    async def create(self, document: Document) -> Document:
        key = (document.project_id, document.id)
        if key in self._by_key:
            raise DuplicateId(f"Document {document.id} already exists")
        self._by_key[key] = _copy(document)
        return document

    async def update(self, document: Document) -> Document:
        self._by_key[(document.project_id, document.id)] = _copy(document)
        return document

    async def hard_delete(self, project_id: str, document_id: str) -> None:
        self._by_key.pop((project_id, document_id), None)


class FakeFileRepository:
    """In-memory blob records."""

    def __init__(self) -> None:
        self._by_digest: dict[str, FileBlob] = {}
        self.fail_create = False

    async def get(self, digest: str) -> FileBlob | None:
        return self._by_digest.get(digest)

    async def create(self, blob: FileBlob) -> bool:
        if self.fail_create:
            raise RuntimeError("connection lost")
        if blob.digest in self._by_digest:
            return False
        self._by_digest[blob.digest] = blob
        return True

    async def delete(self, digest: str) -> None:
        self._by_digest.pop(digest, None)

    async def total_size(self) -> int:
        return sum(b.size for b in self._by_digest.values())


class FakeKnowledgeRepository:
    """In-memory knowledge entries."""

    def __init__(self) -> None:
        self._by_digest: dict[str, KnowledgeEntry] = {}

    async def get(self, digest: str) -> KnowledgeEntry | None:
        return self._by_digest.get(digest)

    async def create(self, entry: KnowledgeEntry) -> bool:
        if entry.digest in self._by_digest:
            return False
        self._by_digest[entry.digest] = entry
        return True

    async def delete(self, digest: str) -> None:
        self._by_digest.pop(digest, None)


class FakeAnnotationRepository:
    """In-memory annotations."""

    def __init__(self) -> None:
        self._items: list[Annotation] = []

    async def list_by_document(self, project_id: str, document_id: str) -> list[Annotation]:
        items = [
            a for a in self._items if a.project_id == project_id and a.document_id == document_id
        ]
        return sorted(items, key=lambda a: (a.page_number, a.created_at))

    async def create(self, annotation: Annotation) -> Annotation:
        self._items.append(annotation)
        return annotation

    async def delete_by_document(self, project_id: str, document_id: str) -> int:
        before = len(self._items)
        self._items = [
            a
            for a in self._items
            if not (a.project_id == project_id and a.document_id == document_id)
        ]
        return before - len(self._items)


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.documents = FakeDocumentRepository()
        self.files = FakeFileRepository()
        self.knowledge = FakeKnowledgeRepository()
        self.annotations = FakeAnnotationRepository()

    async def commit(self) -> None:
        pass

    async def rollback(self) -> None:
        pass


def make_uow_factory(uow: FakeUnitOfWork):
    """Factory yielding the same FakeUnitOfWork, so state survives between transactions."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        yield uow

    return _factory


# --- Fake external services ---


class FakeDurableStorage:
    """In-memory object store that never overwrites."""

    def __init__(self) -> None:
        self.objects: dict[str, bytes] = {}
        self.upload_calls = 0
        self.fail_upload = False
        self.fail_delete = False

    async def upload(self, path: str, data: bytes, content_type: str) -> str:
        self.upload_calls += 1
        # Yield like a network call so concurrent writers interleave
        await asyncio.sleep(0)
        if self.fail_upload:
            raise DurableUploadFailed("storage unavailable")
        self.objects.setdefault(path, data)
        return f"files/{path}"

    async def download(self, path: str) -> bytes:
        if path not in self.objects:
            raise BlobNotFound(path)
        return self.objects[path]

    async def delete(self, path: str) -> None:
        if self.fail_delete:
            raise DurableStorageError("delete refused")
        self.objects.pop(path, None)


class FakeRemoteRegistry:
    """Remote reference counts by digest."""

    def __init__(self) -> None:
        self.counts: dict[str, int] = {}
        self.fail = False

    async def count_active_references(self, digest: str) -> int:
        if self.fail:
            raise ReferenceCheckFailed("remote registry unreachable")
        return self.counts.get(digest, 0)


# --- Fixtures ---


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Fresh in-memory UnitOfWork for each test."""
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    return make_uow_factory(fake_uow)


@pytest.fixture
def durable_storage() -> FakeDurableStorage:
    return FakeDurableStorage()


@pytest.fixture
def remote_registry() -> FakeRemoteRegistry:
    return FakeRemoteRegistry()


@pytest.fixture
def local_cache(tmp_path) -> LocalBlobCache:
    return LocalBlobCache(tmp_path / "blobs")


@pytest.fixture
def blob_store(uow_factory, durable_storage, local_cache, clock) -> ContentAddressedBlobStore:
    return ContentAddressedBlobStore(
        unit_of_work_factory=uow_factory,
        durable_storage=durable_storage,
        local_cache=local_cache,
        clock=clock,
    )


@pytest.fixture
def knowledge_cache(uow_factory, clock) -> RepositoryKnowledgeCache:
    return RepositoryKnowledgeCache(unit_of_work_factory=uow_factory, clock=clock)


@pytest.fixture
def reference_checker(uow_factory, remote_registry) -> PaperbaseReferenceChecker:
    return PaperbaseReferenceChecker(
        unit_of_work_factory=uow_factory,
        remote_registry=remote_registry,
    )


@pytest.fixture
def mock_extractor():
    """AsyncMock for MetadataExtractor - returns fixed knowledge."""
    mock = AsyncMock()
    mock.extract.return_value = Knowledge(
        title="Attention Is All You Need",
        authors=["Ashish Vaswani", "Noam Shazeer"],
        keywords=["transformers", "attention"],
        year=2017,
    )
    return mock


@pytest.fixture
def storage_limits() -> StorageLimits:
    return StorageLimits(max_file_size_bytes=1024, max_storage_bytes=4096)


@pytest.fixture
def collect_garbage(
    uow_factory, blob_store, knowledge_cache, reference_checker, clock
) -> CollectGarbageUseCase:
    return CollectGarbageUseCase(
        unit_of_work_factory=uow_factory,
        blob_store=blob_store,
        knowledge_cache=knowledge_cache,
        reference_checker=reference_checker,
        clock=clock,
    )


@pytest.fixture
def add_document(
    uow_factory,
    blob_store,
    knowledge_cache,
    mock_extractor,
    storage_limits,
    collect_garbage,
    clock,
) -> AddDocumentUseCase:
    return AddDocumentUseCase(
        unit_of_work_factory=uow_factory,
        blob_store=blob_store,
        knowledge_cache=knowledge_cache,
        metadata_extractor=mock_extractor,
        storage_limits=storage_limits,
        collect_garbage=collect_garbage,
        clock=clock,
    )
