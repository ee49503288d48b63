"""Document repository port."""

from __future__ import annotations

from collections.abc import Collection
from datetime import datetime
from typing import Protocol

from paperbase.domain.entities import Document

# (project_id, document_id)
DocumentKey = tuple[str, str]


class DocumentRepository(Protocol):
    """Port for document persistence."""

    async def get(self, project_id: str, document_id: str) -> Document | None: ...

    async def list(
        self, project_id: str, *, include_deleted: bool = False
    ) -> list[Document]: ...

    async def list_expired(
        self, now: datetime, project_id: str | None = None
    ) -> list[Document]: ...

    async def count_active_by_digest(
        self, digest: str, exclude: Collection[DocumentKey] = ()
    ) -> int: ...

    async def create(self, document: Document) -> Document: ...

    async def update(self, document: Document) -> Document: ...

    async def hard_delete(self, project_id: str, document_id: str) -> None: ...
