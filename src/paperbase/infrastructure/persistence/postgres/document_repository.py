"""PostgreSQL document repository implementation."""

from __future__ import annotations

from collections.abc import Collection, Sequence
from datetime import datetime
from typing import Any

from psycopg import AsyncConnection
from psycopg.types.json import Jsonb

from paperbase.application.ports.repositories import DocumentKey
from paperbase.domain.entities import Document
from paperbase.domain.exceptions import DuplicateId
from paperbase.domain.value_objects import lifecycle_from_markers

_COLUMNS = (
    "project_id, id, file_digest, title, file_name, media_type, added_at, "
    "deleted_at, trash_until, metadata, version"
)


def _row_to_document(r: Sequence[Any]) -> Document:
    return Document(
        project_id=r[0],
        id=r[1],
        file_digest=r[2],
        title=r[3],
        file_name=r[4],
        media_type=r[5],
        added_at=r[6],
        lifecycle=lifecycle_from_markers(r[7], r[8]),
        metadata=r[9] or {},
        version=r[10],
    )


def _build_exclude_conditions(
    exclude: Collection[DocumentKey],
) -> tuple[list[str], list[object]]:
    """Build ``NOT (project_id = %s AND id = %s)`` conditions for excluded documents."""
    conditions: list[str] = []
    params: list[object] = []
    for project_id, document_id in exclude:
        conditions.append("NOT (project_id = %s AND id = %s)")
        params.extend([project_id, document_id])
    return conditions, params


class PostgresDocumentRepository:
    """Document repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get(self, project_id: str, document_id: str) -> Document | None:
        """Get document by project and id, including trashed documents."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM document WHERE project_id = %s AND id = %s",
            (project_id, document_id),
        )
        r = await cur.fetchone()
        return _row_to_document(r) if r else None

    async def list(self, project_id: str, *, include_deleted: bool = False) -> list[Document]:
        """List documents of a project ordered by time added."""
        q = f"SELECT {_COLUMNS} FROM document WHERE project_id = %s"
        if not include_deleted:
            q += " AND deleted_at IS NULL"
        q += " ORDER BY added_at, id"
        cur = await self._conn.execute(q, (project_id,))
        return [_row_to_document(r) for r in await cur.fetchall()]

    async def list_expired(
        self, now: datetime, project_id: str | None = None
    ) -> list[Document]:
        """Trashed documents whose retention has elapsed at ``now``."""
        conditions = [
            "deleted_at IS NOT NULL",
            "(trash_until IS NULL OR trash_until <= %s)",
        ]
        params: list[object] = [now]
        if project_id is not None:
            conditions.append("project_id = %s")
            params.append(project_id)
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM document WHERE {' AND '.join(conditions)} "
            "ORDER BY trash_until, project_id, id",
            tuple(params),
        )
        return [_row_to_document(r) for r in await cur.fetchall()]

    async def count_active_by_digest(
        self, digest: str, exclude: Collection[DocumentKey] = ()
    ) -> int:
        """Count active documents in any project referencing ``digest``."""
        conditions = ["file_digest = %s", "deleted_at IS NULL"]
        params: list[object] = [digest]
        ex_conditions, ex_params = _build_exclude_conditions(exclude)
        conditions.extend(ex_conditions)
        params.extend(ex_params)
        cur = await self._conn.execute(
            f"SELECT COUNT(*) FROM document WHERE {' AND '.join(conditions)}",
            tuple(params),
        )
        r = await cur.fetchone()
        return int(r[0]) if r else 0

    async def create(self, document: Document) -> Document:
        """Create document. Raises DuplicateId when the id is taken in the project."""
        deleted_at, trash_until = document.lifecycle.to_markers()
        cur = await self._conn.execute(
            f"INSERT INTO document ({_COLUMNS}) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s) "
            "ON CONFLICT (project_id, id) DO NOTHING RETURNING id",
            (
                document.project_id,
                document.id,
                document.file_digest,
                document.title,
                document.file_name,
                document.media_type,
                document.added_at,
                deleted_at,
                trash_until,
                Jsonb(document.metadata),
                document.version,
            ),
        )
        if await cur.fetchone() is None:
            raise DuplicateId(
                f"Document {document.id} already exists in project {document.project_id}"
            )
        return document

    async def update(self, document: Document) -> Document:
        """Update title, metadata, lifecycle markers and version."""
        deleted_at, trash_until = document.lifecycle.to_markers()
        await self._conn.execute(
            "UPDATE document SET title=%s, metadata=%s, deleted_at=%s, trash_until=%s, version=%s "
            "WHERE project_id=%s AND id=%s",
            (
                document.title,
                Jsonb(document.metadata),
                deleted_at,
                trash_until,
                document.version,
                document.project_id,
                document.id,
            ),
        )
        return document

    async def hard_delete(self, project_id: str, document_id: str) -> None:
        """Hard delete document."""
        await self._conn.execute(
            "DELETE FROM document WHERE project_id = %s AND id = %s",
            (project_id, document_id),
        )
