"""PostgreSQL annotation repository implementation."""

from psycopg import AsyncConnection
from psycopg.types.json import Jsonb

from paperbase.domain.entities import Annotation
from paperbase.domain.value_objects import AnnotationKind


class PostgresAnnotationRepository:
    """Notes and highlights, owned by one document."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def list_by_document(self, project_id: str, document_id: str) -> list[Annotation]:
        cur = await self._conn.execute(
            "SELECT id, project_id, document_id, kind, page_number, content, created_at, "
            "color, position FROM annotation WHERE project_id = %s AND document_id = %s "
            "ORDER BY page_number, created_at",
            (project_id, document_id),
        )
        rows = await cur.fetchall()
        return [
            Annotation(
                id=r[0],
                project_id=r[1],
                document_id=r[2],
                kind=AnnotationKind(r[3]),
                page_number=r[4],
                content=r[5],
                created_at=r[6],
                color=r[7],
                position=r[8] or {},
            )
            for r in rows
        ]

    async def create(self, annotation: Annotation) -> Annotation:
        await self._conn.execute(
            "INSERT INTO annotation (id, project_id, document_id, kind, page_number, content, "
            "created_at, color, position) VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (
                annotation.id,
                annotation.project_id,
                annotation.document_id,
                annotation.kind.value,
                annotation.page_number,
                annotation.content,
                annotation.created_at,
                annotation.color,
                Jsonb(annotation.position),
            ),
        )
        return annotation

    async def delete_by_document(self, project_id: str, document_id: str) -> int:
        """Delete all annotations of a document; returns how many were removed."""
        cur = await self._conn.execute(
            "DELETE FROM annotation WHERE project_id = %s AND document_id = %s",
            (project_id, document_id),
        )
        return cur.rowcount
