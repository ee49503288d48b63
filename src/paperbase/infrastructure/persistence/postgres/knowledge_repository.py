"""PostgreSQL knowledge repository implementation."""

from psycopg import AsyncConnection
from psycopg.types.json import Jsonb

from paperbase.domain.entities import Knowledge, KnowledgeEntry


class PostgresKnowledgeRepository:
    """Extraction results keyed by digest."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get(self, digest: str) -> KnowledgeEntry | None:
        cur = await self._conn.execute(
            "SELECT digest, metadata, extracted_at FROM knowledge WHERE digest = %s",
            (digest,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return KnowledgeEntry(
            digest=r[0],
            knowledge=Knowledge(**(r[1] or {})),
            extracted_at=r[2],
        )

    async def create(self, entry: KnowledgeEntry) -> bool:
        """Insert entry unless one exists for the digest."""
        cur = await self._conn.execute(
            "INSERT INTO knowledge (digest, metadata, extracted_at) VALUES (%s, %s, %s) "
            "ON CONFLICT (digest) DO NOTHING RETURNING digest",
            (entry.digest, Jsonb(entry.knowledge.to_dict()), entry.extracted_at),
        )
        return await cur.fetchone() is not None

    async def delete(self, digest: str) -> None:
        await self._conn.execute("DELETE FROM knowledge WHERE digest = %s", (digest,))
