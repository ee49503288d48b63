"""PostgreSQL file blob record repository implementation."""

from psycopg import AsyncConnection

from paperbase.domain.entities import FileBlob


class PostgresFileRepository:
    """One row per stored digest."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get(self, digest: str) -> FileBlob | None:
        cur = await self._conn.execute(
            "SELECT digest, media_type, size, storage_url, created_at FROM file WHERE digest = %s",
            (digest,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return FileBlob(
            digest=r[0],
            media_type=r[1],
            size=r[2],
            storage_url=r[3],
            created_at=r[4],
        )

    async def create(self, blob: FileBlob) -> bool:
        """Insert record; returns False if another writer recorded it first."""
        cur = await self._conn.execute(
            "INSERT INTO file (digest, media_type, size, storage_url, created_at) "
            "VALUES (%s, %s, %s, %s, %s) ON CONFLICT (digest) DO NOTHING RETURNING digest",
            (blob.digest, blob.media_type, blob.size, blob.storage_url, blob.created_at),
        )
        return await cur.fetchone() is not None

    async def delete(self, digest: str) -> None:
        await self._conn.execute("DELETE FROM file WHERE digest = %s", (digest,))

    async def total_size(self) -> int:
        cur = await self._conn.execute("SELECT COALESCE(SUM(size), 0) FROM file")
        r = await cur.fetchone()
        return int(r[0]) if r else 0
