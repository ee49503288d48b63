"""PostgreSQL Unit of Work implementation."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from psycopg_pool import AsyncConnectionPool

from paperbase.application.ports.unit_of_work import UnitOfWorkFactory
from paperbase.infrastructure.persistence.postgres.annotation_repository import (
    PostgresAnnotationRepository,
)
from paperbase.infrastructure.persistence.postgres.document_repository import (
    PostgresDocumentRepository,
)
from paperbase.infrastructure.persistence.postgres.file_repository import (
    PostgresFileRepository,
)
from paperbase.infrastructure.persistence.postgres.knowledge_repository import (
    PostgresKnowledgeRepository,
)


class PostgresUnitOfWork:
    """One connection, one transaction."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool
        self._conn = None
        self._conn_cm = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._conn_cm = self._pool.connection()
        self._conn = await self._conn_cm.__aenter__()
        self._documents = PostgresDocumentRepository(self._conn)
        self._files = PostgresFileRepository(self._conn)
        self._knowledge = PostgresKnowledgeRepository(self._conn)
        self._annotations = PostgresAnnotationRepository(self._conn)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        if exc_type and self._conn:
            await self._conn.rollback()
        if self._conn_cm:
            await self._conn_cm.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def documents(self) -> PostgresDocumentRepository:
        return self._documents

    @property
    def files(self) -> PostgresFileRepository:
        return self._files

    @property
    def knowledge(self) -> PostgresKnowledgeRepository:
        return self._knowledge

    @property
    def annotations(self) -> PostgresAnnotationRepository:
        return self._annotations

    async def commit(self) -> None:
        if self._conn:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn:
            await self._conn.rollback()


def create_uow_factory(pool: AsyncConnectionPool) -> UnitOfWorkFactory:
    """Create UnitOfWork factory; the transaction commits when the block exits cleanly."""

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        uow = PostgresUnitOfWork(pool)
        async with uow:
            try:
                yield uow
                await uow.commit()
            except BaseException:
                await uow.rollback()
                raise

    return factory
