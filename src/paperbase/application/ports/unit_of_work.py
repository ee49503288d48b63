"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from paperbase.application.ports.repositories.annotation_repository import (
    AnnotationRepository,
)
from paperbase.application.ports.repositories.document_repository import DocumentRepository
from paperbase.application.ports.repositories.file_repository import FileRepository
from paperbase.application.ports.repositories.knowledge_repository import (
    KnowledgeRepository,
)


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def documents(self) -> DocumentRepository: ...

    @property
    def files(self) -> FileRepository: ...

    @property
    def knowledge(self) -> KnowledgeRepository: ...

    @property
    def annotations(self) -> AnnotationRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    async def __call__(self) -> AsyncIterator[UnitOfWork]: ...
