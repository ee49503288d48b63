"""Knowledge repository port."""

from typing import Protocol

from paperbase.domain.entities import KnowledgeEntry


class KnowledgeRepository(Protocol):
    """Port for extraction results keyed by digest."""

    async def get(self, digest: str) -> KnowledgeEntry | None: ...

    async def create(self, entry: KnowledgeEntry) -> bool: ...

    async def delete(self, digest: str) -> None: ...
