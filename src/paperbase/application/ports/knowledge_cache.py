"""Knowledge cache port."""

from typing import Protocol

from paperbase.domain.entities import Knowledge, KnowledgeEntry
from paperbase.domain.value_objects import ContentDigest


class KnowledgeCache(Protocol):
    """Passive cache of extraction results keyed by content digest."""

    async def has(self, digest: ContentDigest) -> bool: ...

    async def get(self, digest: ContentDigest) -> KnowledgeEntry: ...

    async def put(self, digest: ContentDigest, knowledge: Knowledge) -> KnowledgeEntry: ...

    async def delete(self, digest: ContentDigest) -> None: ...
