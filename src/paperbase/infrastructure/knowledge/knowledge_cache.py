"""Knowledge cache backed by the knowledge repository."""

from paperbase.domain.clock import Clock, utcnow
from paperbase.domain.entities import Knowledge, KnowledgeEntry
from paperbase.domain.exceptions import NotFound
from paperbase.domain.value_objects import ContentDigest


class RepositoryKnowledgeCache:
    """Keeps one extraction result per digest. First writer wins."""

    def __init__(self, unit_of_work_factory: type, clock: Clock = utcnow) -> None:
        self._uow_factory = unit_of_work_factory
        self._clock = clock

    async def has(self, digest: ContentDigest) -> bool:
        async with self._uow_factory() as uow:
            return await uow.knowledge.get(digest.value) is not None

    async def get(self, digest: ContentDigest) -> KnowledgeEntry:
        async with self._uow_factory() as uow:
            entry = await uow.knowledge.get(digest.value)
        if entry is None:
            raise NotFound("Knowledge", digest.value)
        return entry

    async def put(self, digest: ContentDigest, knowledge: Knowledge) -> KnowledgeEntry:
        """Store knowledge unless an entry exists; returns the stored entry."""
        entry = KnowledgeEntry(
            digest=digest.value,
            knowledge=knowledge,
            extracted_at=self._clock(),
        )
        async with self._uow_factory() as uow:
            if await uow.knowledge.create(entry):
                return entry
            existing = await uow.knowledge.get(digest.value)
        return existing or entry

    async def delete(self, digest: ContentDigest) -> None:
        async with self._uow_factory() as uow:
            await uow.knowledge.delete(digest.value)
