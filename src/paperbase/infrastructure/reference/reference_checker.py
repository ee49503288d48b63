"""Reference-safety checker - local registry plus remote mirror."""

import logging
from collections.abc import Collection

from paperbase.application.ports import ReferenceStatus, RemoteRegistry
from paperbase.application.ports.repositories import DocumentKey
from paperbase.domain.value_objects import ContentDigest

logger = logging.getLogger(__name__)


class PaperbaseReferenceChecker:
    """Decides whether any active document anywhere still uses a digest."""

    def __init__(
        self,
        unit_of_work_factory: type,
        remote_registry: RemoteRegistry | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._remote = remote_registry

    async def check(
        self, digest: ContentDigest, exclude: Collection[DocumentKey] = ()
    ) -> ReferenceStatus:
        """Count active references locally first, then in the remote mirror.

        A failed remote query yields UNKNOWN: the blob is treated as referenced.
        """
        async with self._uow_factory() as uow:
            local = await uow.documents.count_active_by_digest(digest.value, exclude)
        if local > 0:
            return ReferenceStatus.REFERENCED
        if self._remote is None:
            return ReferenceStatus.UNREFERENCED

        try:
            remote = await self._remote.count_active_references(digest.value)
        except Exception as e:
            logger.warning("Remote reference check failed for %s, keeping blob: %s", digest, e)
            return ReferenceStatus.UNKNOWN
        if remote > 0:
            return ReferenceStatus.REFERENCED
        return ReferenceStatus.UNREFERENCED

    async def is_safe_to_delete_blob(
        self, digest: ContentDigest, exclude: Collection[DocumentKey] = ()
    ) -> bool:
        return await self.check(digest, exclude) is ReferenceStatus.UNREFERENCED
