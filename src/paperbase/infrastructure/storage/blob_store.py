"""Content-addressed blob store: local cache in front of durable storage."""

import logging

from paperbase.application.ports import DurableStorage
from paperbase.domain.clock import Clock, utcnow
from paperbase.domain.entities import FileBlob
from paperbase.domain.exceptions import BlobNotFound, MetadataInsertFailed
from paperbase.domain.value_objects import ContentDigest
from paperbase.infrastructure.storage.local_cache import LocalBlobCache

logger = logging.getLogger(__name__)


class ContentAddressedBlobStore:
    """Stores each distinct file exactly once.

    A blob is durably present when its ``file`` record exists. The local cache
    is per process and only fills after the record was committed; another
    instance may have collected the blob since, so presence is always decided
    by the record.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        durable_storage: DurableStorage,
        local_cache: LocalBlobCache,
        clock: Clock = utcnow,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._durable = durable_storage
        self._cache = local_cache
        self._clock = clock

    async def exists(self, digest: ContentDigest) -> bool:
        """Check the durable record; a cached copy without one is dropped."""
        async with self._uow_factory() as uow:
            recorded = await uow.files.get(digest.value) is not None
        if not recorded and await self._cache.has(digest.value):
            logger.info("Dropping cached blob %s with no durable record", digest)
            await self._cache.remove(digest.value)
        return recorded

    async def put(self, digest: ContentDigest, data: bytes, media_type: str) -> None:
        """Store bytes once. No-op when the digest is already recorded.

        The durable upload never overwrites, and an existing object counts as
        uploaded, so a retry after a failed record insert only writes the record.
        """
        async with self._uow_factory() as uow:
            record = await uow.files.get(digest.value)
        if record is not None:
            await self._cache.write(digest.value, data)
            return

        locator = await self._durable.upload(digest.storage_path, data, media_type)
        blob = FileBlob(
            digest=digest.value,
            media_type=media_type,
            size=len(data),
            storage_url=locator,
            created_at=self._clock(),
        )
        try:
            async with self._uow_factory() as uow:
                created = await uow.files.create(blob)
        except Exception as e:
            logger.warning(
                "Blob %s uploaded but its record was not written (orphaned blob): %s",
                digest,
                e,
            )
            raise MetadataInsertFailed(f"Failed to insert file metadata: {e}") from e
        if not created:
            logger.debug("Blob %s recorded concurrently by another writer", digest)
        await self._cache.write(digest.value, data)

    async def get(self, digest: ContentDigest) -> bytes:
        """Read bytes from the local cache, else durable storage."""
        data = await self._cache.read(digest.value)
        if data is not None:
            return data
        async with self._uow_factory() as uow:
            record = await uow.files.get(digest.value)
        try:
            data = await self._durable.download(digest.storage_path)
        except BlobNotFound:
            raise BlobNotFound(f"No blob stored for digest {digest}") from None
        if record is not None:
            await self._cache.write(digest.value, data)
        else:
            logger.warning("Blob %s found in durable storage without a record", digest)
        return data

    async def delete(self, digest: ContentDigest) -> None:
        """Remove the blob everywhere. Callers must have checked references."""
        await self._durable.delete(digest.storage_path)
        async with self._uow_factory() as uow:
            await uow.files.delete(digest.value)
        await self._cache.remove(digest.value)
        logger.info("Deleted blob %s", digest)

    async def usage(self) -> int:
        """Total recorded blob bytes."""
        async with self._uow_factory() as uow:
            return await uow.files.total_size()
