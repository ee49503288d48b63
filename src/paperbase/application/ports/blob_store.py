"""Blob store port."""

from typing import Protocol

from paperbase.domain.value_objects import ContentDigest


class BlobStore(Protocol):
    """Immutable byte blobs keyed by content digest."""

    async def exists(self, digest: ContentDigest) -> bool: ...

    async def put(self, digest: ContentDigest, data: bytes, media_type: str) -> None: ...

    async def get(self, digest: ContentDigest) -> bytes: ...

    async def delete(self, digest: ContentDigest) -> None: ...

    async def usage(self) -> int: ...
