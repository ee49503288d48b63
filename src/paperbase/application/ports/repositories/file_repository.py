"""File blob record repository port."""

from typing import Protocol

from paperbase.domain.entities import FileBlob


class FileRepository(Protocol):
    """Port for durable blob records (one row per digest)."""

    async def get(self, digest: str) -> FileBlob | None: ...

    async def create(self, blob: FileBlob) -> bool: ...

    async def delete(self, digest: str) -> None: ...

    async def total_size(self) -> int: ...
