"""Remote registry port."""

from typing import Protocol


class RemoteRegistry(Protocol):
    """Mirror of document records kept by other devices and projects."""

    async def count_active_references(self, digest: str) -> int: ...
