"""Durable object storage port."""

from typing import Protocol


class DurableStorage(Protocol):
    """Remote object storage for blob bytes.

    Objects are content addressed and never overwritten: uploading to a path
    that already holds an object succeeds and returns its locator.
    """

    async def upload(self, path: str, data: bytes, content_type: str) -> str: ...

    async def download(self, path: str) -> bytes: ...

    async def delete(self, path: str) -> None: ...
