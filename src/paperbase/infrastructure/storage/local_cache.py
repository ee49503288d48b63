"""Filesystem cache of blob bytes keyed by digest."""

import asyncio
import os
import tempfile
from pathlib import Path


class LocalBlobCache:
    """Blob bytes under ``<root>/<digest[:2]>/<digest>``.

    Writes go through a temporary file and an atomic rename, so concurrent
    writers of the same digest never expose a partial file.
    """

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)

    def _path(self, digest: str) -> Path:
        return self._root / digest[:2] / digest

    async def has(self, digest: str) -> bool:
        return await asyncio.to_thread(self._path(digest).is_file)

    async def read(self, digest: str) -> bytes | None:
        return await asyncio.to_thread(self._read, self._path(digest))

    async def write(self, digest: str, data: bytes) -> None:
        await asyncio.to_thread(self._write, self._path(digest), data)

    async def remove(self, digest: str) -> None:
        await asyncio.to_thread(self._path(digest).unlink, missing_ok=True)

    @staticmethod
    def _read(path: Path) -> bytes | None:
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None

    @staticmethod
    def _write(path: Path, data: bytes) -> None:
        if path.is_file():
            return
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".tmp-")
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
