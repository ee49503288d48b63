"""Durable object storage over the Supabase Storage REST API."""

import httpx

from paperbase.domain.exceptions import (
    BlobNotFound,
    DurableStorageError,
    DurableUploadFailed,
)


def _is_duplicate(response: httpx.Response) -> bool:
    """Storage answers 409, or 400 with a Duplicate body, for existing objects."""
    if response.status_code == 409:
        return True
    return response.status_code == 400 and "Duplicate" in response.text


def _is_missing(response: httpx.Response) -> bool:
    if response.status_code == 404:
        return True
    return response.status_code == 400 and "not_found" in response.text.lower()


class SupabaseObjectStorage:
    """Immutable objects in one bucket; uploads never overwrite."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        bucket: str = "files",
        client: httpx.AsyncClient | None = None,
        timeout: float = 60.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._bucket = bucket
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._headers = {"Authorization": f"Bearer {api_key}", "apikey": api_key}

    def _object_url(self, path: str) -> str:
        return f"{self._base_url}/storage/v1/object/{self._bucket}/{path}"

    def locator(self, path: str) -> str:
        return f"{self._bucket}/{path}"

    async def upload(self, path: str, data: bytes, content_type: str) -> str:
        """Upload bytes; an object already at ``path`` counts as uploaded."""
        try:
            response = await self._client.post(
                self._object_url(path),
                content=data,
                headers={
                    **self._headers,
                    "Content-Type": content_type,
                    "x-upsert": "false",
                },
            )
        except httpx.HTTPError as e:
            raise DurableUploadFailed(f"Failed to upload file: {e}") from e
        if response.is_success or _is_duplicate(response):
            return self.locator(path)
        raise DurableUploadFailed(
            f"Failed to upload file: HTTP {response.status_code} {response.text}"
        )

    async def download(self, path: str) -> bytes:
        try:
            response = await self._client.get(self._object_url(path), headers=self._headers)
        except httpx.HTTPError as e:
            raise DurableStorageError(f"Failed to download file: {e}") from e
        if _is_missing(response):
            raise BlobNotFound(path)
        if not response.is_success:
            raise DurableStorageError(
                f"Failed to download file: HTTP {response.status_code} {response.text}"
            )
        return response.content

    async def delete(self, path: str) -> None:
        """Remove the object. Removing a missing object succeeds."""
        try:
            response = await self._client.request(
                "DELETE",
                f"{self._base_url}/storage/v1/object/{self._bucket}",
                json={"prefixes": [path]},
                headers=self._headers,
            )
        except httpx.HTTPError as e:
            raise DurableStorageError(f"Failed to delete file: {e}") from e
        if not response.is_success and not _is_missing(response):
            raise DurableStorageError(
                f"Failed to delete file: HTTP {response.status_code} {response.text}"
            )

    async def aclose(self) -> None:
        await self._client.aclose()
