"""Remote registry mirror queried through PostgREST."""

import httpx

from paperbase.domain.exceptions import ReferenceCheckFailed


def _parse_total(content_range: str | None) -> int:
    """Total from a Content-Range header such as ``0-0/3`` or ``*/0``."""
    if not content_range or "/" not in content_range:
        raise ReferenceCheckFailed(f"Missing count in Content-Range: {content_range!r}")
    total = content_range.rsplit("/", 1)[1]
    if not total.isdigit():
        raise ReferenceCheckFailed(f"Unknown total in Content-Range: {content_range!r}")
    return int(total)


class PostgrestRemoteRegistry:
    """Counts active documents referencing a digest in the remote ``documents`` table."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._headers = {
            "Authorization": f"Bearer {api_key}",
            "apikey": api_key,
            "Prefer": "count=exact",
        }

    async def count_active_references(self, digest: str) -> int:
        try:
            response = await self._client.head(
                f"{self._base_url}/rest/v1/documents",
                params={
                    "select": "id",
                    "file_hash": f"eq.{digest}",
                    "deleted_at": "is.null",
                },
                headers=self._headers,
            )
        except httpx.HTTPError as e:
            raise ReferenceCheckFailed(f"Remote registry unreachable: {e}") from e
        if not response.is_success:
            raise ReferenceCheckFailed(f"Remote registry returned HTTP {response.status_code}")
        return _parse_total(response.headers.get("content-range"))

    async def aclose(self) -> None:
        await self._client.aclose()
