"""Storage usage API resource."""

import falcon.asgi

from paperbase.application.use_cases.storage.storage_usage import StorageUsageUseCase


class StorageUsageResource:
    """GET /v1/storage/usage - blob storage consumption against the quota."""

    def __init__(self, storage_usage: StorageUsageUseCase) -> None:
        self._storage_usage = storage_usage

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        usage = await self._storage_usage.execute()
        resp.media = {
            "used_bytes": usage.used_bytes,
            "limit_bytes": usage.limit_bytes,
            "max_file_size_bytes": usage.max_file_size_bytes,
            "percentage": usage.percentage,
            "used": usage.used_display,
            "limit": usage.limit_display,
        }
        resp.status = falcon.HTTP_200
