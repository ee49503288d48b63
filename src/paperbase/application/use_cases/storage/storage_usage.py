"""Storage usage use case."""

from paperbase.application.dto.storage_usage import StorageUsageOutput
from paperbase.application.ports import BlobStore
from paperbase.domain.value_objects import StorageLimits, format_storage_size


class StorageUsageUseCase:
    """Report blob storage consumption against the quota."""

    def __init__(self, blob_store: BlobStore, storage_limits: StorageLimits) -> None:
        self._blob_store = blob_store
        self._limits = storage_limits

    async def execute(self) -> StorageUsageOutput:
        used = await self._blob_store.usage()
        return StorageUsageOutput(
            used_bytes=used,
            limit_bytes=self._limits.max_storage_bytes,
            max_file_size_bytes=self._limits.max_file_size_bytes,
            percentage=self._limits.usage_percentage(used),
            used_display=format_storage_size(used),
            limit_display=format_storage_size(self._limits.max_storage_bytes),
        )
