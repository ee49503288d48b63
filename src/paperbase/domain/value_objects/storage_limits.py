"""Storage limits for new uploads."""

from dataclasses import dataclass

from paperbase.domain.exceptions import FileTooLarge, QuotaExceeded

MIB = 1024 * 1024

DEFAULT_MAX_FILE_SIZE_BYTES = 25 * MIB
DEFAULT_MAX_STORAGE_BYTES = 900 * MIB


@dataclass(frozen=True)
class StorageLimits:
    """Per-file size ceiling and aggregate quota, in bytes."""

    max_file_size_bytes: int = DEFAULT_MAX_FILE_SIZE_BYTES
    max_storage_bytes: int = DEFAULT_MAX_STORAGE_BYTES

    def check_upload(self, size: int, current_usage: int) -> None:
        """Raise if a new blob of ``size`` bytes may not be stored.

        Only called for bytes not already stored: reused blobs never count.
        """
        if size > self.max_file_size_bytes:
            raise FileTooLarge(
                f"File exceeds the {format_storage_size(self.max_file_size_bytes)} limit.",
                size=size,
                limit=self.max_file_size_bytes,
            )
        if current_usage + size > self.max_storage_bytes:
            raise QuotaExceeded(
                "Storage limit reached. Clear Trash to free up space.",
                size=size,
                limit=self.max_storage_bytes,
            )

    def usage_percentage(self, current_usage: int) -> int:
        """Usage as a rounded percentage of the quota, capped at 100."""
        if self.max_storage_bytes <= 0:
            return 100
        return min(100, round(current_usage / self.max_storage_bytes * 100))


def format_storage_size(size: int) -> str:
    """Human-readable size, e.g. ``125.5 MB``."""
    if size <= 0:
        return "0 B"
    units = ["B", "KB", "MB", "GB"]
    value = float(size)
    i = 0
    while value >= 1024 and i < len(units) - 1:
        value /= 1024
        i += 1
    return f"{value:.1f} {units[i]}"
