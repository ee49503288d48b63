"""Storage usage DTO."""

from dataclasses import dataclass


@dataclass
class StorageUsageOutput:
    """Current blob storage consumption against the quota."""

    used_bytes: int
    limit_bytes: int
    max_file_size_bytes: int
    percentage: int
    used_display: str
    limit_display: str
