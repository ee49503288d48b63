"""Garbage collection report."""

from dataclasses import dataclass, field


@dataclass
class GarbageCollectionReport:
    """What one collector sweep did."""

    expired: int = 0
    removed: list[str] = field(default_factory=list)
    blobs_deleted: list[str] = field(default_factory=list)
    blobs_retained: list[str] = field(default_factory=list)
    failures: dict[str, str] = field(default_factory=dict)

    @property
    def removed_count(self) -> int:
        return len(self.removed)
