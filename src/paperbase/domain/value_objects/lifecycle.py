"""Document lifecycle: active or trashed, with a fixed retention window.

The lifecycle is a tagged union rather than two nullable timestamps, so a
document can never carry ``deleted_at`` without a matching ``trash_until``.
The timestamp pair is produced only at the storage boundary through
``to_markers`` / ``lifecycle_from_markers``.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import StrEnum

# Caller-visible contract: soft-deleted documents expire 10 days after deletion.
RETENTION_PERIOD = timedelta(days=10)


class LifecycleState(StrEnum):
    """Observable state of a document at a point in time."""

    ACTIVE = "active"
    TRASHED = "trashed"
    EXPIRED = "expired"


@dataclass(frozen=True)
class Active:
    """Document is visible in the project."""

    def state_at(self, now: datetime) -> LifecycleState:
        return LifecycleState.ACTIVE

    def to_markers(self) -> tuple[datetime | None, datetime | None]:
        return None, None


@dataclass(frozen=True)
class Trashed:
    """Document is in the trash since ``since`` and expires at ``until``."""

    since: datetime
    until: datetime

    def __post_init__(self) -> None:
        if self.until < self.since:
            raise ValueError("trash_until must not precede deleted_at")

    @classmethod
    def starting(cls, now: datetime) -> "Trashed":
        """Trash a document now, expiring after the retention period."""
        return cls(since=now, until=now + RETENTION_PERIOD)

    def state_at(self, now: datetime) -> LifecycleState:
        if now >= self.until:
            return LifecycleState.EXPIRED
        return LifecycleState.TRASHED

    def to_markers(self) -> tuple[datetime | None, datetime | None]:
        return self.since, self.until


Lifecycle = Active | Trashed


def lifecycle_from_markers(
    deleted_at: datetime | None, trash_until: datetime | None
) -> Lifecycle:
    """Rebuild a lifecycle from stored ``deleted_at`` / ``trash_until`` columns.

    Rows with ``deleted_at`` but no ``trash_until`` predate the retention
    window and are treated as already expired.
    """
    if deleted_at is None:
        return Active()
    if trash_until is None:
        return Trashed(since=deleted_at, until=deleted_at)
    return Trashed(since=deleted_at, until=trash_until)
