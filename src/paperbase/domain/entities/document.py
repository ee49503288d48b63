"""Document entity."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from paperbase.domain.value_objects.lifecycle import (
    Active,
    Lifecycle,
    LifecycleState,
    Trashed,
)


@dataclass
class Document:
    """Project-scoped record referencing a stored blob by content digest."""

    id: str
    project_id: str
    file_digest: str | None
    title: str
    file_name: str
    media_type: str
    added_at: datetime
    lifecycle: Lifecycle = field(default_factory=Active)
    metadata: dict[str, Any] = field(default_factory=dict)
    version: int = 1

    @property
    def deleted_at(self) -> datetime | None:
        return self.lifecycle.to_markers()[0]

    @property
    def trash_until(self) -> datetime | None:
        return self.lifecycle.to_markers()[1]

    @property
    def is_active(self) -> bool:
        return isinstance(self.lifecycle, Active)

    def state_at(self, now: datetime) -> LifecycleState:
        return self.lifecycle.state_at(now)

    def trash(self, now: datetime) -> bool:
        """Move an active document to the trash. Returns False if already trashed."""
        if not self.is_active:
            return False
        self.lifecycle = Trashed.starting(now)
        self.version += 1
        return True

    def restore(self, now: datetime) -> bool:
        """Return a trashed document to active. Expired documents stay expired."""
        if self.state_at(now) is not LifecycleState.TRASHED:
            return False
        self.lifecycle = Active()
        self.version += 1
        return True
