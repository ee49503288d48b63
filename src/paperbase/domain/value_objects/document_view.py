"""Document listing views."""

from enum import StrEnum


class DocumentView(StrEnum):
    """Partitions of a project's documents."""

    ACTIVE = "active"
    TRASHED = "trashed"
