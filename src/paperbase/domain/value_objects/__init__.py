"""Domain value objects."""

from paperbase.domain.value_objects.annotation_kind import AnnotationKind
from paperbase.domain.value_objects.content_digest import ContentDigest, compute_digest
from paperbase.domain.value_objects.document_view import DocumentView
from paperbase.domain.value_objects.lifecycle import (
    RETENTION_PERIOD,
    Active,
    Lifecycle,
    LifecycleState,
    Trashed,
    lifecycle_from_markers,
)
from paperbase.domain.value_objects.storage_limits import StorageLimits, format_storage_size

__all__ = [
    "RETENTION_PERIOD",
    "Active",
    "AnnotationKind",
    "ContentDigest",
    "DocumentView",
    "Lifecycle",
    "LifecycleState",
    "StorageLimits",
    "Trashed",
    "compute_digest",
    "format_storage_size",
    "lifecycle_from_markers",
]
