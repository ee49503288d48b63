"""Annotation entity."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID

from paperbase.domain.value_objects.annotation_kind import AnnotationKind


@dataclass
class Annotation:
    """Note or highlight owned by a single document."""

    id: UUID
    project_id: str
    document_id: str
    kind: AnnotationKind
    page_number: int
    content: str
    created_at: datetime
    color: str | None = None
    position: dict[str, Any] = field(default_factory=dict)
