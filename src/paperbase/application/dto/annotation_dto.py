"""Annotation DTOs."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID

from paperbase.domain.entities import Annotation
from paperbase.domain.value_objects import AnnotationKind


@dataclass
class AnnotationCreateInput:
    """Input for annotating a document."""

    project_id: str
    document_id: str
    kind: AnnotationKind
    page_number: int
    content: str
    color: str | None = None
    position: dict[str, Any] = field(default_factory=dict)


@dataclass
class AnnotationOutput:
    """Output DTO for annotation."""

    id: UUID
    document_id: str
    kind: AnnotationKind
    page_number: int
    content: str
    created_at: datetime
    color: str | None = None
    position: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_entity(cls, annotation: Annotation) -> "AnnotationOutput":
        return cls(
            id=annotation.id,
            document_id=annotation.document_id,
            kind=annotation.kind,
            page_number=annotation.page_number,
            content=annotation.content,
            created_at=annotation.created_at,
            color=annotation.color,
            position=dict(annotation.position),
        )
