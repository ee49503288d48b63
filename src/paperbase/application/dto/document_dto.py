"""Document DTOs."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from paperbase.domain.entities import Document

PDF_MEDIA_TYPE = "application/pdf"


@dataclass
class AddDocumentInput:
    """Input for adding a file to a project."""

    project_id: str
    data: bytes
    filename: str
    media_type: str = PDF_MEDIA_TYPE
    document_id: str | None = None


@dataclass
class DocumentOutput:
    """Output DTO for document."""

    id: str
    project_id: str
    file_digest: str | None
    title: str
    file_name: str
    media_type: str
    added_at: datetime
    deleted_at: datetime | None
    trash_until: datetime | None
    version: int
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_entity(cls, document: Document) -> "DocumentOutput":
        return cls(
            id=document.id,
            project_id=document.project_id,
            file_digest=document.file_digest,
            title=document.title,
            file_name=document.file_name,
            media_type=document.media_type,
            added_at=document.added_at,
            deleted_at=document.deleted_at,
            trash_until=document.trash_until,
            version=document.version,
            metadata=dict(document.metadata),
        )


@dataclass
class TrashOperationResult:
    """Outcome of a batch delete or restore."""

    updated: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    # Restorable ids whose blob was already collected; they need a re-upload
    blob_missing: list[str] = field(default_factory=list)


@dataclass
class DocumentFileOutput:
    """Stored file bytes of a document."""

    file_name: str
    media_type: str
    data: bytes
