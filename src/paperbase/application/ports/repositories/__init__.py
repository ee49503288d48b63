"""Repository ports."""

from paperbase.application.ports.repositories.annotation_repository import (
    AnnotationRepository,
)
from paperbase.application.ports.repositories.document_repository import (
    DocumentKey,
    DocumentRepository,
)
from paperbase.application.ports.repositories.file_repository import FileRepository
from paperbase.application.ports.repositories.knowledge_repository import (
    KnowledgeRepository,
)

__all__ = [
    "AnnotationRepository",
    "DocumentKey",
    "DocumentRepository",
    "FileRepository",
    "KnowledgeRepository",
]
