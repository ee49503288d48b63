"""Domain entities."""

from paperbase.domain.entities.annotation import Annotation
from paperbase.domain.entities.document import Document
from paperbase.domain.entities.file_blob import FileBlob
from paperbase.domain.entities.knowledge import Knowledge, KnowledgeEntry

__all__ = [
    "Annotation",
    "Document",
    "FileBlob",
    "Knowledge",
    "KnowledgeEntry",
]
