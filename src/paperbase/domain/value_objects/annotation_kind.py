"""Annotation kinds."""

from enum import StrEnum


class AnnotationKind(StrEnum):
    """Kinds of annotations attached to a document."""

    NOTE = "note"
    HIGHLIGHT = "highlight"
