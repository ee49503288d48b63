"""Extracted document knowledge."""

import re
from dataclasses import asdict, dataclass, field, fields
from datetime import datetime
from typing import Any

# Wire names of the extraction payload -> Knowledge attribute names.
_WIRE_TO_FIELD = {
    "publicationDate": "publication_date",
    "itemType": "item_type",
    "proceedingsTitle": "proceedings_title",
    "conferenceName": "conference_name",
    "shortTitle": "short_title",
    "pageCount": "page_count",
}

_LEADING_INT = re.compile(r"\s*(\d+)")


def _as_str_list(value: Any) -> list[str] | None:
    if value is None:
        return None
    if isinstance(value, str):
        return [v.strip() for v in value.split(",") if v.strip()] or None
    if isinstance(value, list):
        return [str(v) for v in value if v is not None and str(v).strip()] or None
    return None


def _as_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class Knowledge:
    """Bibliographic metadata extracted from a document's content."""

    title: str | None = None
    authors: list[str] | None = None
    abstract: str | None = None
    keywords: list[str] | None = None
    journal: str | None = None
    publisher: str | None = None
    publication_date: str | None = None
    doi: str | None = None
    isbn: str | None = None
    volume: str | None = None
    issue: str | None = None
    pages: str | None = None
    language: str | None = None
    item_type: str | None = None
    proceedings_title: str | None = None
    conference_name: str | None = None
    place: str | None = None
    series: str | None = None
    short_title: str | None = None
    url: str | None = None
    rights: str | None = None
    year: int | None = None
    page_count: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Knowledge":
        """Build from an extraction payload; unknown keys are ignored."""
        names = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in data.items():
            name = _WIRE_TO_FIELD.get(key, key)
            if name not in names or value in ("", None):
                continue
            values[name] = value
        for name in ("authors", "keywords"):
            if name in values:
                values[name] = _as_str_list(values[name])
        for name in ("year", "page_count"):
            if name in values:
                values[name] = _as_int(values[name])
        for name, value in list(values.items()):
            if name not in ("authors", "keywords", "year", "page_count"):
                values[name] = str(value)
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def to_document_metadata(self) -> dict[str, Any]:
        """Non-empty fields as document metadata; keywords become tags."""
        result = {k: v for k, v in asdict(self).items() if v is not None and k != "keywords"}
        if self.keywords:
            result["tags"] = list(self.keywords)
        return result


@dataclass(frozen=True)
class KnowledgeEntry:
    """Cached extraction result for one content digest."""

    digest: str
    knowledge: Knowledge = field(default_factory=Knowledge)
    extracted_at: datetime | None = None
