"""Text and embedded metadata from PDF bytes."""

import io
from dataclasses import dataclass, field

from pypdf import PdfReader


@dataclass(frozen=True, slots=True)
class PdfContent:
    """Leading page text, total page count and the embedded info dictionary."""

    text: str
    page_count: int
    info: dict[str, str] = field(default_factory=dict)


def _parse_pdf_date(value: str) -> str:
    """Convert PDF date string (D:YYYYMMDD...) to ISO-like string."""
    if not value.startswith("D:"):
        return value
    s = value[2:].strip()
    if len(s) >= 8:
        return f"{s[:4]}-{s[4:6]}-{s[6:8]}"
    return value


def _read_info(reader: PdfReader) -> dict[str, str]:
    meta = reader.metadata
    if not meta:
        return {}
    info: dict[str, str] = {}
    for key, name in (("/Title", "title"), ("/Author", "author"), ("/CreationDate", "created")):
        raw = meta.get(key)
        if raw is None:
            continue
        value = str(raw).strip()
        if not value:
            continue
        info[name] = _parse_pdf_date(value) if name == "created" else value
    return info


def read_pdf(data: bytes, max_pages: int = 3) -> PdfContent:
    """Extract text of the first ``max_pages`` pages. Raises ValueError on bad PDFs."""
    try:
        reader = PdfReader(io.BytesIO(data))
        pages = reader.pages
        parts: list[str] = []
        for i in range(min(max_pages, len(pages))):
            t = pages[i].extract_text()
            if t:
                parts.append(t)
        return PdfContent(
            text="\n\n".join(parts),
            page_count=len(pages),
            info=_read_info(reader),
        )
    except Exception as e:
        raise ValueError(f"Invalid or corrupted PDF: {e}") from e
