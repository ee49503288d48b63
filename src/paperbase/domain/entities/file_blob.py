"""File blob entity."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class FileBlob:
    """Immutable stored bytes of one uploaded file, keyed by content digest."""

    digest: str
    media_type: str
    size: int
    storage_url: str
    created_at: datetime
