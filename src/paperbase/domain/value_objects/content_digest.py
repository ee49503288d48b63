"""Content digest for deduplication."""

import hashlib
import re
from dataclasses import dataclass

from paperbase.domain.exceptions import HashComputationFailed

_HEX_SHA256 = re.compile(r"^[0-9a-f]{64}$")


@dataclass(frozen=True)
class ContentDigest:
    """SHA-256 digest of file bytes, lowercase hex."""

    value: str

    def __post_init__(self) -> None:
        if not _HEX_SHA256.match(self.value):
            raise ValueError("SHA-256 digest must be 64 lowercase hex characters")

    @property
    def storage_path(self) -> str:
        """Object name of the blob in durable storage."""
        return f"{self.value}.pdf"

    def __str__(self) -> str:
        return self.value


def compute_digest(data: bytes) -> ContentDigest:
    """Hash file bytes. Same bytes always give the same digest."""
    try:
        return ContentDigest(hashlib.sha256(data).hexdigest())
    except (TypeError, ValueError) as e:
        raise HashComputationFailed(f"Failed to compute file hash: {e}") from e
