"""Metadata extractor port."""

from typing import Protocol

from paperbase.domain.entities import Knowledge


class MetadataExtractor(Protocol):
    """Port for extracting bibliographic metadata from PDF bytes."""

    async def extract(self, data: bytes, filename: str | None = None) -> Knowledge: ...
