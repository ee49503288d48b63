"""Reference-safety checker port."""

from collections.abc import Collection
from enum import StrEnum
from typing import Protocol

from paperbase.application.ports.repositories.document_repository import DocumentKey
from paperbase.domain.value_objects import ContentDigest


class ReferenceStatus(StrEnum):
    """Whether any active document still points at a digest."""

    UNREFERENCED = "unreferenced"
    REFERENCED = "referenced"
    UNKNOWN = "unknown"


class ReferenceChecker(Protocol):
    """Port for deciding whether a shared blob may be deleted."""

    async def check(
        self, digest: ContentDigest, exclude: Collection[DocumentKey] = ()
    ) -> ReferenceStatus: ...

    async def is_safe_to_delete_blob(
        self, digest: ContentDigest, exclude: Collection[DocumentKey] = ()
    ) -> bool: ...
