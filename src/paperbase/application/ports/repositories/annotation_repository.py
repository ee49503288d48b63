"""Annotation repository port."""

from typing import Protocol

from paperbase.domain.entities import Annotation


class AnnotationRepository(Protocol):
    """Port for notes and highlights owned by documents."""

    async def list_by_document(
        self, project_id: str, document_id: str
    ) -> list[Annotation]: ...

    async def create(self, annotation: Annotation) -> Annotation: ...

    async def delete_by_document(self, project_id: str, document_id: str) -> int: ...
