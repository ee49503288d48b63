"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from paperbase.application.use_cases.annotation.add_annotation import AddAnnotationUseCase
from paperbase.application.use_cases.annotation.list_annotations import ListAnnotationsUseCase
from paperbase.application.use_cases.document.get_document import GetDocumentUseCase
from paperbase.application.use_cases.document.list_documents import ListDocumentsUseCase
from paperbase.application.use_cases.document.read_document_file import (
    ReadDocumentFileUseCase,
)
from paperbase.application.use_cases.storage.storage_usage import StorageUsageUseCase
from paperbase.application.use_cases.trash.delete_documents import DeleteDocumentsUseCase
from paperbase.application.use_cases.trash.restore_documents import RestoreDocumentsUseCase
from paperbase.interfaces.api.app import create_app
from paperbase.interfaces.api.resources.annotations import AnnotationsResource
from paperbase.interfaces.api.resources.documents import (
    DocumentFileResource,
    DocumentResource,
    DocumentsResource,
)
from paperbase.interfaces.api.resources.health import HealthResource
from paperbase.interfaces.api.resources.storage import StorageUsageResource
from paperbase.interfaces.api.resources.trash import TrashResource


@pytest.fixture
def app(uow_factory, add_document, collect_garbage, blob_store, storage_limits, clock):
    """Falcon ASGI app wired to in-memory repositories and fake services."""
    list_documents = ListDocumentsUseCase(
        unit_of_work_factory=uow_factory,
        collect_garbage=collect_garbage,
        clock=clock,
    )
    return create_app(
        documents_resource=DocumentsResource(add_document, list_documents),
        document_resource=DocumentResource(
            GetDocumentUseCase(unit_of_work_factory=uow_factory, clock=clock)
        ),
        document_file_resource=DocumentFileResource(
            ReadDocumentFileUseCase(
                unit_of_work_factory=uow_factory, blob_store=blob_store, clock=clock
            )
        ),
        trash_resource=TrashResource(
            DeleteDocumentsUseCase(unit_of_work_factory=uow_factory, clock=clock),
            RestoreDocumentsUseCase(
                unit_of_work_factory=uow_factory, blob_store=blob_store, clock=clock
            ),
        ),
        annotations_resource=AnnotationsResource(
            AddAnnotationUseCase(unit_of_work_factory=uow_factory, clock=clock),
            ListAnnotationsUseCase(unit_of_work_factory=uow_factory),
        ),
        storage_usage_resource=StorageUsageResource(
            StorageUsageUseCase(blob_store=blob_store, storage_limits=storage_limits)
        ),
        health_resource=HealthResource(),
        max_file_size_bytes=storage_limits.max_file_size_bytes,
    )


@pytest.fixture
def client(app) -> TestClient:
    """Falcon ASGI test client."""
    return TestClient(app)
