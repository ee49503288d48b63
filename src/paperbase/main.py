"""Application entry point and composition root."""

import logging

from falcon.asgi import App

from paperbase import __version__
from paperbase.application.use_cases.annotation.add_annotation import AddAnnotationUseCase
from paperbase.application.use_cases.annotation.list_annotations import ListAnnotationsUseCase
from paperbase.application.use_cases.document.add_document import AddDocumentUseCase
from paperbase.application.use_cases.document.get_document import GetDocumentUseCase
from paperbase.application.use_cases.document.list_documents import ListDocumentsUseCase
from paperbase.application.use_cases.document.read_document_file import (
    ReadDocumentFileUseCase,
)
from paperbase.application.use_cases.storage.storage_usage import StorageUsageUseCase
from paperbase.application.use_cases.trash.collect_garbage import CollectGarbageUseCase
from paperbase.application.use_cases.trash.delete_documents import DeleteDocumentsUseCase
from paperbase.application.use_cases.trash.restore_documents import RestoreDocumentsUseCase
from paperbase.config import get_settings
from paperbase.infrastructure.extraction.openai_extractor import OpenAIMetadataExtractor
from paperbase.infrastructure.knowledge.knowledge_cache import RepositoryKnowledgeCache
from paperbase.infrastructure.persistence.postgres.connection import create_pool
from paperbase.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from paperbase.infrastructure.reference.reference_checker import PaperbaseReferenceChecker
from paperbase.infrastructure.remote.postgrest_registry import PostgrestRemoteRegistry
from paperbase.infrastructure.storage.blob_store import ContentAddressedBlobStore
from paperbase.infrastructure.storage.local_cache import LocalBlobCache
from paperbase.infrastructure.storage.supabase_storage import SupabaseObjectStorage
from paperbase.interfaces.api.app import create_app
from paperbase.interfaces.api.middleware.cors import CORSMiddleware
from paperbase.interfaces.api.middleware.lifespan import LifespanMiddleware
from paperbase.interfaces.api.resources.annotations import AnnotationsResource
from paperbase.interfaces.api.resources.documents import (
    DocumentFileResource,
    DocumentResource,
    DocumentsResource,
)
from paperbase.interfaces.api.resources.health import HealthResource
from paperbase.interfaces.api.resources.storage import StorageUsageResource
from paperbase.interfaces.api.resources.trash import TrashResource
from paperbase.logging_config import setup_logging

logger = logging.getLogger(__name__)


def create_paperbase_app() -> App:
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.debug)

    pool = create_pool(settings.database_url)
    uow_factory = create_uow_factory(pool)

    durable_storage = SupabaseObjectStorage(
        base_url=settings.storage_url,
        api_key=settings.storage_api_key,
        bucket=settings.storage_bucket,
    )
    remote_registry = (
        PostgrestRemoteRegistry(
            base_url=settings.remote_registry_url,
            api_key=settings.remote_registry_api_key,
        )
        if settings.remote_registry_url
        else None
    )
    extractor = OpenAIMetadataExtractor(
        base_url=settings.extraction_api_url,
        api_key=settings.extraction_api_key,
        model=settings.extraction_model,
        max_pages=settings.extraction_max_pages,
    )

    blob_store = ContentAddressedBlobStore(
        unit_of_work_factory=uow_factory,
        durable_storage=durable_storage,
        local_cache=LocalBlobCache(settings.blob_cache_dir),
    )
    knowledge_cache = RepositoryKnowledgeCache(unit_of_work_factory=uow_factory)
    reference_checker = PaperbaseReferenceChecker(
        unit_of_work_factory=uow_factory,
        remote_registry=remote_registry,
    )
    storage_limits = settings.storage_limits

    collect_garbage = CollectGarbageUseCase(
        unit_of_work_factory=uow_factory,
        blob_store=blob_store,
        knowledge_cache=knowledge_cache,
        reference_checker=reference_checker,
    )
    add_document = AddDocumentUseCase(
        unit_of_work_factory=uow_factory,
        blob_store=blob_store,
        knowledge_cache=knowledge_cache,
        metadata_extractor=extractor,
        storage_limits=storage_limits,
        collect_garbage=collect_garbage,
    )
    list_documents = ListDocumentsUseCase(
        unit_of_work_factory=uow_factory,
        collect_garbage=collect_garbage,
    )
    get_document = GetDocumentUseCase(unit_of_work_factory=uow_factory)
    read_document_file = ReadDocumentFileUseCase(
        unit_of_work_factory=uow_factory,
        blob_store=blob_store,
    )
    delete_documents = DeleteDocumentsUseCase(unit_of_work_factory=uow_factory)
    restore_documents = RestoreDocumentsUseCase(
        unit_of_work_factory=uow_factory,
        blob_store=blob_store,
    )
    add_annotation = AddAnnotationUseCase(unit_of_work_factory=uow_factory)
    list_annotations = ListAnnotationsUseCase(unit_of_work_factory=uow_factory)
    storage_usage = StorageUsageUseCase(blob_store=blob_store, storage_limits=storage_limits)

    closers = [durable_storage.aclose, extractor.aclose]
    if remote_registry is not None:
        closers.append(remote_registry.aclose)

    cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    logger.info("Paperbase v%s (%s)", __version__, settings.environment)
    return create_app(
        documents_resource=DocumentsResource(add_document, list_documents),
        document_resource=DocumentResource(get_document),
        document_file_resource=DocumentFileResource(read_document_file),
        trash_resource=TrashResource(delete_documents, restore_documents),
        annotations_resource=AnnotationsResource(add_annotation, list_annotations),
        storage_usage_resource=StorageUsageResource(storage_usage),
        health_resource=HealthResource(pool),
        max_file_size_bytes=storage_limits.max_file_size_bytes,
        middleware=[
            CORSMiddleware(cors_origins),
            LifespanMiddleware(pool, closers),
        ],
    )


def run_server(host: str = "0.0.0.0", port: int = 8000) -> None:
    """Run uvicorn server."""
    import uvicorn

    uvicorn.run(create_paperbase_app(), host=host, port=port)


def main() -> None:
    """CLI entry point."""
    run_server()


if __name__ == "__main__":
    main()
