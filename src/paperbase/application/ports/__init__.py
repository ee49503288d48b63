"""Application ports - interfaces for external adapters."""

from paperbase.application.ports.blob_store import BlobStore
from paperbase.application.ports.durable_storage import DurableStorage
from paperbase.application.ports.knowledge_cache import KnowledgeCache
from paperbase.application.ports.metadata_extractor import MetadataExtractor
from paperbase.application.ports.reference_checker import ReferenceChecker, ReferenceStatus
from paperbase.application.ports.remote_registry import RemoteRegistry
from paperbase.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "BlobStore",
    "DurableStorage",
    "KnowledgeCache",
    "MetadataExtractor",
    "ReferenceChecker",
    "ReferenceStatus",
    "RemoteRegistry",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
