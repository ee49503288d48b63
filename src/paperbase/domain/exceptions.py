"""Domain exceptions."""


class PaperbaseError(Exception):
    """Base exception for Paperbase."""

    pass


class NotFound(PaperbaseError):
    """Requested resource was not found."""

    pass


class BlobNotFound(NotFound):
    """No stored bytes exist for the requested digest."""

    pass


class DuplicateId(PaperbaseError):
    """Document with the same id already exists in the project."""

    pass


class ValidationError(PaperbaseError):
    """Validation failed for input data."""

    pass


class HashComputationFailed(PaperbaseError):
    """Content digest could not be computed. The upload may be retried."""

    pass


class StorageLimitError(PaperbaseError):
    """Upload rejected by a storage limit before anything was written."""

    reason = "storage_limit"

    def __init__(self, message: str, *, size: int, limit: int) -> None:
        super().__init__(message)
        self.size = size
        self.limit = limit


class FileTooLarge(StorageLimitError):
    """File exceeds the per-file size ceiling."""

    reason = "file_too_large"


class QuotaExceeded(StorageLimitError):
    """Storing the file would exceed the aggregate storage quota."""

    reason = "quota_exceeded"


class DurableStorageError(PaperbaseError):
    """Durable object storage request failed."""

    pass


class DurableUploadFailed(DurableStorageError):
    """Upload to durable storage failed. Nothing was stored."""

    pass


class MetadataInsertFailed(PaperbaseError):
    """Blob bytes were uploaded but its record could not be written."""

    pass


class ExtractionFailed(PaperbaseError):
    """Metadata extraction failed or returned unusable data."""

    pass


class ReferenceCheckFailed(PaperbaseError):
    """Reference count could not be obtained from the remote registry."""

    pass
