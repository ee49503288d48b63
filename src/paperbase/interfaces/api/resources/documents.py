"""Document API resources."""

import re
from urllib.parse import quote, unquote_to_bytes

import falcon.asgi

from paperbase.application.dto.document_dto import AddDocumentInput, DocumentOutput
from paperbase.application.use_cases.document.add_document import AddDocumentUseCase
from paperbase.application.use_cases.document.get_document import GetDocumentUseCase
from paperbase.application.use_cases.document.list_documents import ListDocumentsUseCase
from paperbase.application.use_cases.document.read_document_file import (
    ReadDocumentFileUseCase,
)
from paperbase.domain.exceptions import (
    DuplicateId,
    DurableUploadFailed,
    FileTooLarge,
    HashComputationFailed,
    NotFound,
    QuotaExceeded,
    ValidationError,
)
from paperbase.domain.value_objects import DocumentView

# RFC 5987: filename*=charset''percent-encoded (two single quotes)
_FILENAME_STAR_RFC5987 = re.compile(r"([\w-]+)''(.+)")

_FILE_FIELDS = ("file", "files", "files[]")

# Part types sent when the client does not label the file; text/plain is the multipart default
_GENERIC_MEDIA_TYPES = ("", "application/octet-stream", "text/plain")


def _decode_filename(raw: str | None) -> str:
    """Decode filename to UTF-8, fixing mojibake when UTF-8 bytes were read as Latin-1."""
    if not raw or not raw.strip():
        return ""
    raw = raw.strip()
    try:
        return raw.encode("latin-1").decode("utf-8")
    except (UnicodeEncodeError, UnicodeDecodeError):
        return raw


def _parse_filename_star_from_header(raw_header_value: bytes) -> str | None:
    """Parse ``filename*=charset''percent-encoded`` from a raw Content-Disposition value."""
    if not raw_header_value:
        return None
    decoded = raw_header_value.decode("utf-8", errors="replace")
    idx = decoded.find("filename*=")
    if idx == -1:
        return None
    match = _FILENAME_STAR_RFC5987.match(decoded[idx + len("filename*=") :].strip())
    if not match:
        return None
    charset, encoded = match.groups()
    try:
        return unquote_to_bytes(encoded.split(";")[0]).decode(charset)
    except (ValueError, LookupError):
        return None


def _get_part_filename(part: object) -> str:
    """Filename of a multipart part, falling back to ``document.pdf``."""
    raw = (getattr(part, "filename", None) or "").strip()
    if not raw:
        headers = getattr(part, "_headers", None)
        if isinstance(headers, dict):
            raw = (_parse_filename_star_from_header(headers.get(b"content-disposition", b"")) or "").strip()
    return _decode_filename(raw) or "document.pdf"


def _document_to_dict(d: DocumentOutput) -> dict:
    return {
        "id": d.id,
        "project_id": d.project_id,
        "file_digest": d.file_digest,
        "title": d.title,
        "file_name": d.file_name,
        "media_type": d.media_type,
        "added_at": d.added_at.isoformat(),
        "deleted_at": d.deleted_at.isoformat() if d.deleted_at else None,
        "trash_until": d.trash_until.isoformat() if d.trash_until else None,
        "version": d.version,
        "metadata": d.metadata,
    }


class DocumentsResource:
    """GET/POST /v1/projects/{project_id}/documents - list and add documents."""

    def __init__(
        self,
        add_document: AddDocumentUseCase,
        list_documents: ListDocumentsUseCase,
    ) -> None:
        self._add_document = add_document
        self._list_documents = list_documents

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        project_id: str,
    ) -> None:
        """List active (default) or trashed documents."""
        try:
            view = DocumentView(req.get_param("view") or DocumentView.ACTIVE.value)
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "view must be 'active' or 'trashed'"}
            return

        documents = await self._list_documents.execute(project_id, view)
        resp.media = {"items": [_document_to_dict(d) for d in documents]}
        resp.status = falcon.HTTP_200

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        project_id: str,
    ) -> None:
        """Add one file (multipart field ``file``) with an optional ``id``."""
        content_type = req.content_type or ""
        if "multipart/form-data" not in content_type:
            resp.status = falcon.HTTP_415
            resp.media = {"error": "multipart/form-data required"}
            return

        document_id: str | None = None
        uploads: list[tuple[bytes, str, str]] = []
        try:
            form = await req.get_media()
            async for part in form:
                name = (part.name or "").strip()
                if name == "id":
                    document_id = (await part.get_text() or "").strip() or None
                elif name in _FILE_FIELDS:
                    data = await part.get_data()
                    uploads.append((bytes(data), _get_part_filename(part), part.content_type))
        except falcon.MediaMalformedError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Invalid multipart: {e.description}"}
            return

        if len(uploads) != 1:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Exactly one file required"}
            return
        data, filename, media_type = uploads[0]
        if media_type in _GENERIC_MEDIA_TYPES and filename.lower().endswith(".pdf"):
            media_type = "application/pdf"
        if media_type != "application/pdf":
            resp.status = falcon.HTTP_415
            resp.media = {"error": "Only PDF files are supported"}
            return

        try:
            result = await self._add_document.execute(
                AddDocumentInput(
                    project_id=project_id,
                    data=data,
                    filename=filename,
                    media_type=media_type,
                    document_id=document_id,
                )
            )
            resp.media = _document_to_dict(result)
            resp.status = falcon.HTTP_201
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
        except DuplicateId as e:
            resp.status = falcon.HTTP_409
            resp.media = {"error": str(e)}
        except FileTooLarge as e:
            resp.status = falcon.HTTP_413
            resp.media = {"error": str(e), "reason": e.reason, "limit": e.limit}
        except QuotaExceeded as e:
            resp.status = falcon.HTTP_507
            resp.media = {"error": str(e), "reason": e.reason, "limit": e.limit}
        except HashComputationFailed as e:
            resp.status = falcon.HTTP_500
            resp.media = {"error": str(e)}
        except DurableUploadFailed as e:
            resp.status = falcon.HTTP_502
            resp.media = {"error": str(e)}


class DocumentResource:
    """GET /v1/projects/{project_id}/documents/{document_id} - get document."""

    def __init__(self, get_document: GetDocumentUseCase) -> None:
        self._get_document = get_document

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        project_id: str,
        document_id: str,
    ) -> None:
        try:
            result = await self._get_document.execute(project_id, document_id)
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Document not found"}
            return
        resp.media = _document_to_dict(result)
        resp.status = falcon.HTTP_200


class DocumentFileResource:
    """GET /v1/projects/{project_id}/documents/{document_id}/file - stored PDF bytes."""

    def __init__(self, read_document_file: ReadDocumentFileUseCase) -> None:
        self._read_file = read_document_file

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        project_id: str,
        document_id: str,
    ) -> None:
        try:
            result = await self._read_file.execute(project_id, document_id)
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "File not found"}
            return
        resp.content_type = result.media_type
        resp.set_header(
            "Content-Disposition",
            f"inline; filename*=UTF-8''{quote(result.file_name)}",
        )
        resp.data = result.data
        resp.status = falcon.HTTP_200
