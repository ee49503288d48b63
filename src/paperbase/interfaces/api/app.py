"""Falcon ASGI application."""

import logging
from collections.abc import Sequence

import falcon
import falcon.asgi
from falcon.asgi import App

from paperbase.interfaces.api.resources.annotations import AnnotationsResource
from paperbase.interfaces.api.resources.documents import (
    DocumentFileResource,
    DocumentResource,
    DocumentsResource,
)
from paperbase.interfaces.api.resources.health import HealthResource
from paperbase.interfaces.api.resources.storage import StorageUsageResource
from paperbase.interfaces.api.resources.trash import TrashResource

logger = logging.getLogger(__name__)

# Multipart framing and a little slack above the file-size limit, so oversized
# files reach the size check instead of failing in the parser
_MULTIPART_HEADROOM_BYTES = 1024 * 1024


async def _handle_unexpected(req, resp, ex, params) -> None:
    logger.exception("Unhandled error on %s %s", req.method, req.path, exc_info=ex)
    resp.status = falcon.HTTP_500
    resp.media = {"error": "Internal Server Error"}


def create_app(
    documents_resource: DocumentsResource,
    document_resource: DocumentResource,
    document_file_resource: DocumentFileResource,
    trash_resource: TrashResource,
    annotations_resource: AnnotationsResource,
    storage_usage_resource: StorageUsageResource,
    health_resource: HealthResource,
    max_file_size_bytes: int,
    middleware: Sequence[object] = (),
) -> App:
    """Create Falcon ASGI app with routes.

    ``max_file_size_bytes`` sizes the multipart part buffer: files up to the
    limit parse, and files just over it reach the size check (413).
    """
    app = falcon.asgi.App(middleware=list(middleware))
    multipart = app.req_options.media_handlers[falcon.MEDIA_MULTIPART]
    multipart.parse_options.max_body_part_buffer_size = (
        max_file_size_bytes + _MULTIPART_HEADROOM_BYTES
    )
    app.add_error_handler(Exception, _handle_unexpected)

    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")
    app.add_route("/v1/storage/usage", storage_usage_resource)

    project = "/v1/projects/{project_id}"
    app.add_route(f"{project}/documents", documents_resource)
    app.add_route(f"{project}/documents/trash", trash_resource)
    app.add_route(f"{project}/documents/restore", trash_resource, suffix="restore")
    app.add_route(f"{project}/documents/{{document_id}}", document_resource)
    app.add_route(f"{project}/documents/{{document_id}}/file", document_file_resource)
    app.add_route(f"{project}/documents/{{document_id}}/annotations", annotations_resource)
    return app
