"""Trash API resources."""

import falcon.asgi

from paperbase.application.dto.document_dto import TrashOperationResult
from paperbase.application.use_cases.trash.delete_documents import DeleteDocumentsUseCase
from paperbase.application.use_cases.trash.restore_documents import RestoreDocumentsUseCase


async def _read_ids(req: falcon.asgi.Request) -> list[str] | None:
    """``{"ids": [...]}`` body as a list of strings, None when malformed."""
    try:
        body = await req.get_media()
    except falcon.MediaMalformedError:
        return None
    ids = body.get("ids") if isinstance(body, dict) else None
    if not isinstance(ids, list) or not all(isinstance(i, str) and i for i in ids):
        return None
    return ids


def _result_to_dict(result: TrashOperationResult) -> dict:
    return {
        "updated": result.updated,
        "skipped": result.skipped,
        "blob_missing": result.blob_missing,
    }


class TrashResource:
    """POST /v1/projects/{project_id}/documents/trash and /restore."""

    def __init__(
        self,
        delete_documents: DeleteDocumentsUseCase,
        restore_documents: RestoreDocumentsUseCase,
    ) -> None:
        self._delete = delete_documents
        self._restore = restore_documents

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        project_id: str,
    ) -> None:
        """Move documents to the trash."""
        ids = await _read_ids(req)
        if ids is None:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "ids must be a list of document ids"}
            return
        result = await self._delete.execute(project_id, ids)
        resp.media = _result_to_dict(result)
        resp.status = falcon.HTTP_200

    async def on_post_restore(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        project_id: str,
    ) -> None:
        """Restore trashed documents."""
        ids = await _read_ids(req)
        if ids is None:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "ids must be a list of document ids"}
            return
        result = await self._restore.execute(project_id, ids)
        resp.media = _result_to_dict(result)
        resp.status = falcon.HTTP_200
