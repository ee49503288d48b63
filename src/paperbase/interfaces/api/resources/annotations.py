"""Annotation API resources."""

import falcon.asgi

from paperbase.application.dto.annotation_dto import AnnotationCreateInput, AnnotationOutput
from paperbase.application.use_cases.annotation.add_annotation import AddAnnotationUseCase
from paperbase.application.use_cases.annotation.list_annotations import ListAnnotationsUseCase
from paperbase.domain.exceptions import NotFound, ValidationError
from paperbase.domain.value_objects import AnnotationKind


def _annotation_to_dict(a: AnnotationOutput) -> dict:
    return {
        "id": str(a.id),
        "document_id": a.document_id,
        "kind": a.kind.value,
        "page_number": a.page_number,
        "content": a.content,
        "color": a.color,
        "position": a.position,
        "created_at": a.created_at.isoformat(),
    }


class AnnotationsResource:
    """GET/POST /v1/projects/{project_id}/documents/{document_id}/annotations."""

    def __init__(
        self,
        add_annotation: AddAnnotationUseCase,
        list_annotations: ListAnnotationsUseCase,
    ) -> None:
        self._add = add_annotation
        self._list = list_annotations

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        project_id: str,
        document_id: str,
    ) -> None:
        try:
            items = await self._list.execute(project_id, document_id)
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Document not found"}
            return
        resp.media = {"items": [_annotation_to_dict(a) for a in items]}
        resp.status = falcon.HTTP_200

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        project_id: str,
        document_id: str,
    ) -> None:
        try:
            body = await req.get_media()
            position = body.get("position") or {}
            if not isinstance(position, dict):
                raise ValueError("position must be an object")
            input_data = AnnotationCreateInput(
                project_id=project_id,
                document_id=document_id,
                kind=AnnotationKind(body["kind"]),
                page_number=int(body["page_number"]),
                content=str(body.get("content") or ""),
                color=body.get("color"),
                position=position,
            )
        except (KeyError, TypeError, ValueError, AttributeError, falcon.MediaMalformedError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Invalid annotation: {e}"}
            return

        try:
            result = await self._add.execute(input_data)
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Document not found"}
            return
        resp.media = _annotation_to_dict(result)
        resp.status = falcon.HTTP_201
