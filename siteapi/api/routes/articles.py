from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Response, status

from siteapi.adapters.content.base import ANONYMOUS
from siteapi.api.deps import ContainerDep, CurrentUserDep
from siteapi.core.auth import require_permission
from siteapi.core.errors import NotFoundAppError
from siteapi.schemas.content import TagUpdateResponse

router = APIRouter(tags=["Content"])


@router.patch(
    "/article/tags/update",
    response_model=TagUpdateResponse,
    dependencies=[Depends(require_permission("edit any article content"))],
)
def update_article_tags(
    container: ContainerDep,
    payload: Any = Body(..., examples=[{"nid": 1, "tags": ["python", "fastapi"]}]),
) -> TagUpdateResponse:
    """Append existing tags (by name) to an article.

    Unknown tag names are skipped; no terms are created.

    Raises:
        ValidationAppError: 400 for a missing/invalid nid or tags list.
        NotFoundAppError: 404 when the node is missing or not an article.
    """
    tids = container.tags.add_tags(payload)
    return TagUpdateResponse(tags=tids)


@router.delete(
    "/article/{nid}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_permission("delete any article content"))],
)
def delete_article(nid: int, container: ContainerDep, user: CurrentUserDep) -> Response:
    """Delete a node; deletions of articles are written to the audit log."""
    deleted = container.content.delete_node(nid, actor=user or ANONYMOUS)
    if deleted is None:
        raise NotFoundAppError(code="node_not_found", message="Node not found.", details={"nid": nid})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
