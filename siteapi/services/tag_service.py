"""Merge taxonomy tags into an article by term name."""

from __future__ import annotations

import logging
from typing import Any

from siteapi.adapters.content.base import AbstractContentRepository
from siteapi.core.errors import NotFoundAppError, ValidationAppError

logger = logging.getLogger(__name__)

ARTICLE_TYPE = "article"
TAGS_VOCABULARY = "tags"


def _parse_nid(value: Any) -> int:
    """Accept a non-zero int or numeric string; reject bools, fractional floats and blanks."""
    if isinstance(value, bool) or not value:
        raise ValueError("nid")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    raise ValueError("nid")


class TagUpdateService:
    """Append existing ``tags`` terms to an article; never creates terms."""

    def __init__(self, repository: AbstractContentRepository) -> None:
        self._repository = repository

    def add_tags(self, payload: Any) -> list[int]:
        """Apply a ``{"nid": ..., "tags": [...]}`` request.

        Tag names are trimmed and matched exactly. Unknown names are skipped.
        The node keeps its existing terms; the merged list is de-duplicated in
        first-seen order.

        Returns:
            Term ids stored on the article after the update.

        Raises:
            ValidationAppError: If nid or tags are missing or malformed.
            NotFoundAppError: If the node does not exist or is not an article.
        """
        if not isinstance(payload, dict):
            raise ValidationAppError(code="invalid_body", message="Request body must be a JSON object.")

        try:
            nid = _parse_nid(payload.get("nid"))
        except ValueError:
            raise ValidationAppError(
                code="invalid_nid",
                message="Node ID (nid) is required and must be a valid number.",
                details={"field": "nid"},
            ) from None

        tag_names = payload.get("tags")
        if not tag_names or not isinstance(tag_names, list):
            raise ValidationAppError(
                code="invalid_tags",
                message="Invalid request format. Tag data is required.",
                details={"field": "tags"},
            )

        node = self._repository.get_node(nid)
        if node is None or node.type != ARTICLE_TYPE:
            raise NotFoundAppError(code="article_not_found", message="Article not found.", details={"nid": nid})

        tids = list(node.tags)
        skipped: list[str] = []
        for raw_name in tag_names:
            name = str(raw_name).strip()
            terms = self._repository.find_terms_by_name(name, TAGS_VOCABULARY)
            if terms:
                tids.append(terms[0].tid)
            else:
                skipped.append(name)

        node.tags = list(dict.fromkeys(tids))
        self._repository.save_node(node)

        logger.info(
            "article.tags_updated",
            extra={"nid": nid, "tag_count": len(node.tags), "skipped_tags": skipped},
        )
        return node.tags
