"""Audit log entry for every deleted article."""

from __future__ import annotations

import logging

from siteapi.adapters.content.base import Node, User

logger = logging.getLogger("siteapi.audit.article_deletion")


class ArticleDeletionLogger:
    """Delete listener that records who removed which article.

    Register with ``repository.add_delete_listener(ArticleDeletionLogger())``.
    Nodes of other types are ignored.
    """

    def __init__(self, article_type: str = "article") -> None:
        self._article_type = article_type

    def __call__(self, node: Node, actor: User) -> None:
        if node.type != self._article_type:
            return

        logger.info(
            "article.deleted",
            extra={
                "title": node.title,
                "nid": node.nid,
                "uid": actor.uid,
                "user_name": actor.name,
                "summary": (
                    f'Article "{node.title}" (ID: {node.nid}) was deleted by user '
                    f"{actor.uid} ({actor.name})."
                ),
            },
        )
