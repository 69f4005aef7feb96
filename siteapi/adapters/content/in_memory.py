"""In-memory content repository, optionally seeded from a JSON file."""

from __future__ import annotations

import copy
import json
import logging
import threading
from pathlib import Path
from typing import Any

from siteapi.adapters.content.base import (
    ANONYMOUS,
    AbstractContentRepository,
    DeleteListener,
    Node,
    Term,
    User,
)

logger = logging.getLogger(__name__)


class InMemoryContentRepository(AbstractContentRepository):
    """Thread-safe repository backed by dictionaries.

    Listeners run outside the lock, after the node has been removed.
    """

    def __init__(
        self,
        *,
        nodes: list[Node] | None = None,
        terms: list[Term] | None = None,
        users: list[User] | None = None,
    ) -> None:
        self._lock = threading.RLock()
        self._nodes: dict[int, Node] = {n.nid: copy.deepcopy(n) for n in nodes or []}
        self._terms: dict[int, Term] = {t.tid: t for t in terms or []}
        self._users: dict[int, User] = {u.uid: u for u in users or []}
        self._delete_listeners: list[DeleteListener] = []

    @classmethod
    def from_seed(cls, data: dict[str, Any]) -> "InMemoryContentRepository":
        """Build a repository from ``{"nodes": [...], "terms": [...], "users": [...]}``."""
        return cls(
            nodes=[
                Node(
                    nid=int(n["nid"]),
                    type=n["type"],
                    title=n.get("title", ""),
                    tags=[int(t) for t in n.get("tags", [])],
                )
                for n in data.get("nodes", [])
            ],
            terms=[
                Term(tid=int(t["tid"]), name=t["name"], vocabulary=t.get("vocabulary", "tags"))
                for t in data.get("terms", [])
            ],
            users=[
                User(uid=int(u["uid"]), name=u["name"], email=u.get("email"))
                for u in data.get("users", [])
            ],
        )

    @classmethod
    def from_seed_file(cls, path: str | Path) -> "InMemoryContentRepository":
        with open(path, encoding="utf-8") as fh:
            data = json.load(fh)
        repository = cls.from_seed(data)
        logger.info(
            "content.seeded",
            extra={
                "seed_file": str(path),
                "nodes": len(repository._nodes),
                "terms": len(repository._terms),
                "users": len(repository._users),
            },
        )
        return repository

    def get_node(self, nid: int) -> Node | None:
        with self._lock:
            node = self._nodes.get(nid)
            return copy.deepcopy(node) if node is not None else None

    def save_node(self, node: Node) -> None:
        with self._lock:
            self._nodes[node.nid] = copy.deepcopy(node)

    def delete_node(self, nid: int, *, actor: User = ANONYMOUS) -> Node | None:
        with self._lock:
            node = self._nodes.pop(nid, None)
            listeners = list(self._delete_listeners)
        if node is None:
            return None
        for listener in listeners:
            listener(node, actor)
        return node

    def find_terms_by_name(self, name: str, vocabulary: str) -> list[Term]:
        with self._lock:
            return sorted(
                (t for t in self._terms.values() if t.name == name and t.vocabulary == vocabulary),
                key=lambda t: t.tid,
            )

    def get_user(self, uid: int) -> User | None:
        with self._lock:
            return self._users.get(uid)

    def add_user(self, user: User) -> None:
        with self._lock:
            self._users[user.uid] = user

    def add_term(self, term: Term) -> None:
        with self._lock:
            self._terms[term.tid] = term

    def add_delete_listener(self, listener: DeleteListener) -> None:
        with self._lock:
            self._delete_listeners.append(listener)
