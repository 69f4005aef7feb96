"""Content repository interface: nodes, taxonomy terms and users."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable


@dataclass
class Node:
    """A content item. ``tags`` holds term ids from the ``tags`` vocabulary."""

    nid: int
    type: str
    title: str
    tags: list[int] = field(default_factory=list)


@dataclass(frozen=True)
class Term:
    tid: int
    name: str
    vocabulary: str = "tags"


@dataclass(frozen=True)
class User:
    uid: int
    name: str
    email: str | None = None


ANONYMOUS = User(uid=0, name="Anonymous")

# Called after an entity has been removed from the repository.
DeleteListener = Callable[[Node, User], None]


class AbstractContentRepository(ABC):
    """Storage collaborator for the content endpoints."""

    @abstractmethod
    def get_node(self, nid: int) -> Node | None:
        raise NotImplementedError

    @abstractmethod
    def save_node(self, node: Node) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete_node(self, nid: int, *, actor: User = ANONYMOUS) -> Node | None:
        """Delete a node and notify delete listeners.

        Returns:
            The deleted node, or None if it did not exist (listeners are not
            called in that case).
        """
        raise NotImplementedError

    @abstractmethod
    def find_terms_by_name(self, name: str, vocabulary: str) -> list[Term]:
        """Return terms whose name matches exactly within a vocabulary."""
        raise NotImplementedError

    @abstractmethod
    def get_user(self, uid: int) -> User | None:
        raise NotImplementedError

    @abstractmethod
    def add_delete_listener(self, listener: DeleteListener) -> None:
        raise NotImplementedError
