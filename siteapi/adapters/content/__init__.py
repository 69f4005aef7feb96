"""Content storage adapters."""

from siteapi.adapters.content.base import (
    ANONYMOUS,
    AbstractContentRepository,
    Node,
    Term,
    User,
)
from siteapi.adapters.content.in_memory import InMemoryContentRepository

__all__ = [
    "ANONYMOUS",
    "AbstractContentRepository",
    "InMemoryContentRepository",
    "Node",
    "Term",
    "User",
]
