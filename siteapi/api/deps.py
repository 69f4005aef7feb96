"""Dependency injection for FastAPI routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Header, Request

from siteapi.adapters.content.base import User
from siteapi.core.container import ServiceContainer


def get_container(request: Request) -> ServiceContainer:
    """Return the service container built by the app factory."""
    return request.app.state.container


ContainerDep = Annotated[ServiceContainer, Depends(get_container)]


def get_current_user(
    container: ContainerDep,
    x_user_id: Annotated[str | None, Header(alias="X-User-Id")] = None,
) -> User | None:
    """Resolve the acting user from the X-User-Id header.

    Returns None when the header is absent, non-numeric or names no user.
    """
    if not x_user_id or not x_user_id.strip().isdigit():
        return None
    return container.content.get_user(int(x_user_id))


CurrentUserDep = Annotated[User | None, Depends(get_current_user)]
