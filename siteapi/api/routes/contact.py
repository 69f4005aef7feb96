from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body

from siteapi.api.deps import ContainerDep, CurrentUserDep
from siteapi.schemas.content import ContactResponse

router = APIRouter(tags=["Contact"])


@router.post("/contact", response_model=ContactResponse)
def submit_contact_form(
    container: ContainerDep,
    sender: CurrentUserDep,
    payload: Any = Body(
        ...,
        examples=[{"subject": "Hello", "message": "Hi there", "recipient": 2, "send_copy": True}],
    ),
) -> ContactResponse:
    """Relay a contact message from the current user (X-User-Id) to a site user.

    Raises:
        ValidationAppError: 400 when subject, message or recipient is missing.
        NotFoundAppError: 404 when the recipient does not exist.
        DeliveryAppError: 500 when an address is missing or sending fails.
    """
    container.contact.submit(payload, sender)
    return ContactResponse()
