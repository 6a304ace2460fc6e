# app/routes/contact.py

"""Public contact form endpoint."""

from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_201_CREATED

from app.configs import settings
from app.dependencies import ContactServiceDep, OptionalUserDep
from app.managers import limiter
from app.schemas.contact import ContactCreate, ContactResponse

router = APIRouter(prefix="/api/contact", tags=["✉️ Contact"])


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=ContactResponse,
    status_code=HTTP_201_CREATED,
    summary="Send a contact message",
    responses={
        201: {
            "content": {
                "application/json": {"example": {"success": True, "message": "Message received!"}},
            },
        },
        400: {
            "description": "Bad Request",
            "content": {"application/json": {"example": {"detail": "Invalid email format"}}},
        },
        429: {
            "description": "Rate limit exceeded",
            "content": {"application/json": {"example": {"detail": "Too Many Requests"}}},
        },
    },
    operation_id="contact_submit",
)
@limiter.limit(settings.CONTACT_RATE_LIMIT)
async def submit_contact(
    request: Request,
    payload: ContactCreate,
    contact_service: ContactServiceDep,
    sender: OptionalUserDep,
) -> ContactResponse:
    """
    Store a contact form message.

    Parameters
    ----------
    request : Request
        Current request context (used by the rate limiter).
    payload : ContactCreate
        Sender name, email and message.
    contact_service : ContactService
        Contact service dependency.
    sender : UserDB | None
        Signed-in sender, when a valid token accompanies the message.

    Returns
    -------
    ContactResponse
        Acknowledgement.
    """
    await contact_service.submit(payload, sender)
    return ContactResponse()
