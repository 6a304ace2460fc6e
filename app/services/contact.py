"""Contact form service."""

from app.models import ContactMessageDB, UserDB
from app.monitoring import get_logger
from app.repositories import ContactRepository
from app.schemas.contact import ContactCreate

logger = get_logger(__name__)


class ContactService:
    def __init__(self, repo: ContactRepository) -> None:
        self.repo = repo

    async def submit(
        self,
        payload: ContactCreate,
        sender: UserDB | None = None,
    ) -> ContactMessageDB:
        """Store a contact form submission as received; ``sender`` is only logged."""
        message = await self.repo.create(
            name=payload.name,
            email=payload.email,
            message=payload.message,
        )
        origin = f"user {sender.id}" if sender else "anonymous visitor"
        logger.info(f"Contact message {message.id} received from {origin}")
        return message
