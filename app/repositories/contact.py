"""Contact message repository."""

from app.models.contact import ContactMessageDB
from app.repositories.base import BaseRepository


class ContactRepository(BaseRepository[ContactMessageDB]):
    """Stores contact form submissions; messages are never read back by the API."""

    model = ContactMessageDB

    async def create(self, *, name: str, email: str, message: str) -> ContactMessageDB:
        """
        Persist a contact form submission.

        Args:
            name: Sender name
            email: Normalized sender e-mail
            message: Message body

        Returns:
            ContactMessageDB: Stored message
        """
        return await self._add_and_refresh(
            ContactMessageDB(name=name, email=email, message=message),
        )
