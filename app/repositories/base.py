"""Base repository for database operations."""

from collections.abc import Mapping
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from app.errors.database import DatabaseError, DuplicateEntryError, RecordNotFoundError


class BaseRepository[ModelT: SQLModel]:
    """
    Base repository implementing common lookups and guarded writes.

    Attributes:
        model: The SQLModel database model type.
        id_field: The name of the primary key field (default: "id").
        duplicate_messages: Maps a unique column name to the message raised
            when an insert or update collides on it.
    """

    model: type[ModelT]
    id_field: str = "id"
    duplicate_messages: Mapping[str, str] = {}

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def get_by_id(self, record_id: UUID) -> ModelT | None:
        """
        Get a record by its ID.

        Args:
            record_id: Record UUID

        Returns:
            ModelT | None: Record if found, None otherwise
        """
        id_column = getattr(self.model, self.id_field)
        statement = (
            select(self.model)
            .where(id_column == record_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_or_raise(
        self,
        record_id: UUID,
        error: type[RecordNotFoundError] = RecordNotFoundError,
    ) -> ModelT:
        """
        Get a record by ID or raise if it does not exist.

        Args:
            record_id: Record UUID
            error: Not-found error type to raise

        Returns:
            ModelT: Record if found

        Raises:
            RecordNotFoundError: If record is not found
        """
        record = await self.get_by_id(record_id)
        if record is None:
            raise error()
        return record

    async def count(self) -> int:
        """
        Count total records.

        Returns:
            int: Total number of records
        """
        statement = select(func.count()).select_from(self.model)
        result = await self.session.execute(statement)
        return result.scalar() or 0

    async def _add_and_refresh(self, record: ModelT) -> ModelT:
        """
        Add a record, flush it and refresh it from the database.

        Args:
            record: Record to add

        Returns:
            ModelT: Refreshed record

        Raises:
            DuplicateEntryError: If a unique constraint is violated
            DatabaseError: For other integrity errors
        """
        self.session.add(record)
        await self._flush()
        await self.session.refresh(record)
        return record

    async def _flush(self) -> None:
        """Flush pending changes, translating integrity errors into domain errors."""
        try:
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            raise self._map_integrity_error(e) from e

    def _map_integrity_error(self, error: IntegrityError) -> DatabaseError:
        error_msg = str(error.orig) if error.orig else str(error)
        lowered = error_msg.lower()
        if "unique" in lowered or "duplicate" in lowered:
            for column, message in self.duplicate_messages.items():
                if column in lowered:
                    return DuplicateEntryError(detail=message)
            return DuplicateEntryError()
        return DatabaseError(detail="Database integrity error")
