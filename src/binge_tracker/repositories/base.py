"""Base repository shared by show and season repositories."""

from typing import Generic, Optional, Type, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from ..database.base import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """Lookup, insert and delete by primary key for one ORM model."""

    def __init__(self, model: Type[T], session: AsyncSession):
        self.model = model
        self.session = session

    async def get(self, id: int) -> Optional[T]:
        """Get a row by primary key, relationships loaded eagerly."""
        return await self.session.get(self.model, id)

    async def create(self, instance: T) -> T:
        """
        Add a new row and flush it so its ID is assigned.

        Args:
            instance: ORM instance, with any child rows already attached

        Returns:
            The same instance
        """
        self.session.add(instance)
        await self.session.flush()
        return instance

    async def delete_by_id(self, id: int) -> bool:
        """
        Delete a row (and its cascaded children) by primary key.

        Returns:
            True if deleted, False if not found
        """
        instance = await self.get(id)
        if instance is None:
            return False
        await self.session.delete(instance)
        await self.session.flush()
        return True
