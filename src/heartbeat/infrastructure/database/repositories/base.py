"""
Base Repository

Generic primary-key reads shared by entity repositories.
"""

from typing import Any, Generic, Optional, Sequence, Type, TypeVar

from sqlalchemy import inspect, select
from sqlalchemy.ext.asyncio import AsyncSession

from heartbeat.infrastructure.database.connection import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """
    Reads keyed on the model's (single-column) primary key.

    Usage:
        class UserRepository(BaseRepository[UserModel]):
            def __init__(self, session):
                super().__init__(UserModel, session)
    """

    def __init__(self, model: Type[ModelT], session: AsyncSession) -> None:
        self._model = model
        self._session = session
        self._pk = inspect(model).primary_key[0]

    async def get_by_id(self, key: Any) -> Optional[ModelT]:
        result = await self._session.execute(
            select(self._model).where(self._pk == key)
        )
        return result.scalar_one_or_none()

    async def get_all(self, *, limit: Optional[int] = None) -> Sequence[ModelT]:
        """All rows in primary key order."""
        query = select(self._model).order_by(self._pk)
        if limit is not None:
            query = query.limit(limit)

        result = await self._session.execute(query)
        return result.scalars().all()
