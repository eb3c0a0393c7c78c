"""
Shared read and update queries for UUID-keyed models.

Dependencies: sqlalchemy
System role: Query helpers reused by DocumentCRUD
"""

from typing import Any, Generic, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ragdesk.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    Primary-key reads, full listings and returning updates for one model.

    Callers own the session and the transaction; nothing here commits.
    """

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    async def get_by_id(self, session: AsyncSession, id: UUID) -> ModelT | None:
        result = await session.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def get_all(self, session: AsyncSession, order_by: Any | None = None) -> Sequence[ModelT]:
        """
        List every row of the table.

        Args:
            session: Async database session
            order_by: Optional column or expression to sort by

        Returns:
            Sequence of model instances
        """
        stmt = select(self.model)
        if order_by is not None:
            stmt = stmt.order_by(order_by)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def update_by_id(self, session: AsyncSession, id: UUID, **values: Any) -> ModelT | None:
        """
        Apply column values to one row and return it as updated.

        Returns:
            Updated instance, None when no row has that id
        """
        stmt = (
            update(self.model)
            .where(self.model.id == id)
            .values(**values)
            .returning(self.model)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()
