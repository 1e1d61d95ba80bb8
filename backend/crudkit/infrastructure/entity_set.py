"""SQLAlchemy Entity Set: EntitySet protocol over an AsyncSession.

Invariants:
    - One instance serves one model class within one session (one request)
    - save() commits; a failed commit is rolled back before the fault propagates
    - Faults are raised raw; CrudService is the layer that wraps them
"""

from typing import Generic, TypeVar

from sqlalchemy import ColumnElement, select
from sqlalchemy.ext.asyncio import AsyncSession

E = TypeVar("E")


class SqlAlchemyEntitySet(Generic[E]):
    """Entity set backed by an AsyncSession."""

    def __init__(self, session: AsyncSession, model: type[E]):
        self._session = session
        self.model = model

    async def find_one(self, *criteria: ColumnElement[bool]) -> E | None:
        result = await self._session.execute(
            select(self.model).where(*criteria).limit(1)
            .execution_options(populate_existing=True),
        )
        return result.scalars().first()

    async def find_all(self, *criteria: ColumnElement[bool]) -> list[E]:
        result = await self._session.execute(
            select(self.model).where(*criteria).order_by(self.model.id)
            .execution_options(populate_existing=True),
        )
        return list(result.scalars().all())

    async def add(self, entity: E) -> None:
        self._session.add(entity)

    async def update(self, entity: E) -> None:
        # Entities fetched through this session are already tracked; merge
        # covers instances that were detached or built outside it.
        if entity not in self._session:
            await self._session.merge(entity)

    async def save(self) -> None:
        try:
            await self._session.commit()
        except BaseException:
            await self._session.rollback()
            raise
