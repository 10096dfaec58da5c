"""Shared async repository utilities for SQLAlchemy models."""

import logging
from typing import Generic, TypeVar, Type, Optional, List, Any
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select, delete, update, func, text
from database import Base
from errors import RepositoryError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Base)  # Generic model type constrained to SQLAlchemy Base.


class BaseRepository(Generic[T]):
    """Generic async repository with CRUD operations for a model with an integer ``id``.

    Absence is reported as ``None``, ``False`` or an empty list. Any database
    failure is logged, the transaction rolled back, and a ``RepositoryError``
    raised.
    """

    def __init__(self, session: AsyncSession, model: Type[T]):
        """Store the async DB session and the model class this repository serves."""
        # Session used for all database interactions in this repository instance.
        self.session = session
        # SQLAlchemy model class (not instance) for query construction.
        self.model = model

    @property
    def table_name(self) -> str:
        return self.model.__tablename__

    async def _fail(self, operation: str, error: SQLAlchemyError) -> RepositoryError:
        logger.exception("%s on %s failed", operation, self.table_name)
        await self.session.rollback()
        return RepositoryError(operation, self.table_name, error)

    async def allocate_next_id(self) -> int:
        """Return ``max(id) + 1``, or 1 for an empty table.

        Not safe under concurrent writers: two callers may get the same value.
        ``save`` does not use it; the store assigns ids itself.
        """
        try:
            result = await self.session.execute(select(func.max(self.model.id)))
        except SQLAlchemyError as e:
            raise await self._fail("allocate_next_id", e)
        return (result.scalar() or 0) + 1

    async def save(self, item: T) -> T:
        """Insert ``item`` as a single row and return it with its id set.

        Without an id the store allocates one (always above the current max).
        """
        try:
            self.session.add(item)
            await self.session.commit()
            await self.session.refresh(item)
        except SQLAlchemyError as e:
            raise await self._fail("save", e)
        logger.debug("Saved %s id=%s", self.table_name, item.id)
        return item

    async def find_by_id(self, id: int) -> Optional[T]:
        """Fetch a single model instance by primary key, if it exists."""
        try:
            # `session.get` is optimized for primary-key lookup.
            return await self.session.get(self.model, id)
        except SQLAlchemyError as e:
            raise await self._fail("find_by_id", e)

    async def find_all(self) -> List[T]:
        """Return every row of the table, ordered by id."""
        stmt = select(self.model).order_by(self.model.id)
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise await self._fail("find_all", e)
        # `scalars()` yields model instances; `all()` collects them.
        return list(result.scalars().all())

    async def find_by(self, **filters: Any) -> List[T]:
        """Return rows whose attributes equal the given values."""
        stmt = select(self.model).filter_by(**filters).order_by(self.model.id)
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise await self._fail("find_by", e)
        return list(result.scalars().all())

    async def update(self, id: int, **values: Any) -> bool:
        """Update the row with this id; True iff a row was affected."""
        stmt = update(self.model).where(self.model.id == id).values(**values)
        try:
            result = await self.session.execute(stmt)
            await self.session.commit()
        except SQLAlchemyError as e:
            raise await self._fail("update", e)
        return result.rowcount > 0

    async def delete(self, id: int) -> bool:
        """Delete by id; True iff a row with that id existed."""
        stmt = delete(self.model).where(self.model.id == id)
        try:
            result = await self.session.execute(stmt)
            await self.session.commit()
        except SQLAlchemyError as e:
            raise await self._fail("delete", e)
        return result.rowcount > 0

    async def query(self, sql: str, params: Optional[dict] = None) -> List[T]:
        """Run a textual SELECT and map its rows onto the model.

        Values must be passed through ``params`` as named placeholders
        (``:name``); never format them into ``sql``.
        """
        stmt = select(self.model).from_statement(text(sql))
        try:
            result = await self.session.execute(stmt, params or {})
        except SQLAlchemyError as e:
            raise await self._fail("query", e)
        return list(result.scalars().all())

    async def find_first(self) -> Optional[T]:
        """Return an arbitrary row, or None on an empty table."""
        stmt = select(self.model).limit(1)
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise await self._fail("find_first", e)
        return result.scalars().first()
