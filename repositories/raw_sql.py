import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import text
from errors import RepositoryError

logger = logging.getLogger(__name__)


class RawSqlRepository:
    """Textual statements returning plain dict rows; values go through bound parameters."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def execute(self, sql: str, params: dict | None = None) -> list[dict]:
        try:
            result = await self.session.execute(text(sql), params or {})
        except SQLAlchemyError as e:
            logger.exception("Raw statement failed")
            await self.session.rollback()
            raise RepositoryError("execute", "raw_sql", e)
        if not result.returns_rows:
            await self.session.commit()
            return []
        return [dict(row) for row in result.mappings().all()]
