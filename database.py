from sqlalchemy import inspect  # Column introspection for to_dict.
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker  # Async SQLAlchemy engine/session.
from sqlalchemy.orm import DeclarativeBase  # Base class for ORM models.
from sqlalchemy.pool import StaticPool  # Single shared connection for in-memory SQLite.

import config

DATABASE_URL = config.DATABASE_URL  # Connection string for the database.
if not DATABASE_URL:
    raise ValueError("DATABASE_URL environment variable not set")

# Ensure we use the async driver.
if DATABASE_URL.startswith("postgresql://"):
    DATABASE_URL = DATABASE_URL.replace("postgresql://", "postgresql+asyncpg://", 1)


def engine_options(url: str) -> dict:
    """Extra engine arguments; in-memory SQLite must share one connection."""
    if url.startswith("sqlite") and (url.endswith("://") or ":memory:" in url):
        return {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
    return {}


engine = create_async_engine(DATABASE_URL, echo=config.DATABASE_ECHO, **engine_options(DATABASE_URL))

AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False)  # Session factory.


class Base(DeclarativeBase):
    """Base class for all ORM models (collects metadata)."""

    def to_dict(self) -> dict:
        """Plain attribute map keyed by column name."""
        mapper = inspect(type(self))
        return {
            attr.columns[0].name: getattr(self, attr.key)
            for attr in mapper.column_attrs
        }


async def get_db():
    # Dependency that yields a DB session and closes it after the request.
    async with AsyncSessionLocal() as session:
        yield session
