"""
Async engine and session factory setup.
"""

from pathlib import Path

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from timed_interview.config import get_settings
from timed_interview.db.models import Base


def create_engine(database_url: str | None = None, echo: bool = False) -> AsyncEngine:
    """
    Create the async engine for the results store.

    For file-based SQLite URLs the parent directory is created.

    Args:
        database_url: Connection string (uses config if not provided).
        echo: Log emitted SQL.

    Returns:
        AsyncEngine instance.
    """
    url = make_url(database_url or get_settings().database_url)
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    return create_async_engine(url, echo=echo)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to ``engine``."""
    return async_sessionmaker(engine, expire_on_commit=False)


async def init_db(engine: AsyncEngine) -> None:
    """Create all tables that do not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
