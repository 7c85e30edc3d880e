from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from quotes_core.config import Settings, settings as default_settings

Base = declarative_base()


def create_engine(url: Optional[str] = None, config: Optional[Settings] = None) -> AsyncEngine:
    """Create the async engine for the quotes database.

    In-memory SQLite gets a single shared connection so every session sees
    the same database.
    """
    config = config or default_settings
    url = url or config.DB_URL

    if url.startswith("sqlite") and ":memory:" in url:
        return create_async_engine(
            url,
            echo=config.DB_ECHO,
            poolclass=StaticPool,
        )
    return create_async_engine(url, echo=config.DB_ECHO, pool_pre_ping=True)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


async def init_models(engine: AsyncEngine) -> None:
    # Registers the model tables on Base.metadata
    from quotes_core.models import quote  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
