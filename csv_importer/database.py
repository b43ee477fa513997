from typing import AsyncIterator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from csv_importer.config import Settings
from csv_importer.logging_config import get_logger

logger = get_logger("database")

# Base model class
Base = declarative_base()


def create_db_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine for the configured PostgreSQL database.

    Connections are opened with the session timezone pinned to UTC.
    """
    return create_async_engine(
        settings.DATABASE_URL,
        echo=settings.DEBUG,
        future=True,
        pool_pre_ping=True,
        connect_args={"server_settings": {"timezone": "UTC"}},
    )


def create_session_factory(engine: AsyncEngine) -> sessionmaker:
    """Create a session factory bound to ``engine``."""
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """Get a database session from the application's session factory.

    Yields:
        AsyncSession: Database session
    """
    async with request.app.state.session_factory() as session:
        yield session


def get_engine(request: Request) -> AsyncEngine:
    """Return the engine the application was built with."""
    return request.app.state.engine


async def create_db_and_tables(engine: AsyncEngine) -> None:
    """Create database tables."""
    # Register the models on Base.metadata
    from csv_importer.models import event  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ready: %s", ", ".join(Base.metadata.tables))


async def ping(engine: AsyncEngine) -> None:
    """Round-trip a trivial query; raises whatever the driver raises."""
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
