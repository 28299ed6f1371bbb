"""
Database engine, session factory and declarative base.
"""
import logging
from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import Path, Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

logger = logging.getLogger(__name__)

# Largest value an Integer primary key column holds on every supported store.
MAX_ID = 2**31 - 1

RecordId = Annotated[int, Path(ge=1, le=MAX_ID)]


class Base(DeclarativeBase):
    """Declarative base for all models."""


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """
    Create the async engine for the given URL.

    SQLite does not enforce foreign keys unless asked to on every
    connection, so the pragma is switched on at connect time.
    """
    engine_kwargs: dict[str, object] = {"echo": echo}
    is_sqlite = database_url.startswith("sqlite")
    if not is_sqlite:
        engine_kwargs["pool_pre_ping"] = True

    engine = create_async_engine(database_url, **engine_kwargs)
    if is_sqlite:
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


async def init_db(engine: AsyncEngine) -> None:
    """Create all tables that do not exist yet."""
    # Models register themselves on Base.metadata when imported.
    import app.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ready")


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """
    Request-scoped session dependency.
    """
    sessionmaker: async_sessionmaker[AsyncSession] = request.app.state.sessionmaker
    async with sessionmaker() as session:
        yield session
