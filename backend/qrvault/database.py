"""
QRVault Backend — Database Engine & Session Factory
=====================================================

What:  Async SQLAlchemy engine construction, session factory, and the ORM base.
How:   `create_engine_for()` builds an aiosqlite-backed engine for a database
       file; `create_session_factory()` wraps it in an `async_sessionmaker`.
Who:   Used by QRCodeStore, which owns the engine for the process lifetime.
When:  Once during application startup (lifespan) or per test.

Connection Strategy:
    SQLite allows one writer at a time. Each store operation is a single
    statement inside its own short transaction, so the engine's built-in
    locking is the only serialization point. `timeout` gives a writer a few
    seconds to wait for the lock before the driver raises.
"""

from pathlib import Path

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Every model registers with the shared metadata, which the store uses to
    create the schema on startup.
    """
    pass


def create_engine_for(db_path: str, echo: bool = False) -> AsyncEngine:
    """
    Create an async engine for the SQLite file at `db_path`.

    The parent directory is created if it does not exist yet.

    Args:
        db_path: Filesystem path of the database file
        echo:    Log every SQL statement (enabled when LOG_LEVEL=DEBUG)
    """
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    return create_async_engine(
        f"sqlite+aiosqlite:///{db_path}",
        echo=echo,
        connect_args={"timeout": 5},
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Session factory bound to `engine`.

    expire_on_commit=False: records returned by the store stay readable after
    their session has been committed and closed.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
