"""Async SQLAlchemy engine and session factory.

Learn: SQLAlchemy 2.0 async mode — create_async_engine for connection pooling,
AsyncSession for per-request database access, dependency injection via FastAPI.

create_app() builds one engine + session factory from the settings it was
given and parks them on app.state; get_db reads the factory from there, so
an app always talks to the database its own settings name.
"""

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from brewlog.db.models import Base


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    """Create an engine for the given URL.

    Postgres gets a pool of min 5, max 20 connections. SQLite (local dev,
    tests) uses the driver's default pool, which doesn't take sizes.
    """
    if url.startswith("sqlite"):
        return create_async_engine(url, echo=echo)
    return create_async_engine(url, echo=echo, pool_size=5, max_overflow=15)


def build_session_factory(target: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(target, class_=AsyncSession, expire_on_commit=False)


async def create_schema(target: AsyncEngine) -> None:
    """Create all tables that don't exist yet."""
    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db(request: Request) -> AsyncSession:
    """FastAPI dependency — yields a session per request, auto-closes."""
    async with request.app.state.session_factory() as session:
        try:
            yield session
        finally:
            await session.close()
