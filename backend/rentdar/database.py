"""Async SQLAlchemy engine, session factory, and declarative base.

PostgreSQL (asyncpg) is the deployment target. A ``sqlite+aiosqlite`` URL is
also accepted for local runs; SQLite gets no connection pool sizing.
"""

import uuid
from collections.abc import AsyncGenerator
from datetime import datetime
from typing import Any

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from rentdar.config import settings


def engine_options(url: str, echo: bool = False) -> dict[str, Any]:
    """Keyword arguments for :func:`create_async_engine` suited to ``url``."""
    options: dict[str, Any] = {"echo": echo}
    if url.startswith("sqlite"):
        return options
    options.update(pool_pre_ping=True, pool_size=10, max_overflow=20)
    return options


engine = create_async_engine(
    settings.async_database_url,
    **engine_options(settings.async_database_url, echo=settings.debug),
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class TimestampMixin:
    """``created_at``/``updated_at`` set by the database."""

    created_at: Mapped[datetime] = mapped_column(server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        server_default=func.now(),
        onupdate=func.now(),
    )


class UUIDPrimaryKeyMixin:
    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)


async def init_db() -> None:
    """Create any missing tables for the registered models."""
    import rentdar.models  # noqa: F401  (registers every table on Base.metadata)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session, committed when the handler returns cleanly."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
