"""Async SQLAlchemy engine, session factory and declarative Base."""


from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from radio_api.core.config import settings

# ---------------------------------------------------------------------------
# Declarative Base
# ---------------------------------------------------------------------------
class Base(DeclarativeBase):
    """All ORM models inherit from this base."""

# ---------------------------------------------------------------------------
# Engine + session factory
# ---------------------------------------------------------------------------
def build_engine(database_url: str | None = None) -> AsyncEngine:
    url = database_url or settings.database_url
    engine_kwargs: dict = {
        "pool_pre_ping": True,
        "echo": False,
    }
    # SQLite (local dev) doesn't support connection pooling parameters
    if url.startswith("sqlite"):
        engine_kwargs["connect_args"] = {"check_same_thread": False}
    return create_async_engine(url, **engine_kwargs)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
