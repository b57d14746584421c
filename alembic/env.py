"""Alembic environment for the credential store schema."""

from __future__ import annotations

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy.engine import Connection

import radio_api.domain  # noqa: F401  registers StoredCredential on Base.metadata
from radio_api.core.config import settings
from radio_api.db.base import Base, build_engine

config = context.config
if config.config_file_name:
    fileConfig(config.config_file_name)

# SQLite needs batch mode for ALTER TABLE
_CONFIGURE_OPTS = {"target_metadata": Base.metadata, "render_as_batch": True}


def _migrate(connection: Connection) -> None:
    context.configure(connection=connection, **_CONFIGURE_OPTS)
    with context.begin_transaction():
        context.run_migrations()


async def _migrate_online() -> None:
    engine = build_engine(settings.database_url)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_migrate)
    finally:
        await engine.dispose()


def _migrate_offline() -> None:
    context.configure(
        url=settings.database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_CONFIGURE_OPTS,
    )
    with context.begin_transaction():
        context.run_migrations()


if context.is_offline_mode():
    _migrate_offline()
else:
    asyncio.run(_migrate_online())
