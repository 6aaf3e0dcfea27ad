"""Alembic environment for the LifeLog schema.

Migrations own the ``users`` and ``activities`` tables, including the
energy CHECK constraint and the ``(user_id, activity_date)`` index that the
dashboard and analytics queries rely on.  The app never creates tables on
startup.  Online runs reuse the asyncpg driver from ``DATABASE_URL``; offline
runs (``alembic upgrade --sql``) emit plain SQL.
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

# Registers User and Activity on Base.metadata.
from lifelog.models import *  # noqa: F401, F403
from lifelog.database import Base
from lifelog.config import get_settings

# ---------------------------------------------------------------------------
# Alembic Config object. Provides access to values in alembic.ini.
# ---------------------------------------------------------------------------
config = context.config

# The URL always comes from DATABASE_URL (environment or .env), never from
# alembic.ini.
config.set_main_option("sqlalchemy.url", get_settings().DATABASE_URL)

# Set up Python logging from the config file.
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# MetaData for autogenerate support.
target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode.

    Configures the context with just a URL so that calls to
    ``context.execute()`` emit the SQL string to the script output.
    """
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    """Run migrations on a sync-facing connection from ``run_sync``."""
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        # catches type changes such as energy SMALLINT
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    """Create an async engine and run migrations within an async connection."""
    connectable = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode (async)."""
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
