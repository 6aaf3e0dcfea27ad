"""Database engine and per-request session for the LifeLog store.

One async engine (asyncpg pool with pre-ping) is shared by the process.
Each request gets its own ``AsyncSession`` through :func:`get_session`.

Session policy: services commit their own writes (activity create/update/
delete, registration) so that generated ids and timestamps can be refreshed
before the response is built.  The dependency commits anything still pending
once the handler returns, and rolls back if the handler raised, so a failed
request never leaves a partial write behind.  Objects stay usable after
commit (``expire_on_commit=False``) because responses are serialised from
them after the service returns.
"""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from lifelog.config import get_settings

_settings = get_settings()

# SQL is echoed only when the app itself logs at DEBUG.
engine = create_async_engine(
    _settings.DATABASE_URL,
    echo=_settings.LOG_LEVEL.upper() == "DEBUG",
    pool_pre_ping=True,
)

async_session_factory = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Declarative base for the ``users`` and ``activities`` tables."""


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a request-scoped session.

    Pending work is committed after a successful handler and rolled back
    when the handler raises; the session is closed either way.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
