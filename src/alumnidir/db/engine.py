"""Async engine and sessions for the profile database.

The engine is module state: the NiceGUI startup hook calls ``init_db()``,
shutdown calls ``close_db()``, and ``get_session()`` creates the engine on
first use when neither hook has run (CLI commands, integration tests).
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool
from sqlmodel.ext.asyncio.session import AsyncSession

from alumnidir.config import get_settings
from alumnidir.db.bootstrap import mask_password

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from sqlalchemy.ext.asyncio import AsyncEngine

logger = logging.getLogger(__name__)

# Set to "1" to open a fresh connection per checkout; pooled connections
# are tied to the event loop that opened them
NULL_POOL_ENV = "_ALUMNIDIR_USE_NULL_POOL"


@dataclass
class _DatabaseState:
    engine: AsyncEngine | None = None
    session_factory: async_sessionmaker[AsyncSession] | None = None


_state = _DatabaseState()


def get_database_url() -> str:
    """Return DATABASE__URL.

    Raises:
        ValueError: If DATABASE__URL is not configured.
    """
    url = get_settings().database.url
    if not url:
        msg = (
            "DATABASE__URL is not configured. "
            "Set it in your .env file or as an environment variable."
        )
        raise ValueError(msg)
    return url


def get_engine() -> AsyncEngine | None:
    """The current engine, or None before ``init_db()``."""
    return _state.engine


def _engine_options() -> dict[str, Any]:
    if os.environ.get(NULL_POOL_ENV) == "1":
        return {"poolclass": NullPool}
    # Profile pages hold a connection only for one read or one partial write
    return {
        "pool_size": 5,
        "max_overflow": 5,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
        "connect_args": {"timeout": 10, "command_timeout": 30},
    }


async def init_db() -> None:
    """Create the engine and session factory from settings."""
    url = get_database_url()
    options = _engine_options()
    _state.engine = create_async_engine(
        url, echo=get_settings().dev.database_echo, **options
    )
    _state.session_factory = async_sessionmaker(
        _state.engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    logger.info(
        "Database engine ready for %s (%s)",
        mask_password(url),
        "NullPool" if "poolclass" in options else "pooled",
    )


async def close_db() -> None:
    """Dispose the engine and forget it; safe to call when not initialised."""
    if _state.engine is None:
        return
    await _state.engine.dispose()
    _state.engine = None
    _state.session_factory = None
    logger.info("Database engine disposed")


@asynccontextmanager
async def get_session() -> AsyncIterator[AsyncSession]:
    """Yield a session that commits on exit and rolls back on error.

    Errors are logged and re-raised, so ``ProfileNotFoundError`` raised
    inside the block still reaches the caller after the rollback.

    Raises:
        ValueError: If the engine must be created and DATABASE__URL is unset.
    """
    if _state.session_factory is None:
        await init_db()
    session_factory = _state.session_factory
    assert session_factory is not None  # For type narrowing

    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            logger.exception("Database session error, rolling back transaction")
            await session.rollback()
            raise
