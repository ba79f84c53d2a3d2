"""Database creation, migrations and the startup schema check.

``main()`` calls ``ensure_database_exists`` and ``run_alembic_upgrade``
before the app starts, then ``verify_schema`` from the startup hook so a
missing ``profile`` table stops the app instead of failing on first page
load. Schema changes go through Alembic only.
"""

from __future__ import annotations

import logging
import os
import re
import subprocess
import sys
from typing import TYPE_CHECKING

import psycopg
import psycopg.sql
from sqlalchemy import inspect
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError
from sqlmodel import SQLModel

from alumnidir.config import _PROJECT_ROOT, get_settings

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

logger = logging.getLogger(__name__)

_SAFE_DB_NAME = re.compile(r"^[a-zA-Z0-9_]+$")


def mask_password(url: str) -> str:
    """Render ``url`` with its password replaced by ``***``."""
    try:
        return make_url(url).render_as_string(hide_password=True)
    except ArgumentError:
        return "<unparseable database URL>"


def _maintenance_url(url: str) -> str:
    """Same server and credentials, ``postgres`` database, plain psycopg scheme."""
    maintenance = make_url(url).set(drivername="postgresql", database="postgres")
    return maintenance.render_as_string(hide_password=False)


def ensure_database_exists(url: str | None) -> bool:
    """Create the database named in ``url`` if the server lacks it.

    CREATE DATABASE cannot run in a transaction, so this uses a sync
    psycopg connection in autocommit mode against ``postgres``.

    Args:
        url: DATABASE__URL. None or a URL without a database name is a no-op.

    Returns:
        True if the database was created.

    Raises:
        ValueError: If the database name is not plain ``[A-Za-z0-9_]``.
    """
    if not url:
        return False
    db_name = make_url(url).database
    if not db_name:
        return False
    if not _SAFE_DB_NAME.match(db_name):
        msg = f"Invalid database name: {db_name!r}"
        raise ValueError(msg)

    with psycopg.connect(_maintenance_url(url), autocommit=True) as conn:
        exists = conn.execute(
            "SELECT 1 FROM pg_database WHERE datname = %s", (db_name,)
        ).fetchone()
        if exists is not None:
            return False
        conn.execute(
            psycopg.sql.SQL("CREATE DATABASE {}").format(
                psycopg.sql.Identifier(db_name)
            )
        )
    logger.info("Created database %s", db_name)
    return True


def is_db_configured() -> bool:
    """True when DATABASE__URL is set."""
    return bool(get_settings().database.url)


def run_alembic_upgrade() -> None:
    """Bring the schema to head with ``alembic upgrade head``.

    Runs in a subprocess from the project root, where alembic.ini lives,
    so Alembic's own asyncio loop never meets the caller's.

    Raises:
        RuntimeError: If DATABASE__URL is unset or the migration fails.
    """
    if not is_db_configured():
        msg = "DATABASE__URL not configured; cannot run migrations"
        raise RuntimeError(msg)

    ensure_database_exists(get_settings().database.url)

    result = subprocess.run(
        [sys.executable, "-m", "alembic", "upgrade", "head"],
        capture_output=True,
        encoding="utf-8",
        check=False,
        cwd=_PROJECT_ROOT,
        env=dict(os.environ),
    )
    if result.returncode != 0:
        msg = (
            "Alembic migrations failed:\n"
            f"stdout: {result.stdout}\n"
            f"stderr: {result.stderr}"
        )
        raise RuntimeError(msg)
    logger.info("Profile schema is at head")


def get_expected_tables() -> set[str]:
    """Table names declared by ``alumnidir.db.models``."""
    import alumnidir.db.models  # noqa: F401, PLC0415

    return set(SQLModel.metadata.tables.keys())


async def verify_schema(engine: AsyncEngine | None) -> None:
    """Fail fast if any model table is missing from the database.

    Raises:
        RuntimeError: If ``engine`` is None or tables are missing.
    """
    if engine is None:
        raise RuntimeError("Database engine is not initialized")

    expected = get_expected_tables()
    async with engine.connect() as connection:
        existing = await connection.run_sync(
            lambda sync_conn: set(inspect(sync_conn).get_table_names())
        )

    missing = expected - existing
    if missing:
        url = get_settings().database.url
        masked = mask_password(url) if url else "<unset>"
        msg = (
            f"Database is missing tables: {', '.join(sorted(missing))}. "
            f"DATABASE__URL={masked}. Run 'alembic upgrade head'."
        )
        raise RuntimeError(msg)
