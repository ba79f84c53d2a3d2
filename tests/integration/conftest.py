"""Integration test configuration.

Points the app's DATABASE__URL at DEV__TEST_DATABASE_URL, migrates the
schema once per run, and gives each test a NullPool engine bound to its
own event loop.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
import pytest_asyncio

from alumnidir.config import get_settings

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterator


@pytest.fixture(scope="session", autouse=True)
def _test_database() -> Iterator[None]:
    """Swap in the test database URL and run migrations."""
    test_url = get_settings().dev.test_database_url
    if not test_url:
        yield
        return

    from alumnidir.db import run_alembic_upgrade

    saved = {
        k: os.environ.get(k) for k in ("DATABASE__URL", "_ALUMNIDIR_USE_NULL_POOL")
    }
    os.environ["DATABASE__URL"] = test_url
    os.environ["_ALUMNIDIR_USE_NULL_POOL"] = "1"
    get_settings.cache_clear()
    run_alembic_upgrade()
    yield
    for key, value in saved.items():
        if value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = value
    get_settings.cache_clear()


@pytest_asyncio.fixture(autouse=True)
async def _engine_per_test() -> AsyncIterator[None]:
    """Dispose the engine so the next test builds one in its own loop."""
    yield
    from alumnidir.db import close_db

    await close_db()
