"""Alumni Directory - member profile editor.

Profile pages with colour-coded hobby tags and per-field privacy toggles
for an alumni member directory.
"""

import logging
import os
import subprocess
from logging.handlers import RotatingFileHandler
from pathlib import Path

__version__ = "0.1.0"


def get_git_commit() -> str:
    """Get the short git commit hash, or 'unknown' if not in a git repo."""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],
            capture_output=True,
            text=True,
            check=True,
            timeout=5,
        )
        return result.stdout.strip()
    except (
        subprocess.CalledProcessError,
        FileNotFoundError,
        subprocess.TimeoutExpired,
    ):
        return "unknown"


def get_version_string() -> str:
    """Get version string with git commit for dev builds."""
    commit = get_git_commit()
    return f"{__version__}+{commit}"


def _setup_logging(log_dir: Path) -> None:
    """Configure logging to both console and rotating file."""
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"alumnidir.{os.getpid()}.log"

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # File handler - detailed logging with rotation (10MB, keep 5 backups)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_formatter = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    file_handler.setFormatter(file_formatter)

    # Console handler - less verbose
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_formatter = logging.Formatter("%(levelname)s: %(message)s")
    console_handler.setFormatter(console_formatter)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    logging.info("Logging configured. Log file: %s", log_file.absolute())


def main() -> None:
    """Entry point for the Alumni Directory application."""
    from nicegui import app, ui

    from alumnidir.config import get_settings

    settings = get_settings()
    _setup_logging(settings.app.log_dir)

    import alumnidir.pages  # noqa: F401 - registers routes

    # Auto-create database and run migrations when using the real store
    if settings.database.url and not settings.dev.store_mock:
        from alumnidir.db.bootstrap import (
            ensure_database_exists,
            run_alembic_upgrade,
        )

        created = ensure_database_exists(settings.database.url)
        run_alembic_upgrade()  # idempotent

        if created:
            print("Created database, seeding development data...")
            subprocess.run(["uv", "run", "seed-data"], check=False)

        from alumnidir.db import close_db, get_engine, init_db, verify_schema

        @app.on_startup
        async def startup() -> None:
            await init_db()
            await verify_schema(get_engine())
            print("Database connected")

        @app.on_shutdown
        async def shutdown() -> None:
            await close_db()

    elif settings.dev.store_mock:
        from alumnidir.cli import DEMO_PROFILE, DEMO_PROFILE_ID
        from alumnidir.profile.factory import get_profile_store
        from alumnidir.profile.store import InMemoryProfileStore

        store = get_profile_store()
        if isinstance(store, InMemoryProfileStore):
            store.add(DEMO_PROFILE_ID, DEMO_PROFILE)
            print(f"In-memory store: {settings.app.base_url}/profile/{DEMO_PROFILE_ID}")

    port = settings.app.port
    storage_secret = settings.app.storage_secret.get_secret_value()

    print(f"Alumni Directory v{get_version_string()}")
    print(f"Starting application on http://0.0.0.0:{port}")

    reload = os.environ.get("ALUMNIDIR_RELOAD", "1") != "0"
    ui.run(host="0.0.0.0", port=port, reload=reload, storage_secret=storage_secret)  # nosec B104


if __name__ in {"__main__", "__mp_main__"}:
    main()
