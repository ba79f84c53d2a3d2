"""Database module for the alumni directory.

Provides async SQLModel operations with PostgreSQL.
"""

from __future__ import annotations

from alumnidir.db.bootstrap import (
    ensure_database_exists,
    get_expected_tables,
    is_db_configured,
    run_alembic_upgrade,
    verify_schema,
)
from alumnidir.db.engine import close_db, get_engine, get_session, init_db
from alumnidir.db.models import Profile
from alumnidir.db.profiles import (
    create_profile,
    delete_profile,
    get_profile,
    get_profile_record,
    update_profile_fields,
)

__all__ = [
    # Models
    "Profile",
    # Engine
    "close_db",
    "get_engine",
    "get_session",
    "init_db",
    # Bootstrap
    "ensure_database_exists",
    "get_expected_tables",
    "is_db_configured",
    "run_alembic_upgrade",
    "verify_schema",
    # Profiles
    "create_profile",
    "delete_profile",
    "get_profile",
    "get_profile_record",
    "update_profile_fields",
]
