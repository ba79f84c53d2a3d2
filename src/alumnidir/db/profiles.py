"""CRUD operations for Profile.

Provides async database functions for reading and partially updating
alumni profiles.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from alumnidir.db.engine import get_session
from alumnidir.db.models import Profile
from alumnidir.profile.store import ProfileNotFoundError

if TYPE_CHECKING:
    from uuid import UUID

# Columns callers may never set through update_profile_fields()
_PROTECTED_COLUMNS = frozenset({"id", "created_at", "updated_at"})


def _writable_columns() -> frozenset[str]:
    return frozenset(Profile.model_fields) - _PROTECTED_COLUMNS


async def create_profile(**fields: Any) -> Profile:
    """Create a profile.

    Args:
        **fields: Column values; unknown names raise ValueError.

    Returns:
        The created Profile.
    """
    unknown = set(fields) - set(Profile.model_fields)
    if unknown:
        msg = f"Unknown profile columns: {', '.join(sorted(unknown))}"
        raise ValueError(msg)

    async with get_session() as session:
        profile = Profile(**fields)
        session.add(profile)
        await session.flush()
        await session.refresh(profile)
        return profile


async def get_profile(profile_id: UUID) -> Profile | None:
    """Get a Profile by ID."""
    async with get_session() as session:
        return await session.get(Profile, profile_id)


async def get_profile_record(profile_id: UUID) -> dict[str, Any] | None:
    """Get a Profile by ID as a column-name keyed dict, or None."""
    profile = await get_profile(profile_id)
    if profile is None:
        return None
    return profile.model_dump()


async def update_profile_fields(profile_id: UUID, **fields: Any) -> Profile:
    """Fetch a profile, apply field updates, and persist.

    Handles the fetch-or-raise, timestamp bump, flush, and refresh
    boilerplate shared by every partial update.

    Args:
        profile_id: The profile UUID.
        **fields: Column name/value pairs to set.

    Returns:
        The updated Profile.

    Raises:
        ValueError: If a field is not a writable profile column.
        ProfileNotFoundError: If the profile does not exist.
    """
    unknown = set(fields) - _writable_columns()
    if unknown:
        msg = f"Cannot update profile columns: {', '.join(sorted(unknown))}"
        raise ValueError(msg)

    async with get_session() as session:
        profile = await session.get(Profile, profile_id)
        if not profile:
            raise ProfileNotFoundError(profile_id)
        for attr, value in fields.items():
            setattr(profile, attr, value)
        profile.updated_at = datetime.now(UTC)
        session.add(profile)
        await session.flush()
        await session.refresh(profile)
        return profile


async def delete_profile(profile_id: UUID) -> bool:
    """Delete a profile.

    Returns True if found and deleted.
    """
    async with get_session() as session:
        profile = await session.get(Profile, profile_id)
        if not profile:
            return False
        await session.delete(profile)
        return True
