"""PostgreSQL-backed implementation of ProfileStoreProtocol."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy.exc import SQLAlchemyError

from alumnidir.db.profiles import get_profile_record, update_profile_fields
from alumnidir.profile.store import PersistenceError

if TYPE_CHECKING:
    from collections.abc import Mapping
    from uuid import UUID

    from alumnidir.profile.store import ProfileRecord

logger = logging.getLogger(__name__)


class DatabaseProfileStore:
    """Profile store over the ``profile`` table.

    Database errors on write are wrapped in PersistenceError so callers
    only deal with the store's own error types. ProfileNotFoundError from
    ``update_profile_fields`` passes through unchanged.
    """

    async def read_record(self, profile_id: UUID) -> ProfileRecord | None:
        return await get_profile_record(profile_id)

    async def write_record(
        self, profile_id: UUID, fields: Mapping[str, Any]
    ) -> None:
        try:
            await update_profile_fields(profile_id, **fields)
        except SQLAlchemyError as exc:
            logger.warning("Profile %s write failed: %s", profile_id, exc)
            raise PersistenceError(f"Database write failed: {exc}") from exc
