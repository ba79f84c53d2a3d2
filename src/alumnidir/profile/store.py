"""Profile storage interface and an in-memory implementation.

The editor core needs exactly two operations from storage: read a profile
record by id and write a subset of its fields. ``DatabaseProfileStore`` and
``InMemoryProfileStore`` both implement ``ProfileStoreProtocol`` so they can
be used interchangeably.
"""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from collections.abc import Mapping
    from uuid import UUID

logger = logging.getLogger(__name__)

type ProfileRecord = dict[str, Any]


class ProfileNotFoundError(LookupError):
    """The profile record does not exist."""

    def __init__(self, profile_id: UUID) -> None:
        self.profile_id = profile_id
        super().__init__(f"Profile {profile_id} not found")


class PersistenceError(RuntimeError):
    """A write to the profile store failed."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class ProfileStoreProtocol(Protocol):
    """Protocol for profile storage backends."""

    async def read_record(self, profile_id: UUID) -> ProfileRecord | None:
        """Fetch a profile record.

        Args:
            profile_id: The profile's UUID.

        Returns:
            The record as a column-name keyed dict, or None if not found.
        """
        ...

    async def write_record(
        self, profile_id: UUID, fields: Mapping[str, Any]
    ) -> None:
        """Write a partial update to a profile record.

        Args:
            profile_id: The profile's UUID.
            fields: Column name/value pairs to set.

        Raises:
            ProfileNotFoundError: If the profile does not exist.
            PersistenceError: If the write fails.
        """
        ...


class InMemoryProfileStore:
    """Dict-backed implementation of ProfileStoreProtocol.

    Used for tests and when DEV__STORE_MOCK is enabled. Writes can be made
    to fail on demand with ``fail_writes()`` to exercise rollback paths.
    """

    def __init__(self, records: Mapping[UUID, Mapping[str, Any]] | None = None):
        self._records: dict[UUID, ProfileRecord] = {
            pid: dict(record) for pid, record in (records or {}).items()
        }
        self._fail_reason: str | None = None
        self.writes: list[tuple[UUID, ProfileRecord]] = []

    def add(self, profile_id: UUID, record: Mapping[str, Any]) -> None:
        """Insert or replace a record."""
        self._records[profile_id] = {"id": profile_id, **record}

    def remove(self, profile_id: UUID) -> None:
        self._records.pop(profile_id, None)

    def fail_writes(self, reason: str = "Simulated write failure") -> None:
        """Make every subsequent write raise PersistenceError."""
        self._fail_reason = reason

    def restore_writes(self) -> None:
        self._fail_reason = None

    async def read_record(self, profile_id: UUID) -> ProfileRecord | None:
        record = self._records.get(profile_id)
        if record is None:
            return None
        return copy.deepcopy(record)

    async def write_record(
        self, profile_id: UUID, fields: Mapping[str, Any]
    ) -> None:
        if self._fail_reason is not None:
            raise PersistenceError(self._fail_reason)
        record = self._records.get(profile_id)
        if record is None:
            raise ProfileNotFoundError(profile_id)
        record.update(copy.deepcopy(dict(fields)))
        self.writes.append((profile_id, dict(fields)))
        logger.debug("Wrote %s to profile %s", sorted(fields), profile_id)
