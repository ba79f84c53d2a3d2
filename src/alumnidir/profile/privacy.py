"""Optimistic per-field visibility toggles.

A toggle flips the local flag immediately so the UI reflects it before the
write lands. The write then runs in the background and is reconciled:
success confirms the new value, failure rolls the flag (and any mirrored
copy of it) back to the last value the store is known to hold, and the
user is notified once.

Each write moves through an explicit state machine::

    IDLE -> PENDING -> COMMITTED
                    -> ROLLED_BACK
                    -> SUPERSEDED

SUPERSEDED covers a failed write whose field has since been toggled again.
Writes for the same field are serialised with a per-field lock and carry a
sequence number, so a late outcome never overwrites a newer toggle.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, MutableMapping
    from uuid import UUID

    from alumnidir.profile.store import ProfileStoreProtocol

logger = logging.getLogger(__name__)

PRIVACY_FIELDS: tuple[str, ...] = ("phone", "email", "address", "spouse", "children")

# Record column holding each field's visibility
PRIVACY_COLUMNS: dict[str, str] = {name: f"show_{name}" for name in PRIVACY_FIELDS}

type PrivacyFlags = dict[str, bool]


class WriteState(StrEnum):
    """Lifecycle of a single visibility write."""

    IDLE = "idle"
    PENDING = "pending"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"
    SUPERSEDED = "superseded"


_ALLOWED_TRANSITIONS: dict[WriteState, frozenset[WriteState]] = {
    WriteState.IDLE: frozenset({WriteState.PENDING}),
    WriteState.PENDING: frozenset(
        {WriteState.COMMITTED, WriteState.ROLLED_BACK, WriteState.SUPERSEDED}
    ),
    WriteState.COMMITTED: frozenset(),
    WriteState.ROLLED_BACK: frozenset(),
    WriteState.SUPERSEDED: frozenset(),
}


class InvalidTransitionError(RuntimeError):
    """A pending write was moved to a state its current state cannot reach."""


@dataclass(frozen=True, slots=True)
class WriteOutcome:
    """Result of a persistence attempt."""

    success: bool
    reason: str | None = None

    @classmethod
    def ok(cls) -> WriteOutcome:
        return cls(success=True)

    @classmethod
    def failed(cls, reason: str) -> WriteOutcome:
        return cls(success=False, reason=reason)


@dataclass
class PendingWrite:
    """A deferred visibility write.

    Attributes:
        field: Privacy field name (e.g. "phone").
        previous: Local value before the toggle.
        new_value: Local value after the toggle.
        sequence: Per-field toggle counter; higher means newer.
        state: Current lifecycle state.
    """

    field: str
    previous: bool
    new_value: bool
    sequence: int = 0
    state: WriteState = WriteState.IDLE
    outcome: WriteOutcome | None = None

    @property
    def column(self) -> str:
        return PRIVACY_COLUMNS[self.field]

    def transition(self, target: WriteState) -> None:
        if target not in _ALLOWED_TRANSITIONS[self.state]:
            msg = f"Cannot move {self.field} write from {self.state} to {target}"
            raise InvalidTransitionError(msg)
        self.state = target


def flags_from_record(record: Mapping[str, Any] | None) -> PrivacyFlags:
    """Build the flag map from a profile record; unset means private."""
    record = record or {}
    return {name: bool(record.get(PRIVACY_COLUMNS[name])) for name in PRIVACY_FIELDS}


def flip(flags: Mapping[str, bool], field_name: str) -> PrivacyFlags:
    """Return a copy of ``flags`` with only ``field_name`` negated.

    Raises:
        KeyError: If ``field_name`` is not a privacy field.
    """
    if field_name not in PRIVACY_COLUMNS:
        raise KeyError(field_name)
    updated = {name: bool(flags.get(name, False)) for name in PRIVACY_FIELDS}
    updated[field_name] = not updated[field_name]
    return updated


def apply_optimistic(
    flags: Mapping[str, bool], field_name: str
) -> tuple[PrivacyFlags, PendingWrite]:
    """Flip ``field_name`` and describe the write needed to persist it."""
    updated = flip(flags, field_name)
    pending = PendingWrite(
        field=field_name,
        previous=bool(flags.get(field_name, False)),
        new_value=updated[field_name],
    )
    return updated, pending


class VisibilitySynchronizer:
    """Owns one session's privacy flags and reconciles their writes.

    Args:
        profile_id: Profile whose flags are being edited.
        flags: Initial flags, normally from ``flags_from_record``.
        store: Backend the writes go to.
        notify: Called with a user-facing message when a write fails.
        mirror: Optional second copy of the flags keyed by column name
            (e.g. the cached profile record). Kept in step with ``flags``
            through both the optimistic update and any rollback.
    """

    def __init__(
        self,
        profile_id: UUID,
        flags: Mapping[str, bool],
        store: ProfileStoreProtocol,
        notify: Callable[[str], None],
        mirror: MutableMapping[str, Any] | None = None,
    ) -> None:
        self._profile_id = profile_id
        self._flags: PrivacyFlags = {
            name: bool(flags.get(name, False)) for name in PRIVACY_FIELDS
        }
        # Last value known to be in the store, per field
        self._confirmed: PrivacyFlags = dict(self._flags)
        self._store = store
        self._notify = notify
        self._mirror = mirror
        self._sequence: dict[str, int] = dict.fromkeys(PRIVACY_FIELDS, 0)
        self._locks: dict[str, asyncio.Lock] = {}
        self._tasks: set[asyncio.Task[PendingWrite]] = set()

    @property
    def flags(self) -> PrivacyFlags:
        return dict(self._flags)

    def is_pending(self, field_name: str) -> bool:
        """True while a write for ``field_name`` has not been reconciled."""
        return any(
            not task.done() and task.get_name() == f"privacy-{field_name}"
            for task in self._tasks
        )

    @property
    def toggle_count(self) -> int:
        """Toggles applied so far across all fields; never decreases."""
        return sum(self._sequence.values())

    def reset(
        self,
        flags: Mapping[str, bool],
        mirror: MutableMapping[str, Any] | None = None,
    ) -> None:
        """Adopt freshly read flags as both local and confirmed state.

        Only valid when no write is in flight, so that ``flags`` already
        reflects every toggle. Sequence counters are kept.

        Raises:
            RuntimeError: If a write is still pending.
        """
        if any(not task.done() for task in self._tasks):
            msg = "Cannot reset visibility flags while writes are pending"
            raise RuntimeError(msg)
        self._flags = {name: bool(flags.get(name, False)) for name in PRIVACY_FIELDS}
        self._confirmed = dict(self._flags)
        self._mirror = mirror

    def _set_local(self, field_name: str, value: bool) -> None:
        self._flags[field_name] = value
        if self._mirror is not None:
            self._mirror[PRIVACY_COLUMNS[field_name]] = value

    def apply(self, field_name: str) -> PendingWrite:
        """Flip the local flag now and return the write that persists it."""
        self._flags, pending = apply_optimistic(self._flags, field_name)
        self._set_local(field_name, pending.new_value)
        self._sequence[field_name] += 1
        pending.sequence = self._sequence[field_name]
        pending.transition(WriteState.PENDING)
        logger.debug(
            "Optimistic %s=%s (seq %d) for profile %s",
            field_name,
            pending.new_value,
            pending.sequence,
            self._profile_id,
        )
        return pending

    async def persist(self, pending: PendingWrite) -> PendingWrite:
        """Write ``pending`` to the store and reconcile the result."""
        lock = self._locks.setdefault(pending.field, asyncio.Lock())
        async with lock:
            try:
                await self._store.write_record(
                    self._profile_id, {pending.column: pending.new_value}
                )
            except Exception as exc:
                # reconcile() logs the warning; keep the traceback at DEBUG
                logger.debug(
                    "Write of %s for profile %s raised",
                    pending.field,
                    self._profile_id,
                    exc_info=True,
                )
                outcome = WriteOutcome.failed(str(exc) or type(exc).__name__)
            else:
                outcome = WriteOutcome.ok()
            self.reconcile(pending, outcome)
        return pending

    def reconcile(self, pending: PendingWrite, outcome: WriteOutcome) -> None:
        """Settle a pending write: confirm it or roll the flag back."""
        pending.outcome = outcome
        if outcome.success:
            self._confirmed[pending.field] = pending.new_value
            pending.transition(WriteState.COMMITTED)
            return

        if pending.sequence == self._sequence[pending.field]:
            self._set_local(pending.field, self._confirmed[pending.field])
            pending.transition(WriteState.ROLLED_BACK)
        else:
            pending.transition(WriteState.SUPERSEDED)

        logger.warning(
            "Visibility write for %s on profile %s failed (%s): %s",
            pending.field,
            self._profile_id,
            pending.state,
            outcome.reason,
        )
        self._notify(f"Failed to update {pending.field} visibility")

    def toggle_field(
        self, field_name: str
    ) -> tuple[PrivacyFlags, asyncio.Task[PendingWrite]]:
        """Flip ``field_name`` and persist it in the background.

        Must be called from within a running event loop. Returns the new
        flags for immediate rendering and the task that completes once the
        write has been reconciled.
        """
        pending = self.apply(field_name)
        task = asyncio.create_task(
            self.persist(pending), name=f"privacy-{field_name}"
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return self.flags, task

    async def drain(self) -> None:
        """Wait for every in-flight write to be reconciled."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))
