"""Per-page editing session for one profile.

Loads a snapshot of the profile record, derives the tag list and privacy
flags from it, and exposes the mutation entry points the profile page
binds to. Tags and editable text fields are written back on ``save()``;
privacy flags are written per toggle by the VisibilitySynchronizer.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from alumnidir.config import get_settings
from alumnidir.profile.privacy import VisibilitySynchronizer, flags_from_record
from alumnidir.profile.store import ProfileNotFoundError
from alumnidir.profile.tags import TagEditor, format_tags

if TYPE_CHECKING:
    import asyncio
    from collections.abc import Callable
    from uuid import UUID

    from alumnidir.profile.privacy import PendingWrite, PrivacyFlags
    from alumnidir.profile.store import ProfileRecord, ProfileStoreProtocol
    from alumnidir.profile.tags import TagChip

logger = logging.getLogger(__name__)

EDITABLE_FIELDS: tuple[str, ...] = (
    "profession",
    "email",
    "phone_number",
    "spouse_name",
    "children",
)

HOBBIES_COLUMN = "hobbies_interests"


class ProfileEditSession:
    """Editing state for one profile on one page.

    Args:
        store: Backend used for reads and writes.
        profile_id: Profile being edited.
        notify: Called with a user-facing message when a background
            visibility write fails.
    """

    def __init__(
        self,
        store: ProfileStoreProtocol,
        profile_id: UUID,
        notify: Callable[[str], None],
    ) -> None:
        self._store = store
        self.profile_id = profile_id
        self._notify = notify
        self._record: ProfileRecord | None = None
        self.edit_data: dict[str, str] = dict.fromkeys(EDITABLE_FIELDS, "")
        settings = get_settings().profile
        self._tag_editor = TagEditor(
            suggestion_limit=settings.suggestion_limit,
            delimiter=settings.tag_delimiter,
        )
        self._visibility: VisibilitySynchronizer | None = None

    # ── loading ──────────────────────────────────────────────

    async def load(self) -> ProfileRecord:
        """Read the profile and rebuild all session state from it.

        The session keeps one VisibilitySynchronizer for its lifetime. If a
        toggle lands while the read is awaited, that read may predate the
        toggle's write, so its writes are drained and the record re-read
        before the flags are adopted.

        Raises:
            ProfileNotFoundError: If the profile does not exist.
        """
        while True:
            toggles_before = 0
            if self._visibility is not None:
                await self._visibility.drain()
                toggles_before = self._visibility.toggle_count

            record = await self._store.read_record(self.profile_id)
            if record is None:
                raise ProfileNotFoundError(self.profile_id)

            if (
                self._visibility is None
                or self._visibility.toggle_count == toggles_before
            ):
                break
            logger.debug(
                "Profile %s toggled during reload; reading again", self.profile_id
            )

        self._record = record
        self._reset_edits()
        if self._visibility is None:
            self._visibility = VisibilitySynchronizer(
                self.profile_id,
                flags_from_record(record),
                self._store,
                self._notify,
                mirror=record,
            )
        else:
            self._visibility.reset(flags_from_record(record), mirror=record)
        logger.debug(
            "Loaded profile %s with %d tags", self.profile_id, len(self.tags)
        )
        return record

    async def refresh(self) -> ProfileRecord:
        """Reload from the store once in-flight toggles have settled."""
        return await self.load()

    def _reset_edits(self) -> None:
        record = self.record
        self.edit_data = {name: record.get(name) or "" for name in EDITABLE_FIELDS}
        self._tag_editor.reset(record.get(HOBBIES_COLUMN))

    # ── exposed state ──────────────────────────────────────────────

    @property
    def loaded(self) -> bool:
        return self._record is not None

    @property
    def record(self) -> ProfileRecord:
        if self._record is None:
            msg = "Profile session has not been loaded"
            raise RuntimeError(msg)
        return self._record

    @property
    def tags(self) -> list[str]:
        return self._tag_editor.tags

    @property
    def chips(self) -> list[TagChip]:
        return self._tag_editor.chips

    @property
    def partial_input(self) -> str:
        return self._tag_editor.partial_input

    @property
    def suggestions(self) -> list[str]:
        return self._tag_editor.suggestions

    @property
    def flags(self) -> PrivacyFlags:
        return self._synchronizer.flags

    @property
    def _synchronizer(self) -> VisibilitySynchronizer:
        if self._visibility is None:
            msg = "Profile session has not been loaded"
            raise RuntimeError(msg)
        return self._visibility

    # ── mutation entry points ──────────────────────────────────────────────

    def add_tag(self, raw: str) -> list[str]:
        return self._tag_editor.add_tag(raw)

    def remove_tag(self, tag: str) -> list[str]:
        return self._tag_editor.remove_tag(tag)

    def set_partial_input(self, text: str) -> list[str]:
        return self._tag_editor.set_partial_input(text)

    def confirm_input(self) -> list[str]:
        return self._tag_editor.confirm()

    def toggle_field(
        self, field_name: str
    ) -> tuple[PrivacyFlags, asyncio.Task[PendingWrite]]:
        return self._synchronizer.toggle_field(field_name)

    def set_field(self, name: str, value: str) -> None:
        """Update an editable text field in the pending edits."""
        if name not in EDITABLE_FIELDS:
            raise KeyError(name)
        self.edit_data[name] = value

    def cancel_edit(self) -> None:
        """Discard pending text and tag edits, keeping privacy flags."""
        self._reset_edits()

    # ── persistence ──────────────────────────────────────────────

    def pending_changes(self) -> dict[str, Any]:
        """The partial record ``save()`` will write."""
        fields: dict[str, Any] = dict(self.edit_data)
        fields[HOBBIES_COLUMN] = format_tags(self.tags)
        return fields

    async def save(self) -> ProfileRecord:
        """Write text fields and tags, then reload.

        The profile is read first; if it has gone missing nothing is
        written.

        Raises:
            ProfileNotFoundError: If the profile no longer exists.
            PersistenceError: If the store rejects the write.
        """
        existing = await self._store.read_record(self.profile_id)
        if existing is None:
            logger.warning("Save aborted: profile %s not found", self.profile_id)
            raise ProfileNotFoundError(self.profile_id)

        fields = self.pending_changes()
        logger.info(
            "Saving profile %s (%d tags)", self.profile_id, len(fields[HOBBIES_COLUMN])
        )
        await self._store.write_record(self.profile_id, fields)
        return await self.refresh()
