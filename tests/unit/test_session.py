"""Tests for ProfileEditSession over the in-memory store."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any
from unittest.mock import AsyncMock

import pytest

from alumnidir.profile.session import HOBBIES_COLUMN, ProfileEditSession
from alumnidir.profile.store import (
    InMemoryProfileStore,
    PersistenceError,
    ProfileNotFoundError,
)
from tests.conftest import MISSING_PROFILE_ID, SAMPLE_PROFILE_ID, sample_record

if TYPE_CHECKING:
    from uuid import UUID

    from alumnidir.profile.store import ProfileRecord


@pytest.fixture
def session(
    memory_store: InMemoryProfileStore, notifications: list[str]
) -> ProfileEditSession:
    return ProfileEditSession(memory_store, SAMPLE_PROFILE_ID, notifications.append)


class TestLoad:
    """Reading a profile into session state."""

    @pytest.mark.asyncio
    async def test_load_parses_legacy_hobbies(
        self, session: ProfileEditSession
    ) -> None:
        await session.load()
        assert session.loaded
        assert session.tags == ["Reading", "Hiking", "Chess"]
        assert session.edit_data["profession"] == "Civil Engineer"
        assert session.edit_data["spouse_name"] == ""

    @pytest.mark.asyncio
    async def test_load_derives_flags(self, session: ProfileEditSession) -> None:
        await session.load()
        assert session.flags["email"] is True
        assert session.flags["phone"] is False

    @pytest.mark.asyncio
    async def test_load_missing_profile(
        self, memory_store: InMemoryProfileStore, notifications: list[str]
    ) -> None:
        session = ProfileEditSession(
            memory_store, MISSING_PROFILE_ID, notifications.append
        )
        with pytest.raises(ProfileNotFoundError) as exc_info:
            await session.load()
        assert exc_info.value.profile_id == MISSING_PROFILE_ID
        assert not session.loaded

    def test_record_before_load(self, session: ProfileEditSession) -> None:
        with pytest.raises(RuntimeError, match="not been loaded"):
            _ = session.record

    def test_flags_before_load(self, session: ProfileEditSession) -> None:
        with pytest.raises(RuntimeError, match="not been loaded"):
            _ = session.flags


class TestEditing:
    """Tag and text edits held in the session until save."""

    @pytest.mark.asyncio
    async def test_tag_edits_stay_local(
        self, session: ProfileEditSession, memory_store: InMemoryProfileStore
    ) -> None:
        await session.load()
        session.add_tag("Yoga")
        session.remove_tag("Chess")
        assert session.tags == ["Reading", "Hiking", "Yoga"]
        assert memory_store.writes == []

    @pytest.mark.asyncio
    async def test_confirm_input_uses_suggestion(
        self, session: ProfileEditSession
    ) -> None:
        await session.load()
        assert session.set_partial_input("gui") == ["Playing Guitar"]
        session.set_partial_input("play")
        session.confirm_input()
        assert session.tags[-1] == "Playing Guitar"
        assert session.partial_input == ""

    @pytest.mark.asyncio
    async def test_chips_follow_tags(self, session: ProfileEditSession) -> None:
        await session.load()
        assert [chip.name for chip in session.chips] == session.tags

    @pytest.mark.asyncio
    async def test_set_field_rejects_non_editable(
        self, session: ProfileEditSession
    ) -> None:
        await session.load()
        with pytest.raises(KeyError):
            session.set_field("first_name", "Ana")

    @pytest.mark.asyncio
    async def test_cancel_edit_discards_changes(
        self, session: ProfileEditSession
    ) -> None:
        await session.load()
        session.set_field("profession", "Architect")
        session.add_tag("Yoga")
        session.cancel_edit()
        assert session.edit_data["profession"] == "Civil Engineer"
        assert "Yoga" not in session.tags

    @pytest.mark.asyncio
    async def test_pending_changes_shape(self, session: ProfileEditSession) -> None:
        await session.load()
        changes = session.pending_changes()
        assert changes[HOBBIES_COLUMN] == ["Reading", "Hiking", "Chess"]
        assert set(changes) == {
            "profession",
            "email",
            "phone_number",
            "spouse_name",
            "children",
            HOBBIES_COLUMN,
        }


class TestSave:
    """Writing edits back to the store."""

    @pytest.mark.asyncio
    async def test_save_writes_tag_list(
        self, session: ProfileEditSession, memory_store: InMemoryProfileStore
    ) -> None:
        await session.load()
        session.add_tag("Yoga")
        session.set_field("profession", "Architect")

        record = await session.save()

        assert record[HOBBIES_COLUMN] == ["Reading", "Hiking", "Chess", "Yoga"]
        assert record["profession"] == "Architect"
        (written_id, fields), = memory_store.writes
        assert written_id == SAMPLE_PROFILE_ID
        assert fields[HOBBIES_COLUMN] == ["Reading", "Hiking", "Chess", "Yoga"]

    @pytest.mark.asyncio
    async def test_saved_tags_reload_from_list_form(
        self, session: ProfileEditSession
    ) -> None:
        await session.load()
        session.remove_tag("Hiking")
        await session.save()
        assert session.tags == ["Reading", "Chess"]

    @pytest.mark.asyncio
    async def test_save_aborts_when_profile_vanished(
        self, session: ProfileEditSession, memory_store: InMemoryProfileStore
    ) -> None:
        await session.load()
        memory_store.remove(SAMPLE_PROFILE_ID)
        session.add_tag("Yoga")

        with pytest.raises(ProfileNotFoundError):
            await session.save()
        assert memory_store.writes == []

    @pytest.mark.asyncio
    async def test_save_propagates_store_failure(
        self, session: ProfileEditSession, memory_store: InMemoryProfileStore
    ) -> None:
        await session.load()
        memory_store.fail_writes("disk full")
        with pytest.raises(PersistenceError, match="disk full"):
            await session.save()

    @pytest.mark.asyncio
    async def test_save_waits_for_pending_toggles(self) -> None:
        store = AsyncMock()
        store.read_record.return_value = {"id": SAMPLE_PROFILE_ID}
        session = ProfileEditSession(store, SAMPLE_PROFILE_ID, lambda _m: None)
        await session.load()
        _flags, task = session.toggle_field("email")
        await session.save()
        assert task.done()


class TestToggleThroughSession:
    """Privacy toggles keep the cached record in step."""

    @pytest.mark.asyncio
    async def test_toggle_updates_record(
        self, session: ProfileEditSession, memory_store: InMemoryProfileStore
    ) -> None:
        await session.load()
        flags, task = session.toggle_field("phone")
        assert flags["phone"] is True
        assert session.record["show_phone"] is True
        await task
        stored = await memory_store.read_record(SAMPLE_PROFILE_ID)
        assert stored is not None
        assert stored["show_phone"] is True

    @pytest.mark.asyncio
    async def test_failed_toggle_restores_record(
        self,
        session: ProfileEditSession,
        memory_store: InMemoryProfileStore,
        notifications: list[str],
    ) -> None:
        await session.load()
        memory_store.fail_writes()
        _flags, task = session.toggle_field("email")
        await task
        assert session.flags["email"] is True
        assert session.record["show_email"] is True
        assert notifications == ["Failed to update email visibility"]


class _GatedReadStore(InMemoryProfileStore):
    """Holds one chosen read open until the test releases it."""

    def __init__(self) -> None:
        super().__init__()
        self.reads = 0
        self.hold_read: int | None = None
        self.read_started = asyncio.Event()
        self.release = asyncio.Event()

    async def read_record(self, profile_id: UUID) -> ProfileRecord | None:
        record = await super().read_record(profile_id)
        self.reads += 1
        if self.reads == self.hold_read:
            self.read_started.set()
            await self.release.wait()
        return record


class TestToggleDuringReload:
    """A toggle that lands while save() is reloading stays in step."""

    @pytest.fixture
    def gated_store(self) -> _GatedReadStore:
        store = _GatedReadStore()
        store.add(SAMPLE_PROFILE_ID, sample_record())
        return store

    async def _toggle_mid_save(
        self, session: ProfileEditSession, store: _GatedReadStore, field: str
    ) -> None:
        # save() reads once to check the profile exists, writes, then reloads
        store.reads = 0
        store.hold_read = 2
        save_task = asyncio.create_task(session.save())
        await store.read_started.wait()
        _flags, toggle_task = session.toggle_field(field)
        store.release.set()
        await asyncio.gather(save_task, toggle_task)

    @pytest.mark.asyncio
    async def test_flags_match_store_after_save(
        self, gated_store: _GatedReadStore, notifications: list[str]
    ) -> None:
        session = ProfileEditSession(
            gated_store, SAMPLE_PROFILE_ID, notifications.append
        )
        await session.load()

        await self._toggle_mid_save(session, gated_store, "phone")

        stored = await gated_store.read_record(SAMPLE_PROFILE_ID)
        assert stored is not None
        assert stored["show_phone"] is True
        assert session.flags["phone"] is True
        assert session.record["show_phone"] is True
        assert notifications == []

    @pytest.mark.asyncio
    async def test_failed_toggle_during_reload_matches_store(
        self, gated_store: _GatedReadStore, notifications: list[str]
    ) -> None:
        session = ProfileEditSession(
            gated_store, SAMPLE_PROFILE_ID, notifications.append
        )
        await session.load()
        original_write = gated_store.write_record
        calls = 0

        async def _fail_toggle_write(profile_id: UUID, fields: Any) -> None:
            nonlocal calls
            calls += 1
            if calls > 1:
                raise PersistenceError("offline")
            await original_write(profile_id, fields)

        gated_store.write_record = _fail_toggle_write  # type: ignore[method-assign]

        await self._toggle_mid_save(session, gated_store, "phone")

        assert session.flags["phone"] is False
        assert not session.record["show_phone"]
        assert notifications == ["Failed to update phone visibility"]

    @pytest.mark.asyncio
    async def test_reload_without_toggles_reads_once(
        self, gated_store: _GatedReadStore, notifications: list[str]
    ) -> None:
        session = ProfileEditSession(
            gated_store, SAMPLE_PROFILE_ID, notifications.append
        )
        await session.load()
        gated_store.reads = 0
        await session.refresh()
        assert gated_store.reads == 1
