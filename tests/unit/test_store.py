"""Tests for InMemoryProfileStore."""

from __future__ import annotations

import pytest

from alumnidir.profile.store import (
    InMemoryProfileStore,
    PersistenceError,
    ProfileNotFoundError,
)
from tests.conftest import MISSING_PROFILE_ID, SAMPLE_PROFILE_ID


class TestInMemoryProfileStore:
    """Read/write semantics of the dict-backed store."""

    @pytest.mark.asyncio
    async def test_read_includes_id(self, memory_store: InMemoryProfileStore) -> None:
        record = await memory_store.read_record(SAMPLE_PROFILE_ID)
        assert record is not None
        assert record["id"] == SAMPLE_PROFILE_ID
        assert record["first_name"] == "Maria"

    @pytest.mark.asyncio
    async def test_read_missing_returns_none(
        self, memory_store: InMemoryProfileStore
    ) -> None:
        assert await memory_store.read_record(MISSING_PROFILE_ID) is None

    @pytest.mark.asyncio
    async def test_read_returns_copy(self, memory_store: InMemoryProfileStore) -> None:
        first = await memory_store.read_record(SAMPLE_PROFILE_ID)
        assert first is not None
        first["first_name"] = "Changed"
        second = await memory_store.read_record(SAMPLE_PROFILE_ID)
        assert second is not None
        assert second["first_name"] == "Maria"

    @pytest.mark.asyncio
    async def test_write_is_partial(self, memory_store: InMemoryProfileStore) -> None:
        await memory_store.write_record(SAMPLE_PROFILE_ID, {"show_phone": True})
        record = await memory_store.read_record(SAMPLE_PROFILE_ID)
        assert record is not None
        assert record["show_phone"] is True
        assert record["first_name"] == "Maria"
        assert memory_store.writes == [(SAMPLE_PROFILE_ID, {"show_phone": True})]

    @pytest.mark.asyncio
    async def test_write_missing_raises(
        self, memory_store: InMemoryProfileStore
    ) -> None:
        with pytest.raises(ProfileNotFoundError, match=str(MISSING_PROFILE_ID)):
            await memory_store.write_record(MISSING_PROFILE_ID, {"show_phone": True})

    @pytest.mark.asyncio
    async def test_fail_and_restore_writes(
        self, memory_store: InMemoryProfileStore
    ) -> None:
        memory_store.fail_writes("offline")
        with pytest.raises(PersistenceError) as exc_info:
            await memory_store.write_record(SAMPLE_PROFILE_ID, {"show_phone": True})
        assert exc_info.value.reason == "offline"
        assert memory_store.writes == []

        memory_store.restore_writes()
        await memory_store.write_record(SAMPLE_PROFILE_ID, {"show_phone": True})
        assert len(memory_store.writes) == 1

    @pytest.mark.asyncio
    async def test_constructor_records(self) -> None:
        store = InMemoryProfileStore({SAMPLE_PROFILE_ID: {"first_name": "Ana"}})
        record = await store.read_record(SAMPLE_PROFILE_ID)
        assert record == {"first_name": "Ana"}
