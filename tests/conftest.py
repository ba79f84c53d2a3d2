"""Shared pytest fixtures for alumni directory tests."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

import pytest
from dotenv import load_dotenv

from alumnidir.profile.store import InMemoryProfileStore

if TYPE_CHECKING:
    from collections.abc import Iterator

load_dotenv()

# Standard UUIDs for test references
SAMPLE_PROFILE_ID = UUID("12345678-1234-5678-1234-567812345678")
MISSING_PROFILE_ID = UUID("87654321-4321-8765-4321-876543218765")


def sample_record(**overrides: object) -> dict[str, object]:
    """A profile record with a legacy string hobbies value."""
    record: dict[str, object] = {
        "first_name": "Maria",
        "middle_name": "Santos",
        "last_name": "Reyes",
        "email": "maria.reyes@example.com",
        "phone_number": "+63 912 345 6789",
        "profession": "Civil Engineer",
        "spouse_name": None,
        "children": None,
        "hobbies_interests": "Reading; Hiking ;Chess",
        "show_phone": None,
        "show_email": True,
        "show_address": False,
        "show_spouse": None,
        "show_children": None,
    }
    record.update(overrides)
    return record


@pytest.fixture
def memory_store() -> InMemoryProfileStore:
    """In-memory store holding one sample profile."""
    store = InMemoryProfileStore()
    store.add(SAMPLE_PROFILE_ID, sample_record())
    return store


@pytest.fixture
def notifications() -> list[str]:
    """Collects messages passed to a notify callback."""
    return []


@pytest.fixture
def fresh_settings() -> Iterator[None]:
    """Clear cached settings and store singletons around a test."""
    from alumnidir.profile.factory import clear_store_cache

    clear_store_cache()
    yield
    clear_store_cache()
