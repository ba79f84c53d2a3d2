"""Shared fixtures for unit tests."""

from __future__ import annotations

import os

import pytest


@pytest.fixture(autouse=True)
def _isolated_profile_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep PROFILE__* overrides from the developer's shell out of unit tests."""
    for key in list(os.environ):
        if key.startswith("PROFILE__"):
            monkeypatch.delenv(key, raising=False)
