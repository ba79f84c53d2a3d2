"""Profile store factory.

Provides a factory function to get the appropriate profile store based on
configuration (database-backed, or in-memory for development and tests).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from alumnidir.config import get_settings

if TYPE_CHECKING:
    from alumnidir.profile.store import ProfileStoreProtocol


# Cached in-memory store so records survive across page loads
_memory_store_instance: ProfileStoreProtocol | None = None


def get_profile_store() -> ProfileStoreProtocol:
    """Get the profile store for the current configuration.

    If DEV__STORE_MOCK=true, returns a singleton InMemoryProfileStore.
    Otherwise, returns DatabaseProfileStore.

    Raises:
        ValueError: If DATABASE__URL is empty and mock mode is disabled.
    """
    global _memory_store_instance  # noqa: PLW0603
    settings = get_settings()

    if settings.dev.store_mock:
        if _memory_store_instance is None:
            from alumnidir.profile.store import InMemoryProfileStore

            _memory_store_instance = InMemoryProfileStore()
        return _memory_store_instance

    if not settings.database.url:
        msg = (
            "DATABASE__URL is required when DEV__STORE_MOCK is not enabled. "
            "Set DATABASE__URL in your .env file."
        )
        raise ValueError(msg)

    from alumnidir.profile.database_store import DatabaseProfileStore

    return DatabaseProfileStore()


def clear_store_cache() -> None:
    """Clear the configuration and in-memory store caches."""
    global _memory_store_instance  # noqa: PLW0603
    get_settings.cache_clear()
    _memory_store_instance = None
