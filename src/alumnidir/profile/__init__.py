"""Profile editing core: hobby tags, privacy toggles and the edit session.

``DatabaseProfileStore`` is not re-exported here; import it from
``alumnidir.profile.database_store`` (or use ``get_profile_store()``) so
that the in-memory path never imports the database stack.
"""

from __future__ import annotations

from alumnidir.profile.privacy import (
    PRIVACY_COLUMNS,
    PRIVACY_FIELDS,
    InvalidTransitionError,
    PendingWrite,
    VisibilitySynchronizer,
    WriteOutcome,
    WriteState,
    apply_optimistic,
    flags_from_record,
    flip,
)
from alumnidir.profile.session import EDITABLE_FIELDS, ProfileEditSession
from alumnidir.profile.store import (
    InMemoryProfileStore,
    PersistenceError,
    ProfileNotFoundError,
    ProfileStoreProtocol,
)
from alumnidir.profile.tags import (
    TagChip,
    TagEditor,
    add_tag,
    classify,
    format_tags,
    normalize_tag,
    parse_tags,
    remove_tag,
    resolve_confirmed,
    suggest,
    tag_chips,
)

__all__ = [
    # Tags
    "TagChip",
    "TagEditor",
    "add_tag",
    "classify",
    "format_tags",
    "normalize_tag",
    "parse_tags",
    "remove_tag",
    "resolve_confirmed",
    "suggest",
    "tag_chips",
    # Privacy
    "PRIVACY_COLUMNS",
    "PRIVACY_FIELDS",
    "InvalidTransitionError",
    "PendingWrite",
    "VisibilitySynchronizer",
    "WriteOutcome",
    "WriteState",
    "apply_optimistic",
    "flags_from_record",
    "flip",
    # Store
    "InMemoryProfileStore",
    "PersistenceError",
    "ProfileNotFoundError",
    "ProfileStoreProtocol",
    # Session
    "EDITABLE_FIELDS",
    "ProfileEditSession",
]
