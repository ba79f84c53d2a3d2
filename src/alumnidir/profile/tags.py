"""Hobby tag parsing, classification and autocomplete.

All functions here are pure: they take the current tag list and return a
new one, never mutating their inputs. ``TagEditor`` wraps them with the
per-session state the profile page binds to (current tags plus the text
the user is typing).

Tag identity is exact string equality after trimming. "Reading" and
"reading" are distinct tags even though they classify identically.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from alumnidir.models.hobbies import (
    CATEGORY_INFO,
    COMMON_HOBBIES,
    HOBBY_CATEGORIES,
    Category,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

DEFAULT_DELIMITER = ";"
MAX_SUGGESTIONS = 5


@dataclass(frozen=True, slots=True)
class TagChip:
    """Render metadata for one selected tag.

    Attributes:
        name: The tag text as entered.
        category: Taxonomy bucket from ``classify``.
        accent: Tailwind background class for the chip.
        colour: Hex colour for the chip.
    """

    name: str
    category: Category
    accent: str
    colour: str


def normalize_tag(raw: str | None) -> str | None:
    """Trim ``raw``; return None when nothing is left."""
    if raw is None:
        return None
    tag = raw.strip()
    return tag or None


def parse_tags(
    source: Sequence[str] | str | None,
    delimiter: str = DEFAULT_DELIMITER,
) -> list[str]:
    """Parse a stored hobbies value into an ordered tag list.

    Accepts either a structured list (current format) or a single
    delimiter-separated string (legacy format). Elements are trimmed,
    empty elements dropped, and later exact duplicates discarded so the
    result satisfies the no-duplicates invariant.

    >>> parse_tags("Reading; Hiking ;Chess")
    ['Reading', 'Hiking', 'Chess']
    """
    if not source:
        return []
    parts = source.split(delimiter) if isinstance(source, str) else source

    tags: list[str] = []
    for part in parts:
        if not isinstance(part, str):
            continue
        tags = add_tag(tags, part)
    return tags


def format_tags(tags: Iterable[str]) -> list[str]:
    """Return the persisted (structured list) form of ``tags``."""
    return [tag for tag in (normalize_tag(t) for t in tags) if tag is not None]


def add_tag(tags: Sequence[str], raw: str) -> list[str]:
    """Append ``raw`` (trimmed) unless it is blank or already present."""
    tag = normalize_tag(raw)
    if tag is None or tag in tags:
        return list(tags)
    return [*tags, tag]


def remove_tag(tags: Sequence[str], tag: str) -> list[str]:
    """Remove the exact match of ``tag``; unchanged if absent."""
    return [t for t in tags if t != tag]


def classify(tag: str) -> Category:
    """Return the first category whose keywords occur in ``tag``.

    Matching is a case-insensitive substring test, scanned in taxonomy
    order. Falls back to ``Category.OTHER``.
    """
    lowered = tag.lower()
    for info in HOBBY_CATEGORIES:
        if info.category is Category.OTHER:
            continue
        if any(keyword in lowered for keyword in info.keywords):
            return info.category
    return Category.OTHER


def suggest(
    catalog: Iterable[str],
    partial: str,
    selected: Iterable[str] = (),
    limit: int = MAX_SUGGESTIONS,
) -> list[str]:
    """Return up to ``limit`` catalog entries containing ``partial``.

    Case-insensitive substring match in catalog order, skipping entries
    already in ``selected``. Blank input gives no suggestions.
    """
    needle = partial.strip().lower()
    limit = min(limit, MAX_SUGGESTIONS)
    if not needle or limit <= 0:
        return []
    chosen = set(selected)

    matches: list[str] = []
    for candidate in catalog:
        if candidate in chosen or needle not in candidate.lower():
            continue
        matches.append(candidate)
        if len(matches) >= limit:
            break
    return matches


def resolve_confirmed(typed: str, suggestions: Sequence[str]) -> str:
    """Pick the text to add when the user confirms their input.

    Prefers the top suggestion when it starts with what was typed, so a
    user completing a known entry gets the catalog spelling. Otherwise
    the literal typed text wins.
    """
    if suggestions and suggestions[0].lower().startswith(typed.lower()):
        return suggestions[0]
    return typed


def tag_chips(tags: Iterable[str]) -> list[TagChip]:
    """Annotate each tag with its category for colour-coded display."""
    chips = []
    for tag in tags:
        info = CATEGORY_INFO[classify(tag)]
        chips.append(
            TagChip(
                name=tag,
                category=info.category,
                accent=info.accent,
                colour=info.colour,
            )
        )
    return chips


class TagEditor:
    """Tag list plus in-progress input for one editing session."""

    def __init__(
        self,
        tags: Sequence[str] | str | None = None,
        *,
        catalog: Sequence[str] = COMMON_HOBBIES,
        suggestion_limit: int = MAX_SUGGESTIONS,
        delimiter: str = DEFAULT_DELIMITER,
    ) -> None:
        self._catalog = tuple(catalog)
        self._limit = suggestion_limit
        self._delimiter = delimiter
        self._tags: list[str] = parse_tags(tags, delimiter)
        self._partial = ""

    @property
    def tags(self) -> list[str]:
        return list(self._tags)

    @property
    def partial_input(self) -> str:
        return self._partial

    @property
    def suggestions(self) -> list[str]:
        return suggest(self._catalog, self._partial, self._tags, self._limit)

    @property
    def chips(self) -> list[TagChip]:
        return tag_chips(self._tags)

    def reset(self, source: Sequence[str] | str | None) -> None:
        """Replace the tag list from a stored value and clear the input."""
        self._tags = parse_tags(source, self._delimiter)
        self._partial = ""

    def set_partial_input(self, text: str) -> list[str]:
        """Update the typed text and return the fresh suggestions."""
        self._partial = text
        return self.suggestions

    def add_tag(self, raw: str) -> list[str]:
        """Add a tag; clears the typed text when the tag is accepted."""
        updated = add_tag(self._tags, raw)
        if updated != self._tags:
            self._tags = updated
            self._partial = ""
        return self.tags

    def remove_tag(self, tag: str) -> list[str]:
        self._tags = remove_tag(self._tags, tag)
        return self.tags

    def confirm(self) -> list[str]:
        """Commit the typed text, preferring a matching catalog entry."""
        if normalize_tag(self._partial) is None:
            return self.tags
        return self.add_tag(resolve_confirmed(self._partial, self.suggestions))
