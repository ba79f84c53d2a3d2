"""Display helpers for profile names and dates."""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping

UNKNOWN_USER = "Unknown User"


def _parts(record: Mapping[str, Any] | None, *keys: str) -> list[str]:
    if not record:
        return []
    return [str(record[k]).strip() for k in keys if record.get(k)]


def format_full_name(record: Mapping[str, Any] | None) -> str:
    """Join first, middle, last and suffix names."""
    parts = _parts(record, "first_name", "middle_name", "last_name", "suffix_name")
    return " ".join(p for p in parts if p) or UNKNOWN_USER


def display_name(record: Mapping[str, Any] | None) -> str:
    """First and last name, falling back to the full name."""
    parts = _parts(record, "first_name", "last_name")
    if len(parts) == 2:
        return " ".join(parts)
    return format_full_name(record)


def name_with_middle_initial(record: Mapping[str, Any] | None) -> str:
    """Full name with the middle name shortened to an initial.

    >>> name_with_middle_initial({"first_name": "Ana", "middle_name": "Reyes",
    ...                           "last_name": "Cruz"})
    'Ana R. Cruz'
    """
    if not record or not record.get("middle_name"):
        return format_full_name(record)
    middle = str(record["middle_name"]).strip()
    initial = f"{middle[0].upper()}." if middle else ""
    parts = [
        *_parts(record, "first_name"),
        initial,
        *_parts(record, "last_name", "suffix_name"),
    ]
    return " ".join(p for p in parts if p) or UNKNOWN_USER


def get_initials(record: Mapping[str, Any] | None) -> str:
    """Two-letter initials for the avatar placeholder."""
    if not record:
        return "U"
    first = str(record.get("first_name") or "").strip()
    last = str(record.get("last_name") or "").strip()
    if first and last:
        return f"{first[0]}{last[0]}".upper()
    if first:
        return first[0].upper()
    email = str(record.get("email") or "").strip()
    if email:
        return email[0].upper()
    return "U"


def format_date(value: date | str | None) -> str:
    """Format a date as e.g. 'January 5, 1984'."""
    if not value:
        return "Not provided"
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            return "Invalid date"
    return f"{value:%B} {value.day}, {value.year}"
