"""SQLModel database models for the alumni directory."""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import Any
from uuid import UUID, uuid4

import sqlalchemy as sa
from sqlalchemy import Column, DateTime
from sqlalchemy.dialects.postgresql import JSONB
from sqlmodel import Field, SQLModel


def _utcnow() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(UTC)


def _timestamptz_column() -> Any:
    """Create a TIMESTAMP WITH TIME ZONE column for PostgreSQL."""
    return Column(DateTime(timezone=True), nullable=False)


def _text_column() -> Any:
    """Create a nullable TEXT column."""
    return Column(sa.Text(), nullable=True)


def _visibility_column() -> Any:
    """Create a nullable per-field visibility flag (NULL reads as private)."""
    return Column(sa.Boolean(), nullable=True)


class Profile(SQLModel, table=True):
    """An alumni member's directory profile.

    Attributes:
        id: Primary key UUID, auto-generated.
        hobbies_interests: JSON list of tags. Older rows may hold a single
            ``;``-delimited string instead; both forms are read.
        show_phone .. show_children: Per-field visibility to other members.
            NULL means the member never chose and is treated as private.
        created_at: Timestamp when the profile was created.
        updated_at: Timestamp of the last write.
    """

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    first_name: str | None = Field(default=None, max_length=100)
    middle_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    suffix_name: str | None = Field(default=None, max_length=20)
    email: str | None = Field(default=None, index=True, max_length=255)
    birthday: date | None = Field(default=None)
    phone_number: str | None = Field(default=None, max_length=50)
    address: str | None = Field(default=None, sa_column=_text_column())
    section_1st_year: str | None = Field(default=None, max_length=50)
    section_3rd_year: str | None = Field(default=None, max_length=50)
    section_4th_year: str | None = Field(default=None, max_length=50)
    profession: str | None = Field(default=None, sa_column=_text_column())
    company: str | None = Field(default=None, sa_column=_text_column())
    hobbies_interests: Any = Field(
        default=None, sa_column=Column(JSONB(), nullable=True)
    )
    spouse_name: str | None = Field(default=None, sa_column=_text_column())
    children: str | None = Field(default=None, sa_column=_text_column())
    profile_picture_url: str | None = Field(default=None, sa_column=_text_column())
    then_picture_url: str | None = Field(default=None, sa_column=_text_column())
    show_phone: bool | None = Field(default=None, sa_column=_visibility_column())
    show_email: bool | None = Field(default=None, sa_column=_visibility_column())
    show_address: bool | None = Field(default=None, sa_column=_visibility_column())
    show_spouse: bool | None = Field(default=None, sa_column=_visibility_column())
    show_children: bool | None = Field(
        default=None, sa_column=_visibility_column()
    )
    created_at: datetime = Field(
        default_factory=_utcnow, sa_column=_timestamptz_column()
    )
    updated_at: datetime = Field(
        default_factory=_utcnow, sa_column=_timestamptz_column()
    )
