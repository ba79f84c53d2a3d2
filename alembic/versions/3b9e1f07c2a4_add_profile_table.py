"""add_profile_table

Revision ID: 3b9e1f07c2a4
Revises:
Create Date: 2026-10-17 09:12:41.508213

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "3b9e1f07c2a4"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "profile",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=True),
        sa.Column("middle_name", sa.String(length=100), nullable=True),
        sa.Column("last_name", sa.String(length=100), nullable=True),
        sa.Column("suffix_name", sa.String(length=20), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("birthday", sa.Date(), nullable=True),
        sa.Column("phone_number", sa.String(length=50), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("section_1st_year", sa.String(length=50), nullable=True),
        sa.Column("section_3rd_year", sa.String(length=50), nullable=True),
        sa.Column("section_4th_year", sa.String(length=50), nullable=True),
        sa.Column("profession", sa.Text(), nullable=True),
        sa.Column("company", sa.Text(), nullable=True),
        sa.Column(
            "hobbies_interests",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=True,
        ),
        sa.Column("spouse_name", sa.Text(), nullable=True),
        sa.Column("children", sa.Text(), nullable=True),
        sa.Column("profile_picture_url", sa.Text(), nullable=True),
        sa.Column("then_picture_url", sa.Text(), nullable=True),
        sa.Column("show_phone", sa.Boolean(), nullable=True),
        sa.Column("show_email", sa.Boolean(), nullable=True),
        sa.Column("show_address", sa.Boolean(), nullable=True),
        sa.Column("show_spouse", sa.Boolean(), nullable=True),
        sa.Column("show_children", sa.Boolean(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_profile_email", "profile", ["email"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_profile_email", table_name="profile")
    op.drop_table("profile")
