"""Command-line utilities for the alumni directory.

Provides a hobby tag classification preview and a development seed
command.
"""

from __future__ import annotations

import asyncio
import sys
from typing import TYPE_CHECKING
from uuid import UUID

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from alumnidir.models.hobbies import CATEGORY_INFO, COMMON_HOBBIES
from alumnidir.profile.tags import classify, parse_tags, suggest

if TYPE_CHECKING:
    import argparse
    from collections.abc import Sequence

console = Console()

# Fixed id for the demo profile in DEV__STORE_MOCK mode
DEMO_PROFILE_ID = UUID("5f0c1a2e-8d4b-4c7e-9a31-2b6e7d90c4f1")

DEMO_PROFILE = {
    "first_name": "Maria",
    "middle_name": "Santos",
    "last_name": "Reyes",
    "email": "maria.reyes@example.com",
    "phone_number": "+63 912 345 6789",
    "profession": "Civil Engineer",
    "company": "Reyes & Partners",
    "hobbies_interests": ["Reading", "Hiking", "Playing Guitar", "Oil Painting"],
    "show_email": True,
}


def _build_classify_parser() -> argparse.ArgumentParser:
    """Build argparse parser for classify-tags."""
    import argparse

    parser = argparse.ArgumentParser(
        prog="classify-tags",
        description="Show the category each hobby tag is filed under.",
    )
    parser.add_argument(
        "tags",
        nargs="*",
        help="Tags to classify; a single ';'-separated string also works",
    )
    parser.add_argument(
        "--suggest",
        metavar="TEXT",
        default=None,
        help="Also list catalog suggestions for partially typed TEXT",
    )
    return parser


def classification_table(tags: Sequence[str]) -> Table:
    """Build a rich table of tag, category and accent."""
    table = Table(title="Hobby classification")
    table.add_column("Tag")
    table.add_column("Category")
    table.add_column("Accent", style="dim")
    for tag in tags:
        info = CATEGORY_INFO[classify(tag)]
        table.add_row(tag, f"[{info.colour}]{info.category}[/]", info.accent)
    return table


def classify_tags() -> None:
    """Classify hobby tags and optionally preview suggestions.

    Usage:
        uv run classify-tags "Morning Run" "Oil Painting"
        uv run classify-tags "Reading; Hiking ;Chess" --suggest gui
    """
    args = _build_classify_parser().parse_args(sys.argv[1:])

    source: list[str] | str = args.tags
    if len(args.tags) == 1:
        source = args.tags[0]
    tags = parse_tags(source)

    if tags:
        console.print(classification_table(tags))
    elif args.suggest is None:
        console.print("[yellow]No tags given[/]")

    if args.suggest is not None:
        matches = suggest(COMMON_HOBBIES, args.suggest, tags)
        if matches:
            console.print(f"[bold]Suggestions for {args.suggest!r}:[/]")
            for match in matches:
                console.print(f"  • {match}")
        else:
            console.print(f"[dim]No suggestions for {args.suggest!r}[/]")


def seed_data() -> None:
    """Seed the database with a demo profile for development.

    Usage:
        uv run seed-data
    """
    from alumnidir.config import get_settings

    settings = get_settings()
    if not settings.database.url:
        console.print("[red]Error:[/] DATABASE__URL not set")
        sys.exit(1)

    async def _seed() -> None:
        from sqlmodel import select

        from alumnidir.db.engine import get_session, init_db
        from alumnidir.db.models import Profile
        from alumnidir.db.profiles import create_profile

        await init_db()

        async with get_session() as session:
            result = await session.exec(
                select(Profile).where(Profile.email == DEMO_PROFILE["email"])
            )
            profile = result.first()

        if profile:
            console.print(f"[yellow]Profile exists:[/] {profile.email} (id={profile.id})")
        else:
            profile = await create_profile(**DEMO_PROFILE)
            console.print(f"[green]Created profile:[/] {profile.email} (id={profile.id})")

        console.print()
        console.print(
            Panel(
                f"[bold]Profile:[/] {settings.app.base_url}/profile/{profile.id}",
                title="Seed Data Ready",
            )
        )

    asyncio.run(_seed())
