"""Page registration system for data-driven navigation.

Provides a decorator for registering pages with metadata, so the
navigation drawer is generated from what is registered.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

from nicegui import ui

if TYPE_CHECKING:
    from collections.abc import Callable

type PageCategory = Literal["main", "hidden"]


@dataclass
class PageMeta:
    """Metadata for a registered page."""

    route: str
    title: str
    icon: str
    category: PageCategory = "main"
    order: int = field(default=100)


# Global registry of all pages
_page_registry: dict[str, PageMeta] = {}


def page_route(
    route: str,
    *,
    title: str,
    icon: str,
    category: PageCategory = "main",
    order: int = 100,
) -> Callable:
    """Decorator to register a page with navigation metadata.

    Usage:
        @page_route("/", title="Home", icon="home", order=10)
        async def index_page():
            ...

    Args:
        route: URL path for the page.
        title: Display title in navigation.
        icon: Material icon name.
        category: "main" pages appear in the drawer; "hidden" ones do not.
        order: Sort order within the drawer (lower = higher).

    Returns:
        Decorated function registered with NiceGUI and the page registry.
    """

    def decorator(func: Callable) -> Callable:
        _page_registry[route] = PageMeta(
            route=route,
            title=title,
            icon=icon,
            category=category,
            order=order,
        )
        return ui.page(route)(func)

    return decorator


def get_navigation_pages() -> list[PageMeta]:
    """Pages shown in the navigation drawer, sorted by order."""
    visible = [meta for meta in _page_registry.values() if meta.category == "main"]
    visible.sort(key=lambda p: p.order)
    return visible
