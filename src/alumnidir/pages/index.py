"""Index page for the alumni directory."""

from uuid import UUID

from nicegui import ui

from alumnidir.pages.layout import page_layout
from alumnidir.pages.registry import page_route


def _parse_profile_id(value: str | None) -> UUID | None:
    """Parse a profile UUID typed by the user; None if malformed."""
    try:
        return UUID((value or "").strip())
    except ValueError:
        return None


@page_route("/", title="Home", icon="home", order=10)
async def index_page() -> None:
    """Landing page with a profile lookup box."""
    with page_layout("Home"):
        ui.label("Alumni Directory").classes("text-2xl font-bold mb-4")

        with ui.card().classes("p-4 max-w-md"):
            ui.label("Open a profile").classes("text-lg font-semibold mb-2")
            profile_input = ui.input("Profile ID").classes("w-full")

            def _open() -> None:
                profile_id = _parse_profile_id(profile_input.value)
                if profile_id is None:
                    ui.notify("Invalid profile ID", type="warning")
                    return
                ui.navigate.to(f"/profile/{profile_id}")

            profile_input.on("keydown.enter", _open)
            ui.button("Open", on_click=_open).classes("mt-2")
