"""Profile page: details, hobby tags and privacy toggles.

All editing state lives in a ProfileEditSession; this module only binds
NiceGUI elements to it. Privacy switches flip immediately and persist in
the background; a failed write snaps the switch back and shows a
negative notification.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from uuid import UUID

from nicegui import ui

from alumnidir.pages.layout import page_layout
from alumnidir.pages.registry import page_route
from alumnidir.profile.factory import get_profile_store
from alumnidir.profile.names import (
    display_name,
    format_date,
    get_initials,
    name_with_middle_initial,
)
from alumnidir.profile.privacy import PRIVACY_FIELDS
from alumnidir.profile.session import ProfileEditSession
from alumnidir.profile.store import ProfileNotFoundError

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from alumnidir.profile.tags import TagChip

logger = logging.getLogger(__name__)

PRIVACY_LABELS: dict[str, str] = {
    "phone": "Phone number",
    "email": "Email",
    "address": "Address",
    "spouse": "Spouse",
    "children": "Children",
}

_FIELD_LABELS: dict[str, str] = {
    "profession": "Profession",
    "email": "Email",
    "phone_number": "Phone number",
    "spouse_name": "Spouse",
    "children": "Children",
}


def privacy_rows(flags: Mapping[str, bool]) -> list[tuple[str, str, bool]]:
    """(field, label, visible) for each privacy switch, in display order."""
    return [
        (name, PRIVACY_LABELS[name], bool(flags.get(name, False)))
        for name in PRIVACY_FIELDS
    ]


def chip_style(chip: TagChip) -> str:
    """Inline CSS for a tag chip coloured by its category."""
    return f"background-color: {chip.colour}; color: white"


def _render_chips(
    session: ProfileEditSession,
    on_remove: Callable[[str], None] | None = None,
) -> None:
    """Colour-coded tag chips, with remove buttons when editable."""
    with ui.row().classes("gap-2 flex-wrap"):
        if not session.tags:
            ui.label("No hobbies added").classes("text-grey-6")
        for chip in session.chips:
            with (
                ui.row()
                .classes("items-center rounded-full px-3 py-1 gap-1")
                .style(chip_style(chip))
                .props(f'data-testid="hobby-chip" data-category="{chip.category}"')
            ):
                ui.label(chip.name).classes("text-sm")
                if on_remove is not None:
                    ui.button(
                        icon="close",
                        on_click=lambda _e, tag=chip.name: on_remove(tag),
                    ).props("flat dense round size=xs color=white")


def _render_tag_editor(session: ProfileEditSession) -> None:
    """Tag chips, the tag input, and its suggestion list."""

    @ui.refreshable
    def chips_row() -> None:
        _render_chips(session, _remove)

    @ui.refreshable
    def suggestion_list() -> None:
        suggestions = session.suggestions
        if not suggestions:
            return
        with ui.list().props("dense bordered").classes("w-full max-w-md"):
            for hobby in suggestions:
                ui.item(hobby, on_click=lambda _e, h=hobby: _add(h))

    def _rerender() -> None:
        chips_row.refresh()
        suggestion_list.refresh()
        if tag_input.value != session.partial_input:
            tag_input.value = session.partial_input

    def _add(hobby: str) -> None:
        session.add_tag(hobby)
        _rerender()

    def _remove(tag: str) -> None:
        session.remove_tag(tag)
        _rerender()

    def _on_input(value: str | None) -> None:
        session.set_partial_input(value or "")
        suggestion_list.refresh()

    def _on_enter() -> None:
        session.confirm_input()
        _rerender()

    chips_row()
    tag_input = ui.input(
        placeholder="Add a hobby and press Enter",
        on_change=lambda e: _on_input(e.value),
    ).classes("w-full max-w-md")
    tag_input.on("keydown.enter", _on_enter)
    suggestion_list()


def _render_privacy(session: ProfileEditSession) -> None:
    """One switch per privacy field, wired to optimistic toggles."""

    @ui.refreshable
    def switches() -> None:
        for name, label, visible in privacy_rows(session.flags):
            ui.switch(
                f"Show {label.lower()}",
                value=visible,
                on_change=lambda e, field=name: _on_toggle(field, e.value),
            ).props(f'data-testid="privacy-{name}"')

    async def _on_toggle(field: str, value: bool) -> None:
        # Re-render after rollback sets the switch programmatically
        if session.flags[field] == value:
            return
        _flags, task = session.toggle_field(field)
        await task
        switches.refresh()

    switches()


def _render_details(session: ProfileEditSession) -> None:
    record = session.record
    with ui.grid(columns=2).classes("gap-x-6 gap-y-4"):
        ui.label("Full name").classes("text-xs text-grey-6")
        ui.label(name_with_middle_initial(record))
        ui.label("Birthday").classes("text-xs text-grey-6")
        ui.label(format_date(record.get("birthday")))
        for name, label in _FIELD_LABELS.items():
            ui.label(label).classes("text-xs text-grey-6")
            ui.label(record.get(name) or "Not provided")


def _render_edit_form(
    session: ProfileEditSession, on_done: Callable[[], None]
) -> None:
    for name, label in _FIELD_LABELS.items():
        ui.input(
            label,
            value=session.edit_data[name],
            on_change=lambda e, field=name: session.set_field(field, e.value or ""),
        ).classes("w-full max-w-md")

    async def _save() -> None:
        try:
            await session.save()
        except ProfileNotFoundError:
            ui.notify("Profile not found", type="negative")
            return
        except Exception as exc:
            logger.exception("Failed to save profile %s", session.profile_id)
            ui.notify(f"Failed to save profile changes: {exc}", type="negative")
            return
        ui.notify("Profile saved", type="positive")
        on_done()

    def _cancel() -> None:
        session.cancel_edit()
        on_done()

    with ui.row().classes("mt-4"):
        ui.button("Save", on_click=_save).props('data-testid="save-profile"')
        ui.button("Cancel", on_click=_cancel).props("flat")


@page_route("/profile/{profile_id}", title="Profile", icon="person", category="hidden")
async def profile_page(profile_id: str) -> None:
    """Profile page for one alumni member."""
    try:
        pid = UUID(profile_id)
    except ValueError:
        ui.label("Invalid profile ID").classes("text-red-500")
        return

    with page_layout("Profile"):
        root = ui.column().classes("w-full gap-4")

        def _notify(message: str) -> None:
            # Called from background write tasks; bind to this page's client
            with root:
                ui.notify(message, type="negative")

        session = ProfileEditSession(get_profile_store(), pid, _notify)
        try:
            await session.load()
        except ProfileNotFoundError:
            with root:
                ui.label("Profile not found.").classes("text-yellow-700")
            return

        editing = {"on": False}

        @ui.refreshable
        def body() -> None:
            record = session.record
            with ui.row().classes("items-center gap-4"):
                with ui.avatar(color="primary", text_color="white", size="64px"):
                    if record.get("profile_picture_url"):
                        ui.image(record["profile_picture_url"])
                    else:
                        ui.label(get_initials(record))
                ui.label(display_name(record)).classes("text-2xl font-bold")
                ui.button(
                    icon="close" if editing["on"] else "edit",
                    on_click=_toggle_editing,
                ).props("flat round")

            with ui.card().classes("w-full"):
                ui.label("Personal information").classes("text-lg font-semibold")
                if editing["on"]:
                    _render_edit_form(session, _stop_editing)
                else:
                    _render_details(session)

            with ui.card().classes("w-full"):
                ui.label("Hobbies & interests").classes("text-lg font-semibold")
                if editing["on"]:
                    _render_tag_editor(session)
                else:
                    _render_chips(session)

            with ui.card().classes("w-full"):
                ui.label("Privacy").classes("text-lg font-semibold")
                _render_privacy(session)

        def _toggle_editing() -> None:
            if editing["on"]:
                session.cancel_edit()
            editing["on"] = not editing["on"]
            body.refresh()

        def _stop_editing() -> None:
            editing["on"] = False
            body.refresh()

        with root:
            body()
