"""
Streamlit frontend for Chill Notes.

Run with ``streamlit run SOURCE/frontend/streamlit_app.py`` while the notes
service is up.
"""

from __future__ import annotations

import html
import logging
from typing import Any, Dict, Optional, Tuple

import requests
import streamlit as st

from chillnotes.client import ApiError, NotesClient, summarize_error
from chillnotes.config import get_settings
from chillnotes.errors import NoteNotFoundError, ValidationError
from chillnotes.logging_config import configure_logging
from chillnotes.state import (
    AddNote,
    CancelDelete,
    ClearSelection,
    ConfirmDelete,
    EditContentDraft,
    EditTitleDraft,
    NotesLoaded,
    NotesState,
    RequestDelete,
    SelectNote,
    UpdateNote,
    reduce,
)


logger = logging.getLogger("chillnotes.frontend")

TITLE_KEY = "title_input"
CONTENT_KEY = "content_input"

ALERT_MESSAGES = {
    ValidationError.EMPTY_TITLE: "Please enter a note title",
    ValidationError.DUPLICATE_TITLE: "Note with this title already exists",
}

ClientErrors = (ApiError, requests.RequestException, RuntimeError)


@st.cache_resource
def get_client() -> NotesClient:
    return NotesClient()


def inject_styles() -> None:
    st.markdown(
        """
        <style>
        .flash-message {
            padding: 0.9rem 1.2rem;
            border-radius: 0.75rem;
            margin-bottom: 1.5rem;
            font-weight: 500;
            animation: flash-fade 6s forwards;
        }
        .flash-success {
            background-color: rgba(46, 204, 113, 0.2);
            color: #2ecc71;
        }
        .flash-error {
            background-color: rgba(231, 76, 60, 0.2);
            color: #e74c3c;
        }
        @keyframes flash-fade {
            0%, 90% { opacity: 1; }
            100% { opacity: 0; display: none; }
        }
        </style>
        """,
        unsafe_allow_html=True,
    )


def ensure_session_defaults() -> None:
    defaults = {
        "flash": None,
        "alert": None,
        TITLE_KEY: "",
        CONTENT_KEY: "",
    }
    for key, value in defaults.items():
        st.session_state.setdefault(key, value)

    if "notes_state" not in st.session_state:
        st.session_state["notes_state"] = NotesState()
        refresh_notes()


def current_state() -> NotesState:
    return st.session_state["notes_state"]


def commit(state: NotesState) -> None:
    """Store the new state and push its drafts into the input widgets."""
    st.session_state["notes_state"] = state
    st.session_state[TITLE_KEY] = state.title_draft
    st.session_state[CONTENT_KEY] = state.content_draft


def set_flash(level: str, message: str) -> None:
    st.session_state["flash"] = (level, message)


def set_error_flash(context: str, error: Exception) -> None:
    text, detail = summarize_error(error, context)
    if detail:
        text = f"{text} ({detail})"
    set_flash("error", text)


def pop_flash() -> Optional[Tuple[str, str]]:
    flash = st.session_state.get("flash")
    st.session_state["flash"] = None
    return flash


def show_alert(reason: str) -> None:
    st.session_state["alert"] = ALERT_MESSAGES.get(reason, reason)


def note_saved(response: Dict[str, Any]) -> None:
    if response.get("persisted") is False:
        logger.warning("Notes service could not persist the last change")


def refresh_notes() -> None:
    try:
        notes = get_client().list_notes()
    except ClientErrors as exc:
        logger.exception("Failed to load notes")
        set_error_flash("Unable to load notes", exc)
        return
    commit(reduce(current_state(), NotesLoaded(notes)))


# Widget callbacks run before the script body, so they may rewrite widget state.

def on_title_change() -> None:
    commit(reduce(current_state(), EditTitleDraft(st.session_state[TITLE_KEY])))


def on_content_change() -> None:
    commit(reduce(current_state(), EditContentDraft(st.session_state[CONTENT_KEY])))


def on_select(title: str) -> None:
    try:
        commit(reduce(current_state(), SelectNote(title)))
    except NoteNotFoundError:
        refresh_notes()


def on_clear() -> None:
    commit(reduce(current_state(), ClearSelection()))


def on_add() -> None:
    state = current_state()
    title = st.session_state[TITLE_KEY]
    content = st.session_state[CONTENT_KEY]
    try:
        next_state = reduce(state, AddNote(title, content))
    except ValidationError as exc:
        show_alert(exc.reason)
        return
    if next_state is state:
        return

    try:
        response = get_client().add_note(title, content)
    except ApiError as exc:
        if exc.is_validation:
            show_alert(str(exc.payload.get("message") or exc.error))
        else:
            set_error_flash("Could not add note", exc)
        return
    except ClientErrors as exc:
        set_error_flash("Could not add note", exc)
        return

    note_saved(response)
    commit(reduce(next_state, NotesLoaded(response["notes"])))
    set_flash("success", f"Added “{title}”.")


def on_save() -> None:
    state = current_state()
    content = st.session_state[CONTENT_KEY]
    next_state = reduce(state, UpdateNote(content))
    if next_state is state:
        return

    try:
        response = get_client().update_note(state.selected_title, content)
    except ClientErrors as exc:
        set_error_flash("Could not save note", exc)
        return

    note_saved(response)
    commit(reduce(next_state, NotesLoaded(response["notes"])))
    set_flash("success", "Changes saved.")


def on_request_delete(title: str) -> None:
    try:
        commit(reduce(current_state(), RequestDelete(title)))
    except NoteNotFoundError:
        refresh_notes()


def on_cancel_delete() -> None:
    commit(reduce(current_state(), CancelDelete()))


def on_confirm_delete() -> None:
    state = current_state()
    title = state.pending_delete
    if title is None:
        return

    try:
        response = get_client().delete_note(title)
    except ApiError as exc:
        if exc.status == 404:
            refresh_notes()
        else:
            set_error_flash("Could not delete note", exc)
        return
    except ClientErrors as exc:
        set_error_flash("Could not delete note", exc)
        return

    note_saved(response)
    commit(reduce(reduce(state, ConfirmDelete()), NotesLoaded(response["notes"])))
    set_flash("success", f"Deleted “{title}”.")


@st.dialog("Error")
def alert_dialog(message: str) -> None:
    st.write(message)
    if st.button("OK", key="alert_ok"):
        st.rerun()


def display_flash() -> None:
    flash = pop_flash()
    if not flash:
        return

    level, message = flash
    css_class = "flash-error" if level == "error" else "flash-success"
    st.markdown(
        f"<div class='flash-message {css_class}'>{html.escape(message)}</div>",
        unsafe_allow_html=True,
    )


def render_note_list(state: NotesState) -> None:
    if not state.titles:
        st.info("No notes yet. Add one below to get started.")
        return

    for title in state.titles:
        cols = st.columns([6, 1])
        cols[0].button(
            title,
            key=f"select_{title}",
            on_click=on_select,
            args=(title,),
            type="primary" if title == state.selected_title else "secondary",
            width="stretch",
        )
        cols[1].button(
            "🗑️",
            key=f"delete_{title}",
            on_click=on_request_delete,
            args=(title,),
            help=f"Delete “{title}”",
        )


def render_delete_confirmation(state: NotesState) -> None:
    if state.pending_delete is None:
        return

    st.warning(f"Delete note “{state.pending_delete}”?")
    cols = st.columns([1, 1])
    cols[0].button("Delete", key="confirm_delete_yes", type="primary", on_click=on_confirm_delete)
    cols[1].button("Cancel", key="confirm_delete_no", on_click=on_cancel_delete)


def render_editor(state: NotesState) -> None:
    st.text_input(
        "Note Title",
        key=TITLE_KEY,
        placeholder="Note Title",
        disabled=state.is_editing,
        on_change=on_title_change,
    )
    st.text_area(
        "Note Content",
        key=CONTENT_KEY,
        placeholder="Note Content",
        height=200,
        on_change=on_content_change,
    )

    cols = st.columns([1, 1])
    cols[0].button(
        state.primary_action_label,
        key="primary_action",
        type="primary",
        on_click=on_save if state.is_editing else on_add,
        width="stretch",
    )
    cols[1].button("Clear", key="clear", on_click=on_clear, width="stretch")


def main():
    st.set_page_config(page_title="Chill Notes", page_icon="❄️")
    configure_logging(get_settings())
    ensure_session_defaults()
    inject_styles()

    st.header("Chill Notes ❄️")
    display_flash()

    alert = st.session_state.get("alert")
    if alert:
        st.session_state["alert"] = None
        alert_dialog(alert)

    state = current_state()
    render_note_list(state)
    render_delete_confirmation(state)
    st.divider()
    render_editor(state)


if __name__ == "__main__":
    main()
