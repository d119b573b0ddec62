"""
Selection state for the notes screen.

The screen state is an immutable ``NotesState``; every user action is an event
and :func:`reduce` returns the next state. Reducing never touches storage, the
caller decides when to persist the resulting collection.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, List, Mapping, Optional, Union

from .errors import NoteNotFoundError, ValidationError


ADD_LABEL = "Add Note"
SAVE_LABEL = "Save Changes"


@dataclass(frozen=True)
class NotesState:
    notes: Dict[str, str] = field(default_factory=dict)
    selected_title: Optional[str] = None
    title_draft: str = ""
    content_draft: str = ""
    pending_delete: Optional[str] = None

    @property
    def is_editing(self) -> bool:
        return self.selected_title is not None

    @property
    def titles(self) -> List[str]:
        return list(self.notes)

    @property
    def primary_action_label(self) -> str:
        return SAVE_LABEL if self.is_editing else ADD_LABEL


@dataclass(frozen=True)
class NotesLoaded:
    notes: Mapping[str, str]


@dataclass(frozen=True)
class SelectNote:
    title: str


@dataclass(frozen=True)
class ClearSelection:
    pass


@dataclass(frozen=True)
class EditTitleDraft:
    text: str


@dataclass(frozen=True)
class EditContentDraft:
    text: str


@dataclass(frozen=True)
class AddNote:
    title: str
    content: str


@dataclass(frozen=True)
class UpdateNote:
    content: str


@dataclass(frozen=True)
class RequestDelete:
    title: str


@dataclass(frozen=True)
class CancelDelete:
    pass


@dataclass(frozen=True)
class ConfirmDelete:
    pass


Event = Union[
    NotesLoaded,
    SelectNote,
    ClearSelection,
    EditTitleDraft,
    EditContentDraft,
    AddNote,
    UpdateNote,
    RequestDelete,
    CancelDelete,
    ConfirmDelete,
]


def check_new_title(notes: Mapping[str, str], title: str) -> None:
    """Raise ``ValidationError`` if ``title`` cannot be added to ``notes``."""
    if not title.strip():
        raise ValidationError(ValidationError.EMPTY_TITLE)
    if title in notes:
        raise ValidationError(ValidationError.DUPLICATE_TITLE)


def _cleared(state: NotesState) -> NotesState:
    return replace(state, selected_title=None, title_draft="", content_draft="")


def reduce(state: NotesState, event: Event) -> NotesState:
    """Return the state that follows ``event``.

    Raises ``ValidationError`` for a rejected ``AddNote`` and
    ``NoteNotFoundError`` when an event names a title that does not exist.
    In both cases the caller keeps the previous state.
    """
    if isinstance(event, NotesLoaded):
        notes = dict(event.notes)
        next_state = replace(state, notes=notes)
        if state.selected_title is not None and state.selected_title not in notes:
            next_state = _cleared(next_state)
        if state.pending_delete is not None and state.pending_delete not in notes:
            next_state = replace(next_state, pending_delete=None)
        return next_state

    if isinstance(event, SelectNote):
        if event.title not in state.notes:
            raise NoteNotFoundError(event.title)
        return replace(
            state,
            selected_title=event.title,
            title_draft=event.title,
            content_draft=state.notes[event.title],
        )

    if isinstance(event, ClearSelection):
        return _cleared(state)

    if isinstance(event, EditTitleDraft):
        # The title of an existing note is read-only.
        if state.is_editing:
            return state
        return replace(state, title_draft=event.text)

    if isinstance(event, EditContentDraft):
        return replace(state, content_draft=event.text)

    if isinstance(event, AddNote):
        if state.is_editing:
            return state
        check_new_title(state.notes, event.title)
        notes = {**state.notes, event.title: event.content}
        return _cleared(replace(state, notes=notes))

    if isinstance(event, UpdateNote):
        if not state.selected_title:
            return state
        notes = {**state.notes, state.selected_title: event.content}
        return replace(state, notes=notes, content_draft=event.content)

    if isinstance(event, RequestDelete):
        if event.title not in state.notes:
            raise NoteNotFoundError(event.title)
        return replace(state, pending_delete=event.title)

    if isinstance(event, CancelDelete):
        return replace(state, pending_delete=None)

    if isinstance(event, ConfirmDelete):
        title = state.pending_delete
        if title is None:
            return state
        notes = {key: value for key, value in state.notes.items() if key != title}
        next_state = replace(state, notes=notes, pending_delete=None)
        if state.selected_title == title:
            next_state = _cleared(next_state)
        return next_state

    raise TypeError(f"Unsupported event: {event!r}")


__all__ = [
    "NotesState",
    "Event",
    "NotesLoaded",
    "SelectNote",
    "ClearSelection",
    "EditTitleDraft",
    "EditContentDraft",
    "AddNote",
    "UpdateNote",
    "RequestDelete",
    "CancelDelete",
    "ConfirmDelete",
    "check_new_title",
    "reduce",
    "ADD_LABEL",
    "SAVE_LABEL",
]
