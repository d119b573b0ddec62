"""
Error taxonomy for the notes store.
"""

from __future__ import annotations


class NotesError(Exception):
    """Base class for every error raised by the notes package."""


class LoadError(NotesError):
    """The stored blob could not be read or deserialized."""


class PersistError(NotesError):
    """The collection could not be written to storage."""


class ValidationError(NotesError):
    """A note was rejected before any state changed."""

    EMPTY_TITLE = "empty title"
    DUPLICATE_TITLE = "duplicate title"

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason

    @property
    def code(self) -> str:
        return self.reason.replace(" ", "-")


class NoteNotFoundError(NotesError):
    def __init__(self, title: str) -> None:
        super().__init__(f"No note titled {title!r}")
        self.title = title


__all__ = [
    "NotesError",
    "LoadError",
    "PersistError",
    "ValidationError",
    "NoteNotFoundError",
]
