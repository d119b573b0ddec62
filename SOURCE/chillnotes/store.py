"""
Note collection mirrored to the key-value storage collaborator.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Protocol

from pydantic import ValidationError as PydanticValidationError

from .errors import LoadError, NoteNotFoundError, PersistError, ValidationError
from .schemas import NoteCollectionAdapter
from .state import check_new_title


logger = logging.getLogger(__name__)


class Storage(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, blob: str) -> None: ...


@dataclass
class PersistResult:
    ok: bool
    error: Optional[PersistError] = None


def serialize_notes(notes: Dict[str, str]) -> str:
    return NoteCollectionAdapter.dump_json(notes).decode("utf-8")


def deserialize_notes(blob: str) -> Dict[str, str]:
    try:
        notes = NoteCollectionAdapter.validate_json(blob)
    except PydanticValidationError as exc:
        raise LoadError(f"Stored notes are not a title/content mapping: {exc}") from exc

    blank = [title for title in notes if not title.strip()]
    if blank:
        raise LoadError(f"Stored notes contain {len(blank)} blank title(s)")
    return notes


class NoteStore:
    """
    Owns the title to content mapping and writes it back after every change.

    Every write replaces the whole blob. The in-memory collection is updated
    before the write is attempted, so a failed write leaves memory ahead of
    storage until the next successful save or load.
    """

    def __init__(self, storage: Storage, storage_key: str) -> None:
        self._storage = storage
        self.storage_key = storage_key
        self._notes: Dict[str, str] = {}

    @property
    def notes(self) -> Dict[str, str]:
        return dict(self._notes)

    def get(self, title: str) -> str:
        try:
            return self._notes[title]
        except KeyError:
            raise NoteNotFoundError(title) from None

    def load(self) -> Dict[str, str]:
        try:
            blob = self._storage.get(self.storage_key)
        except Exception as exc:
            raise LoadError(f"Could not read {self.storage_key!r}: {exc}") from exc

        self._notes = {} if blob is None else deserialize_notes(blob)
        logger.info("Loaded %d notes from %s", len(self._notes), self.storage_key)
        return self.notes

    def reload(self) -> bool:
        """Load from storage, keeping the current collection if that fails."""
        try:
            self.load()
        except LoadError:
            logger.exception("Failed to load notes")
            return False
        return True

    def add(self, title: str, content: str) -> PersistResult:
        try:
            check_new_title(self._notes, title)
        except ValidationError as exc:
            logger.info("Rejected note %r: %s", title, exc)
            raise
        self._notes = {**self._notes, title: content}
        logger.info("Added note %r", title)
        return self.persist(self._notes)

    def update(self, selected_title: Optional[str], content: str) -> Optional[PersistResult]:
        """Replace the content of the selected note; no-op without a selection."""
        if not selected_title:
            return None
        if selected_title not in self._notes:
            raise NoteNotFoundError(selected_title)
        self._notes = {**self._notes, selected_title: content}
        logger.info("Updated note %r", selected_title)
        return self.persist(self._notes)

    def delete(self, title: str) -> PersistResult:
        if title not in self._notes:
            raise NoteNotFoundError(title)
        self._notes = {key: value for key, value in self._notes.items() if key != title}
        logger.info("Deleted note %r", title)
        return self.persist(self._notes)

    def persist(self, notes: Dict[str, str]) -> PersistResult:
        blob = serialize_notes(notes)
        try:
            self._storage.set(self.storage_key, blob)
        except Exception as exc:
            logger.exception("Failed to save notes")
            return PersistResult(ok=False, error=PersistError(str(exc)))
        return PersistResult(ok=True)


__all__ = [
    "NoteStore",
    "PersistResult",
    "Storage",
    "serialize_notes",
    "deserialize_notes",
]
