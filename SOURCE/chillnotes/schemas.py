"""
Pydantic models for request validation and the stored blob format.
"""

from __future__ import annotations

from typing import Dict

from pydantic import BaseModel, TypeAdapter


# The persisted blob is a JSON object mapping title to content.
NoteCollectionAdapter = TypeAdapter(Dict[str, str])


class NoteCreateRequest(BaseModel):
    # Emptiness is checked by the store so the rejection carries its own reason.
    title: str
    content: str = ""


class NoteUpdateRequest(BaseModel):
    title: str
    content: str


class NoteDeleteRequest(BaseModel):
    title: str
    confirm: bool = False


class NoteResponse(BaseModel):
    title: str
    content: str


__all__ = [
    "NoteCollectionAdapter",
    "NoteCreateRequest",
    "NoteUpdateRequest",
    "NoteDeleteRequest",
    "NoteResponse",
]
