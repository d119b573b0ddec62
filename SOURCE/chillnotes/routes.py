"""
API route definitions for the notes service.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError as PydanticValidationError

from .errors import NoteNotFoundError, ValidationError
from .schemas import (
    NoteCreateRequest,
    NoteDeleteRequest,
    NoteResponse,
    NoteUpdateRequest,
)
from .store import NoteStore, PersistResult


api_bp = Blueprint("api", __name__)

STORE_EXTENSION = "chillnotes.store"


def get_store() -> NoteStore:
    return current_app.extensions[STORE_EXTENSION]


def parse_request(model_cls, payload: Optional[dict] = None):
    """Utility to build and validate Pydantic models from request JSON."""
    payload = payload or request.get_json(silent=True) or {}
    return model_cls.model_validate(payload)


def serialize_collection(
    store: NoteStore, result: Optional[PersistResult] = None
) -> Dict[str, Any]:
    notes = store.notes
    data: Dict[str, Any] = {"notes": notes, "titles": list(notes)}
    if result is not None:
        data["persisted"] = result.ok
    return data


@api_bp.errorhandler(PydanticValidationError)
def handle_request_error(err: PydanticValidationError):  # type: ignore[override]
    return jsonify({"error": "invalid-request", "details": err.errors()}), 400


@api_bp.errorhandler(ValidationError)
def handle_validation_error(err: ValidationError):  # type: ignore[override]
    status = 409 if err.reason == ValidationError.DUPLICATE_TITLE else 400
    return jsonify({"error": err.code, "message": err.reason}), status


@api_bp.errorhandler(NoteNotFoundError)
def handle_not_found(err: NoteNotFoundError):  # type: ignore[override]
    return jsonify({"error": "not-found", "title": err.title}), 404


@api_bp.route("/notes", methods=["GET"])
def list_notes():
    store = get_store()
    title = request.args.get("title")
    if title is not None:
        note = NoteResponse(title=title, content=store.get(title))
        return jsonify(note.model_dump())
    return jsonify(serialize_collection(store))


@api_bp.route("/notes", methods=["POST"])
def create_note():
    data = parse_request(NoteCreateRequest)
    store = get_store()
    result = store.add(data.title, data.content)
    return jsonify(serialize_collection(store, result)), 201


# Titles travel in the body or query string, never in the URL path.
@api_bp.route("/notes", methods=["PUT"])
def update_note():
    data = parse_request(NoteUpdateRequest)
    store = get_store()
    result = store.update(data.title, data.content)
    return jsonify(serialize_collection(store, result)), 200


@api_bp.route("/notes", methods=["DELETE"])
def delete_note():
    data = parse_request(NoteDeleteRequest, request.args.to_dict())
    store = get_store()
    if not data.confirm:
        note = NoteResponse(title=data.title, content=store.get(data.title))
        return jsonify({"note": note.model_dump(), "confirmed": False})

    result = store.delete(data.title)
    payload = serialize_collection(store, result)
    payload["confirmed"] = True
    return jsonify(payload), 200


__all__ = ["api_bp", "get_store", "STORE_EXTENSION"]
