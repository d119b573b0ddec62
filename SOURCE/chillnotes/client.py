"""
HTTP client for the local notes service.
"""

from __future__ import annotations

import os
from typing import Any, Dict, Optional, Tuple

import requests


BACKEND_URL = os.getenv("BACKEND_URL", "http://127.0.0.1:5000")
API_PREFIX = os.getenv("API_PREFIX", "/api")

VALIDATION_ERRORS = {"empty-title", "duplicate-title"}


class ApiError(RuntimeError):
    """Raised for any non-2xx response from the notes service."""

    def __init__(self, status: int, payload: Dict[str, Any]) -> None:
        super().__init__(payload)
        self.status = status
        self.payload = payload

    @property
    def error(self) -> str:
        return str(self.payload.get("error") or "unknown-error")

    @property
    def is_validation(self) -> bool:
        return self.error in VALIDATION_ERRORS


def _ensure_json_response(response: requests.Response) -> Dict[str, Any]:
    if response.status_code >= 400:
        try:
            error_payload = response.json()
        except ValueError:
            body = response.text or response.reason or "Unknown error"
            error_payload = {
                "error": body,
                "details": {
                    "status": response.status_code,
                    "url": str(response.url),
                },
            }
        raise ApiError(response.status_code, error_payload)

    if not response.content:
        return {}

    try:
        return response.json()
    except ValueError as exc:
        raise RuntimeError(
            f"Invalid JSON response: {exc}. Body: {response.text!r}"
        ) from exc


def summarize_error(error: Exception, context: str) -> Tuple[str, Optional[str]]:
    """Turn a client exception into a headline and an optional detail line."""
    message = None
    details = None

    if isinstance(error, ApiError):
        message = error.payload.get("message") or error.payload.get("error")
        detail_payload = error.payload.get("details")
        if isinstance(detail_payload, dict):
            details = ", ".join(f"{k}: {v}" for k, v in detail_payload.items())
        elif isinstance(detail_payload, list):
            detail_messages = []
            for entry in detail_payload:
                if isinstance(entry, dict) and entry.get("msg"):
                    loc = ".".join(str(part) for part in entry.get("loc") or [])
                    detail_messages.append(f"{loc}: {entry['msg']}" if loc else entry["msg"])
            if detail_messages:
                details = "; ".join(detail_messages)

    if not message:
        message = str(error)

    return f"{context}: {message}", details


class NotesClient:
    def __init__(
        self,
        base_url: str = BACKEND_URL,
        api_prefix: str = API_PREFIX,
        timeout: int = 30,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_prefix = api_prefix
        self.timeout = timeout
        self.session = session or requests.Session()

    def api_url(self, path: str) -> str:
        return f"{self.base_url}{self.api_prefix}{path}"

    def list_notes(self) -> Dict[str, str]:
        response = self.session.get(self.api_url("/notes"), timeout=self.timeout)
        return _ensure_json_response(response)["notes"]

    def add_note(self, title: str, content: str) -> Dict[str, Any]:
        response = self.session.post(
            self.api_url("/notes"),
            json={"title": title, "content": content},
            timeout=self.timeout,
        )
        return _ensure_json_response(response)

    def update_note(self, title: str, content: str) -> Dict[str, Any]:
        response = self.session.put(
            self.api_url("/notes"),
            json={"title": title, "content": content},
            timeout=self.timeout,
        )
        return _ensure_json_response(response)

    def delete_note(self, title: str, confirm: bool = True) -> Dict[str, Any]:
        params = {"title": title}
        if confirm:
            params["confirm"] = "1"
        response = self.session.delete(
            self.api_url("/notes"),
            params=params,
            timeout=self.timeout,
        )
        return _ensure_json_response(response)


__all__ = ["NotesClient", "ApiError", "summarize_error", "BACKEND_URL", "API_PREFIX"]
