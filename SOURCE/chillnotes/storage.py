"""
Key-value storage collaborator.

Notes are stored as a single serialized blob under one key, so the store only
needs ``get`` and ``set``.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from sqlalchemy.orm import Session

from .database import session_scope
from .models import StorageItem


logger = logging.getLogger(__name__)


class KeyValueStorage:
    """SQLAlchemy-backed ``get``/``set`` store of string blobs."""

    def __init__(self, session_factory: Optional[Callable[[], Session]] = None) -> None:
        self._session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        with session_scope(self._session_factory) as session:
            item = session.get(StorageItem, key)
            return item.value if item is not None else None

    def set(self, key: str, blob: str) -> None:
        with session_scope(self._session_factory) as session:
            item = session.get(StorageItem, key)
            if item is None:
                session.add(StorageItem(key=key, value=blob))
            else:
                item.value = blob
        logger.debug("Stored %d characters under %s", len(blob), key)


__all__ = ["KeyValueStorage"]
