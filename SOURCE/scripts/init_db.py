"""
Initialize the SQLite database that stores the notes blob.

Usage:
    python SOURCE/scripts/init_db.py
"""

from pathlib import Path

from chillnotes.config import get_settings
from chillnotes.database import engine
from chillnotes.models import Base
from chillnotes.storage import KeyValueStorage
from chillnotes.store import NoteStore


def main() -> None:
    Base.metadata.create_all(bind=engine)
    db_path = Path(engine.url.database or "notes.db")
    print(f"Database initialized at {db_path.resolve()}")

    store = NoteStore(KeyValueStorage(), get_settings().storage_key)
    if store.reload():
        print(f"{len(store.notes)} notes stored under {store.storage_key!r}")


if __name__ == "__main__":
    main()
