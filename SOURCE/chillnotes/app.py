"""
Flask application factory for the notes service.
"""

from __future__ import annotations

from typing import Optional

from flask import Flask, jsonify
from flask_cors import CORS

from .config import get_settings
from .database import engine
from .logging_config import configure_logging
from .models import Base
from .routes import STORE_EXTENSION, api_bp
from .storage import KeyValueStorage
from .store import NoteStore


def create_app(store: Optional[NoteStore] = None) -> Flask:
    settings = get_settings()
    configure_logging(settings)

    app = Flask(__name__)
    app.config["SECRET_KEY"] = settings.secret_key
    # Notes are listed in insertion order.
    app.json.sort_keys = False

    CORS(app)

    if store is None:
        Base.metadata.create_all(bind=engine)
        store = NoteStore(KeyValueStorage(), settings.storage_key)
    store.reload()
    app.extensions[STORE_EXTENSION] = store

    app.register_blueprint(api_bp, url_prefix=settings.api_prefix)

    @app.get("/health")
    def health():
        return jsonify({"status": "ok"})

    return app


__all__ = ["create_app"]
