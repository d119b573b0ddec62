import os

import pytest
import requests
from sqlalchemy import create_engine

# Keep the default engine off disk before any chillnotes import.
os.environ.setdefault("DATABASE_URL", "sqlite://")


class FlakyStorage:
    """In-test storage whose reads and writes can be made to fail."""

    def __init__(self, blob=None, fail_get=False, fail_set=False):
        self.blobs = {} if blob is None else {"@my_notes": blob}
        self.fail_get = fail_get
        self.fail_set = fail_set
        self.writes = []

    def get(self, key):
        if self.fail_get:
            raise OSError("storage unavailable")
        return self.blobs.get(key)

    def set(self, key, blob):
        if self.fail_set:
            raise OSError("disk full")
        self.writes.append(blob)
        self.blobs[key] = blob


@pytest.fixture
def session_factory(tmp_path):
    from chillnotes.database import make_session_factory
    from chillnotes.models import Base

    engine = create_engine(f"sqlite:///{tmp_path / 'notes.db'}")
    Base.metadata.create_all(bind=engine)
    try:
        yield make_session_factory(engine)
    finally:
        engine.dispose()


@pytest.fixture
def storage(session_factory):
    from chillnotes.storage import KeyValueStorage

    return KeyValueStorage(session_factory)


@pytest.fixture
def store(storage):
    from chillnotes.store import NoteStore

    return NoteStore(storage, "@my_notes")


@pytest.fixture
def app(store):
    from chillnotes import create_app
    from chillnotes.config import get_settings

    get_settings.cache_clear()
    application = create_app(store=store)
    application.config["TESTING"] = True
    return application


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def flaky_storage():
    return FlakyStorage


class FlaskSession:
    """requests-style session that replays prepared requests on a Flask test client."""

    def __init__(self, test_client):
        self.test_client = test_client
        self.sent = []

    def request(self, method, url, timeout=None, **kwargs):
        prepared = requests.Request(method, url, **kwargs).prepare()
        self.sent.append(prepared)
        result = self.test_client.open(
            prepared.path_url,
            method=method,
            data=prepared.body,
            content_type=prepared.headers.get("Content-Type"),
        )

        response = requests.Response()
        response.status_code = result.status_code
        response.url = prepared.url
        response.encoding = "utf-8"
        response.headers.update(dict(result.headers))
        response._content = result.get_data()
        return response

    def get(self, url, **kwargs):
        return self.request("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self.request("POST", url, **kwargs)

    def put(self, url, **kwargs):
        return self.request("PUT", url, **kwargs)

    def delete(self, url, **kwargs):
        return self.request("DELETE", url, **kwargs)


@pytest.fixture
def notes_client(client):
    from chillnotes.client import NotesClient

    return NotesClient("http://127.0.0.1:5000", "/api", session=FlaskSession(client))
