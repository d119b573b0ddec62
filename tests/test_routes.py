import json

import pytest


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}


def test_list_starts_empty(client):
    response = client.get("/api/notes")
    assert response.status_code == 200
    assert response.get_json() == {"notes": {}, "titles": []}


def test_create_and_list_keep_insertion_order(client):
    for title in ["zeta", "alpha"]:
        response = client.post("/api/notes", json={"title": title, "content": title.upper()})
        assert response.status_code == 201
        assert response.get_json()["persisted"] is True

    body = client.get("/api/notes").get_json()
    assert body["titles"] == ["zeta", "alpha"]
    assert list(json.loads(client.get("/api/notes").data)["notes"]) == ["zeta", "alpha"]


@pytest.mark.parametrize(
    "payload, status, error",
    [
        ({"title": "  ", "content": "x"}, 400, "empty-title"),
        ({"title": "A", "content": "again"}, 409, "duplicate-title"),
        ({"content": "no title"}, 400, "invalid-request"),
    ],
)
def test_create_rejections(client, store, payload, status, error):
    client.post("/api/notes", json={"title": "A", "content": "x"})

    response = client.post("/api/notes", json=payload)

    assert response.status_code == status
    assert response.get_json()["error"] == error
    assert store.notes == {"A": "x"}


def test_read_and_update_note(client):
    client.post("/api/notes", json={"title": "Groceries", "content": "Milk, eggs"})

    response = client.put(
        "/api/notes", json={"title": "Groceries", "content": "Milk, eggs, bread"}
    )
    assert response.status_code == 200
    assert response.get_json()["notes"] == {"Groceries": "Milk, eggs, bread"}

    note = client.get("/api/notes", query_string={"title": "Groceries"}).get_json()
    assert note == {"title": "Groceries", "content": "Milk, eggs, bread"}


@pytest.mark.parametrize("title", [".", "..", "/lead", "a//b", "to do / later", "?x=1#y"])
def test_any_title_can_be_updated_and_deleted(client, store, title):
    assert client.post("/api/notes", json={"title": title, "content": "x"}).status_code == 201

    updated = client.put("/api/notes", json={"title": title, "content": "y"})
    assert updated.status_code == 200
    assert store.get(title) == "y"

    deleted = client.delete("/api/notes", query_string={"title": title, "confirm": "1"})
    assert deleted.status_code == 200
    assert store.notes == {}


def test_long_titles_are_accepted(client, store):
    title = "t" * 300
    response = client.post("/api/notes", json={"title": title, "content": "x"})
    assert response.status_code == 201
    assert store.get(title) == "x"


def test_update_unknown_note(client):
    response = client.put("/api/notes", json={"title": "missing", "content": "y"})
    assert response.status_code == 404
    assert response.get_json() == {"error": "not-found", "title": "missing"}


def test_update_without_title_is_rejected(client):
    response = client.put("/api/notes", json={"content": "y"})
    assert response.status_code == 400
    assert response.get_json()["error"] == "invalid-request"


def test_delete_is_two_step(client, store):
    client.post("/api/notes", json={"title": "A", "content": "x"})

    preview = client.delete("/api/notes", query_string={"title": "A"})
    assert preview.status_code == 200
    assert preview.get_json() == {"note": {"title": "A", "content": "x"}, "confirmed": False}
    assert store.notes == {"A": "x"}

    confirmed = client.delete("/api/notes", query_string={"title": "A", "confirm": "1"})
    assert confirmed.status_code == 200
    body = confirmed.get_json()
    assert body["confirmed"] is True
    assert body["notes"] == {}
    assert body["persisted"] is True


def test_delete_unknown_note(client):
    assert client.delete("/api/notes?title=missing&confirm=1").status_code == 404
    assert client.delete("/api/notes?title=missing").status_code == 404


def test_delete_without_title_is_rejected(client):
    response = client.delete("/api/notes?confirm=1")
    assert response.status_code == 400
    assert response.get_json()["error"] == "invalid-request"



def test_write_failure_is_reported_but_not_an_error(flaky_storage):
    from chillnotes import create_app
    from chillnotes.store import NoteStore

    store = NoteStore(flaky_storage(fail_set=True), "@my_notes")
    client = create_app(store=store).test_client()

    response = client.post("/api/notes", json={"title": "A", "content": "x"})

    assert response.status_code == 201
    assert response.get_json()["persisted"] is False
    assert client.get("/api/notes").get_json()["notes"] == {"A": "x"}


def test_app_starts_with_empty_notes_when_blob_is_corrupt(flaky_storage):
    from chillnotes import create_app
    from chillnotes.store import NoteStore

    store = NoteStore(flaky_storage(blob="{broken"), "@my_notes")
    client = create_app(store=store).test_client()

    assert client.get("/api/notes").get_json()["notes"] == {}


def test_app_loads_existing_notes(storage):
    from chillnotes import create_app
    from chillnotes.store import NoteStore

    storage.set("@my_notes", '{"Saved": "earlier"}')
    client = create_app(store=NoteStore(storage, "@my_notes")).test_client()

    assert client.get("/api/notes").get_json()["notes"] == {"Saved": "earlier"}
