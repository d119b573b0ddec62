from chillnotes.models import StorageItem


def test_missing_key_returns_none(storage):
    assert storage.get("@my_notes") is None


def test_set_overwrites_single_row(storage, session_factory):
    storage.set("@my_notes", '{"A": "x"}')
    storage.set("@my_notes", '{"B": "y"}')

    assert storage.get("@my_notes") == '{"B": "y"}'
    with session_factory() as session:
        assert session.query(StorageItem).count() == 1


def test_keys_are_independent(storage):
    storage.set("one", "1")
    storage.set("two", "2")
    assert storage.get("one") == "1"
    assert storage.get("two") == "2"
