"""Unit tests for the SQLite-backed PreferenceStore."""

import sqlite3

from lyrics_finder.db.preferences import CURRENT_STORE_VERSION, STORE_FILE_NAME, initialize_store, open_store


def test_missing_key_is_none(store):
    assert store.get_item("nope") is None


def test_set_get_overwrite(store):
    store.set_item("k", "v1")
    store.set_item("k", "v2")

    assert store.get_item("k") == "v2"
    assert store.keys() == ["k"]


def test_remove_item(store):
    store.set_item("k", "v")
    store.remove_item("k")
    store.remove_item("k")  # no-op the second time

    assert store.get_item("k") is None


def test_creates_file_and_schema_version(tmp_path):
    data_dir = tmp_path / "nested" / "data"
    s = initialize_store(str(data_dir))
    s.close()

    db_file = data_dir / STORE_FILE_NAME
    assert db_file.exists()

    db = sqlite3.connect(str(db_file))
    try:
        assert db.execute("PRAGMA user_version").fetchone()[0] == CURRENT_STORE_VERSION
    finally:
        db.close()


def test_reopen_keeps_values(tmp_path):
    path = str(tmp_path / "prefs.sqlite3")
    s = open_store(path)
    s.set_item("theme", "dark")
    s.close()

    s = open_store(path)
    try:
        assert s.get_item("theme") == "dark"
    finally:
        s.close()
