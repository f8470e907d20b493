from certprep.study.adapters.db_manager import DatabaseManager
from certprep.study.adapters.sqlite_storage import SQLiteKeyValueStorage


def test_get_missing_key_returns_none(sqlite_storage):
    assert sqlite_storage.get("flashcard-performance-pmle") is None


def test_set_then_get(sqlite_storage):
    sqlite_storage.set("last-used-bank", "pmle")

    assert sqlite_storage.get("last-used-bank") == "pmle"


def test_set_overwrites(sqlite_storage, db_manager):
    sqlite_storage.set("last-used-bank", "pmle")
    sqlite_storage.set("last-used-bank", "pde")

    assert sqlite_storage.get("last-used-bank") == "pde"
    count = db_manager.get_connection().execute("SELECT count(*) FROM kv_store").fetchone()
    assert count == (1,)


def test_set_stamps_updated_at(sqlite_storage, db_manager):
    sqlite_storage.set("k", "v")

    row = db_manager.get_connection().execute(
        "SELECT updated_at FROM kv_store WHERE key = 'k'"
    ).fetchone()

    assert row[0] is not None


def test_delete(sqlite_storage):
    sqlite_storage.set("k", "v")
    sqlite_storage.delete("k")
    sqlite_storage.delete("never-there")

    assert sqlite_storage.get("k") is None


def test_values_survive_reopen(tmp_path):
    db_path = str(tmp_path / "store.db")
    first = DatabaseManager(db_path)
    SQLiteKeyValueStorage(first).set("flashcard-performance-pmle", "[]")
    first.close()

    second = DatabaseManager(db_path)
    assert SQLiteKeyValueStorage(second).get("flashcard-performance-pmle") == "[]"
    second.close()
