import os

from certprep.study.adapters.db_manager import DatabaseManager


class TestDatabaseManagerInit:
    def test_init_creates_file_db(self, tmp_path):
        db_path = str(tmp_path / "test.db")
        db = DatabaseManager(db_path)

        assert os.path.exists(db_path)
        db.close()

    def test_init_creates_directory_if_missing(self, tmp_path):
        db_path = str(tmp_path / "subdir" / "nested" / "test.db")
        db = DatabaseManager(db_path)

        assert os.path.exists(db_path)
        db.close()

    def test_init_memory_db_keeps_connection_open(self):
        db = DatabaseManager(":memory:")

        assert db.is_shared
        assert db._shared_connection.execute("SELECT 1").fetchone() == (1,)
        db.close()

    def test_init_creates_kv_table_with_columns(self, tmp_path):
        db = DatabaseManager(str(tmp_path / "test.db"))
        conn = db.get_connection()

        columns = {row[1] for row in conn.execute("PRAGMA table_info(kv_store)")}

        assert {"key", "value", "updated_at"} <= columns
        db.close()


class TestReopen:
    def test_reopening_is_idempotent(self, tmp_path):
        db_path = str(tmp_path / "test.db")
        DatabaseManager(db_path).close()

        db = DatabaseManager(db_path)
        assert db.get_connection().execute("SELECT count(*) FROM kv_store").fetchone() == (0,)
        db.close()


class TestConnectionManagement:
    def test_get_connection_reconnects_after_close(self, tmp_path):
        db = DatabaseManager(str(tmp_path / "test.db"))
        first = db.get_connection()
        first.close()

        second = db.get_connection()

        assert second is not first
        assert second.execute("SELECT 1").fetchone() == (1,)
        db.close()

    def test_close_is_safe_twice(self):
        db = DatabaseManager(":memory:")
        db.close()
        db.close()

        assert not db.is_shared

