import sqlite3

from certprep.study.adapters.db_manager import DatabaseManager
from certprep.study.domain.ports import IKeyValueStorage
from certprep.shared.telemetry import Telemetry, measure_time


class SQLiteKeyValueStorage(IKeyValueStorage):
    def __init__(self, db_manager: DatabaseManager) -> None:
        self.telemetry = Telemetry("SQLiteStorage")
        self.db_manager = db_manager

    def _get_connection(self) -> sqlite3.Connection:
        return self.db_manager.get_connection()

    @measure_time("db_get")
    def get(self, key: str) -> str | None:
        conn = self._get_connection()
        row = conn.execute(
            "SELECT value FROM kv_store WHERE key = ?", (key,)
        ).fetchone()
        return row[0] if row else None

    @measure_time("db_set")
    def set(self, key: str, value: str) -> None:
        conn = self._get_connection()
        conn.execute(
            """
            INSERT INTO kv_store (key, value, updated_at)
            VALUES (?, ?, CURRENT_TIMESTAMP)
            ON CONFLICT(key) DO UPDATE SET value      = excluded.value,
                                           updated_at = excluded.updated_at
            """,
            (key, value),
        )
        conn.commit()

    def delete(self, key: str) -> None:
        conn = self._get_connection()
        conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
        conn.commit()
