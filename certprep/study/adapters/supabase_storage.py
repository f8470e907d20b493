from typing import Any, cast

from certprep.study.domain.ports import IKeyValueStorage
from certprep.shared.telemetry import Telemetry, measure_time
from supabase import Client, create_client


class SupabaseKeyValueStorage(IKeyValueStorage):
    """
    Stores each key as a row of the `kv_store` table:
    key (text, primary key), value (text).
    """

    TABLE = "kv_store"

    def __init__(
        self, url: str | None = None, key: str | None = None, client: Client | None = None
    ) -> None:
        self.telemetry = Telemetry("SupabaseStorage")
        if client is not None:
            self.client = client
            return
        if not url or not key:
            raise ValueError("Supabase url and key are required without a client")
        try:
            self.client = create_client(url, key)
        except Exception as e:
            self.telemetry.log_error("Failed to initialize Supabase client", e)
            raise

    @measure_time("sb_get")
    def get(self, key: str) -> str | None:
        response = (
            self.client.table(self.TABLE)
            .select("value")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        data = cast(list[dict[str, Any]], response.data)
        if not data:
            return None
        return cast(str, data[0]["value"])

    @measure_time("sb_set")
    def set(self, key: str, value: str) -> None:
        self.client.table(self.TABLE).upsert({"key": key, "value": value}).execute()

    def delete(self, key: str) -> None:
        self.client.table(self.TABLE).delete().eq("key", key).execute()
