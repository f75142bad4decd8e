"""Supabase-backed key-value store."""

import asyncio
from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from calorie_tracker.services.storage import KeyValueStore


@dataclass
class SupabaseKeyValueStore(KeyValueStore):
    """Stores values in a ``kv_store`` table keyed by ``key``.

    The Supabase client is synchronous, so queries run in a worker thread.
    """

    client: Client
    table_name: str = "kv_store"

    async def get_item(self, key: str) -> str | None:
        """Return the stored value for a key, if any."""
        return await asyncio.to_thread(self._select, key)

    async def set_item(self, key: str, value: str) -> None:
        """Insert or replace the value stored under a key."""
        await asyncio.to_thread(self._upsert, key, value)

    def _select(self, key: str) -> str | None:
        response = (
            self.client.table(self.table_name)
            .select("value")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        value = response.data[0].get("value")
        return value if isinstance(value, str) else None

    def _upsert(self, key: str, value: str) -> None:
        response = (
            self.client.table(self.table_name)
            .upsert(
                {
                    "key": key,
                    "value": value,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                },
                on_conflict="key",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError(f"Failed to store {key}")
