"""Flat key-value store on top of SQLite with orjson-encoded values."""

from __future__ import annotations

from typing import Any

import orjson

from linkminder.db.sqlite import SQLiteDatabase
from linkminder.utils.time import utc_now


class KeyValueStore:
    def __init__(self, database: SQLiteDatabase) -> None:
        self.db = database

    def get(self, key: str, default: Any = None) -> Any:
        row = self.db.execute("SELECT value FROM kv WHERE key = ?", [key]).fetchone()
        if row is None:
            return default
        return orjson.loads(row["value"])

    def set(self, key: str, value: Any) -> Any:
        payload = orjson.dumps(value).decode("utf-8")
        stamp = int(utc_now().timestamp() * 1000)
        with self.db.transaction() as cursor:
            cursor.execute(
                """
                INSERT INTO kv (key, value, updated_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                """,
                [key, payload, stamp],
            )
        return value

    def delete(self, key: str) -> None:
        with self.db.transaction() as cursor:
            cursor.execute("DELETE FROM kv WHERE key = ?", [key])


__all__ = ["KeyValueStore"]
