"""SQLite-backed implementation of the matching engine's item store."""

from __future__ import annotations

import sqlite3
from pathlib import Path

from lostfound_matching.config import DB_PATH
from lostfound_matching.models import DateWindow, ItemRecord

from .db import (
    connect,
    from_db_timestamp,
    get_all_descriptions,
    get_item,
    query_found_items,
    require_schema,
)


def row_to_item(row: sqlite3.Row) -> ItemRecord:
    return ItemRecord(
        item_id=int(row["item_id"]),
        kind=row["kind"],
        title=row["title"],
        description=row["description"],
        category=row["category"],
        location=row["location"],
        event_date=from_db_timestamp(row["event_date"]),
        image_path=row["image_path"],
        created_at=from_db_timestamp(row["created_at"]),
        owner_name=row["owner_name"],
        owner_email=row["owner_email"],
        owner_phone=row["owner_phone"],
    )


class SqliteItemStore:
    """Read-only view over the ``items`` and ``users`` tables."""

    def __init__(self, db_path: Path = DB_PATH) -> None:
        self.db_path = db_path

    def get_lost_item(self, item_id: int) -> ItemRecord | None:
        with connect(self.db_path) as conn:
            require_schema(conn)
            row = get_item(conn, item_id, kind="lost")
        return row_to_item(row) if row is not None else None

    def list_all_descriptions(self) -> list[str]:
        with connect(self.db_path) as conn:
            require_schema(conn)
            return get_all_descriptions(conn)

    def query_candidates(
        self, window: DateWindow, location_filter: str | None
    ) -> list[ItemRecord]:
        with connect(self.db_path) as conn:
            require_schema(conn)
            rows = query_found_items(
                conn,
                start=window.start,
                end=window.end,
                location_filter=location_filter,
            )
        return [row_to_item(row) for row in rows]
