"""SQLite storage helpers."""

from .db import (
    connect,
    count_items,
    from_db_timestamp,
    get_all_descriptions,
    get_item,
    insert_item,
    insert_user,
    matching_stats,
    migrate_schema,
    query_found_items,
    require_schema,
    to_db_timestamp,
)
from .item_store import SqliteItemStore, row_to_item

__all__ = [
    "SqliteItemStore",
    "connect",
    "count_items",
    "from_db_timestamp",
    "get_all_descriptions",
    "get_item",
    "insert_item",
    "insert_user",
    "matching_stats",
    "migrate_schema",
    "query_found_items",
    "require_schema",
    "row_to_item",
    "to_db_timestamp",
]
