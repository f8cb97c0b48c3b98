"""SQLite schema and data access helpers."""

from __future__ import annotations

import sqlite3
import time
from datetime import datetime, timezone
from pathlib import Path

from lostfound_matching.config import DB_TIMEOUT_S

SCHEMA_VERSION = 1
_REQUIRED_TABLES = {"schema_meta", "users", "items"}
_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%f"
_ITEM_COLUMNS = """
    items.item_id,
    items.kind,
    items.title,
    items.description,
    items.category,
    items.location,
    items.event_date,
    items.image_path,
    items.created_at,
    users.name AS owner_name,
    users.email AS owner_email,
    users.phone AS owner_phone
"""


def connect(db_path: Path) -> sqlite3.Connection:
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(db_path, timeout=float(DB_TIMEOUT_S))
    _configure_connection(conn)
    return conn


def _configure_connection(conn: sqlite3.Connection) -> None:
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    conn.execute("PRAGMA journal_mode = WAL")
    conn.execute("PRAGMA synchronous = NORMAL")
    conn.execute("PRAGMA temp_store = MEMORY")
    conn.execute("PRAGMA busy_timeout = 5000")


def _execute_with_retry(
    conn: sqlite3.Connection,
    sql: str,
    params: tuple | list | None = None,
    *,
    attempts: int = 3,
    base_delay: float = 0.05,
) -> sqlite3.Cursor:
    params = params or ()
    for attempt in range(attempts):
        try:
            return conn.execute(sql, params)
        except sqlite3.OperationalError as exc:
            message = str(exc).lower()
            if "locked" in message or "busy" in message:
                if attempt == attempts - 1:
                    raise
                time.sleep(base_delay * (2**attempt))
                continue
            raise


def to_db_timestamp(value: datetime) -> str:
    """Fixed-width naive timestamp so range queries can compare strings.

    Aware datetimes are converted to UTC before the offset is dropped.
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.strftime(_TIMESTAMP_FORMAT)


def from_db_timestamp(value: str | None) -> datetime | None:
    if value is None:
        return None
    return datetime.fromisoformat(value)


def _ensure_schema_version(conn: sqlite3.Connection) -> None:
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS schema_meta (
            id INTEGER PRIMARY KEY CHECK (id = 1),
            schema_version INTEGER NOT NULL
        )
        """
    )
    row = conn.execute("SELECT schema_version FROM schema_meta WHERE id = 1").fetchone()
    if row is None:
        conn.execute(
            "INSERT INTO schema_meta (id, schema_version) VALUES (1, ?)",
            (SCHEMA_VERSION,),
        )
        return
    current = int(row["schema_version"])
    if current > SCHEMA_VERSION:
        raise RuntimeError(
            f"Database schema version {current} is newer than supported {SCHEMA_VERSION}."
        )
    if current < SCHEMA_VERSION:
        conn.execute(
            "UPDATE schema_meta SET schema_version = ? WHERE id = 1",
            (SCHEMA_VERSION,),
        )


def migrate_schema(conn: sqlite3.Connection) -> None:
    conn.executescript(
        """
        CREATE TABLE IF NOT EXISTS users (
            user_id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            email TEXT NOT NULL UNIQUE,
            phone TEXT,
            created_at TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS items (
            item_id INTEGER PRIMARY KEY AUTOINCREMENT,
            kind TEXT NOT NULL CHECK (kind IN ('lost', 'found')),
            title TEXT,
            description TEXT,
            category TEXT,
            location TEXT,
            event_date TEXT,
            image_path TEXT,
            created_at TEXT NOT NULL,
            user_id INTEGER,
            FOREIGN KEY (user_id) REFERENCES users(user_id) ON DELETE SET NULL
        );

        CREATE INDEX IF NOT EXISTS idx_items_kind_event_date ON items(kind, event_date);
        CREATE INDEX IF NOT EXISTS idx_items_user_id ON items(user_id);
        """
    )
    _ensure_schema_version(conn)


def require_schema(conn: sqlite3.Connection) -> None:
    tables = {
        row["name"]
        for row in conn.execute(
            "SELECT name FROM sqlite_master WHERE type IN ('table', 'view')"
        ).fetchall()
    }
    missing = sorted(_REQUIRED_TABLES - tables)
    if missing:
        raise RuntimeError(
            "Database schema is not initialized. "
            f"Missing tables: {', '.join(missing)}. Run scripts/maintenance.py --migrate."
        )
    row = conn.execute("SELECT schema_version FROM schema_meta WHERE id = 1").fetchone()
    if row is None:
        raise RuntimeError(
            "Database schema metadata missing. Run scripts/maintenance.py --migrate."
        )
    current = int(row["schema_version"])
    if current != SCHEMA_VERSION:
        raise RuntimeError(
            f"Database schema version {current} is incompatible with required {SCHEMA_VERSION}. "
            "Run scripts/maintenance.py --migrate."
        )


def insert_user(
    conn: sqlite3.Connection,
    *,
    name: str,
    email: str,
    phone: str | None = None,
) -> tuple[int, bool]:
    normalized_email = email.strip().lower()
    row = conn.execute(
        "SELECT user_id FROM users WHERE email = ?", (normalized_email,)
    ).fetchone()
    if row:
        return int(row["user_id"]), False
    cursor = _execute_with_retry(
        conn,
        "INSERT INTO users (name, email, phone, created_at) VALUES (?, ?, ?, ?)",
        (name, normalized_email, phone, to_db_timestamp(datetime.now(timezone.utc))),
    )
    return int(cursor.lastrowid), True


def insert_item(
    conn: sqlite3.Connection,
    *,
    kind: str,
    title: str | None,
    description: str | None,
    category: str | None,
    location: str | None,
    event_date: datetime | None,
    image_path: str | None = None,
    user_id: int | None = None,
    created_at: datetime | None = None,
    item_id: int | None = None,
) -> int:
    if kind not in {"lost", "found"}:
        raise ValueError(f"Unsupported item kind: {kind}")
    cursor = _execute_with_retry(
        conn,
        """
        INSERT INTO items (
            item_id, kind, title, description, category, location,
            event_date, image_path, created_at, user_id
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            item_id,
            kind,
            title,
            description,
            category,
            location,
            to_db_timestamp(event_date) if event_date is not None else None,
            image_path,
            to_db_timestamp(created_at or datetime.now(timezone.utc)),
            user_id,
        ),
    )
    return int(cursor.lastrowid)


def get_item(
    conn: sqlite3.Connection, item_id: int, *, kind: str | None = None
) -> sqlite3.Row | None:
    sql = f"""
        SELECT {_ITEM_COLUMNS}
        FROM items
        LEFT JOIN users ON items.user_id = users.user_id
        WHERE items.item_id = ?
    """
    params: list = [item_id]
    if kind is not None:
        sql += " AND items.kind = ?"
        params.append(kind)
    return conn.execute(sql, params).fetchone()


def get_all_descriptions(conn: sqlite3.Connection) -> list[str]:
    """Non-blank descriptions of every lost and found item, in id order."""
    rows = conn.execute(
        """
        SELECT description FROM items
        WHERE description IS NOT NULL AND trim(description) != ''
        ORDER BY item_id
        """
    ).fetchall()
    return [row["description"] for row in rows]


def query_found_items(
    conn: sqlite3.Connection,
    *,
    start: datetime,
    end: datetime,
    location_filter: str | None = None,
) -> list[sqlite3.Row]:
    sql = f"""
        SELECT {_ITEM_COLUMNS}
        FROM items
        LEFT JOIN users ON items.user_id = users.user_id
        WHERE items.kind = 'found'
          AND items.event_date IS NOT NULL
          AND items.event_date BETWEEN ? AND ?
    """
    params: list = [to_db_timestamp(start), to_db_timestamp(end)]
    if location_filter:
        sql += " AND instr(lower(coalesce(items.location, '')), lower(?)) > 0"
        params.append(location_filter)
    sql += " ORDER BY items.item_id"
    return conn.execute(sql, params).fetchall()


def count_items(conn: sqlite3.Connection) -> dict[str, int]:
    rows = conn.execute("SELECT kind, COUNT(*) AS total FROM items GROUP BY kind").fetchall()
    counts = {"lost": 0, "found": 0}
    for row in rows:
        counts[row["kind"]] = int(row["total"])
    return counts



def matching_stats(conn: sqlite3.Connection) -> dict[str, int]:
    """Counts that decide what a match request can see.

    ``corpus_documents`` is the size of the text model's corpus; undated
    items never enter a candidate window.
    """
    row = conn.execute(
        """
        SELECT
            coalesce(sum(kind = 'lost'), 0) AS lost,
            coalesce(sum(kind = 'found'), 0) AS found,
            coalesce(sum(description IS NOT NULL AND trim(description) != ''), 0)
                AS corpus_documents,
            coalesce(sum(kind = 'lost' AND event_date IS NULL), 0) AS undated_lost,
            coalesce(sum(kind = 'found' AND event_date IS NULL), 0) AS undated_found
        FROM items
        """
    ).fetchone()
    return {key: int(row[key]) for key in row.keys()}
