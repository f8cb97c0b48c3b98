"""Bulk loading of users and items from a JSON export into SQLite."""

from __future__ import annotations

import json
import sqlite3
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Any

from lostfound_matching.config import DB_PATH
from lostfound_matching.models import LoadSummary
from lostfound_matching.storage import connect, insert_item, insert_user, migrate_schema
from lostfound_matching.telemetry import configure_logging, log_event


def _parse_timestamp(raw: Any) -> datetime | None:
    if raw is None or raw == "":
        return None
    if not isinstance(raw, str):
        raise ValueError(f"timestamp must be an ISO-8601 string, got {type(raw).__name__}")
    return datetime.fromisoformat(raw)


def _load_users(conn: sqlite3.Connection, users: list[dict]) -> tuple[dict[str, int], int]:
    by_email: dict[str, int] = {}
    added = 0
    for user in users:
        email = str(user.get("email") or "").strip().lower()
        if not email:
            continue
        user_id, inserted = insert_user(
            conn,
            name=str(user.get("name") or email),
            email=email,
            phone=user.get("phone"),
        )
        by_email[email] = user_id
        added += int(inserted)
    return by_email, added


def load_items(payload: dict, db_path: Path = DB_PATH) -> LoadSummary:
    """Insert ``payload["users"]`` and ``payload["items"]``.

    Items reference their owner through ``user_email``. An item with an
    unknown kind or an unparseable date is skipped and counted.
    """
    logger = configure_logging()
    summary = LoadSummary()
    skip_reasons: Counter[str] = Counter()
    with connect(db_path) as conn:
        migrate_schema(conn)
        users_by_email, summary.users_added = _load_users(conn, payload.get("users", []))
        for item in payload.get("items", []):
            kind = item.get("kind")
            if kind not in {"lost", "found"}:
                skip_reasons["invalid_kind"] += 1
                continue
            try:
                event_date = _parse_timestamp(item.get("date"))
                created_at = _parse_timestamp(item.get("created_at"))
            except ValueError:
                skip_reasons["invalid_date"] += 1
                continue
            owner_email = str(item.get("user_email") or "").strip().lower()
            insert_item(
                conn,
                item_id=item.get("id"),
                kind=kind,
                title=item.get("title"),
                description=item.get("description"),
                category=item.get("category"),
                location=item.get("location"),
                event_date=event_date,
                image_path=item.get("image_path"),
                user_id=users_by_email.get(owner_email),
                created_at=created_at,
            )
            summary.items_added += 1
        conn.commit()
    summary.items_skipped = sum(skip_reasons.values())
    summary.skip_reasons = dict(skip_reasons)
    log_event(logger, "load_items", db_path=str(db_path), **summary.to_dict())
    return summary


def load_items_file(path: Path, db_path: Path = DB_PATH) -> LoadSummary:
    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError(f"{path} must contain a JSON object with 'users' and 'items'")
    return load_items(payload, db_path=db_path)
