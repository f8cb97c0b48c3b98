from pathlib import Path

import pytest

from lostfound_matching.loading import load_items, load_items_file
from lostfound_matching.storage import SqliteItemStore, connect, count_items

FIXTURE = Path(__file__).resolve().parent / "fixtures" / "sample_items.json"


def test_load_items_file_inserts_users_and_items(tmp_path: Path) -> None:
    db_path = tmp_path / "items.db"
    summary = load_items_file(FIXTURE, db_path=db_path)
    assert summary.users_added == 2
    assert summary.items_added == 4
    assert summary.items_skipped == 1
    assert summary.skip_reasons == {"invalid_date": 1}
    with connect(db_path) as conn:
        assert count_items(conn) == {"lost": 1, "found": 3}
    lost = SqliteItemStore(db_path).get_lost_item(1)
    assert lost is not None
    assert lost.owner_email == "ada@example.com"


def test_load_items_skips_unknown_kind(tmp_path: Path) -> None:
    summary = load_items(
        {"items": [{"kind": "stolen", "description": "bike"}]},
        db_path=tmp_path / "items.db",
    )
    assert summary.items_added == 0
    assert summary.skip_reasons == {"invalid_kind": 1}


def test_load_items_file_requires_object(tmp_path: Path) -> None:
    path = tmp_path / "items.json"
    path.write_text("[]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_items_file(path, db_path=tmp_path / "items.db")
