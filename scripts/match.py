"""Script to find found-item matches for a lost item."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
import sys

try:
    from lostfound_matching.config import DB_PATH
    from lostfound_matching.matching import MatchService
    from lostfound_matching.storage import SqliteItemStore
except ModuleNotFoundError:
    repo_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(repo_root / "src"))
    from lostfound_matching.config import DB_PATH  # type: ignore[reportMissingImports]
    from lostfound_matching.matching import MatchService  # type: ignore[reportMissingImports]
    from lostfound_matching.storage import SqliteItemStore  # type: ignore[reportMissingImports]


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Rank found items for a lost item")
    parser.add_argument("lost_item_id", type=int, help="Identifier of the lost item")
    parser.add_argument(
        "--location", type=str, default=None, help="Only consider found items at this location"
    )
    parser.add_argument(
        "--days-before",
        type=int,
        default=None,
        help="Days before the lost date to include (default: lost date only)",
    )
    parser.add_argument(
        "--days-after",
        type=int,
        default=None,
        help="Days after the lost date to include (default: lost date only)",
    )
    parser.add_argument(
        "--db-path", type=Path, default=DB_PATH, help="SQLite database to read"
    )
    parser.add_argument(
        "--json", action="store_true", help="Emit results as a JSON array"
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    service = MatchService(SqliteItemStore(args.db_path))
    try:
        results = service.find_matches(
            args.lost_item_id,
            location_filter=args.location,
            days_before=args.days_before,
            days_after=args.days_after,
        )
    except ValueError as exc:
        print(f"Invalid request: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc

    if args.json:
        print(json.dumps([result.to_dict() for result in results], indent=2))
        return
    if not results:
        print(f"No matches for lost item {args.lost_item_id}.")
        return
    for idx, result in enumerate(results, start=1):
        print(
            f"#{idx} found_item={result.found_item_id} score={result.match_score:.4f} "
            f"(text={result.text_similarity:.4f} location={result.location_score:.4f} "
            f"date={result.date_score:.4f})"
        )
        print(f"   {result.found_item_title or ''} @ {result.found_item_location or '?'}")
        if result.found_by_user_email:
            print(f"   contact: {result.found_by_user_name} <{result.found_by_user_email}>")


if __name__ == "__main__":
    main()
