"""Script to load users and lost/found items from a JSON export."""

from __future__ import annotations

import argparse
from pathlib import Path
import sys

try:
    from lostfound_matching.config import DB_PATH
    from lostfound_matching.loading import load_items_file
except ModuleNotFoundError:
    repo_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(repo_root / "src"))
    from lostfound_matching.config import DB_PATH  # type: ignore[reportMissingImports]
    from lostfound_matching.loading import load_items_file  # type: ignore[reportMissingImports]


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Load users and items into the matching database"
    )
    parser.add_argument(
        "path",
        type=Path,
        help="JSON file with top-level 'users' and 'items' arrays",
    )
    parser.add_argument(
        "--db-path",
        type=Path,
        default=DB_PATH,
        help="SQLite database to write (default from config)",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    summary = load_items_file(args.path, db_path=args.db_path)
    print("Load summary:", summary.to_dict())


if __name__ == "__main__":
    main()
