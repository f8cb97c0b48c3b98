"""Maintenance for the items database: migrate, report matching readiness, compact, back up."""

from __future__ import annotations

import argparse
from pathlib import Path
import sys

try:
    from lostfound_matching.config import DB_PATH
    from lostfound_matching.model_state import VectorSpaceModelState
    from lostfound_matching.storage import (
        SqliteItemStore,
        connect,
        matching_stats,
        migrate_schema,
        require_schema,
    )
except ModuleNotFoundError:
    repo_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(repo_root / "src"))
    from lostfound_matching.config import DB_PATH  # type: ignore[reportMissingImports]
    from lostfound_matching.model_state import (  # type: ignore[reportMissingImports]
        VectorSpaceModelState,
    )
    from lostfound_matching.storage import (  # type: ignore[reportMissingImports]
        SqliteItemStore,
        connect,
        matching_stats,
        migrate_schema,
        require_schema,
    )


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Maintain the lost & found items database")
    parser.add_argument(
        "--migrate",
        action="store_true",
        help="Create or upgrade the users/items schema",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Report lost/found counts, text corpus size and undated items",
    )
    parser.add_argument(
        "--check-model",
        action="store_true",
        help="Fit the text model over the stored descriptions and report its size",
    )
    parser.add_argument(
        "--vacuum", action="store_true", help="Run VACUUM to compact the database"
    )
    parser.add_argument(
        "--backup", type=Path, help="Write a backup copy to the given path"
    )
    return parser.parse_args()


def print_stats(stats: dict[str, int]) -> None:
    print(f"Lost items: {stats['lost']} ({stats['undated_lost']} undated, never matched)")
    print(
        f"Found items: {stats['found']} "
        f"({stats['undated_found']} undated, never candidates)"
    )
    print(f"Text corpus: {stats['corpus_documents']} descriptions")
    if stats["corpus_documents"] == 0:
        print("Text scoring will fall back to Jaccard until descriptions are loaded.")


def check_model(db_path: Path) -> bool:
    state = VectorSpaceModelState()
    model = state.ensure(SqliteItemStore(db_path).list_all_descriptions)
    if model is None:
        print(f"Text model: {state.state.value} ({state.failure})")
        return False
    print(
        f"Text model: {state.state.value}, {model.document_count} documents, "
        f"{model.vocabulary_size} terms"
    )
    return True


def main() -> None:
    args = parse_args()
    if not (args.migrate or args.stats or args.check_model or args.vacuum or args.backup):
        print(
            "No maintenance actions requested. "
            "Use --migrate, --stats, --check-model, --vacuum, or --backup."
        )
        return

    with connect(DB_PATH) as conn:
        if args.migrate:
            migrate_schema(conn)
            conn.commit()
            print("Schema migration completed.")
        else:
            require_schema(conn)
        if args.stats:
            print_stats(matching_stats(conn))
        if args.vacuum:
            conn.execute("VACUUM")
            print("VACUUM completed.")
        if args.backup:
            args.backup.parent.mkdir(parents=True, exist_ok=True)
            with connect(args.backup) as backup_conn:
                conn.backup(backup_conn)
                backup_conn.commit()
            print(f"Backup written to {args.backup}")

    if args.check_model and not check_model(DB_PATH):
        sys.exit(1)


if __name__ == "__main__":
    main()
