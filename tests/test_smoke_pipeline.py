import json
import os
import subprocess
import sys
from pathlib import Path


def test_smoke_load_and_match(tmp_path: Path) -> None:
    repo_root = Path(__file__).resolve().parents[1]
    env = os.environ.copy()
    env["LFM_DATA_DIR"] = str(tmp_path / "data")
    env["PYTHONPATH"] = str(repo_root / "src")

    load = subprocess.run(
        [sys.executable, "scripts/load_items.py", "tests/fixtures/sample_items.json"],
        cwd=repo_root,
        env=env,
        capture_output=True,
        text=True,
    )
    assert load.returncode == 0, load.stderr
    assert "Load summary" in load.stdout

    match = subprocess.run(
        [
            sys.executable,
            "scripts/match.py",
            "1",
            "--days-before",
            "7",
            "--days-after",
            "7",
            "--json",
        ],
        cwd=repo_root,
        env=env,
        capture_output=True,
        text=True,
    )
    assert match.returncode == 0, match.stderr
    results = json.loads(match.stdout)
    assert [result["found_item_id"] for result in results] == [2, 3]
    assert results[0]["found_by_user_email"] == "finn@example.com"
    assert results[0]["location_score"] == 0.8


def test_smoke_unknown_lost_item(tmp_path: Path) -> None:
    repo_root = Path(__file__).resolve().parents[1]
    env = os.environ.copy()
    env["LFM_DATA_DIR"] = str(tmp_path / "data")
    env["PYTHONPATH"] = str(repo_root / "src")

    migrate = subprocess.run(
        [sys.executable, "scripts/maintenance.py", "--migrate"],
        cwd=repo_root,
        env=env,
        capture_output=True,
        text=True,
    )
    assert migrate.returncode == 0, migrate.stderr

    match = subprocess.run(
        [sys.executable, "scripts/match.py", "42"],
        cwd=repo_root,
        env=env,
        capture_output=True,
        text=True,
    )
    assert match.returncode == 0, match.stderr
    assert "No matches" in match.stdout


def test_smoke_maintenance_reports_matching_readiness(tmp_path: Path) -> None:
    repo_root = Path(__file__).resolve().parents[1]
    env = os.environ.copy()
    env["LFM_DATA_DIR"] = str(tmp_path / "data")
    env["PYTHONPATH"] = str(repo_root / "src")

    empty = subprocess.run(
        [sys.executable, "scripts/maintenance.py", "--migrate", "--check-model"],
        cwd=repo_root,
        env=env,
        capture_output=True,
        text=True,
    )
    assert empty.returncode == 1
    assert "Text model: failed" in empty.stdout

    load = subprocess.run(
        [sys.executable, "scripts/load_items.py", "tests/fixtures/sample_items.json"],
        cwd=repo_root,
        env=env,
        capture_output=True,
        text=True,
    )
    assert load.returncode == 0, load.stderr

    stats = subprocess.run(
        [sys.executable, "scripts/maintenance.py", "--stats", "--check-model"],
        cwd=repo_root,
        env=env,
        capture_output=True,
        text=True,
    )
    assert stats.returncode == 0, stats.stderr
    assert "Lost items: 1 (0 undated" in stats.stdout
    assert "Found items: 3 (0 undated" in stats.stdout
    assert "Text corpus: 4 descriptions" in stats.stdout
    assert "Text model: ready, 4 documents" in stats.stdout
