"""Configuration for lostfound_matching (env-overridable)."""

from __future__ import annotations

import logging
import os
from pathlib import Path


def _env_path(key: str, default: Path) -> Path:
    return Path(os.getenv(key, str(default))).expanduser()


def _env_int(key: str, default: int) -> int:
    try:
        return int(os.getenv(key, default))
    except (TypeError, ValueError):
        return default


def _env_log_level(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None:
        return default
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else default


PROJECT_ROOT = Path(__file__).resolve().parents[2]

DATA_DIR = _env_path("LFM_DATA_DIR", PROJECT_ROOT / "data")
DB_PATH = DATA_DIR / "items.db"
DB_TIMEOUT_S = _env_int("LFM_DB_TIMEOUT_S", 5)
LOG_LEVEL = _env_log_level("LFM_LOG_LEVEL", logging.INFO)

# Scoring constants are fixed; they define what a match score means.
MIN_TOKEN_LENGTH = 3
TEXT_WEIGHT = 0.6
LOCATION_WEIGHT = 0.3
DATE_WEIGHT = 0.1
LOCATION_CONTAINMENT_SCORE = 0.8
MAX_RESULTS = 10

# (max day difference, score), checked in order; anything past the last step scores 0.
DATE_SCORE_STEPS: tuple[tuple[int, float], ...] = (
    (0, 1.0),
    (1, 0.9),
    (3, 0.7),
    (7, 0.5),
    (14, 0.3),
    (30, 0.1),
)
