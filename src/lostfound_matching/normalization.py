"""Text normalization shared by the vectorizer, the similarity scorer and the ranker.

Every text signal must tokenize the same way, otherwise TF-IDF weights and
Jaccard overlaps would disagree about what a term is.
"""

from __future__ import annotations

import re

from lostfound_matching.config import MIN_TOKEN_LENGTH

_NON_ALNUM_RE = re.compile(r"[^a-z0-9\s]")


def tokenize(text: str | None) -> list[str]:
    """Split text into matching terms.

    Steps:
    - Lowercase.
    - Replace anything that is not an ASCII letter, digit or whitespace with a space.
    - Split on whitespace and drop tokens shorter than ``MIN_TOKEN_LENGTH``.
    """
    if text is None or not text.strip():
        return []
    cleaned = _NON_ALNUM_RE.sub(" ", text.lower())
    return [token for token in cleaned.split() if len(token) >= MIN_TOKEN_LENGTH]


def token_set(text: str | None) -> set[str]:
    return set(tokenize(text))


def normalize_location(location: str) -> str:
    return location.lower().strip()


def is_blank(text: str | None) -> bool:
    return text is None or not text.strip()
