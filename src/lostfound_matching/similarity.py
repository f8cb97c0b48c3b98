"""Similarity functions over weighted-term vectors and token sets."""

from __future__ import annotations

import math

import numpy as np

from lostfound_matching.models import WeightedVector
from lostfound_matching.normalization import token_set


def _aligned(a: WeightedVector, b: WeightedVector) -> tuple[np.ndarray, np.ndarray]:
    """Lay both sparse vectors out over the sorted union of their terms."""
    terms = sorted(a.keys() | b.keys())
    left = np.fromiter((a.get(term, 0.0) for term in terms), dtype="float64", count=len(terms))
    right = np.fromiter((b.get(term, 0.0) for term in terms), dtype="float64", count=len(terms))
    return left, right


def _clip_unit(value: float) -> float:
    return min(max(value, 0.0), 1.0)


def cosine(a: WeightedVector, b: WeightedVector) -> float:
    """Cosine similarity in [0, 1]; 0 when either vector is empty or has zero norm."""
    if not a or not b:
        return 0.0
    left, right = _aligned(a, b)
    norm_sq_a = float(np.dot(left, left))
    norm_sq_b = float(np.dot(right, right))
    if norm_sq_a == 0.0 or norm_sq_b == 0.0:
        return 0.0
    dot = float(np.dot(left, right))
    # sqrt(x * x) == x in IEEE arithmetic, so cosine(v, v) is exactly 1.0.
    return _clip_unit(dot / math.sqrt(norm_sq_a * norm_sq_b))


def cosine_with_threshold(
    a: WeightedVector, b: WeightedVector, threshold: float
) -> float:
    similarity = cosine(a, b)
    return similarity if similarity >= threshold else 0.0


def is_similar(a: WeightedVector, b: WeightedVector, threshold: float) -> bool:
    return cosine(a, b) >= threshold


def token_set_jaccard(a: set[str], b: set[str]) -> float:
    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.0
    return len(a & b) / len(a | b)


def jaccard_fallback(text_a: str | None, text_b: str | None) -> float:
    """Model-free text similarity over the shared tokenization."""
    return token_set_jaccard(token_set(text_a), token_set(text_b))
