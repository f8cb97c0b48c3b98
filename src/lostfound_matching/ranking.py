"""Composite ranking of found-item candidates against a lost item."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Protocol

from lostfound_matching.config import (
    DATE_SCORE_STEPS,
    DATE_WEIGHT,
    LOCATION_CONTAINMENT_SCORE,
    LOCATION_WEIGHT,
    MAX_RESULTS,
    TEXT_WEIGHT,
)
from lostfound_matching.models import ItemRecord, MatchResult, VectorSpaceModel
from lostfound_matching.normalization import is_blank, normalize_location
from lostfound_matching.similarity import cosine, jaccard_fallback, token_set_jaccard
from lostfound_matching.telemetry import configure_logging, log_warning
from lostfound_matching.vectorizer import transform


class TextScoreStrategy(Protocol):
    name: str

    def score(self, text_a: str, text_b: str) -> float: ...


class TfIdfCosineStrategy:
    name = "tfidf_cosine"

    def __init__(self, model: VectorSpaceModel) -> None:
        if not model.is_usable:
            raise ValueError("TF-IDF strategy requires a usable vector space model")
        self.model = model

    def score(self, text_a: str, text_b: str) -> float:
        return cosine(transform(self.model, text_a), transform(self.model, text_b))


class JaccardStrategy:
    name = "jaccard"

    def score(self, text_a: str, text_b: str) -> float:
        return jaccard_fallback(text_a, text_b)


def select_text_strategy(model: VectorSpaceModel | None) -> TextScoreStrategy:
    if model is not None and model.is_usable:
        return TfIdfCosineStrategy(model)
    return JaccardStrategy()


def text_score(
    strategy: TextScoreStrategy, description_a: str | None, description_b: str | None
) -> float:
    if is_blank(description_a) or is_blank(description_b):
        return 0.0
    if description_a.strip() == description_b.strip():
        return 1.0
    return strategy.score(description_a, description_b)


def location_score(location_a: str | None, location_b: str | None) -> float:
    """Exact match 1.0, containment 0.8, otherwise word-level Jaccard."""
    if location_a is None or location_b is None:
        return 0.0
    loc_a = normalize_location(location_a)
    loc_b = normalize_location(location_b)
    if loc_a == loc_b:
        return 1.0
    if loc_a in loc_b or loc_b in loc_a:
        return LOCATION_CONTAINMENT_SCORE
    return token_set_jaccard(set(loc_a.split()), set(loc_b.split()))


def date_score(date_a: datetime | None, date_b: datetime | None) -> float:
    if date_a is None or date_b is None:
        return 0.0
    # timedelta.days on the absolute difference truncates partial days.
    days = abs(date_a - date_b).days
    for max_days, score in DATE_SCORE_STEPS:
        if days <= max_days:
            return score
    return 0.0


def combine_scores(text: float, location: float, date: float) -> float:
    return TEXT_WEIGHT * text + LOCATION_WEIGHT * location + DATE_WEIGHT * date


def score_candidate(
    strategy: TextScoreStrategy, lost: ItemRecord, found: ItemRecord
) -> MatchResult:
    text = text_score(strategy, lost.description, found.description)
    location = location_score(lost.location, found.location)
    date = date_score(lost.event_date, found.event_date)
    return MatchResult(
        found_item_id=found.item_id,
        found_item_title=found.title,
        found_item_description=found.description,
        found_item_category=found.category,
        found_item_location=found.location,
        found_item_date=found.event_date,
        found_item_image_path=found.image_path,
        found_item_created_at=found.created_at,
        found_by_user_name=found.owner_name,
        found_by_user_email=found.owner_email,
        found_by_user_phone=found.owner_phone,
        match_score=combine_scores(text, location, date),
        text_similarity=text,
        location_score=location,
        date_score=date,
    )


class CompositeRanker:
    """Scores candidates, drops non-positive matches, sorts and truncates.

    Ties on ``match_score`` are broken by ascending ``found_item_id`` so the
    output never depends on candidate order.
    """

    def __init__(self, strategy: TextScoreStrategy, *, limit: int = MAX_RESULTS) -> None:
        self.strategy = strategy
        self.limit = min(limit, MAX_RESULTS)
        self._logger = configure_logging()

    def rank(self, lost: ItemRecord, candidates: Iterable[ItemRecord]) -> list[MatchResult]:
        scored: list[MatchResult] = []
        for found in candidates:
            try:
                result = score_candidate(self.strategy, lost, found)
            except (TypeError, ValueError, AttributeError) as exc:
                log_warning(
                    self._logger,
                    "candidate_skipped",
                    lost_item_id=lost.item_id,
                    found_item_id=getattr(found, "item_id", None),
                    reason=str(exc),
                )
                continue
            if result.match_score > 0.0:
                scored.append(result)
        scored.sort(key=lambda match: (-match.match_score, match.found_item_id))
        return scored[: self.limit]
