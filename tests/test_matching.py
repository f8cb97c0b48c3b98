from datetime import datetime, timedelta

import pytest

from lostfound_matching.matching import MatchService
from lostfound_matching.model_state import ModelState
from lostfound_matching.models import DateWindow, ItemRecord
from lostfound_matching.similarity import jaccard_fallback

LOST_DATE = datetime(2024, 5, 10, 9, 0)


def _found(
    item_id: int,
    description: str,
    location: str,
    offset: timedelta = timedelta(0),
) -> ItemRecord:
    return ItemRecord(
        item_id=item_id,
        kind="found",
        title=f"found {item_id}",
        description=description,
        category="misc",
        location=location,
        event_date=LOST_DATE + offset,
        owner_name="Finn",
        owner_email="finn@example.com",
    )


class _InMemoryStore:
    def __init__(self, lost: list[ItemRecord], found: list[ItemRecord]) -> None:
        self.lost = {item.item_id: item for item in lost}
        self.found = found
        self.description_reads = 0
        self.fail_descriptions = False
        self.fail_candidates = False
        self.candidate_queries = 0

    def get_lost_item(self, item_id: int) -> ItemRecord | None:
        return self.lost.get(item_id)

    def list_all_descriptions(self) -> list[str]:
        self.description_reads += 1
        if self.fail_descriptions:
            raise RuntimeError("corpus unavailable")
        items = list(self.lost.values()) + self.found
        return [item.description for item in items if item.description]

    def query_candidates(
        self, window: DateWindow, location_filter: str | None
    ) -> list[ItemRecord]:
        self.candidate_queries += 1
        if self.fail_candidates:
            raise ConnectionError("candidate query failed")
        return [
            item
            for item in self.found
            if item.event_date is not None
            and window.contains(item.event_date)
            and (
                location_filter is None
                or location_filter.lower() in (item.location or "").lower()
            )
        ]


def _store() -> _InMemoryStore:
    lost = ItemRecord(
        item_id=1,
        kind="lost",
        title="bike",
        description="lost red bike near the park",
        category="vehicles",
        location="Central Park",
        event_date=LOST_DATE,
    )
    found = [
        _found(10, "found red bike by the park gate", "Central Park Zone 5"),
        _found(11, "black leather wallet", "Harbor Station", timedelta(days=8)),
        _found(12, "red bike with basket", "central park", timedelta(days=40)),
        _found(13, "blue umbrella", "Main Street", timedelta(hours=2)),
    ]
    return _InMemoryStore([lost], found)


def test_unknown_lost_item_returns_empty_list() -> None:
    store = _store()
    service = MatchService(store)
    assert service.find_matches(999) == []
    assert store.description_reads == 0
    assert service.model_state is ModelState.UNBUILT


def test_window_without_day_filters_only_admits_exact_instant() -> None:
    service = MatchService(_store())
    results = service.find_matches(1)
    assert [result.found_item_id for result in results] == [10]


def test_date_scores_across_wide_window() -> None:
    service = MatchService(_store())
    results = service.find_matches(1, days_before=60, days_after=60)
    by_id = {result.found_item_id: result for result in results}
    assert by_id[10].date_score == 1.0
    assert by_id[11].date_score == 0.3
    assert by_id[12].date_score == 0.0


def test_results_are_bounded_positive_and_sorted() -> None:
    service = MatchService(_store())
    results = service.find_matches(1, days_before=60, days_after=60)
    assert 0 < len(results) <= 10
    assert all(result.match_score > 0 for result in results)
    scores = [result.match_score for result in results]
    assert scores == sorted(scores, reverse=True)
    for result in results:
        for score in (
            result.text_similarity,
            result.location_score,
            result.date_score,
            result.match_score,
        ):
            assert 0.0 <= score <= 1.0


def test_location_filter_is_case_insensitive_substring() -> None:
    service = MatchService(_store())
    results = service.find_matches(1, location_filter="CENTRAL", days_after=60)
    assert {result.found_item_id for result in results} == {10, 12}


def test_model_is_built_once_and_reused() -> None:
    store = _store()
    service = MatchService(store)
    service.find_matches(1)
    service.find_matches(1, days_after=5)
    assert store.description_reads == 1
    assert service.model_state is ModelState.READY


def test_corpus_failure_falls_back_to_jaccard() -> None:
    store = _store()
    store.fail_descriptions = True
    service = MatchService(store)
    [result] = service.find_matches(1)
    assert service.model_state is ModelState.FAILED
    assert result.text_similarity == jaccard_fallback(
        "lost red bike near the park", "found red bike by the park gate"
    )
    service.find_matches(1)
    assert store.description_reads == 1


def test_rebuild_model_after_failure() -> None:
    store = _store()
    store.fail_descriptions = True
    service = MatchService(store)
    service.find_matches(1)
    store.fail_descriptions = False
    model = service.rebuild_model()
    assert model is not None
    assert service.model_state is ModelState.READY


def test_candidate_query_failure_propagates() -> None:
    store = _store()
    store.fail_candidates = True
    service = MatchService(store)
    with pytest.raises(ConnectionError):
        service.find_matches(1)


def test_negative_day_window_is_rejected() -> None:
    service = MatchService(_store())
    with pytest.raises(ValueError):
        service.find_matches(1, days_before=-1)


def test_day_window_past_calendar_range_is_rejected() -> None:
    store = _store()
    service = MatchService(store)
    with pytest.raises(ValueError):
        service.find_matches(1, days_after=10**6)
    assert store.candidate_queries == 0
