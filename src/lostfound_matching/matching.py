"""Match orchestration: resolve the lost item, ensure the text model, select and rank."""

from __future__ import annotations

import time

from lostfound_matching.candidates import ItemStore, select_candidates
from lostfound_matching.model_state import ModelState, VectorSpaceModelState
from lostfound_matching.models import MatchRequest, MatchResult, VectorSpaceModel
from lostfound_matching.ranking import CompositeRanker, select_text_strategy
from lostfound_matching.telemetry import configure_logging, log_event


class MatchService:
    """Finds found-item candidates for a lost item.

    The text model is built from the store's full description corpus the
    first time a match is requested and reused afterwards; call
    ``rebuild_model`` to refresh it.
    """

    def __init__(
        self,
        store: ItemStore,
        model_state: VectorSpaceModelState | None = None,
    ) -> None:
        self.store = store
        self._model_state = model_state or VectorSpaceModelState()
        self._logger = configure_logging()

    @property
    def model_state(self) -> ModelState:
        return self._model_state.state

    def find_matches(
        self,
        lost_item_id: int,
        location_filter: str | None = None,
        days_before: int | None = None,
        days_after: int | None = None,
    ) -> list[MatchResult]:
        request = MatchRequest(
            lost_item_id=lost_item_id,
            location_filter=location_filter,
            days_before=days_before,
            days_after=days_after,
        )
        return self.run(request)

    def run(self, request: MatchRequest) -> list[MatchResult]:
        start = time.perf_counter()
        lost = self.store.get_lost_item(request.lost_item_id)
        if lost is None:
            log_event(
                self._logger,
                "match_complete",
                lost_item_id=request.lost_item_id,
                resolved=False,
                result_count=0,
            )
            return []

        model = self._model_state.ensure(self.store.list_all_descriptions)
        strategy = select_text_strategy(model)

        candidates = select_candidates(
            self.store,
            lost,
            location_filter=request.location_filter,
            days_before=request.days_before,
            days_after=request.days_after,
        )
        log_event(
            self._logger,
            "candidate_selection",
            lost_item_id=lost.item_id,
            location_filter=request.location_filter,
            days_before=request.days_before,
            days_after=request.days_after,
            candidate_count=len(candidates),
        )

        results = CompositeRanker(strategy).rank(lost, candidates)
        log_event(
            self._logger,
            "match_complete",
            lost_item_id=lost.item_id,
            resolved=True,
            text_strategy=strategy.name,
            model_state=self._model_state.state.value,
            candidate_count=len(candidates),
            result_count=len(results),
            latency_ms=(time.perf_counter() - start) * 1000,
        )
        return results

    def rebuild_model(self) -> VectorSpaceModel | None:
        """Re-read the corpus and replace the shared model."""
        return self._model_state.rebuild(self.store.list_all_descriptions())
