"""Candidate selection: date window computation and the item store contract."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Protocol, Sequence

from lostfound_matching.models import DateWindow, ItemRecord
from lostfound_matching.normalization import is_blank


class ItemStore(Protocol):
    """Read-only data-access boundary the matching core calls into."""

    def get_lost_item(self, item_id: int) -> ItemRecord | None: ...

    def list_all_descriptions(self) -> Sequence[str]: ...

    def query_candidates(
        self, window: DateWindow, location_filter: str | None
    ) -> Sequence[ItemRecord]: ...


def compute_date_window(
    event_date: datetime,
    days_before: int | None = None,
    days_after: int | None = None,
) -> DateWindow:
    """Window around the lost item's date.

    A missing bound stays at ``event_date``, so with neither given the window
    is the single instant ``[event_date, event_date]``. Raises ``ValueError``
    when a bound falls outside the representable date range.
    """
    try:
        start = event_date - timedelta(days=days_before) if days_before is not None else event_date
        end = event_date + timedelta(days=days_after) if days_after is not None else event_date
    except OverflowError as exc:
        raise ValueError(
            f"date window around {event_date.isoformat()} "
            f"(days_before={days_before}, days_after={days_after}) is out of range"
        ) from exc
    return DateWindow(start=start, end=end)


def select_candidates(
    store: ItemStore,
    lost: ItemRecord,
    *,
    location_filter: str | None = None,
    days_before: int | None = None,
    days_after: int | None = None,
) -> list[ItemRecord]:
    if lost.event_date is None:
        return []
    window = compute_date_window(lost.event_date, days_before, days_after)
    effective_filter = None if is_blank(location_filter) else location_filter
    return list(store.query_candidates(window, effective_filter))
