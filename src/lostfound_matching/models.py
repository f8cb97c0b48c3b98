"""Shared data models for the lost & found matching engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Literal, Mapping

ItemKind = Literal["lost", "found"]

# term -> weight, sparse; produced on demand and never persisted
WeightedVector = dict[str, float]


@dataclass(frozen=True)
class ItemRecord:
    item_id: int
    kind: ItemKind
    title: str | None
    description: str | None
    category: str | None
    location: str | None
    event_date: datetime | None
    image_path: str | None = None
    created_at: datetime | None = None
    owner_name: str | None = None
    owner_email: str | None = None
    owner_phone: str | None = None


@dataclass(frozen=True)
class VectorSpaceModel:
    """Corpus-wide IDF weights.

    ``idf`` is exposed as a read-only mapping; the model is shared by every
    scoring call once built and must never be mutated.
    """

    idf: Mapping[str, float]
    document_count: int

    def __post_init__(self) -> None:
        if not isinstance(self.idf, MappingProxyType):
            object.__setattr__(self, "idf", MappingProxyType(dict(self.idf)))

    @property
    def is_usable(self) -> bool:
        return self.document_count > 0 and len(self.idf) > 0

    @property
    def vocabulary_size(self) -> int:
        return len(self.idf)


@dataclass(frozen=True)
class DateWindow:
    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end


@dataclass(frozen=True)
class MatchRequest:
    lost_item_id: int
    location_filter: str | None = None
    days_before: int | None = None
    days_after: int | None = None

    def __post_init__(self) -> None:
        if self.days_before is not None and self.days_before < 0:
            raise ValueError(f"days_before must be >= 0, got {self.days_before}")
        if self.days_after is not None and self.days_after < 0:
            raise ValueError(f"days_after must be >= 0, got {self.days_after}")


@dataclass(frozen=True)
class MatchResult:
    found_item_id: int
    found_item_title: str | None
    found_item_description: str | None
    found_item_category: str | None
    found_item_location: str | None
    found_item_date: datetime | None
    found_item_image_path: str | None
    found_item_created_at: datetime | None
    found_by_user_name: str | None
    found_by_user_email: str | None
    found_by_user_phone: str | None
    match_score: float
    text_similarity: float
    location_score: float
    date_score: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "found_item_id": self.found_item_id,
            "found_item_title": self.found_item_title,
            "found_item_description": self.found_item_description,
            "found_item_category": self.found_item_category,
            "found_item_location": self.found_item_location,
            "found_item_date": _isoformat(self.found_item_date),
            "found_item_image_path": self.found_item_image_path,
            "found_item_created_at": _isoformat(self.found_item_created_at),
            "found_by_user_name": self.found_by_user_name,
            "found_by_user_email": self.found_by_user_email,
            "found_by_user_phone": self.found_by_user_phone,
            "match_score": self.match_score,
            "text_similarity": self.text_similarity,
            "location_score": self.location_score,
            "date_score": self.date_score,
        }


@dataclass
class LoadSummary:
    users_added: int = 0
    items_added: int = 0
    items_skipped: int = 0
    skip_reasons: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "users_added": self.users_added,
            "items_added": self.items_added,
            "items_skipped": self.items_skipped,
            "skip_reasons": self.skip_reasons,
        }


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None
