"""Candidate matching and ranking engine for lost & found items."""

from lostfound_matching.matching import MatchService
from lostfound_matching.model_state import ModelState, VectorSpaceModelState
from lostfound_matching.models import ItemRecord, MatchResult, VectorSpaceModel

__all__ = [
    "ItemRecord",
    "MatchResult",
    "MatchService",
    "ModelState",
    "VectorSpaceModel",
    "VectorSpaceModelState",
]
