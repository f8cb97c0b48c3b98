"""Corpus vectorizer: IDF model fitting and TF-IDF projection."""

from __future__ import annotations

import math
from collections import Counter
from typing import Iterable, Sequence

from lostfound_matching.models import VectorSpaceModel, WeightedVector
from lostfound_matching.normalization import tokenize


def fit(documents: Sequence[str | None]) -> VectorSpaceModel:
    """Build a VectorSpaceModel with ``idf(term) = ln(N / df(term))``.

    N counts every document passed in, blank ones included; blank documents
    simply contribute no terms. An empty sequence yields an unusable model.
    """
    document_count = len(documents)
    document_frequency: Counter[str] = Counter()
    for document in documents:
        document_frequency.update(set(tokenize(document)))
    idf = {
        term: math.log(document_count / frequency)
        for term, frequency in sorted(document_frequency.items())
    }
    return VectorSpaceModel(idf=idf, document_count=document_count)


def transform(model: VectorSpaceModel, text: str | None) -> WeightedVector:
    """Project text onto the model as term frequency x IDF.

    Terms the model has never seen are kept with weight 0.0 so the vector
    still records which terms the text carried.
    """
    if not model.is_usable:
        raise ValueError("cannot transform against an unusable vector space model")
    term_frequency = Counter(tokenize(text))
    return {
        term: count * model.idf.get(term, 0.0)
        for term, count in term_frequency.items()
    }


def transform_many(
    model: VectorSpaceModel, texts: Iterable[str | None]
) -> list[WeightedVector]:
    return [transform(model, text) for text in texts]


def top_terms(vector: WeightedVector, limit: int = 10) -> list[tuple[str, float]]:
    ranked = sorted(vector.items(), key=lambda item: (-item[1], item[0]))
    return ranked[:limit]
