"""Walk through TF-IDF cosine vs Jaccard similarity on a small sample corpus."""

from __future__ import annotations

from pathlib import Path
import sys

try:
    from lostfound_matching.similarity import cosine, is_similar, jaccard_fallback
    from lostfound_matching.vectorizer import fit, top_terms, transform
except ModuleNotFoundError:
    repo_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(repo_root / "src"))
    from lostfound_matching.similarity import (  # type: ignore[reportMissingImports]
        cosine,
        is_similar,
        jaccard_fallback,
    )
    from lostfound_matching.vectorizer import (  # type: ignore[reportMissingImports]
        fit,
        top_terms,
        transform,
    )

SAMPLE_DOCUMENTS = [
    "I lost my black iPhone 12 near the coffee shop downtown",
    "Found a black iPhone near the downtown coffee shop yesterday",
    "Lost wallet with credit cards and driver's license",
    "Found wallet containing credit cards and ID",
    "Lost my keys in the parking lot",
    "Found keys in the parking area near the mall",
]
PAIRS = [(0, 1), (2, 5), (2, 3)]
THRESHOLD = 0.3


def main() -> None:
    model = fit(SAMPLE_DOCUMENTS)
    print(f"Documents: {model.document_count}  Vocabulary: {model.vocabulary_size}")
    for left, right in PAIRS:
        doc_a, doc_b = SAMPLE_DOCUMENTS[left], SAMPLE_DOCUMENTS[right]
        vec_a, vec_b = transform(model, doc_a), transform(model, doc_b)
        print()
        print(f"A: {doc_a}")
        print(f"B: {doc_b}")
        print("  top terms A:", ", ".join(f"{t}={w:.4f}" for t, w in top_terms(vec_a, 5)))
        print("  top terms B:", ", ".join(f"{t}={w:.4f}" for t, w in top_terms(vec_b, 5)))
        print(f"  cosine={cosine(vec_a, vec_b):.4f} jaccard={jaccard_fallback(doc_a, doc_b):.4f}")
        print(f"  similar at {THRESHOLD}: {is_similar(vec_a, vec_b, THRESHOLD)}")


if __name__ == "__main__":
    main()
