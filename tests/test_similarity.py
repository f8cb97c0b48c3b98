from lostfound_matching.similarity import (
    cosine,
    cosine_with_threshold,
    is_similar,
    jaccard_fallback,
    token_set_jaccard,
)
from lostfound_matching.vectorizer import fit, transform


def test_cosine_of_vector_with_itself_is_one() -> None:
    vector = {"wallet": 1.3862943611198906, "black": 0.28768207245178085, "card": 3.0}
    assert cosine(vector, vector) == 1.0


def test_cosine_is_symmetric_and_bounded() -> None:
    a = {"red": 1.2, "bike": 0.7, "park": 0.1}
    b = {"bike": 2.0, "gate": 1.1}
    assert cosine(a, b) == cosine(b, a)
    assert 0.0 <= cosine(a, b) <= 1.0


def test_cosine_empty_or_zero_norm_is_zero() -> None:
    assert cosine({}, {"a": 1.0}) == 0.0
    assert cosine({"a": 1.0}, {}) == 0.0
    assert cosine({"a": 0.0}, {"a": 0.0}) == 0.0


def test_cosine_threshold_helpers() -> None:
    a = {"red": 1.0, "bike": 1.0}
    b = {"red": 1.0, "gate": 1.0}
    assert cosine(a, b) == 0.5
    assert cosine_with_threshold(a, b, 0.4) == cosine(a, b)
    assert cosine_with_threshold(a, b, 0.6) == 0.0
    assert is_similar(a, b, 0.3)
    assert not is_similar(a, b, 0.9)


def test_jaccard_fallback_edge_cases() -> None:
    assert jaccard_fallback("", "") == 1.0
    assert jaccard_fallback("a an", "to be") == 1.0
    assert jaccard_fallback("wallet", "") == 0.0
    assert jaccard_fallback("black wallet", "Black WALLET!") == 1.0
    assert jaccard_fallback("black wallet", "brown wallet") == 1 / 3


def test_token_set_jaccard_is_symmetric() -> None:
    a = {"central", "park"}
    b = {"park", "gate", "north"}
    assert token_set_jaccard(a, b) == token_set_jaccard(b, a) == 0.25


def test_shared_terms_across_whole_corpus_carry_no_weight() -> None:
    docs = ["lost red bike near the park", "found red bike by the park gate"]
    model = fit(docs)
    assert cosine(transform(model, docs[0]), transform(model, docs[1])) == 0.0


def test_tfidf_upweights_rare_shared_terms_over_jaccard() -> None:
    lost_doc = "lost red bike near the park"
    found_doc = "found red bike by the park gate"
    corpus = [
        lost_doc,
        found_doc,
        "lost black wallet near the station",
        "found keys near the main gate",
        "lost phone near the cafe",
        "found umbrella near the gate",
    ]
    model = fit(corpus)
    tfidf = cosine(transform(model, lost_doc), transform(model, found_doc))
    assert tfidf > jaccard_fallback(lost_doc, found_doc)
