from __future__ import annotations

import random

import pytest

from quizcard_generator.document import QuizDocument, Word, WordEditDistance
from quizcard_generator.document.distractors import closest_words

TEXT = "acorn acorns corn horn o."


def _document() -> QuizDocument:
    return QuizDocument(TEXT).finish()


def test_distance_buckets_are_recorded_symmetrically() -> None:
    document = _document()
    acorn = document.get_word("acorn")

    assert sorted(acorn.get_words_at_distance(1)) == ["acorns", "corn"]
    assert acorn.get_words_at_distance(2) == ["horn"]
    assert acorn.get_words_at_distance(4) == ["o"]
    assert acorn.distance_range == (1, 4)
    assert document.get_word("horn").get_distance("acorn").distance == 2
    assert acorn.get_distance(acorn) is None


def test_closest_words_walks_buckets_outward() -> None:
    document = _document()

    assert sorted(document.closest_words("acorn", 2)) == ["acorns", "corn"]
    closest = document.closest_words("acorn", 3)
    assert sorted(closest[:2]) == ["acorns", "corn"]
    assert closest[2] == "horn"
    assert document.closest_words("acorn", 0) == []


def test_closest_words_may_return_fewer_than_requested() -> None:
    document = _document()

    assert len(document.closest_words("acorn", 10)) == 4


def test_closest_words_truncates_a_bucket_at_random() -> None:
    document = _document()
    seen = set()
    for seed in range(30):
        (picked,) = document.closest_words("acorn", 1, rng=random.Random(seed))
        seen.add(picked)

    assert seen == {"acorns", "corn"}


def test_closest_words_with_random_injection_excludes_self() -> None:
    document = _document()
    rng = random.Random(7)

    for _ in range(20):
        closest = document.closest_words("horn", 3, random_probability=1.0, rng=rng)
        assert "horn" not in closest
        assert len(closest) == len(set(closest)) <= 3


def test_closest_words_zero_probability_matches_deterministic_selection() -> None:
    document = _document()

    plain = document.closest_words("acorn", 3, rng=random.Random(1))
    varied = document.closest_words("acorn", 3, random_probability=0.0, rng=random.Random(1))
    assert plain == varied


def test_closest_words_rejects_invalid_probability() -> None:
    document = _document()

    with pytest.raises(ValueError):
        document.closest_words("acorn", 2, random_probability=1.5)


def test_word_without_distances_has_no_distractors() -> None:
    word = Word(0, "alone", "alone")

    assert closest_words(word, 3) == []
    with pytest.raises(ValueError):
        word.set_distance("alone", WordEditDistance(0, 0.0))
    with pytest.raises(ValueError):
        Word(1, "", "")
