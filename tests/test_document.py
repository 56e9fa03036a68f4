from __future__ import annotations

import random

import pytest

from quizcard_generator.document import DocumentConfig, QuizDocument
from quizcard_generator.document.similarity import partition_pairs

TEXT = """The quick brown fox jumps over the lazy dog. A lazy cat naps on the warm mat.
Foxes and dogs rarely share a mat! Does the brown cat jump? The dog barks at the fox."""


def _neighbours(document: QuizDocument, seed: int) -> dict[str, list[str]]:
    rng = random.Random(seed)
    return {word.key: document.closest_words(word, 4, random_probability=0.0, rng=rng) for word in document.vocabulary}


def test_finish_sets_completion_signal_and_is_idempotent() -> None:
    document = QuizDocument(TEXT)
    assert not document.finished.is_set()

    assert document.finish() is document
    assert document.finished.is_set()
    pairs = document.distance_pairs
    assert pairs > 0

    document.finish()
    assert document.distance_pairs == pairs


def test_closest_words_requires_finish() -> None:
    document = QuizDocument(TEXT)

    with pytest.raises(RuntimeError):
        document.closest_words("fox", 2)


def test_identical_input_yields_identical_model() -> None:
    config = DocumentConfig(seed=3)
    first = QuizDocument.build(TEXT, config)
    second = QuizDocument.build(TEXT, config)

    assert [(w.key, w.frequency) for w in first.vocabulary] == [(w.key, w.frequency) for w in second.vocabulary]
    assert _neighbours(first, 11) == _neighbours(second, 11)


def test_document_rng_is_seeded_from_config() -> None:
    first = QuizDocument.build(TEXT, DocumentConfig(seed=5))
    second = QuizDocument.build(TEXT, DocumentConfig(seed=5))

    picks_first = [first.closest_words("the", 2, random_probability=0.5) for _ in range(5)]
    picks_second = [second.closest_words("the", 2, random_probability=0.5) for _ in range(5)]
    assert picks_first == picks_second


def test_default_config_picks_the_same_neighbours() -> None:
    rhymes = "cat bat hat mat rat sat fat pat vat."
    # 거리 1 버킷이 요청 수보다 커서 섞은 뒤 잘라낸다
    picks = {
        tuple(QuizDocument.build(rhymes, DocumentConfig()).closest_words("cat", 2, random_probability=0.0))
        for _ in range(10)
    }

    assert len(picks) == 1
    assert DocumentConfig().seed == 0


def test_worker_processes_match_inline_computation() -> None:
    inline = QuizDocument.build(TEXT, DocumentConfig(workers=1))
    sharded = QuizDocument.build(TEXT, DocumentConfig(workers=2))

    assert inline.distance_pairs == sharded.distance_pairs
    for word in inline.vocabulary:
        other = sharded.get_word(word.key)
        assert word.distance_range == other.distance_range
        if word.distance_range is None:
            continue
        low, high = word.distance_range
        for distance in range(low, high + 1):
            assert word.get_words_at_distance(distance) == other.get_words_at_distance(distance)


def test_max_edit_distance_bounds_recorded_pairs() -> None:
    document = QuizDocument.build(TEXT, DocumentConfig(max_edit_distance=1))

    for word in document.vocabulary:
        if word.distance_range is not None:
            assert word.distance_range[1] <= 1
    assert document.get_word("foxes").get_distance("fox") is None
    assert document.get_word("dogs").get_distance("dog").distance == 1


def test_partition_pairs_covers_upper_triangle() -> None:
    shards = partition_pairs(10, 4)

    assert shards[0].row_start == 0
    assert shards[-1].row_stop == 9
    for before, after in zip(shards, shards[1:]):
        assert before.row_stop == after.row_start
    assert partition_pairs(1, 4) == []


def test_prologue_and_epilogue() -> None:
    document = QuizDocument.build(TEXT)
    first, second = document.get_sentence(0), document.get_sentence(1)

    assert document.get_prologue(first, 2) == ""
    assert document.get_epilogue(first, 2) == "A lazy"
    assert document.get_prologue(second, 2) == "lazy dog."
    assert document.get_epilogue(first, 0) == ""
    assert document.render_sentence(second, 1, 1) == "dog. A lazy cat naps on the warm mat. Foxes"
