from __future__ import annotations

import re

from quizcard_generator.document import DocumentConfig, LiteralToken, QuizDocument, WordToken


def test_short_fragments_merge_until_minimum_words() -> None:
    document = QuizDocument("Hi. Ok. The cat sat on the mat.")

    assert document.get_sentences_count() == 1
    assert document.get_sentence(0).text() == "Hi. Ok. The cat sat on the mat."
    assert document.get_sentence(0).get_word_count() == 7
    assert [word.key for word in document.get_sentence(0).get_words()] == ["hi", "ok", "the", "cat", "sat", "on", "mat"]
    assert "MAT" in document.vocabulary
    assert "dog" not in document.vocabulary


def test_frequency_counts_case_and_punctuation_variants() -> None:
    document = QuizDocument("apple banana? BA'N'ANA cinnamon baNANa. apple.")

    assert document.get_word("banana").frequency == 3
    assert document.get_word("apple").frequency == 2
    assert document.get_word("cinnamon").frequency == 1
    assert document.get_words_count() == 3
    # 마지막 문장은 최소 단어 수를 채우지 못해도 남는다
    assert document.get_sentences_count() == 2
    assert document.get_sentence(1).text() == "apple."


def test_first_raw_string_is_kept_and_occurrence_raw_is_tracked() -> None:
    document = QuizDocument("apple banana? BA'N'ANA cinnamon baNANa. apple.")
    banana = document.get_word("BANANA")

    assert banana.raw_string == "banana?"
    assert banana.get_raw_string(0, 2) == "BA'N'ANA"
    assert banana.get_raw_string(5, 5) == "banana?"


def test_word_locations() -> None:
    document = QuizDocument("one two\n  three four five.")
    three = document.get_word("three")
    (location,) = three.locations

    assert location.line == 1
    assert location.char_on_line == 2
    assert location.token_on_line == 0
    assert location.sentence_index == 0
    assert location.token_in_sentence == 2
    assert location.raw_string == "three"


def test_literal_and_pattern_excludes_become_literal_tokens() -> None:
    config = DocumentConfig(word_excludes=("THE", re.compile(r"^\d+$")))
    document = QuizDocument("The 42 cats ate the 7 fish -- quickly.", config)

    assert document.get_word("the") is None
    assert document.get_word("42") is None
    assert document.get_word("cats") is not None

    tokens = document.get_sentence(0).get_tokens()
    assert tokens[0] == LiteralToken("The")
    assert tokens[1] == LiteralToken("42")
    assert isinstance(tokens[2], WordToken)
    # 키가 비는 구두점 토큰도 리터럴이다
    assert tokens[7] == LiteralToken("--")


def test_token_maximum_splits_sentences() -> None:
    config = DocumentConfig(sentence_word_count_min=1, sentence_token_count_max=2)
    document = QuizDocument("a b c d e", config)

    sentences = document.get_sentences()
    assert [s.text() for s in sentences] == ["a b", "c d", "e"]
    assert [s.previous_index for s in sentences] == [None, 0, 1]
    assert [s.next_index for s in sentences] == [1, 2, None]
    assert all(s.sealed for s in sentences)


def test_last_sealed_sentence_has_no_next() -> None:
    document = QuizDocument("The cat sat on the mat.")

    assert document.get_sentences_count() == 1
    assert document.get_sentence(0).next_index is None


def test_token_maximum_is_deferred_below_word_minimum() -> None:
    config = DocumentConfig(sentence_word_count_min=3, sentence_token_count_max=2)
    document = QuizDocument("a a b b c c d", config)

    assert [s.text() for s in document.get_sentences()] == ["a a b b c", "c d"]


def test_case_sensitive_keys() -> None:
    document = QuizDocument("Apple apple APPLE", DocumentConfig(case_sensitive=True))

    assert document.get_words_count() == 3
    assert document.get_word("Apple").frequency == 1
    assert document.get_word("apple") is not document.get_word("APPLE")


def test_empty_input() -> None:
    document = QuizDocument("").finish()

    assert document.get_sentences_count() == 0
    assert document.get_words_count() == 0
    assert document.get_sentence(0) is None
    assert document.closest_words("anything", 3) == []
