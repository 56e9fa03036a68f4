from __future__ import annotations

import re
from pathlib import Path

import pytest

from quizcard_generator.corpus.source import read_source_text, read_word_excludes
from quizcard_generator.document import (
    ConfigurationError,
    DocumentConfig,
    load_config_file,
    parse_word_exclude,
    parse_word_excludes,
)


def test_parse_word_exclude_literal_and_regex() -> None:
    assert parse_word_exclude("the") == "the"
    pattern = parse_word_exclude(r"/^\d+$/")
    assert isinstance(pattern, re.Pattern)
    assert pattern.pattern == r"^\d+$"


def test_parse_word_exclude_invalid_regex() -> None:
    with pytest.raises(ConfigurationError):
        parse_word_exclude("/(/")


def test_parse_word_excludes_skips_comments_and_blanks() -> None:
    excludes = parse_word_excludes(["# articles", "the", "", "  a  ", "/^x/"])

    assert excludes[:2] == ["the", "a"]
    assert isinstance(excludes[2], re.Pattern)


def test_config_normalizes_excludes() -> None:
    config = DocumentConfig(word_excludes=("The", re.compile("^x"), re.compile(r"\d")))

    assert config.literal_excludes == frozenset({"the"})
    assert config.pattern_exclude.pattern == r"(^x)|(\d)"
    assert config.pattern_exclude.flags & re.IGNORECASE

    sensitive = DocumentConfig(case_sensitive=True, word_excludes=("The",))
    assert sensitive.literal_excludes == frozenset({"The"})
    assert sensitive.pattern_exclude is None


@pytest.mark.parametrize(
    "kwargs",
    [
        {"sentence_word_count_min": -1},
        {"sentence_token_count_max": 0},
        {"max_edit_distance": -2},
        {"workers": -1},
        {"token_key_exclude": "[unclosed"},
    ],
)
def test_config_rejects_invalid_values(kwargs: dict) -> None:
    with pytest.raises(ConfigurationError):
        DocumentConfig(**kwargs)


def test_with_overrides_ignores_none() -> None:
    config = DocumentConfig(seed=1)

    assert config.with_overrides(seed=None) is config
    assert config.with_overrides(seed=2, workers=None).seed == 2


def test_from_mapping() -> None:
    config = DocumentConfig.from_mapping(
        {"word_excludes": ["the", "/^\\d+$/"], "max_edit_distance": 3, "sentence_word_count_min": 2}
    )

    assert config.max_edit_distance == 3
    assert config.sentence_word_count_min == 2
    assert config.literal_excludes == frozenset({"the"})
    assert config.pattern_exclude is not None

    with pytest.raises(ConfigurationError, match="colour"):
        DocumentConfig.from_mapping({"colour": "blue"})
    with pytest.raises(ConfigurationError):
        DocumentConfig.from_mapping({"word_excludes": "the"})


def test_load_config_file(tmp_path: Path) -> None:
    path = tmp_path / "quizcard.yaml"
    path.write_text("max_edit_distance: 4\nword_excludes:\n  - the\n  - /^a/\n", encoding="utf-8")

    assert load_config_file(path) == {"max_edit_distance": 4, "word_excludes": ["the", "/^a/"]}

    empty = tmp_path / "empty.yaml"
    empty.write_text("", encoding="utf-8")
    assert load_config_file(empty) == {}

    listing = tmp_path / "list.yaml"
    listing.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_config_file(listing)

    with pytest.raises(FileNotFoundError):
        load_config_file(tmp_path / "missing.yaml")


def test_read_source_text_formats(tmp_path: Path) -> None:
    text_path = tmp_path / "source.txt"
    text_path.write_text("line one.\nline two.\n", encoding="utf-8")
    assert read_source_text(text_path) == "line one.\nline two.\n"

    jsonl_path = tmp_path / "source.jsonl"
    jsonl_path.write_text('{"body": "first."}\nnot json\n{"body": "second."}\n{"other": 1}\n', encoding="utf-8")
    assert read_source_text(jsonl_path, text_key="body") == "first.\nsecond."

    json_path = tmp_path / "source.json"
    json_path.write_text('[{"text": "alpha."}, {"text": "beta."}]', encoding="utf-8")
    assert read_source_text(json_path) == "alpha.\nbeta."


def test_read_source_text_errors(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        read_source_text(tmp_path / "missing.txt")

    unsupported = tmp_path / "source.pdf"
    unsupported.write_bytes(b"%PDF")
    with pytest.raises(ValueError):
        read_source_text(unsupported)

    broken = tmp_path / "broken.json"
    broken.write_text("{", encoding="utf-8")
    with pytest.raises(ValueError):
        read_source_text(broken)


def test_read_word_excludes(tmp_path: Path) -> None:
    path = tmp_path / "excludes.txt"
    path.write_text("# common words\nthe\nand\n\n/^[0-9]+$/\n", encoding="utf-8")

    excludes = read_word_excludes(path)
    assert excludes[:2] == ["the", "and"]
    assert isinstance(excludes[2], re.Pattern)
