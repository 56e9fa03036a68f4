from __future__ import annotations

import argparse
import io
from pathlib import Path

import pytest
from rich.console import Console

from quizcard_generator import cli
from quizcard_generator.commands import AnalyzeCommand, DocumentOptions, GenerateCommand
from quizcard_generator.document import ConfigurationError, Percentage
from quizcard_generator.parser import (
    count_or_percentage,
    non_negative_int,
    positive_int,
    probability,
    setup_parser,
    validate_int,
)

TEXT = "The cat sat on the mat. The dog sat on the log."


def _parser() -> argparse.ArgumentParser:
    return setup_parser(Console(file=io.StringIO()), (AnalyzeCommand, GenerateCommand))


def test_int_validators() -> None:
    assert validate_int("3") == 3
    assert non_negative_int("0") == 0
    assert positive_int("2") == 2
    with pytest.raises(argparse.ArgumentTypeError):
        positive_int("0")
    with pytest.raises(argparse.ArgumentTypeError):
        non_negative_int("x")


def test_count_or_percentage() -> None:
    assert count_or_percentage("30%") == Percentage(30)
    assert count_or_percentage("5") == 5
    with pytest.raises(argparse.ArgumentTypeError):
        count_or_percentage("1.5")
    with pytest.raises(argparse.ArgumentTypeError):
        count_or_percentage("-3")


def test_probability() -> None:
    assert probability("30%") == pytest.approx(0.3)
    assert probability("0.25") == 0.25
    with pytest.raises(argparse.ArgumentTypeError):
        probability("2")


def test_generate_arguments() -> None:
    args = _parser().parse_args(
        [
            "generate", "-I", TEXT, "-E", "the", "-E", "/^\\d+$/",
            "--word-frequency-first", "10%", "-t", "lesson", "-N", "3", "--choice-variation", "20%",
        ]
    )

    assert args.command == "generate"
    assert args.input_file_content == TEXT
    assert args.exclude_words == ["the", "/^\\d+$/"]
    assert args.word_frequency_first == Percentage(10)
    assert args.tags == ["lesson"]
    assert args.limit == 3
    assert args.choice_variation == pytest.approx(0.2)
    assert args.anki_notes_name == "notes"


def test_input_source_is_required() -> None:
    with pytest.raises(SystemExit) as excinfo:
        _parser().parse_args(["analyze"])
    assert excinfo.value.code == 2


def test_document_options_merge_config_and_cli(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    Path("quizcard.yaml").write_text("max_edit_distance: 4\nword_excludes: [a]\n", encoding="utf-8")
    excludes = tmp_path / "excludes.txt"
    excludes.write_text("the\n", encoding="utf-8")

    args = _parser().parse_args(
        ["analyze", "-I", TEXT, "-E", "/^x/", "-e", str(excludes), "--sentence-length-min", "2", "--seed", "9"]
    )
    config = DocumentOptions.from_args(args).build_config()

    assert config.max_edit_distance == 4
    assert config.sentence_word_count_min == 2
    assert config.seed == 9
    assert config.literal_excludes == frozenset({"a", "the"})
    assert config.pattern_exclude.pattern == "(^x)"


def test_main_generate(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    code = cli.main(["--no-log-file", "generate", "-I", TEXT, "--seed", "1", "-n", "demo", "-t", "pets"])

    assert code == 0
    notes = tmp_path / "out" / "anki" / "notes" / "fill-blanks" / "demo.txt"
    assert notes.exists()
    assert "quizcard-generator demo pets" in notes.read_text(encoding="utf-8")


def test_main_analyze_from_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    source = tmp_path / "source.txt"
    source.write_text(TEXT, encoding="utf-8")

    code = cli.main(["--no-log-file", "analyze", "-i", str(source), "--workers", "1"])

    assert code == 0
    assert (tmp_path / "out" / "analysis" / "reports" / "word_frequency.parquet").exists()
    assert (tmp_path / "out" / "analysis" / "reports" / "word_distractors.csv").exists()
    assert (tmp_path / "out" / "analysis" / "reports" / "analysis_log.md").exists()


def test_main_writes_log_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    code = cli.main(["--log-dir", str(tmp_path / "logs"), "generate", "-I", TEXT])

    assert code == 0


@pytest.mark.parametrize(
    "argv",
    [
        ["--no-log-file", "generate", "-i", "missing.txt"],
        ["--no-log-file", "generate", "-I", TEXT, "-E", "/(/"],
    ],
)
def test_main_reports_failures(argv: list[str], tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    assert cli.main(argv) == 1


def test_main_argument_error_exit_code(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    assert cli.main(["generate", "-I", TEXT, "--limit", "0"]) == 2


def test_error_categories() -> None:
    assert cli.categorize_error(ConfigurationError("bad"))[0] == "설정 오류"
    assert cli.categorize_error(FileNotFoundError("x"))[0] == "파일 없음"
    assert cli.categorize_error(ValueError("x"))[0] == "입력값 오류"
    assert cli.categorize_error(RuntimeError("x")) is None


def test_create_command_rejects_unknown() -> None:
    with pytest.raises(NotImplementedError):
        cli.create_command(argparse.Namespace(command="unknown"))
