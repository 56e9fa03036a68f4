from __future__ import annotations

import csv
import io
import random
from pathlib import Path

import pytest

from quizcard_generator.anki import CHOICES_MAX, AnkiCloze, export_anki_notes, generate_anki_notes
from quizcard_generator.anki.notes import resolve_choice_variation
from quizcard_generator.document import DocumentConfig, Percentage, QuizDocument

TEXT = "The cat sat on the mat. The dog sat on the log."


def _document() -> QuizDocument:
    return QuizDocument.build(TEXT, DocumentConfig(seed=0))


def test_cloze_rendering() -> None:
    assert str(AnkiCloze(1, "Cat", "cat")) == "{{c1::Cat}}"
    assert str(AnkiCloze(2, "mat.", "mat", hint="noun")) == "{{c2::mat.:noun}}"


def test_generate_notes_clozes_every_word() -> None:
    notes = generate_anki_notes(_document(), word_length_min=3, rng=random.Random(0))

    assert len(notes) == 2
    assert notes[0].text == "{{c1::The}} {{c2::cat}} {{c3::sat}} on {{c4::the}} {{c5::mat.}}"
    assert [cloze.key for cloze in notes[0].clozes] == ["the", "cat", "sat", "the", "mat"]
    assert notes[0].source_line == 1
    for note in notes:
        for cloze in note.clozes:
            choices = note.choices[cloze.index]
            assert cloze.key not in choices
            assert len(choices) <= CHOICES_MAX


def test_generate_notes_limit_and_frequency_filters() -> None:
    document = _document()

    assert len(generate_anki_notes(document, limit=1)) == 1

    first = generate_anki_notes(document, word_frequency_first=1)
    assert first[0].text == "{{c1::The}} cat sat on {{c2::the}} mat."

    # 상위 빈도 조건이 하위 빈도 조건보다 우선한다
    both = generate_anki_notes(document, word_frequency_first=1, word_frequency_last=Percentage(50))
    assert [note.text for note in both] == [note.text for note in first]

    # 빈도 하위 2개(dog, log)가 없는 첫 문장은 노트가 되지 않는다
    last = generate_anki_notes(document, word_frequency_last="2")
    assert [note.text for note in last] == ["The {{c1::dog}} sat on the {{c2::log.}}"]

    frequent = generate_anki_notes(document, word_frequency_min=2)
    assert {cloze.key for note in frequent for cloze in note.clozes} == {"the", "sat", "on"}


def test_notes_without_clozes_are_dropped() -> None:
    notes = generate_anki_notes(_document(), word_frequency_min=10)

    assert notes == []


def test_generate_notes_prologue_and_epilogue() -> None:
    notes = generate_anki_notes(_document(), before_token_count=2, after_token_count=2)

    assert notes[0].prologue == ""
    assert notes[0].epilogue == "The dog"
    assert notes[1].prologue == "the mat."
    assert notes[1].epilogue == ""


def test_resolve_choice_variation() -> None:
    assert resolve_choice_variation("30%") == pytest.approx(0.3)
    assert resolve_choice_variation("0.25") == 0.25
    assert resolve_choice_variation(None) is None
    with pytest.raises(ValueError):
        resolve_choice_variation("150%")


def test_export_file_layout(tmp_path: Path) -> None:
    notes = generate_anki_notes(_document(), word_length_min=3, rng=random.Random(1))
    path = export_anki_notes(notes, "demo", tmp_path, tags=["my tag", "demo"], rng=random.Random(2))

    assert path == tmp_path / "demo.txt"
    content = path.read_text(encoding="utf-8")
    lines = content.splitlines()
    assert lines[0].startswith("# 2 notes generated with [quizcard-generator]")
    assert lines[1].startswith("# author date = ")
    assert lines[2:6] == ["#separator:tab", "#html:true", "#notetype column:1", "#tags column:2"]

    body = content.split("#tags column:2\n", 1)[1]
    rows = list(csv.reader(io.StringIO(body), delimiter="\t"))
    assert len(rows) == 2

    row = rows[0]
    assert row[0] == "fill-blanks"
    assert row[1] == "quizcard-generator demo my_tag"
    assert row[2] == notes[0].text
    assert row[3].startswith('<div class="choices">')
    for cloze in notes[0].clozes:
        assert f'<div class="choice-{cloze.index}">' in row[3]
        assert f"<li>{cloze.key}</li>" in row[3]
    assert row[6] == ""
    assert row[7] == "1"


def test_export_default_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    path = export_anki_notes([], "empty")

    assert path == Path("out/anki/notes/fill-blanks/empty.txt")
    assert path.read_text(encoding="utf-8").startswith("# 0 notes generated with")
