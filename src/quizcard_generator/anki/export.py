"""Anki 노트를 탭 구분 텍스트 파일로 내보냅니다.

Anki의 "Import File" 형식을 따른다. 파일 머리에 주석과 import 지시문을
두고, 노트마다 한 줄에 노트 타입, 태그, 텍스트, 보기 HTML, prologue,
epilogue, 출처, 줄 번호를 기록한다.
"""

from __future__ import annotations

import csv
import logging
import random
from collections.abc import Iterable, Sequence
from datetime import datetime, timezone
from pathlib import Path

from quizcard_generator.anki.notes import AnkiNote
from quizcard_generator.constants import ANKI_NOTE_TYPE_DEFAULT, ANKI_NOTES_DIR, ANKI_NOTES_NAME_DEFAULT

logger = logging.getLogger(__name__)

PROJECT_TAG = "quizcard-generator"
PROJECT_URL = "https://github.com/ogallagher/quizcard-generator"

SEPARATOR_NAME = "tab"
SEPARATOR = "\t"
TAG_SEPARATOR = " "

_INDENT = "  "


def render_choices(note: AnkiNote, rng: random.Random) -> str:
    """빈칸마다 정답과 오답 보기를 섞은 목록 HTML을 만듭니다."""
    lines = ['<div class="choices">']
    for cloze in note.clozes:
        choices = [*note.choices.get(cloze.index, []), cloze.key]
        rng.shuffle(choices)
        lines.append(f'{_INDENT}<div class="choice-{cloze.index}">')
        lines.append(f"{_INDENT * 2}<ul>")
        lines.extend(f"{_INDENT * 3}<li>{choice}</li>" for choice in choices)
        lines.append(f"{_INDENT * 2}</ul>")
        lines.append(f"{_INDENT}</div>")
    lines.append("</div>")
    return "\n".join(lines)


def note_tags(name: str, tags: Iterable[str] = ()) -> str:
    """프로젝트 태그, 노트 파일 이름, 사용자 태그를 중복 없이 이어 붙입니다."""
    ordered: dict[str, None] = {PROJECT_TAG: None, name: None}
    for tag in tags:
        # Anki 태그에는 공백이 들어갈 수 없다
        tag = "_".join(tag.split())
        if tag:
            ordered.setdefault(tag)
    return TAG_SEPARATOR.join(ordered)


def export_anki_notes(
    notes: Sequence[AnkiNote],
    name: str = ANKI_NOTES_NAME_DEFAULT,
    out_dir: Path | None = None,
    *,
    note_type: str = ANKI_NOTE_TYPE_DEFAULT,
    tags: Iterable[str] = (),
    rng: random.Random | None = None,
) -> Path:
    """노트를 ``<out_dir>/<name>.txt`` 로 저장합니다.

    Args:
        notes: 내보낼 노트 목록
        name: 출력 파일 이름 (확장자 제외), 태그로도 사용
        out_dir: 출력 디렉토리 (None이면 ``out/anki/notes/<note_type>``)
        note_type: Anki 노트 타입 이름
        tags: 추가 태그
        rng: 보기 순서를 섞을 난수 생성기

    Returns:
        저장된 파일 경로
    """
    out_dir = out_dir if out_dir is not None else ANKI_NOTES_DIR / note_type
    out_dir.mkdir(parents=True, exist_ok=True)
    out_path = out_dir / f"{name}.txt"
    rng = rng or random.Random()
    tag_field = note_tags(name, tags)

    with out_path.open("w", encoding="utf-8", newline="") as handle:
        handle.write(f"# {len(notes)} notes generated with [quizcard-generator]({PROJECT_URL})\n")
        handle.write(f"# author date = {datetime.now(timezone.utc).isoformat()}\n")
        handle.write(
            f"#separator:{SEPARATOR_NAME}\n"
            "#html:true\n"
            "#notetype column:1\n"
            "#tags column:2\n"
        )

        writer = csv.writer(handle, delimiter=SEPARATOR, quoting=csv.QUOTE_ALL, lineterminator="\n")
        for note in notes:
            writer.writerow(
                [
                    note_type,
                    tag_field,
                    note.text,
                    render_choices(note, rng),
                    note.prologue,
                    note.epilogue,
                    note.source or "",
                    note.source_line if note.source_line is not None else "",
                ]
            )

    logger.info("💾 Anki 노트 %d개 저장: %s", len(notes), out_path)
    return out_path
