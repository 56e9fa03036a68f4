"""Anki 노트 생성 커맨드.

원문 문장을 빈칸 채우기 노트로 변환하고 오답 보기와 함께
Anki import 형식의 탭 구분 파일로 저장한다.
"""

from __future__ import annotations

import logging
import random
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.table import Table

from quizcard_generator.anki.export import export_anki_notes
from quizcard_generator.anki.notes import generate_anki_notes
from quizcard_generator.constants import ANKI_NOTE_TYPE_DEFAULT, ANKI_NOTES_NAME_DEFAULT
from quizcard_generator.document.frequency import Percentage
from quizcard_generator.parser import (
    CliHelpFormatter,
    add_document_args,
    count_or_percentage,
    non_negative_int,
    positive_int,
    probability,
)

from .base import Command, DocumentOptions, SubparsersLike

logger = logging.getLogger(__name__)


class GenerateCommand(Command):
    """Anki 노트 생성 커맨드.

    Attributes:
        console: Rich 콘솔 인스턴스
        options: 원문 입력과 문서 설정
        notes_name: 출력 파일 이름 (확장자 제외)
        tags: 추가 노트 태그
        limit: 변환할 최대 문장 수 (None이면 전체)
        word_frequency_min: 빈칸으로 만들 최소 단어 빈도
        word_frequency_first: 빈도 상위 N 또는 N% 단어만 빈칸으로 사용
        word_frequency_last: 빈도 하위 N 또는 N% 단어만 빈칸으로 사용
        word_length_min: 빈칸으로 만들 최소 단어 길이
        prologue: 앞 문장에서 붙일 토큰 수
        epilogue: 뒤 문장에서 붙일 토큰 수
        choice_variation: 오답 보기를 무작위 단어로 바꿀 확률
        output_dir: 노트 파일 출력 디렉토리
    """

    @staticmethod
    def configure_parser(subparsers: SubparsersLike) -> None:
        """서브커맨드 파서를 설정한다.

        Args:
            subparsers: 서브파서 액션 객체
        """
        parser = subparsers.add_parser("generate", help="Anki 빈칸 채우기 노트 생성", formatter_class=CliHelpFormatter)
        add_document_args(parser)
        parser.add_argument(
            "-n", "--anki-notes-name", default=ANKI_NOTES_NAME_DEFAULT, help="노트 파일 이름 (태그로도 사용)"
        )
        parser.add_argument("-t", "--tag", action="append", dest="tags", default=None, help="노트 태그 (반복 가능)")
        parser.add_argument("-N", "--limit", type=positive_int, default=None, help="변환할 최대 문장 수")
        parser.add_argument("--word-frequency-min", type=positive_int, default=None, help="빈칸으로 만들 최소 단어 빈도")
        parser.add_argument(
            "--word-frequency-first",
            type=count_or_percentage,
            default=None,
            help="빈도 상위 N 또는 N%% 단어만 빈칸으로 사용 (--word-frequency-last보다 우선)",
        )
        parser.add_argument(
            "--word-frequency-last",
            type=count_or_percentage,
            default=None,
            help="빈도 하위 N 또는 N%% 단어만 빈칸으로 사용",
        )
        parser.add_argument("--word-length-min", type=positive_int, default=None, help="빈칸으로 만들 최소 단어 길이")
        parser.add_argument("--prologue", type=non_negative_int, default=0, help="앞 문장에서 붙일 토큰 수")
        parser.add_argument("--epilogue", type=non_negative_int, default=0, help="뒤 문장에서 붙일 토큰 수")
        parser.add_argument(
            "--choice-variation", type=probability, default=None, help="오답 보기를 무작위 단어로 바꿀 확률 (0.3 또는 30%%)"
        )
        parser.add_argument(
            "--output-dir", type=Path, default=None, help="노트 파일 출력 디렉토리 (기본: out/anki/notes/fill-blanks)"
        )

    def __init__(
        self,
        console: Console,
        options: DocumentOptions,
        notes_name: str = ANKI_NOTES_NAME_DEFAULT,
        tags: list[str] | None = None,
        limit: int | None = None,
        word_frequency_min: int | None = None,
        word_frequency_first: int | Percentage | None = None,
        word_frequency_last: int | Percentage | None = None,
        word_length_min: int | None = None,
        prologue: int = 0,
        epilogue: int = 0,
        choice_variation: float | None = None,
        output_dir: Path | None = None,
    ):
        self.console = console
        self.options = options
        self.notes_name = notes_name
        self.tags = tags or []
        self.limit = limit
        self.word_frequency_min = word_frequency_min
        self.word_frequency_first = word_frequency_first
        self.word_frequency_last = word_frequency_last
        self.word_length_min = word_length_min
        self.prologue = prologue
        self.epilogue = epilogue
        self.choice_variation = choice_variation
        self.output_dir = output_dir

    def execute(self) -> dict[str, Any]:
        """노트를 생성하고 파일로 저장한다.

        Returns:
            실행 결과 딕셔너리 (notes_count, clozes_count, notes_path)
        """
        document = self.options.load_document(self.console)
        rng = random.Random(document.config.seed)

        with self.console.status("Anki 노트 생성 중..."):
            notes = generate_anki_notes(
                document,
                limit=self.limit,
                word_frequency_min=self.word_frequency_min,
                word_length_min=self.word_length_min,
                word_frequency_first=self.word_frequency_first,
                word_frequency_last=self.word_frequency_last,
                before_token_count=self.prologue,
                after_token_count=self.epilogue,
                choice_variation=self.choice_variation,
                rng=rng,
            )

        if not notes:
            logger.warning("빈칸을 만들 수 있는 문장이 없습니다. 빈 노트 파일을 저장합니다.")

        notes_path = export_anki_notes(
            notes,
            self.notes_name,
            self.output_dir,
            note_type=ANKI_NOTE_TYPE_DEFAULT,
            tags=self.tags,
            rng=rng,
        )
        clozes_count = sum(len(note.clozes) for note in notes)

        table = Table(title="🃏 Anki 노트 생성 결과", show_header=True, title_style="bold green")
        table.add_column("항목", style="bold cyan", width=20)
        table.add_column("값", style="yellow", justify="right")

        table.add_row("문장 수", f"{document.get_sentences_count():,}개")
        table.add_row("고유 단어 수", f"{document.get_words_count():,}개")
        table.add_row("노트 수", f"{len(notes):,}개")
        table.add_row("빈칸 수", f"{clozes_count:,}개")
        table.add_row("", "")
        table.add_row("노트 파일", str(notes_path))

        self.console.print()
        self.console.print(table)

        if notes:
            sample_table = Table(title="노트 샘플 (상위 5개)", show_header=True, border_style="dim")
            sample_table.add_column("#", style="dim", width=4, justify="right")
            sample_table.add_column("텍스트", style="white")
            sample_table.add_column("빈칸", style="cyan", justify="right")
            for idx, note in enumerate(notes[:5], 1):
                sample_table.add_row(str(idx), note.text, str(len(note.clozes)))
            self.console.print()
            self.console.print(sample_table)

        self.console.print()
        return {
            "notes_count": len(notes),
            "clozes_count": clozes_count,
            "notes_path": notes_path,
        }

    def get_name(self) -> str:
        """커맨드 이름을 반환한다.

        Returns:
            커맨드 이름 "generate"
        """
        return "generate"
