"""문서 어휘 분석 커맨드.

원문을 문장과 단어로 분석하고 단어 빈도와 단어별 오답 보기를
리포트(parquet, CSV, 마크다운)로 저장한다.
"""

from __future__ import annotations

import logging
import random
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.table import Table

from quizcard_generator.analysis.distractor_report import DISTRACTOR_COUNT_DEFAULT, analyze_document
from quizcard_generator.constants import ANALYSIS_LOG_FILE, WORD_DISTRACTORS_FILE, WORD_FREQUENCY_FILE
from quizcard_generator.parser import CliHelpFormatter, add_document_args, positive_int, probability

from .base import Command, DocumentOptions, SubparsersLike

logger = logging.getLogger(__name__)


class AnalyzeCommand(Command):
    """문서 어휘 분석 커맨드.

    Attributes:
        console: Rich 콘솔 인스턴스
        options: 원문 입력과 문서 설정
        output_frequency: 단어 빈도 parquet 출력 경로
        output_distractors: 오답 보기 CSV 출력 경로
        output_log: 분석 로그 출력 경로
        distractor_count: 단어당 오답 보기 수
        choice_variation: 오답 보기를 무작위 단어로 바꿀 확률
    """

    @staticmethod
    def configure_parser(subparsers: SubparsersLike) -> None:
        """서브커맨드 파서를 설정한다.

        Args:
            subparsers: 서브파서 액션 객체
        """
        parser = subparsers.add_parser("analyze", help="단어 빈도 및 오답 보기 분석", formatter_class=CliHelpFormatter)
        add_document_args(parser)
        parser.add_argument(
            "--output-frequency", type=Path, default=WORD_FREQUENCY_FILE, help="단어 빈도 parquet 출력 경로"
        )
        parser.add_argument(
            "--output-distractors", type=Path, default=WORD_DISTRACTORS_FILE, help="오답 보기 CSV 출력 경로"
        )
        parser.add_argument("--output-log", type=Path, default=ANALYSIS_LOG_FILE, help="분석 로그 출력 경로")
        parser.add_argument(
            "--distractor-count", type=positive_int, default=DISTRACTOR_COUNT_DEFAULT, help="단어당 오답 보기 수"
        )
        parser.add_argument(
            "--choice-variation", type=probability, default=None, help="오답 보기를 무작위 단어로 바꿀 확률 (0.3 또는 30%%)"
        )

    def __init__(
        self,
        console: Console,
        options: DocumentOptions,
        output_frequency: Path,
        output_distractors: Path,
        output_log: Path,
        distractor_count: int = DISTRACTOR_COUNT_DEFAULT,
        choice_variation: float | None = None,
    ):
        self.console = console
        self.options = options
        self.output_frequency = output_frequency
        self.output_distractors = output_distractors
        self.output_log = output_log
        self.distractor_count = distractor_count
        self.choice_variation = choice_variation

    def execute(self) -> dict[str, Any]:
        """분석을 실행하고 리포트를 저장한다.

        Returns:
            분석 결과 딕셔너리 (sentences_count, words_count, distance_pairs, 리포트 경로)
        """
        document = self.options.load_document(self.console)
        rng = random.Random(document.config.seed)

        with self.console.status("오답 보기 리포트 작성 중..."):
            result = analyze_document(
                document,
                output_frequency=self.output_frequency,
                output_distractors=self.output_distractors,
                output_log=self.output_log,
                distractor_count=self.distractor_count,
                random_probability=self.choice_variation,
                rng=rng,
            )

        table = Table(title="✨ 문서 어휘 분석 결과", show_header=True, title_style="bold green")
        table.add_column("항목", style="bold cyan", width=20)
        table.add_column("값", style="yellow", justify="right")

        table.add_row("문장 수", f"{result['sentences_count']:,}개")
        table.add_row("고유 단어 수", f"{result['words_count']:,}개")
        table.add_row("한도 안의 단어 쌍", f"{result['distance_pairs']:,}개")
        table.add_row("", "")
        table.add_row("빈도 파일", str(result["frequency_path"]))
        table.add_row("오답 보기 파일", str(result["distractors_path"]))
        table.add_row("분석 로그", str(result["log_path"]))

        self.console.print()
        self.console.print(table)

        top_count = min(10, document.get_words_count())
        if top_count:
            top_table = Table(title=f"🏆 상위 {top_count}개 빈도 단어", show_header=True, border_style="dim")
            top_table.add_column("순위", style="dim", width=6, justify="center")
            top_table.add_column("단어", style="cyan")
            top_table.add_column("빈도", style="yellow", justify="right")
            top_table.add_column("가까운 단어", style="white")

            for rank in range(top_count):
                word = document.get_word_by_frequency_index(rank)
                if word is None:
                    break
                neighbours = document.closest_words(word, self.distractor_count, rng=random.Random(document.config.seed))
                rank_style = "bold green" if rank < 3 else "dim"
                top_table.add_row(
                    f"{rank + 1}", word.key, f"{word.frequency:,}회", ", ".join(neighbours) or "-", style=rank_style
                )

            self.console.print()
            self.console.print(top_table)

        self.console.print()
        return dict(result)

    def get_name(self) -> str:
        """커맨드 이름을 반환한다.

        Returns:
            커맨드 이름 "analyze"
        """
        return "analyze"
