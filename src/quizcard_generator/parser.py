"""CLI 인자 파서 설정 모듈.

argparse 기반 CLI 파서와 서브커맨드를 정의한다.
검증 함수, 문서 공통 인자와 서브파서 구성을 담당한다.
"""

from __future__ import annotations

import argparse
from collections.abc import Iterable
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.panel import Panel

from quizcard_generator.anki.notes import resolve_choice_variation
from quizcard_generator.document.frequency import Percentage, percentage_or_number

if TYPE_CHECKING:
    from quizcard_generator.commands.base import Command


class CliHelpFormatter(argparse.ArgumentDefaultsHelpFormatter, argparse.RawTextHelpFormatter):
    """CLI 도움말 포맷터.

    ArgumentDefaultsHelpFormatter와 RawTextHelpFormatter를 결합하여
    기본값 표시와 원시 텍스트 포맷을 동시에 지원한다.
    """


class CliArgumentParser(argparse.ArgumentParser):
    """오류 메시지를 Rich 스타일로 출력하는 argparse 파서.

    인자 파싱 오류 발생 시 Rich Panel로 오류를 표시한다.

    Attributes:
        console: Rich 콘솔 인스턴스
    """

    def __init__(self, console: Console | None = None, **kwargs: Any) -> None:
        self.console = console or Console()
        super().__init__(**kwargs)

    def error(self, message: str) -> None:
        """인자 파싱 오류를 Rich 패널로 출력한다.

        Args:
            message: 오류 메시지
        """
        self.console.print(
            Panel.fit(
                f"[bold red]인자 오류[/bold red]\n{message}\n\n[dim]도움말: quizcard --help[/dim]",
                title="CLI 입력 오류",
                border_style="red",
            )
        )
        raise SystemExit(2)


def validate_int(value: str, minimum: int = 0) -> int:
    """정수 값을 검증한다.

    Args:
        value: 파싱할 문자열 값
        minimum: 허용되는 최소값 (기본값: 0)

    Returns:
        파싱된 정수 값

    Raises:
        argparse.ArgumentTypeError: 값이 정수가 아니거나 최소값보다 작은 경우
    """
    try:
        if (parsed := int(value)) < minimum:
            raise argparse.ArgumentTypeError(f"{minimum} 이상의 정수만 허용됩니다.")
        return parsed
    except ValueError as e:
        raise argparse.ArgumentTypeError("정수를 입력해야 합니다.") from e


non_negative_int = partial(validate_int, minimum=0)
positive_int = partial(validate_int, minimum=1)


def count_or_percentage(value: str) -> int | Percentage:
    """``N`` 또는 ``N%`` 형식의 순위 개수를 검증한다."""
    try:
        parsed = percentage_or_number(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError("정수 또는 N% 형식이어야 합니다.") from e
    if isinstance(parsed, Percentage):
        return parsed
    if isinstance(parsed, float) or parsed is None or parsed < 0:
        raise argparse.ArgumentTypeError("0 이상의 정수 또는 N% 형식이어야 합니다.")
    return parsed


def probability(value: str) -> float:
    """``0.3`` 또는 ``30%`` 형식의 확률을 검증한다."""
    try:
        resolved = resolve_choice_variation(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e
    return 0.0 if resolved is None else resolved


@dataclass
class ArgConfig:
    """공통 인자 설정을 담는 데이터클래스."""

    flags: tuple[str, ...]
    type: Any = str
    default: Any = None
    help: str = ""
    action: str | None = None
    dest: str | None = None


# 문서 공통 인자 설정 (데이터 기반)
DOCUMENT_ARG_CONFIGS: dict[str, ArgConfig] = {
    "text-key": ArgConfig(("--text-key",), str, "text", "JSON/JSONL 파일에서 텍스트를 읽어올 키"),
    "encoding": ArgConfig(("--encoding",), str, "utf-8", "입력 파일 인코딩"),
    "exclude-word": ArgConfig(
        ("-E", "--exclude-word"), str, None, "어휘에서 제외할 단어 또는 /정규식/ (반복 가능)", "append", "exclude_words"
    ),
    "excludes-file": ArgConfig(("-e", "--excludes-file"), Path, None, "한 줄에 하나씩 제외 항목을 적은 파일"),
    "sentence-length-min": ArgConfig(
        ("--sentence-length-min",), non_negative_int, None, "문장을 끝내기 위한 최소 고유 단어 수 (기본: 3)"
    ),
    "sentence-length-max": ArgConfig(
        ("--sentence-length-max",), positive_int, None, "문장당 최대 토큰 수 (기본: 제한 없음)"
    ),
    "max-edit-distance": ArgConfig(
        ("--max-edit-distance",), non_negative_int, None, "기록할 최대 편집 거리 (기본: 10)"
    ),
    "workers": ArgConfig(("--workers",), non_negative_int, None, "편집 거리 계산 프로세스 수 (0이면 CPU 수)"),
    "seed": ArgConfig(("--seed",), int, None, "오답 선택 난수 시드 (기본 0, 설정 파일의 seed: null이면 비결정적)"),
    "config": ArgConfig(("--config",), Path, None, "YAML 설정 파일 경로 (기본: ./quizcard.yaml 이 있으면 사용)"),
}


def add_document_args(parser: argparse.ArgumentParser) -> None:
    """원문 입력과 문서 모델 설정 인자를 파서에 추가한다.

    DOCUMENT_ARG_CONFIGS에서 설정을 조회하여 데이터 기반으로 인자를 추가한다.

    Args:
        parser: 인자를 추가할 파서
    """
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("-i", "--input-file", type=Path, help="원문 파일 경로 (.txt, .md, .json, .jsonl)")
    source.add_argument("-I", "--input-file-content", help="원문 텍스트를 직접 입력")

    for config in DOCUMENT_ARG_CONFIGS.values():
        kwargs: dict[str, Any] = {"default": config.default, "help": config.help}
        if config.action:
            kwargs["action"] = config.action
        if config.type is not None:
            kwargs["type"] = config.type
        if config.dest:
            kwargs["dest"] = config.dest
        parser.add_argument(*config.flags, **kwargs)


def setup_parser(console: Console, commands: Iterable[type[Command]]) -> argparse.ArgumentParser:
    """CLI 파서를 설정한다.

    각 Command 서브클래스의 configure_parser()를 호출하여 서브커맨드를 등록한다.

    Args:
        console: Rich 콘솔 인스턴스 (오류 출력용)
        commands: Command 서브클래스 이터러블

    Returns:
        설정된 ArgumentParser 객체
    """
    parser = CliArgumentParser(
        console,
        prog="quizcard",
        description="원문 텍스트에서 빈칸 채우기 퀴즈 카드와 오답 보기를 생성하는 CLI",
        formatter_class=CliHelpFormatter,
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="콘솔 로깅 레벨",
    )
    parser.add_argument("--no-log-file", action="store_true", help="로그 파일을 만들지 않는다")
    parser.add_argument("--log-dir", type=Path, default=None, help="로그 파일 디렉토리 (기본: out/logs)")

    subparsers = parser.add_subparsers(dest="command", required=True, metavar="command")
    for cmd_cls in commands:
        cmd_cls.configure_parser(subparsers)

    return parser
