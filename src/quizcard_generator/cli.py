"""Quizcard Generator CLI 진입점 모듈.

원문 분석과 Anki 노트 생성을 위한 명령줄 인터페이스를 제공한다.
Rich 기반 콘솔 출력 및 로깅을 지원한다.
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable, Sequence
from functools import lru_cache
from pathlib import Path
from time import perf_counter
from typing import Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from quizcard_generator.commands import AnalyzeCommand, Command, DocumentOptions, GenerateCommand
from quizcard_generator.document.config import ConfigurationError
from quizcard_generator.parser import setup_parser
from quizcard_generator.utils.logging_config import get_console, setup_logging

LOGGER_NAME = "quizcard_generator.cli"
CONSOLE = get_console()


_COMMAND_REGISTRY: dict[str, Callable[[argparse.Namespace], Command]] = {}


def register_command(name: str) -> Callable:
    """커맨드 팩토리 함수를 레지스트리에 등록하는 데코레이터.

    Args:
        name: 커맨드 이름 (CLI 서브커맨드 이름)

    Returns:
        데코레이터 함수
    """
    def decorator(factory: Callable[[argparse.Namespace], Command]) -> Callable:
        _COMMAND_REGISTRY[name] = factory
        return factory
    return decorator


@lru_cache(maxsize=1)
def _get_banner() -> str:
    """pyfiglet ASCII 아트 배너를 캐싱하여 반환한다."""
    from pyfiglet import Figlet
    return Figlet(font="standard").renderText("Quizcard").rstrip()


def print_banner() -> None:
    """시작 배너를 출력한다."""
    CONSOLE.print(Text(_get_banner(), style="bold cyan"))


@register_command("analyze")
def _create_analyze_command(a: argparse.Namespace) -> AnalyzeCommand:
    """AnalyzeCommand 팩토리 함수."""
    return AnalyzeCommand(
        CONSOLE, DocumentOptions.from_args(a), a.output_frequency, a.output_distractors,
        a.output_log, a.distractor_count, a.choice_variation
    )


@register_command("generate")
def _create_generate_command(a: argparse.Namespace) -> GenerateCommand:
    """GenerateCommand 팩토리 함수."""
    return GenerateCommand(
        CONSOLE, DocumentOptions.from_args(a), a.anki_notes_name, a.tags, a.limit,
        a.word_frequency_min, a.word_frequency_first, a.word_frequency_last, a.word_length_min,
        a.prologue, a.epilogue, a.choice_variation, a.output_dir
    )


def create_command(args: argparse.Namespace) -> Command:
    """커맨드 객체를 생성한다.

    Args:
        args: 파싱된 커맨드라인 인자

    Returns:
        생성된 Command 객체

    Raises:
        NotImplementedError: 유효하지 않은 커맨드인 경우
    """
    if factory := _COMMAND_REGISTRY.get(args.command):
        return factory(args)
    raise NotImplementedError(f"'{args.command}'는 유효하지 않은 커맨드입니다.")


def format_time(elapsed: float) -> str:
    """경과 시간을 사람이 읽기 쉬운 형태로 포맷팅한다.

    Args:
        elapsed: 경과 시간 (초 단위)

    Returns:
        포맷팅된 시간 문자열 (예: "500ms", "3.14초", "2분 30.5초")
    """
    if elapsed < 1:
        return f"{elapsed*1000:.0f}ms"
    if elapsed < 60:
        return f"{elapsed:.2f}초"
    minutes, seconds = divmod(elapsed, 60)
    return f"{int(minutes)}분 {seconds:.1f}초"


def format_value(value: Any) -> str:
    """결과 값을 포맷팅한다. 120자를 초과하면 잘라낸다."""
    formatters = {
        dict: lambda v: f"dict({len(v)})",
        list: lambda v: f"list({len(v)})",
        int: lambda v: f"{v:,}",
    }
    formatted = str(value) if isinstance(value, Path) else formatters.get(type(value), str)(value)
    return formatted[:117] + "..." if len(formatted) > 120 else formatted


def create_result_table(command_name: str, elapsed: float, result: dict[str, Any]) -> Panel:
    """실행 결과 테이블을 생성한다.

    Args:
        command_name: 커맨드 이름
        elapsed: 경과 시간 (초 단위)
        result: 실행 결과 딕셔너리

    Returns:
        생성된 Rich Panel 객체
    """
    table = Table(show_header=True, border_style="dim", padding=(0, 1))
    table.add_column("항목", style="bold cyan", width=25)
    table.add_column("값", style="yellow", justify="left")

    table.add_row("⏱️  실행 시간", format_time(elapsed))

    for key, value in result.items():
        formatted_key = key.replace("_", " ").title()
        table.add_row(f"   {formatted_key}", format_value(value))

    return Panel(
        table,
        title=f"[bold green]✅ {command_name} 완료[/bold green]",
        border_style="green",
        padding=(1, 2)
    )


# 에러 타입별 카테고리 (구체적인 타입을 먼저 검사한다)
_ERROR_CATEGORIES: dict[type[Exception], tuple[str, str, str]] = {
    ConfigurationError: ("설정 오류", "⚙️", "설정 오류"),
    NotImplementedError: ("미구현 기능", "⚠️", "미구현/미지원 오류"),
    FileNotFoundError: ("파일 없음", "📁", "파일 찾기 실패"),
    ValueError: ("입력값 오류", "⚠️", "입력값 오류"),
}


def categorize_error(error: Exception) -> tuple[str, str, str] | None:
    """예외에 해당하는 (카테고리, 아이콘, 로그 메시지)를 반환한다."""
    for error_type, category in _ERROR_CATEGORIES.items():
        if isinstance(error, error_type):
            return category
    return None


def handle_error(error: Exception, command: str, elapsed: float, logger: logging.Logger) -> None:
    """에러를 처리하고 출력한다.

    Args:
        error: 발생한 예외
        command: 실행 중이던 커맨드 이름
        elapsed: 경과 시간 (초 단위)
        logger: 로거 객체
    """
    error_type = type(error).__name__
    known = categorize_error(error)
    category, icon, log_msg = known or ("예기치 않은 오류", "❌", "실행 중 예기치 않은 오류 발생")

    if known is not None:
        logger.error("[%s] %s: %s", command, log_msg, error)
    else:
        logger.exception("[%s] %s", command, log_msg)

    error_table = Table(show_header=False, border_style="dim red", padding=(0, 1))
    error_table.add_column("항목", style="bold red", width=15)
    error_table.add_column("내용", style="white")

    error_table.add_row("카테고리", f"{icon} {category}")
    error_table.add_row("오류 타입", error_type)
    error_table.add_row("메시지", str(error))
    error_table.add_row("경과 시간", format_time(elapsed))

    CONSOLE.print()
    CONSOLE.print(
        Panel(error_table, title=f"[bold red]❌ {command} 실행 실패[/bold red]",
              border_style="red", padding=(1, 2))
    )
    CONSOLE.print()

    help_text = Text()
    help_text.append("💡 도움말: ", style="bold yellow")
    help_text.append(f"quizcard {command} --help", style="cyan")
    help_text.append(" 명령으로 상세 옵션을 확인하세요", style="dim")
    CONSOLE.print(help_text)
    CONSOLE.print()


def main(argv: Sequence[str] | None = None) -> int:
    """CLI 엔트리 포인트.

    Args:
        argv: 명령줄 인자 (None이면 sys.argv 사용)

    Returns:
        종료 코드 (0: 성공, 1: 오류, 2: 인자 오류, 130: 사용자 중단)
    """
    print_banner()
    try:
        args = setup_parser(CONSOLE, (AnalyzeCommand, GenerateCommand)).parse_args(argv)
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 2

    setup_logging(
        getattr(logging, args.log_level.upper(), logging.INFO),
        log_to_file=not args.no_log_file,
        log_dir=args.log_dir,
    )
    logger = logging.getLogger(LOGGER_NAME)
    start = perf_counter()

    try:
        command = create_command(args)
        command_name = command.get_name()
        logger.info("[%s] 시작", command_name)
        result = command.execute()
        elapsed = perf_counter() - start

        logger.info("[%s] 완료 (%.2fs)", command_name, elapsed)
        CONSOLE.print(create_result_table(command_name, elapsed, result))
        return 0

    except KeyboardInterrupt:
        logger.warning("사용자 요청으로 실행 중단됨")
        return 130

    except Exception as e:
        handle_error(e, args.command, perf_counter() - start, logger)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
