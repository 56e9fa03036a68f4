"""커맨드 추상 인터페이스와 문서 로드 헬퍼.

모든 커맨드는 Command 추상 클래스를 상속받아 execute()와 get_name()을 구현해야 한다.
원문을 읽어 문서 모델을 만드는 커맨드는 DocumentOptions로 공통 인자를 받는다.
"""

from __future__ import annotations

import argparse
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from rich.console import Console

from quizcard_generator.constants import CONFIG_PATH
from quizcard_generator.corpus.source import read_source_text, read_word_excludes
from quizcard_generator.document import DocumentConfig, QuizDocument, load_config_file, parse_word_exclude

logger = logging.getLogger(__name__)


class SubparsersLike(Protocol):
    """argparse 서브파서 액션 호환 프로토콜."""

    def add_parser(self, name: str, **kwargs: Any) -> argparse.ArgumentParser:
        """서브커맨드 파서를 추가한다."""
        ...


class Command(ABC):
    """CLI 서브커맨드 실행 인터페이스.

    각 커맨드는 configure_parser(), execute(), get_name()을 구현해야 한다.
    """

    @staticmethod
    @abstractmethod
    def configure_parser(subparsers: SubparsersLike) -> None:
        """서브커맨드 파서를 설정한다.

        Args:
            subparsers: 서브파서 액션 객체
        """
        raise NotImplementedError

    @abstractmethod
    def execute(self) -> dict[str, Any]:
        """커맨드 실행 로직.

        Returns:
            실행 결과 딕셔너리
        """
        raise NotImplementedError

    @abstractmethod
    def get_name(self) -> str:
        """커맨드 이름을 반환한다."""
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class DocumentOptions:
    """원문 입력과 문서 모델 설정 인자.

    Attributes:
        input_file: 원문 파일 경로
        input_content: 직접 입력한 원문 텍스트 (input_file보다 우선)
        text_key: JSON/JSONL 텍스트 키
        encoding: 입력 파일 인코딩
        exclude_words: CLI로 받은 제외 항목
        excludes_file: 제외 항목 파일
        sentence_length_min: 문장 최소 고유 단어 수
        sentence_length_max: 문장 최대 토큰 수
        max_edit_distance: 최대 편집 거리
        workers: 편집 거리 계산 프로세스 수
        seed: 난수 시드
        config_path: YAML 설정 파일 경로
    """

    input_file: Path | None = None
    input_content: str | None = None
    text_key: str = "text"
    encoding: str = "utf-8"
    exclude_words: tuple[str, ...] = ()
    excludes_file: Path | None = None
    sentence_length_min: int | None = None
    sentence_length_max: int | None = None
    max_edit_distance: int | None = None
    workers: int | None = None
    seed: int | None = None
    config_path: Path | None = None

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> DocumentOptions:
        """파싱된 인자에서 문서 옵션을 만든다."""
        return cls(
            input_file=args.input_file,
            input_content=args.input_file_content,
            text_key=args.text_key,
            encoding=args.encoding,
            exclude_words=tuple(args.exclude_words or ()),
            excludes_file=args.excludes_file,
            sentence_length_min=args.sentence_length_min,
            sentence_length_max=args.sentence_length_max,
            max_edit_distance=args.max_edit_distance,
            workers=args.workers,
            seed=args.seed,
            config_path=args.config,
        )

    def build_config(self) -> DocumentConfig:
        """YAML 설정 위에 CLI 인자를 덮어쓴 문서 설정을 만든다.

        제외 항목은 YAML, ``--exclude-word``, ``--excludes-file`` 순서로 합친다.

        Raises:
            FileNotFoundError: 명시한 설정/제외 파일이 없는 경우
            ConfigurationError: 설정 값이 올바르지 않은 경우
        """
        config_path = self.config_path
        if config_path is None and CONFIG_PATH.is_file():
            config_path = CONFIG_PATH

        if config_path is not None:
            logger.info("⚙️ 설정 파일 로드: %s", config_path)
            config = DocumentConfig.from_mapping(load_config_file(config_path))
        else:
            config = DocumentConfig()

        excludes = list(config.word_excludes)
        excludes.extend(parse_word_exclude(word) for word in self.exclude_words)
        if self.excludes_file is not None:
            excludes.extend(read_word_excludes(self.excludes_file, encoding=self.encoding))

        return config.with_overrides(
            word_excludes=tuple(excludes),
            sentence_word_count_min=self.sentence_length_min,
            sentence_token_count_max=self.sentence_length_max,
            max_edit_distance=self.max_edit_distance,
            workers=self.workers,
            seed=self.seed,
            progress=True,
        )

    def load_document(self, console: Console) -> QuizDocument:
        """원문을 읽어 통계 계산까지 마친 문서 모델을 만든다."""
        config = self.build_config()

        if self.input_content is not None:
            text, source = self.input_content, None
        elif self.input_file is not None:
            text = read_source_text(self.input_file, text_key=self.text_key, encoding=self.encoding)
            source = self.input_file.name
        else:
            raise ValueError("원문 파일(-i) 또는 원문 텍스트(-I)가 필요합니다.")

        with console.status("문장 분절 중..."):
            document = QuizDocument(text, config, source)
        logger.info(
            "✂️ 문장 %d개, 고유 단어 %d개를 분석했습니다.",
            document.get_sentences_count(),
            document.get_words_count(),
        )
        return document.finish()
