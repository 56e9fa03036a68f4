"""원문 문서와 제외 단어 파일을 읽어 문서 모델 입력으로 변환하는 헬퍼입니다."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterator

from quizcard_generator.document.config import WordExclude, parse_word_excludes

logger = logging.getLogger(__name__)

_ALLOWED_SOURCE_SUFFIXES = {".txt", ".md", ".jsonl", ".json"}

DEFAULT_TEXT_KEY = "text"
DEFAULT_ENCODING = "utf-8"


def _extract_texts_from_records(path: Path, text_key: str, encoding: str) -> Iterator[str]:
    """json/jsonl 파일의 레코드에서 ``text_key`` 텍스트를 순차적으로 추출합니다."""
    suffix = path.suffix.lower()

    if suffix == ".jsonl":
        with path.open("r", encoding=encoding) as handle:
            for line_number, line in enumerate(handle, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    record = json.loads(line)
                except json.JSONDecodeError as exc:
                    logger.warning("%s:%d jsonl 라인을 해석할 수 없습니다: %s", path, line_number, exc)
                    continue
                if isinstance(record, dict) and isinstance(record.get(text_key), str):
                    text = record[text_key].strip()
                    if text:
                        yield text
        return

    try:
        with path.open("r", encoding=encoding) as handle:
            payload = json.load(handle)
    except json.JSONDecodeError as exc:
        raise ValueError(f"{path} 파일을 json으로 파싱할 수 없습니다: {exc}") from exc

    records = payload if isinstance(payload, list) else [payload]
    for record in records:
        if isinstance(record, dict) and text_key in record:
            text = str(record[text_key]).strip()
            if text:
                yield text


def read_source_text(
    path: Path,
    *,
    text_key: str = DEFAULT_TEXT_KEY,
    encoding: str = DEFAULT_ENCODING,
) -> str:
    """원문 파일을 읽어 문서 텍스트를 반환합니다.

    텍스트 파일은 줄 구조를 그대로 유지하고, json/jsonl 파일은 레코드마다
    ``text_key`` 값을 한 줄로 이어 붙입니다.

    Args:
        path: 원문 파일 경로 (.txt, .md, .json, .jsonl)
        text_key: json/jsonl 레코드에서 텍스트를 읽을 키
        encoding: 파일 인코딩

    Returns:
        문서 텍스트

    Raises:
        FileNotFoundError: 파일이 없는 경우
        ValueError: 지원하지 않는 확장자이거나 json을 해석할 수 없는 경우
    """
    if not path.is_file():
        raise FileNotFoundError(f"원문 파일을 찾을 수 없습니다: {path}")

    suffix = path.suffix.lower()
    if suffix not in _ALLOWED_SOURCE_SUFFIXES:
        raise ValueError(
            f"지원하지 않는 원문 형식입니다: {path} "
            f"(허용: {', '.join(sorted(_ALLOWED_SOURCE_SUFFIXES))})"
        )

    if suffix in {".txt", ".md"}:
        text = path.read_text(encoding=encoding)
        logger.info("📄 원문 로드: %s (%d자)", path, len(text))
        return text

    texts = list(_extract_texts_from_records(path, text_key, encoding))
    if not texts:
        logger.warning("%s에서 '%s' 텍스트를 추출하지 못했습니다.", path, text_key)
    logger.info("📄 원문 로드: %s (레코드 %d개)", path, len(texts))
    return "\n".join(texts)


def read_word_excludes(path: Path, *, encoding: str = DEFAULT_ENCODING) -> list[WordExclude]:
    """제외 단어 파일을 읽습니다.

    한 줄에 하나의 ``word`` 또는 ``/expr/`` 항목을 두며, ``#`` 주석과 빈 줄은 무시합니다.

    Raises:
        FileNotFoundError: 파일이 없는 경우
        ConfigurationError: 정규식 항목이 올바르지 않은 경우
    """
    if not path.is_file():
        raise FileNotFoundError(f"제외 단어 파일을 찾을 수 없습니다: {path}")

    with path.open("r", encoding=encoding) as handle:
        excludes = parse_word_excludes(handle)

    logger.info("🚫 제외 단어 %d개 로드: %s", len(excludes), path)
    return excludes
