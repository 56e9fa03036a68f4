"""문서 모델 구성 설정.

분절기(segmenter), 유사도 엔진, 오답 선택기가 공유하는 설정값과
제외 단어 파싱, YAML 설정 파일 로드를 담당한다.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

import yaml

# 토큰에서 키 문자열을 만들 때 제거하는 문자 클래스
TOKEN_KEY_EXCLUDE_DEFAULT = r"[\W_]+"

SENTENCE_WORD_COUNT_MIN_DEFAULT = 3
MAX_EDIT_DISTANCE_DEFAULT = 10
SEED_DEFAULT = 0

# `/expr/` 형태의 제외 항목은 정규식으로 해석한다
_REGEX_EXCLUDE = re.compile(r"^/(?P<expr>.+)/$")
_COMMENT_LINE = re.compile(r"^\s*#")

WordExclude = str | re.Pattern[str]


class ConfigurationError(ValueError):
    """문서 모델 설정이 올바르지 않을 때 발생한다."""


def parse_word_exclude(value: str) -> WordExclude:
    """제외 항목 문자열을 리터럴 또는 정규식으로 변환한다.

    Args:
        value: ``word`` 또는 ``/expr/`` 형식의 문자열

    Returns:
        리터럴 문자열 또는 컴파일된 정규식

    Raises:
        ConfigurationError: 정규식이 올바르지 않은 경우
    """
    if match := _REGEX_EXCLUDE.match(value):
        try:
            return re.compile(match.group("expr"))
        except re.error as e:
            raise ConfigurationError(f"제외 정규식을 해석할 수 없습니다: {value} ({e})") from e
    return value


def parse_word_excludes(lines: Iterable[str]) -> list[WordExclude]:
    """제외 목록 라인에서 주석과 빈 줄을 건너뛰고 제외 항목을 만든다."""
    excludes: list[WordExclude] = []
    for line in lines:
        text = line.strip()
        if not text or _COMMENT_LINE.match(text):
            continue
        excludes.append(parse_word_exclude(text))
    return excludes


@dataclass(frozen=True, slots=True)
class DocumentConfig:
    """문서 모델 구성 설정.

    Attributes:
        case_sensitive: 키 문자열의 대소문자 구분 여부
        word_excludes: 어휘에서 제외할 리터럴 또는 정규식
        sentence_word_count_min: 문장을 끝내기 위한 최소 고유 단어 수
        sentence_token_count_max: 문장당 최대 토큰 수 (None이면 무제한)
        max_edit_distance: 기록할 최대 편집 거리
        token_key_exclude: 키 문자열에서 제거할 문자 클래스 정규식
        workers: 편집 거리 계산 프로세스 수 (0이면 CPU 수)
        seed: 오답 선택용 난수 시드 (기본 0, None을 명시하면 비결정적)
        progress: 편집 거리 계산 진행바 표시 여부
    """

    case_sensitive: bool = False
    word_excludes: tuple[WordExclude, ...] = ()
    sentence_word_count_min: int = SENTENCE_WORD_COUNT_MIN_DEFAULT
    sentence_token_count_max: int | None = None
    max_edit_distance: int | None = MAX_EDIT_DISTANCE_DEFAULT
    token_key_exclude: str = TOKEN_KEY_EXCLUDE_DEFAULT
    workers: int = 1
    seed: int | None = SEED_DEFAULT
    progress: bool = False
    _literal_excludes: frozenset[str] = field(init=False, repr=False, compare=False)
    _pattern_exclude: re.Pattern[str] | None = field(init=False, repr=False, compare=False)
    _token_key_pattern: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.sentence_word_count_min < 0:
            raise ConfigurationError("sentence_word_count_min은 0 이상이어야 합니다.")
        if self.sentence_token_count_max is not None and self.sentence_token_count_max < 1:
            raise ConfigurationError("sentence_token_count_max는 1 이상이어야 합니다.")
        if self.max_edit_distance is not None and self.max_edit_distance < 0:
            raise ConfigurationError("max_edit_distance는 0 이상이어야 합니다.")
        if self.workers < 0:
            raise ConfigurationError("workers는 0 이상이어야 합니다.")

        literals: set[str] = set()
        sources: list[str] = []
        for exclude in self.word_excludes:
            if isinstance(exclude, str):
                literals.add(exclude if self.case_sensitive else exclude.lower())
            else:
                sources.append(f"({exclude.pattern})")

        # 정규식 제외 항목은 하나의 alternation으로 합쳐 한 번에 검사한다
        combined: re.Pattern[str] | None = None
        if sources:
            flags = 0 if self.case_sensitive else re.IGNORECASE
            try:
                combined = re.compile("|".join(sources), flags)
            except re.error as e:
                raise ConfigurationError(f"제외 정규식을 결합할 수 없습니다: {e}") from e

        try:
            token_key_pattern = re.compile(self.token_key_exclude)
        except re.error as e:
            raise ConfigurationError(
                f"token_key_exclude 정규식이 올바르지 않습니다: {self.token_key_exclude} ({e})"
            ) from e

        object.__setattr__(self, "_literal_excludes", frozenset(literals))
        object.__setattr__(self, "_pattern_exclude", combined)
        object.__setattr__(self, "_token_key_pattern", token_key_pattern)

    @property
    def literal_excludes(self) -> frozenset[str]:
        """정규화된 리터럴 제외 집합."""
        return self._literal_excludes

    @property
    def pattern_exclude(self) -> re.Pattern[str] | None:
        """결합된 정규식 제외 패턴."""
        return self._pattern_exclude

    @property
    def token_key_pattern(self) -> re.Pattern[str]:
        return self._token_key_pattern

    def with_overrides(self, **overrides: Any) -> DocumentConfig:
        """None이 아닌 값만 덮어쓴 새 설정을 반환한다."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes) if changes else self

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> DocumentConfig:
        """딕셔너리(YAML 등)에서 설정을 생성한다.

        ``word_excludes`` 는 ``word`` / ``/expr/`` 문자열 목록으로 받는다.

        Raises:
            ConfigurationError: 알 수 없는 키나 잘못된 값이 있는 경우
        """
        known = {f.name for f in fields(cls) if f.init}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"알 수 없는 설정 키: {', '.join(unknown)}")

        kwargs = dict(data)
        excludes = kwargs.pop("word_excludes", None) or []
        if isinstance(excludes, str) or not isinstance(excludes, Iterable):
            raise ConfigurationError("word_excludes는 문자열 목록이어야 합니다.")
        kwargs["word_excludes"] = tuple(parse_word_excludes(str(item) for item in excludes))

        try:
            return cls(**kwargs)
        except TypeError as e:
            raise ConfigurationError(f"설정 값을 해석할 수 없습니다: {e}") from e


def load_config_file(path: Path) -> dict[str, Any]:
    """YAML 설정 파일을 로드한다.

    Args:
        path: YAML 설정 파일 경로

    Returns:
        설정 딕셔너리 (빈 파일이면 빈 딕셔너리)

    Raises:
        FileNotFoundError: 설정 파일이 없는 경우
        ConfigurationError: 최상위가 매핑이 아닌 경우
    """
    if not path.exists():
        raise FileNotFoundError(f"설정 파일이 없습니다: {path}")

    with path.open("r", encoding="utf-8") as handle:
        try:
            payload = yaml.safe_load(handle) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"YAML을 파싱할 수 없습니다: {path} ({e})") from e

    if not isinstance(payload, dict):
        raise ConfigurationError(f"설정 파일의 최상위는 매핑이어야 합니다: {path}")
    return payload
