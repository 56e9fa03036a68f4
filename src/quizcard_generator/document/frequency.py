"""단어 빈도 분석.

어휘 인덱스가 완성된 뒤 단어별 확률을 갱신하고 빈도 내림차순 순위를 만든다.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass

from .words import Word

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Percentage:
    """``30%`` 처럼 표현되는 비율 값."""

    value: float

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError(f"비율은 음수일 수 없습니다: {self.value}%")

    @property
    def proportion(self) -> float:
        return self.value / 100

    @classmethod
    def parse(cls, text: str) -> Percentage:
        """``"30%"`` 형식의 문자열을 해석한다."""
        stripped = text.strip()
        if not stripped.endswith("%"):
            raise ValueError(f"비율 문자열은 %로 끝나야 합니다: {text!r}")
        try:
            return cls(float(stripped[:-1]))
        except ValueError as e:
            raise ValueError(f"비율을 해석할 수 없습니다: {text!r}") from e

    def __str__(self) -> str:
        return f"{self.value:g}%"


def percentage_or_number(value: str | int | float | Percentage | None) -> Percentage | int | float | None:
    """숫자 또는 ``N%`` 문자열을 숫자/``Percentage`` 로 변환한다.

    Raises:
        ValueError: 해석할 수 없는 문자열인 경우
    """
    if value is None or isinstance(value, (Percentage, int, float)):
        return value
    text = value.strip()
    if text.endswith("%"):
        return Percentage.parse(text)
    try:
        return int(text)
    except ValueError:
        try:
            return float(text)
        except ValueError as e:
            raise ValueError(f"숫자 또는 비율을 해석할 수 없습니다: {value!r}") from e


def update_probabilities(words: Iterable[Word], population_count: int) -> None:
    """단어별 확률 = 빈도 / 고유 단어 수 를 갱신한다."""
    for word in words:
        word.update_probability(population_count)


class FrequencyIndex:
    """빈도 내림차순 단어 순위.

    동일 빈도는 삽입 순서를 유지한다(안정 정렬).
    """

    def __init__(self, words: Iterable[Word]) -> None:
        self._desc: list[Word] = sorted(words, key=lambda word: -word.frequency)
        self._cache: dict[tuple[int, bool], frozenset[str]] = {}

    def __len__(self) -> int:
        return len(self._desc)

    def get_word_by_frequency_index(self, index: int, descending: bool = True) -> Word | None:
        """빈도 순위 ``index`` 번째 단어를 반환한다. 범위를 벗어나면 None."""
        if index < 0 or index >= len(self._desc):
            return None
        if not descending:
            index = len(self._desc) - 1 - index
        return self._desc[index]

    def resolve_limit(self, limit: int | float | Percentage) -> int:
        """개수 또는 비율을 순위 개수로 변환한다 (비율은 올림)."""
        if isinstance(limit, Percentage):
            resolved = math.ceil(limit.proportion * len(self._desc))
            logger.debug("빈도 비율 %s → %d개", limit, resolved)
            return resolved
        return max(0, int(limit))

    def get_words_by_frequency(self, limit: int | float | Percentage, highest: bool = True) -> frozenset[str]:
        """빈도 상위(또는 하위) N개 단어의 키 집합을 반환한다.

        요청 크기와 방향별로 결과를 캐시한다.
        """
        count = self.resolve_limit(limit)
        cache_key = (count, highest)
        if (cached := self._cache.get(cache_key)) is not None:
            return cached

        if highest:
            selected = self._desc[:count]
        else:
            selected = self._desc[max(len(self._desc) - count, 0):]
        result = frozenset(word.key for word in selected)
        self._cache[cache_key] = result
        return result
