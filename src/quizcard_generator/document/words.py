"""어휘 인덱스와 단어 모델.

정규화된 키 문자열로 토큰을 중복 제거하여 ``Word`` 로 관리하고,
각 출현 위치와 편집 거리 버킷을 보관한다.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from .distance import WordEditDistance


@dataclass(frozen=True, slots=True)
class WordLocation:
    """단어의 출현 위치 하나.

    Attributes:
        line: 원문 줄 번호 (0부터)
        char_on_line: 줄 안의 문자 오프셋
        token_on_line: 줄 안의 토큰 순번
        sentence_index: 소속 문장 인덱스
        token_in_sentence: 문장 안의 토큰 인덱스
        raw_string: 이 위치에서의 원문 토큰 (구두점 포함)
    """

    line: int
    char_on_line: int
    token_on_line: int
    sentence_index: int
    token_in_sentence: int
    raw_string: str


class Word:
    """문서 안에서 고유한 키 문자열을 가지는 단어."""

    __slots__ = (
        "id",
        "key",
        "raw_string",
        "probability",
        "_locations",
        "_sentence_locations",
        "_distances",
        "_distances_by_key",
        "_distance_min",
        "_distance_max",
    )

    def __init__(self, word_id: int, key: str, raw_string: str) -> None:
        if not key:
            raise ValueError("단어 키 문자열은 비어 있을 수 없습니다.")
        self.id = word_id
        self.key = key
        # 처음 등장한 위치의 원문 토큰
        self.raw_string = raw_string
        self.probability = 0.0
        self._locations: list[WordLocation] = []
        self._sentence_locations: dict[tuple[int, int], WordLocation] = {}
        self._distances: dict[int, list[str]] = {}
        self._distances_by_key: dict[str, WordEditDistance] = {}
        self._distance_min: int | None = None
        self._distance_max: int | None = None

    def __len__(self) -> int:
        return len(self.key)

    def __repr__(self) -> str:
        return f"Word(id={self.id}, key={self.key!r}, frequency={self.frequency})"

    def __str__(self) -> str:
        return self.raw_string

    # ------------- occurrences -------------

    def add_location(self, location: WordLocation) -> None:
        self._locations.append(location)
        self._sentence_locations[(location.sentence_index, location.token_in_sentence)] = location

    @property
    def locations(self) -> tuple[WordLocation, ...]:
        return tuple(self._locations)

    @property
    def frequency(self) -> int:
        return len(self._locations)

    def update_probability(self, population_count: int) -> None:
        self.probability = self.frequency / population_count if population_count else 0.0

    def get_location(self, sentence_index: int, token_in_sentence: int) -> WordLocation | None:
        return self._sentence_locations.get((sentence_index, token_in_sentence))

    def get_raw_string(self, sentence_index: int | None = None, token_in_sentence: int | None = None) -> str:
        """지정 위치의 원문 토큰을 반환한다.

        위치를 찾지 못하면 처음 등장한 원문 토큰을 반환한다.
        """
        if sentence_index is not None and token_in_sentence is not None:
            location = self.get_location(sentence_index, token_in_sentence)
            if location is not None:
                return location.raw_string
        return self.raw_string

    # ------------- edit distances -------------

    def set_distance(self, other_key: str, edit_distance: WordEditDistance) -> None:
        """다른 단어와의 거리를 버킷에 기록한다."""
        if other_key == self.key:
            raise ValueError(f"자기 자신과의 거리는 기록하지 않습니다: {self.key}")

        self._distances_by_key[other_key] = edit_distance
        self._distances.setdefault(edit_distance.distance, []).append(other_key)

        distance = edit_distance.distance
        if self._distance_min is None or distance < self._distance_min:
            self._distance_min = distance
        if self._distance_max is None or distance > self._distance_max:
            self._distance_max = distance

    def get_distance(self, other: Word | str) -> WordEditDistance | None:
        key = other.key if isinstance(other, Word) else other
        return self._distances_by_key.get(key)

    def get_words_at_distance(self, distance: int) -> list[str]:
        return list(self._distances.get(distance, ()))

    @property
    def distance_range(self) -> tuple[int, int] | None:
        """관측된 (최소, 최대) 거리. 기록된 거리가 없으면 None."""
        if self._distance_min is None or self._distance_max is None:
            return None
        return self._distance_min, self._distance_max


@dataclass
class Vocabulary:
    """키 문자열 → ``Word`` 어휘 인덱스.

    단어는 생성 순서대로 조밀한 정수 id를 부여받는다.
    """

    case_sensitive: bool = False
    _words: dict[str, Word] = field(default_factory=dict)
    _by_id: list[Word] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self._by_id)

    def __iter__(self) -> Iterator[Word]:
        return iter(self._by_id)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.normalize_key(key) in self._words

    def normalize_key(self, key: str) -> str:
        return key if self.case_sensitive else key.lower()

    def add_occurrence(self, key: str, raw_string: str, location: WordLocation) -> Word:
        """단어를 새로 만들거나 기존 단어에 출현 위치를 추가한다."""
        word = self._words.get(key)
        if word is None:
            word = Word(len(self._by_id), key, raw_string)
            self._words[key] = word
            self._by_id.append(word)
        word.add_location(location)
        return word

    def get(self, key: str) -> Word | None:
        return self._words.get(self.normalize_key(key))

    def words(self) -> list[Word]:
        """id 순서(삽입 순서)의 단어 목록."""
        return list(self._by_id)
