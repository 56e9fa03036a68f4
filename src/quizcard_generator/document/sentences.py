"""문장과 토큰 모델.

토큰은 어휘에 등록된 단어를 가리키는 ``WordToken`` 과 해석하지 않는
원문 조각인 ``LiteralToken`` 의 태그 유니온이다.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from .words import Word

TOKEN_DELIMITER = " "


@dataclass(frozen=True, slots=True)
class WordToken:
    """어휘 단어를 가리키는 토큰. ``raw`` 는 이 위치의 원문 토큰이다."""

    word: Word
    raw: str

    def __str__(self) -> str:
        return self.raw


@dataclass(frozen=True, slots=True)
class LiteralToken:
    """어휘에 들어가지 않는 원문 조각 (구두점, 제외 단어 등)."""

    text: str

    def __str__(self) -> str:
        return self.text


Token = WordToken | LiteralToken


@dataclass(eq=False)
class Sentence:
    """문서 안의 문장 하나.

    이전/다음 문장은 문서의 평탄한 문장 목록에 대한 인덱스로만 참조한다.

    Attributes:
        index: 문장 순번
        source: 원문 출처 (파일 경로 또는 URL)
        previous_index: 이전 문장 인덱스
        next_index: 다음 문장 인덱스
    """

    index: int
    source: str | None = None
    previous_index: int | None = None
    next_index: int | None = None
    _tokens: list[Token] = field(default_factory=list, repr=False)
    _words: dict[str, Word] = field(default_factory=dict, repr=False)
    _sealed: bool = field(default=False, repr=False)

    def add_token(self, token: Token) -> None:
        if self._sealed:
            raise RuntimeError(f"봉인된 문장에는 토큰을 추가할 수 없습니다: s{self.index}")
        self._tokens.append(token)
        match token:
            case WordToken(word=word):
                self._words.setdefault(word.key, word)
            case LiteralToken():
                pass

    def seal(self) -> None:
        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    def is_empty(self) -> bool:
        return not self._tokens

    def get_words(self) -> Iterator[Word]:
        return iter(self._words.values())

    def get_word_count(self) -> int:
        return len(self._words)

    def get_tokens(self) -> tuple[Token, ...]:
        return tuple(self._tokens)

    def get_token_count(self) -> int:
        return len(self._tokens)

    def text(self) -> str:
        return TOKEN_DELIMITER.join(str(token) for token in self._tokens)

    def __str__(self) -> str:
        return self.text()
