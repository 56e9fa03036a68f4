"""문장을 Anki 빈칸 채우기(cloze) 노트로 변환합니다."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field

from quizcard_generator.document.frequency import Percentage, percentage_or_number
from quizcard_generator.document.model import QuizDocument
from quizcard_generator.document.sentences import TOKEN_DELIMITER, LiteralToken, Sentence, WordToken

logger = logging.getLogger(__name__)

CHOICES_MAX = 4


@dataclass(frozen=True, slots=True)
class AnkiCloze:
    """노트 텍스트 안의 빈칸 하나.

    Attributes:
        index: 노트 안의 빈칸 번호 (1부터)
        value: 빈칸에 들어가는 원문 토큰
        key: 정답 단어 키
        hint: 빈칸 힌트
    """

    index: int
    value: str
    key: str
    hint: str | None = None

    def __str__(self) -> str:
        hint_suffix = f":{self.hint}" if self.hint is not None else ""
        return f"{{{{c{self.index}::{self.value}{hint_suffix}}}}}"


@dataclass(slots=True)
class AnkiNote:
    """문장 하나에서 만든 Anki 노트.

    Attributes:
        text: 빈칸 표기가 포함된 노트 텍스트
        clozes: 빈칸 목록
        choices: 빈칸 번호 → 오답 보기 키 목록
        prologue: 앞 문장의 마지막 토큰들
        epilogue: 뒤 문장의 처음 토큰들
        source: 원문 출처
        source_line: 문장이 시작하는 원문 줄 번호 (1부터)
    """

    text: str
    clozes: list[AnkiCloze]
    choices: dict[int, list[str]] = field(default_factory=dict)
    prologue: str = ""
    epilogue: str = ""
    source: str | None = None
    source_line: int | None = None

    @classmethod
    def from_sentence(
        cls,
        document: QuizDocument,
        sentence: Sentence,
        *,
        word_frequency_min: int | None = None,
        word_length_min: int | None = None,
        testable_words: frozenset[str] | None = None,
        before_token_count: int = 0,
        after_token_count: int = 0,
        choice_variation: float | None = None,
        rng: random.Random | None = None,
    ) -> AnkiNote | None:
        """문장의 단어 토큰을 빈칸으로 바꾼 노트를 만듭니다.

        조건을 통과하지 못한 단어는 원문 그대로 둡니다.
        빈칸이 하나도 없으면 None을 반환합니다.

        Args:
            document: 통계 계산이 끝난 문서
            sentence: 변환할 문장
            word_frequency_min: 빈칸으로 만들 최소 단어 빈도
            word_length_min: 빈칸으로 만들 최소 키 길이
            testable_words: 빈칸 후보 단어 키 집합 (None이면 전체)
            before_token_count: prologue 토큰 수
            after_token_count: epilogue 토큰 수
            choice_variation: 오답 보기를 무작위 단어로 바꿀 확률
            rng: 오답 선택 난수 생성기
        """
        text: list[str] = []
        clozes: list[AnkiCloze] = []
        choices: dict[int, list[str]] = {}
        source_line: int | None = None

        for token_index, token in enumerate(sentence.get_tokens()):
            match token:
                case WordToken(word=word, raw=raw):
                    if source_line is None:
                        location = word.get_location(sentence.index, token_index)
                        if location is not None:
                            source_line = location.line + 1

                    if (
                        (word_frequency_min is not None and word.frequency < word_frequency_min)
                        or (word_length_min is not None and len(word) < word_length_min)
                        or (testable_words is not None and word.key not in testable_words)
                    ):
                        text.append(raw)
                        continue

                    cloze = AnkiCloze(len(clozes) + 1, raw, word.key)
                    text.append(str(cloze))
                    clozes.append(cloze)
                    choices[cloze.index] = document.closest_words(
                        word, CHOICES_MAX, random_probability=choice_variation, rng=rng
                    )
                    logger.debug("%s 오답 보기 = %s", cloze.key, choices[cloze.index])
                case LiteralToken(text=literal):
                    text.append(literal)

        if not clozes:
            logger.debug("s%d 빈칸이 없어 노트를 건너뜁니다.", sentence.index)
            return None

        return cls(
            text=TOKEN_DELIMITER.join(text),
            clozes=clozes,
            choices=choices,
            prologue=document.get_prologue(sentence, before_token_count),
            epilogue=document.get_epilogue(sentence, after_token_count),
            source=sentence.source,
            source_line=source_line,
        )


def resolve_choice_variation(value: str | float | Percentage | None) -> float | None:
    """``0.3`` 또는 ``30%`` 형식의 보기 변형 값을 [0, 1] 확률로 변환합니다.

    Raises:
        ValueError: 확률 범위를 벗어난 경우
    """
    resolved = percentage_or_number(value)
    if resolved is None:
        return None
    probability = resolved.proportion if isinstance(resolved, Percentage) else float(resolved)
    if not 0 <= probability <= 1:
        raise ValueError(f"choice_variation은 [0, 1] 또는 [0%, 100%] 범위여야 합니다: {value}")
    return probability


def generate_anki_notes(
    document: QuizDocument,
    *,
    limit: int | None = None,
    word_frequency_min: int | None = None,
    word_length_min: int | None = None,
    word_frequency_first: str | int | Percentage | None = None,
    word_frequency_last: str | int | Percentage | None = None,
    before_token_count: int = 0,
    after_token_count: int = 0,
    choice_variation: str | float | Percentage | None = None,
    rng: random.Random | None = None,
) -> list[AnkiNote]:
    """문서의 앞쪽 ``limit`` 개 문장을 Anki 노트로 변환합니다.

    ``word_frequency_first`` (빈도 상위 N 또는 N%) 가 주어지면
    ``word_frequency_last`` (빈도 하위) 보다 우선합니다.

    Returns:
        빈칸이 있는 노트 목록
    """
    document.finish()
    sentences = document.get_sentences()
    count = len(sentences) if limit is None else limit
    logger.info("🃏 Anki 노트 %d개 생성을 시작합니다.", min(count, len(sentences)))

    first = percentage_or_number(word_frequency_first)
    last = percentage_or_number(word_frequency_last)
    testable_words: frozenset[str] | None = None
    if first is not None:
        testable_words = document.get_words_by_frequency(first, highest=True)
    elif last is not None:
        testable_words = document.get_words_by_frequency(last, highest=False)
    logger.debug("빈도 상위=%s 하위=%s → 후보 단어 %s개", first, last,
                 len(testable_words) if testable_words is not None else "전체")

    variation = resolve_choice_variation(choice_variation)
    logger.debug("보기 변형=%s prologue=%d epilogue=%d", variation, before_token_count, after_token_count)

    notes: list[AnkiNote] = []
    for sentence in sentences[:count]:
        note = AnkiNote.from_sentence(
            document,
            sentence,
            word_frequency_min=word_frequency_min,
            word_length_min=word_length_min,
            testable_words=testable_words,
            before_token_count=before_token_count,
            after_token_count=after_token_count,
            choice_variation=variation,
            rng=rng,
        )
        if note is not None:
            notes.append(note)

    logger.info("✅ Anki 노트 %d개 생성 완료", len(notes))
    return notes
