"""원문 텍스트를 줄 → 토큰 → 문장으로 분절한다.

분절은 문서 순서대로 한 번만 진행하며, 그 과정에서 어휘 인덱스를 채운다.
"""

from __future__ import annotations

import logging
import re

from .config import DocumentConfig
from .sentences import LiteralToken, Sentence, WordToken
from .words import Vocabulary, WordLocation

logger = logging.getLogger(__name__)

LINE_DELIMITER = re.compile(r"[\n\r]")
TOKEN_PATTERN = re.compile(r"\S+")
END_SENTENCE = re.compile(r"[.?!]+")

# 디버그 로그를 남길 최대 줄/문장 수
DEBUG_THRESHOLD = 100


class SentenceSegmenter:
    """토큰을 문장 단위로 묶는 분절기.

    문장 종료 조건(종결 부호 또는 최대 토큰 수)을 만나도 고유 단어 수가
    최소값에 못 미치면 종료를 미루고 다음 텍스트와 합친다.
    입력 끝에 남은 비어 있지 않은 문장은 최소값과 무관하게 추가된다.
    """

    def __init__(self, config: DocumentConfig, vocabulary: Vocabulary, source: str | None = None) -> None:
        self.config = config
        self.vocabulary = vocabulary
        self.source = source
        self.sentences: list[Sentence] = []

    def token_key(self, raw_token: str) -> str:
        """원문 토큰의 정규화 키 문자열을 만든다."""
        key = self.config.token_key_pattern.sub("", raw_token)
        return key if self.config.case_sensitive else key.lower()

    def is_word(self, key: str, raw_token: str) -> bool:
        """토큰이 어휘 단어로 등록될 수 있는지 판단한다."""
        if not key or key in self.config.literal_excludes:
            return False
        pattern = self.config.pattern_exclude
        return pattern is None or pattern.search(raw_token) is None

    def segment(self, text: str) -> list[Sentence]:
        """전체 텍스트를 분절하여 봉인된 문장 목록을 반환한다."""
        sentence = self._next_sentence(None)
        token_max = self.config.sentence_token_count_max

        for line_idx, line in enumerate(LINE_DELIMITER.split(text)):
            for token_idx, match in enumerate(TOKEN_PATTERN.finditer(line)):
                raw = match.group()
                key = self.token_key(raw)

                if self.is_word(key, raw):
                    if line_idx < DEBUG_THRESHOLD:
                        logger.debug(
                            "토큰 [line=%d sentence=%d token=%d] raw=%r key=%r",
                            line_idx, sentence.index, token_idx, raw, key,
                        )
                    location = WordLocation(
                        line=line_idx,
                        char_on_line=match.start(),
                        token_on_line=token_idx,
                        sentence_index=sentence.index,
                        token_in_sentence=sentence.get_token_count(),
                        raw_string=raw,
                    )
                    word = self.vocabulary.add_occurrence(key, raw, location)
                    sentence.add_token(WordToken(word, raw))
                else:
                    sentence.add_token(LiteralToken(raw))

                if (
                    (token_max is not None and sentence.get_token_count() >= token_max)
                    or END_SENTENCE.search(raw)
                ):
                    sentence = self._next_sentence(sentence)

        # 마지막 문장은 최소 단어 수와 무관하게 추가
        if not sentence.is_empty():
            sentence.seal()
            self.sentences.append(sentence)
        elif self.sentences:
            # 버려지는 빈 누적 문장을 가리키지 않도록 한다
            self.sentences[-1].next_index = None

        logger.info("문장 %d개, 단어 %d개를 분석했습니다.", len(self.sentences), len(self.vocabulary))
        return self.sentences

    def _next_sentence(self, current: Sentence | None) -> Sentence:
        """현재 문장을 봉인하고 새 문장을 반환한다.

        현재 문장의 고유 단어 수가 부족하면 봉인하지 않고 그대로 돌려준다.
        """
        if current is not None:
            if current.get_word_count() < self.config.sentence_word_count_min:
                return current

            if len(self.sentences) < DEBUG_THRESHOLD:
                logger.debug("문장 확정 s%d: %s", current.index, current)
            current.seal()
            self.sentences.append(current)

        index = len(self.sentences)
        new_sentence = Sentence(index, self.source)
        if current is not None:
            current.next_index = index
            new_sentence.previous_index = current.index
        return new_sentence
