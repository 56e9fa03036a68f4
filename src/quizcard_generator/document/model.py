"""문서 모델.

원문 텍스트 하나를 문장 목록과 어휘 인덱스로 분석하고,
빈도 순위와 단어 쌍 편집 거리를 계산한 뒤 질의 인터페이스를 제공한다.
"""

from __future__ import annotations

import logging
import random
import threading
from concurrent.futures import ThreadPoolExecutor

from .config import DocumentConfig
from .distractors import closest_words
from .frequency import FrequencyIndex, Percentage, update_probabilities
from .segmenter import SentenceSegmenter
from .sentences import TOKEN_DELIMITER, Sentence
from .similarity import SimilarityEngine
from .words import Vocabulary, Word

logger = logging.getLogger(__name__)


class QuizDocument:
    """원문 텍스트의 어휘/문장 모델.

    생성자는 분절만 수행한다. 빈도 순위와 편집 거리에 의존하는 질의는
    ``finish()`` 가 끝나 ``finished`` 이벤트가 설정된 뒤에만 사용할 수 있다.

    Example:
        >>> document = QuizDocument("The cat sat on the mat.").finish()
        >>> document.get_word("cat").frequency
        1
    """

    def __init__(
        self,
        source_text: str,
        config: DocumentConfig | None = None,
        source_url: str | None = None,
    ) -> None:
        self.config = config or DocumentConfig()
        self.source_url = source_url
        self.vocabulary = Vocabulary(case_sensitive=self.config.case_sensitive)
        self.finished = threading.Event()
        self._frequency: FrequencyIndex | None = None
        self.distance_pairs = 0
        self._finish_lock = threading.Lock()
        self._rng = random.Random(self.config.seed)

        logger.debug(
            "문장 설정 words-min=%d tokens-max=%s, 제외 리터럴 %d개, 제외 정규식=%s",
            self.config.sentence_word_count_min,
            self.config.sentence_token_count_max,
            len(self.config.literal_excludes),
            self.config.pattern_exclude.pattern if self.config.pattern_exclude else None,
        )
        segmenter = SentenceSegmenter(self.config, self.vocabulary, source_url)
        self._sentences: list[Sentence] = segmenter.segment(source_text)

    @classmethod
    def build(
        cls,
        source_text: str,
        config: DocumentConfig | None = None,
        source_url: str | None = None,
    ) -> QuizDocument:
        """분석과 통계 계산을 모두 마친 문서를 생성한다."""
        return cls(source_text, config, source_url).finish()

    # ------------- statistics -------------

    def finish(self) -> QuizDocument:
        """단어 확률, 빈도 순위, 단어 쌍 편집 거리를 계산한다.

        세 계산은 서로 독립이다. 확률과 순위는 스레드 풀에서, 편집 거리는
        호출 스레드에서 (필요하면 워커 프로세스로 분산하여) 계산한다.
        여러 번 호출해도 한 번만 계산한다.
        """
        with self._finish_lock:
            if self.finished.is_set():
                return self

            words = self.vocabulary.words()
            engine = SimilarityEngine(
                max_distance=self.config.max_edit_distance,
                workers=self.config.workers,
                progress=self.config.progress,
            )

            with ThreadPoolExecutor(max_workers=2) as executor:
                probability_future = executor.submit(update_probabilities, words, len(words))
                ranking_future = executor.submit(FrequencyIndex, words)
                self.distance_pairs = engine.compute(words)
                probability_future.result()
                self._frequency = ranking_future.result()

            self.finished.set()
            logger.info("📊 문서 통계 계산 완료 (문장 %d개, 단어 %d개)", len(self._sentences), len(words))
        return self

    def _require_finished(self) -> FrequencyIndex:
        if not self.finished.is_set() or self._frequency is None:
            raise RuntimeError("문서 통계가 준비되지 않았습니다. 먼저 finish()를 호출하세요.")
        return self._frequency

    # ------------- sentences -------------

    def get_sentence(self, sentence_index: int) -> Sentence | None:
        if 0 <= sentence_index < len(self._sentences):
            return self._sentences[sentence_index]
        return None

    def get_sentences(self) -> list[Sentence]:
        return list(self._sentences)

    def get_sentences_count(self) -> int:
        return len(self._sentences)

    def get_prologue(self, sentence: Sentence, token_count: int) -> str:
        """이전 문장의 마지막 ``token_count`` 개 토큰을 반환한다."""
        if token_count <= 0:
            return ""
        before = self.get_sentence(sentence.previous_index) if sentence.previous_index is not None else None
        if before is None:
            logger.debug("s%d 이전 문장이 없어 prologue %d토큰을 생략합니다.", sentence.index, token_count)
            return ""
        return TOKEN_DELIMITER.join(str(token) for token in before.get_tokens()[-token_count:])

    def get_epilogue(self, sentence: Sentence, token_count: int) -> str:
        """다음 문장의 처음 ``token_count`` 개 토큰을 반환한다."""
        if token_count <= 0:
            return ""
        after = self.get_sentence(sentence.next_index) if sentence.next_index is not None else None
        if after is None:
            logger.debug("s%d 다음 문장이 없어 epilogue %d토큰을 생략합니다.", sentence.index, token_count)
            return ""
        return TOKEN_DELIMITER.join(str(token) for token in after.get_tokens()[:token_count])

    def render_sentence(self, sentence: Sentence, prologue_token_count: int = 0, epilogue_token_count: int = 0) -> str:
        """문장 텍스트에 앞뒤 문맥 토큰을 붙여 반환한다."""
        parts = [
            self.get_prologue(sentence, prologue_token_count),
            sentence.text(),
            self.get_epilogue(sentence, epilogue_token_count),
        ]
        return TOKEN_DELIMITER.join(part for part in parts if part)

    # ------------- words -------------

    def get_words_count(self) -> int:
        return len(self.vocabulary)

    def get_word(self, key: str) -> Word | None:
        return self.vocabulary.get(key)

    def get_word_by_frequency_index(self, index: int, descending: bool = True) -> Word | None:
        return self._require_finished().get_word_by_frequency_index(index, descending)

    def get_words_by_frequency(self, limit: int | float | Percentage, highest: bool = True) -> frozenset[str]:
        return self._require_finished().get_words_by_frequency(limit, highest)

    def random_word(self, rng: random.Random) -> Word | None:
        """빈도 순위 인덱스를 균등하게 뽑아 단어를 반환한다."""
        frequency = self._require_finished()
        if not len(frequency):
            return None
        return frequency.get_word_by_frequency_index(rng.randrange(len(frequency)))

    def closest_words(
        self,
        word: Word | str,
        count: int,
        random_probability: float | None = None,
        rng: random.Random | None = None,
    ) -> list[str]:
        """단어와 가장 가까운 다른 단어 키를 최대 ``count`` 개 반환한다.

        알 수 없는 단어 키이면 빈 목록을 반환한다.
        ``rng`` 를 생략하면 ``config.seed`` 로 초기화한 문서 난수 생성기를 사용한다.
        """
        self._require_finished()
        target = self.get_word(word) if isinstance(word, str) else word
        if target is None:
            return []
        return closest_words(
            target,
            count,
            random_probability=random_probability,
            rng=rng or self._rng,
            random_word=self.random_word,
        )
