"""문서 분절, 어휘/빈도 인덱스, 편집 거리 및 오답 선택 모듈.

원문 텍스트를 문장과 단어로 분석하고, 단어 쌍의 편집 거리를 계산하여
단어마다 가까운 단어(오답 보기)를 선택한다.
"""

from __future__ import annotations

from .config import ConfigurationError, DocumentConfig, load_config_file, parse_word_exclude, parse_word_excludes
from .distance import DISTANCE_BEYOND, WordEditDistance, edit_distance
from .frequency import Percentage, percentage_or_number
from .model import QuizDocument
from .sentences import LiteralToken, Sentence, Token, WordToken
from .words import Vocabulary, Word, WordLocation

__all__ = [
    "ConfigurationError",
    "DISTANCE_BEYOND",
    "DocumentConfig",
    "LiteralToken",
    "Percentage",
    "QuizDocument",
    "Sentence",
    "Token",
    "Vocabulary",
    "Word",
    "WordEditDistance",
    "WordLocation",
    "WordToken",
    "edit_distance",
    "load_config_file",
    "parse_word_exclude",
    "parse_word_excludes",
    "percentage_or_number",
]
