"""Quizcard Generator 패키지.

원문 텍스트를 문장과 어휘 모델로 분해하고, 단어마다 편집 거리 기반의
유사 단어(오답 보기)를 계산하여 Anki 빈칸 채우기 노트를 생성한다.
"""

from __future__ import annotations

from quizcard_generator.document import DocumentConfig, QuizDocument

__version__ = "0.1.0"

__all__ = ["DocumentConfig", "QuizDocument", "__version__"]
