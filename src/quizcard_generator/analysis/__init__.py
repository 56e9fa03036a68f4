"""문서 어휘 분석 리포트 모듈.

단어 빈도 순위와 단어별 오답 보기 선택 결과를 parquet, CSV, 마크다운
리포트로 저장한다.
"""

from __future__ import annotations

from .distractor_report import AnalysisResult, analyze_document, build_distractor_rows
from .word_frequency import write_frequency_parquet

__all__ = [
    "AnalysisResult",
    "analyze_document",
    "build_distractor_rows",
    "write_frequency_parquet",
]
