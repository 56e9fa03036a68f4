"""중앙화된 산출물 경로 상수 관리

이 모듈은 프로젝트 전체에서 사용되는 출력 경로를 중앙에서 관리한다.
모든 하드코딩된 경로는 이 모듈의 상수를 참조해야 한다.
"""

from __future__ import annotations

from pathlib import Path

# ====================================================================
# 📁 루트 디렉토리
# ====================================================================

OUTPUT_ROOT = Path("out")

# ====================================================================
# 🃏 Anki 노트 경로
# ====================================================================

ANKI_ROOT = OUTPUT_ROOT / "anki"
ANKI_NOTES_DIR = ANKI_ROOT / "notes"
ANKI_NOTES_NAME_DEFAULT = "notes"
ANKI_NOTE_TYPE_DEFAULT = "fill-blanks"

# ====================================================================
# 📈 분석 산출물 경로
# ====================================================================

ANALYSIS_ROOT = OUTPUT_ROOT / "analysis"
ANALYSIS_REPORTS_DIR = ANALYSIS_ROOT / "reports"

# 분석 리포트 파일
WORD_FREQUENCY_FILE = ANALYSIS_REPORTS_DIR / "word_frequency.parquet"
WORD_DISTRACTORS_FILE = ANALYSIS_REPORTS_DIR / "word_distractors.csv"
ANALYSIS_LOG_FILE = ANALYSIS_REPORTS_DIR / "analysis_log.md"

# ====================================================================
# 📝 로그 경로
# ====================================================================

LOGS_DIR = OUTPUT_ROOT / "logs"

# ====================================================================
# ⚙️ 기타 설정 경로
# ====================================================================

CONFIG_PATH = Path("quizcard.yaml")
