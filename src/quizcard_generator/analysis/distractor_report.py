"""단어별 오답 보기 리포트.

문서의 모든 단어에 대해 가까운 단어(오답 보기)를 선택하고,
빈도 리포트와 함께 분석 산출물을 저장한다.

산출물:
    - out/analysis/reports/word_frequency.parquet
    - out/analysis/reports/word_distractors.csv
    - out/analysis/reports/analysis_log.md
"""

from __future__ import annotations

import csv
import random
from dataclasses import dataclass
from pathlib import Path
from typing import TypedDict

from quizcard_generator.analysis.word_frequency import write_frequency_parquet
from quizcard_generator.document.distance import WordEditDistance
from quizcard_generator.document.model import QuizDocument
from quizcard_generator.document.words import Word
from quizcard_generator.utils.logging_config import get_logger

logger = get_logger(__name__)

DISTRACTOR_COUNT_DEFAULT = 4
LOG_DISPLAY_COUNT = 50


class AnalysisResult(TypedDict):
    """분석 결과 타입"""

    sentences_count: int
    words_count: int
    distance_pairs: int
    frequency_path: Path
    distractors_path: Path
    log_path: Path


@dataclass(frozen=True, slots=True)
class DistractorRow:
    """단어 하나의 오답 보기 선택 결과."""

    rank: int
    word: Word
    distractors: list[str]
    nearest: WordEditDistance | None


def nearest_distance(word: Word, keys: list[str]) -> WordEditDistance | None:
    """보기 중 분산이 가장 작은 거리. 무작위로 섞인 보기처럼 거리가 없는 키는 건너뛴다."""
    distances = [d for d in (word.get_distance(key) for key in keys) if d is not None]
    if not distances:
        return None
    return min(distances, key=WordEditDistance.sort_key)


def build_distractor_rows(
    document: QuizDocument,
    count: int = DISTRACTOR_COUNT_DEFAULT,
    random_probability: float | None = None,
    rng: random.Random | None = None,
) -> list[DistractorRow]:
    """빈도 순위 순서로 모든 단어의 오답 보기를 선택한다."""
    document.finish()
    rows: list[DistractorRow] = []
    for rank in range(document.get_words_count()):
        word = document.get_word_by_frequency_index(rank)
        if word is None:
            break
        distractors = document.closest_words(word, count, random_probability=random_probability, rng=rng)
        rows.append(DistractorRow(rank + 1, word, distractors, nearest_distance(word, distractors)))
    return rows


def write_distractor_csv(rows: list[DistractorRow], output_path: Path) -> None:
    """word_distractors.csv 를 저장한다."""
    output_path.parent.mkdir(parents=True, exist_ok=True)

    fieldnames = [
        "rank",
        "key",
        "frequency",
        "distractors",
        "nearest_distance",
        "nearest_variance",
    ]

    with output_path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=fieldnames)
        writer.writeheader()
        for row in rows:
            writer.writerow(
                {
                    "rank": row.rank,
                    "key": row.word.key,
                    "frequency": row.word.frequency,
                    "distractors": " ".join(row.distractors),
                    "nearest_distance": row.nearest.distance if row.nearest else "",
                    "nearest_variance": f"{row.nearest.variance:.2f}" if row.nearest else "",
                }
            )


def write_analysis_log(
    document: QuizDocument,
    rows: list[DistractorRow],
    distance_pairs: int,
    output_path: Path,
    max_edit_distance: int | None = None,
) -> None:
    """analysis_log.md 를 저장한다."""
    output_path.parent.mkdir(parents=True, exist_ok=True)

    without_distractors = sum(1 for row in rows if not row.distractors)
    lines: list[str] = [
        "# 문서 어휘 분석 로그\n",
        "",
        "## 요약 통계\n",
        "",
        "| 항목 | 값 |",
        "|------|------|",
        f"| 원문 | {document.source_url or '-'} |",
        f"| 문장 수 | {document.get_sentences_count():,} |",
        f"| 고유 단어 수 | {document.get_words_count():,} |",
        f"| 한도 안의 단어 쌍 | {distance_pairs:,} |",
        f"| 최대 편집 거리 | {max_edit_distance if max_edit_distance is not None else '제한 없음'} |",
        f"| 오답 보기가 없는 단어 | {without_distractors:,} |",
        "",
        "## 선정 기준\n",
        "",
        "- **오답 보기**: 편집 거리 0부터 바깥쪽으로 가까운 단어를 선택",
        "- **분산**: `distance / max(len(a), len(b))` 를 소수 둘째 자리로 반올림",
        "",
        "## 빈도 상위 단어\n",
        "",
        "| 순위 | 단어 | 빈도 | 확률 | 오답 보기 | 최근접 거리 |",
        "|------|------|------|------|-----------|-------------|",
    ]

    display_count = min(len(rows), LOG_DISPLAY_COUNT)
    for row in rows[:display_count]:
        # 마크다운 파이프 이스케이프
        key = row.word.key.replace("|", "\\|")
        distractors = ", ".join(f"`{d}`" for d in row.distractors) or "-"
        nearest = str(row.nearest) if row.nearest else "-"
        lines.append(
            f"| {row.rank} "
            f"| `{key}` "
            f"| {row.word.frequency:,} "
            f"| {row.word.probability:.4f} "
            f"| {distractors} "
            f"| {nearest} |"
        )

    if len(rows) > display_count:
        lines.append("")
        lines.append(f"> 전체 {len(rows)}개 단어 중 상위 {display_count}개만 표시합니다.")

    lines.append("")

    with output_path.open("w", encoding="utf-8") as handle:
        handle.write("\n".join(lines))


def analyze_document(
    document: QuizDocument,
    output_frequency: Path,
    output_distractors: Path,
    output_log: Path,
    distractor_count: int = DISTRACTOR_COUNT_DEFAULT,
    random_probability: float | None = None,
    rng: random.Random | None = None,
) -> AnalysisResult:
    """문서 통계를 계산하고 분석 리포트를 저장한다.

    Args:
        document: 분석할 문서
        output_frequency: 단어 빈도 parquet 저장 경로
        output_distractors: 오답 보기 CSV 저장 경로
        output_log: 분석 로그 저장 경로
        distractor_count: 단어당 오답 보기 수
        random_probability: 오답 보기를 무작위 단어로 바꿀 확률
        rng: 오답 선택 난수 생성기

    Returns:
        분석 결과 정보를 담은 딕셔너리
    """
    document.finish()
    distance_pairs = document.distance_pairs

    write_frequency_parquet(document, output_frequency)

    logger.info("🎯 단어 %d개의 오답 보기를 선택합니다 (단어당 %d개)...", document.get_words_count(), distractor_count)
    rows = build_distractor_rows(document, distractor_count, random_probability, rng)
    write_distractor_csv(rows, output_distractors)
    logger.info("📄 오답 보기 CSV 저장 완료: %s", output_distractors)

    write_analysis_log(document, rows, distance_pairs, output_log, document.config.max_edit_distance)
    logger.info("📝 분석 로그 저장 완료: %s", output_log)

    return AnalysisResult(
        sentences_count=document.get_sentences_count(),
        words_count=document.get_words_count(),
        distance_pairs=distance_pairs,
        frequency_path=output_frequency,
        distractors_path=output_distractors,
        log_path=output_log,
    )

