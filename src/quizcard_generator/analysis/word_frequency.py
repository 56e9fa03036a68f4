"""단어 빈도 리포트 (parquet).

빈도 순위 순서로 단어 키, 원문 표기, 빈도, 확률, 관측된 편집 거리 범위를 저장한다.
"""

from __future__ import annotations

from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq

from quizcard_generator.document.model import QuizDocument
from quizcard_generator.utils.logging_config import get_logger

logger = get_logger(__name__)

FREQUENCY_COLUMNS = ("rank", "key", "raw", "frequency", "probability", "distance_min", "distance_max")


def frequency_table(document: QuizDocument) -> pa.Table:
    """문서 단어를 빈도 내림차순 pyarrow 테이블로 만든다.

    편집 거리가 하나도 기록되지 않은 단어의 거리 범위는 null이다.
    """
    document.finish()
    columns: dict[str, list] = {name: [] for name in FREQUENCY_COLUMNS}

    for rank in range(document.get_words_count()):
        word = document.get_word_by_frequency_index(rank)
        if word is None:
            break
        distance_range = word.distance_range
        columns["rank"].append(rank + 1)
        columns["key"].append(word.key)
        columns["raw"].append(word.raw_string)
        columns["frequency"].append(word.frequency)
        columns["probability"].append(word.probability)
        columns["distance_min"].append(distance_range[0] if distance_range else None)
        columns["distance_max"].append(distance_range[1] if distance_range else None)

    schema = pa.schema(
        [
            ("rank", pa.int32()),
            ("key", pa.string()),
            ("raw", pa.string()),
            ("frequency", pa.int32()),
            ("probability", pa.float64()),
            ("distance_min", pa.int32()),
            ("distance_max", pa.int32()),
        ]
    )
    return pa.Table.from_pydict(columns, schema=schema)


def write_frequency_parquet(document: QuizDocument, output_path: Path) -> int:
    """단어 빈도 리포트를 parquet로 저장하고 행 수를 반환한다."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    table = frequency_table(document)
    pq.write_table(table, output_path)
    logger.info("💾 단어 빈도 %d행 저장: %s", table.num_rows, output_path)
    return table.num_rows

