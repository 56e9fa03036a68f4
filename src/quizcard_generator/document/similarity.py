"""단어 쌍별 편집 거리 계산 엔진.

어휘의 모든 서로 다른 단어 쌍(상삼각 행렬)에 대해 편집 거리를 계산하고,
한도 안의 거리를 양쪽 단어의 거리 버킷에 대칭으로 기록한다.
상삼각 쌍 집합은 행 범위 샤드로 나누어 워커 프로세스에 분배할 수 있다.
"""

from __future__ import annotations

import logging
import math
import os
from collections.abc import Iterator, Sequence
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass

from tqdm import tqdm

from .distance import DISTANCE_BEYOND, EditDistanceMatrix, WordEditDistance, distance_variance
from .words import Word

logger = logging.getLogger(__name__)

# 샤드 하나가 맡을 목표 쌍 수
SHARD_PAIRS_TARGET = 50_000

DistanceRecord = tuple[int, int, int, float]


@dataclass(frozen=True, slots=True)
class PairShard:
    """상삼각 쌍 집합의 행 범위 ``[row_start, row_stop)``."""

    row_start: int
    row_stop: int


def partition_pairs(size: int, shard_count: int) -> list[PairShard]:
    """``size`` 개 단어의 상삼각 쌍을 쌍 수가 비슷한 행 범위로 나눈다."""
    total = size * (size - 1) // 2
    if total == 0:
        return []

    shard_count = max(1, min(shard_count, size - 1))
    target = math.ceil(total / shard_count)

    shards: list[PairShard] = []
    start = 0
    acc = 0
    for row in range(size - 1):
        acc += size - row - 1
        if acc >= target:
            shards.append(PairShard(start, row + 1))
            start = row + 1
            acc = 0
    if start < size - 1:
        shards.append(PairShard(start, size - 1))
    return shards


def compute_shard(keys: Sequence[str], shard: PairShard, max_distance: int | None) -> list[DistanceRecord]:
    """샤드에 속한 쌍의 거리를 계산한다.

    워커 프로세스에서 실행되며 어휘 객체를 건드리지 않고 결과 튜플만 반환한다.
    """
    matrix = EditDistanceMatrix()
    records: list[DistanceRecord] = []
    size = len(keys)
    for a in range(shard.row_start, shard.row_stop):
        key_a = keys[a]
        for b in range(a + 1, size):
            key_b = keys[b]
            distance = matrix.distance(key_a, key_b, max_distance)
            if distance != DISTANCE_BEYOND:
                records.append((a, b, distance, distance_variance(distance, key_a, key_b)))
    return records


def _compute_shard_task(args: tuple[Sequence[str], PairShard, int | None]) -> list[DistanceRecord]:
    keys, shard, max_distance = args
    return compute_shard(keys, shard, max_distance)


class SimilarityEngine:
    """어휘 전체의 단어 쌍 편집 거리를 계산하여 단어에 기록한다.

    Attributes:
        max_distance: 기록할 최대 거리 (None이면 제한 없음)
        workers: 워커 프로세스 수 (1이면 현재 프로세스, 0이면 CPU 수)
        progress: tqdm 진행바 표시 여부
    """

    def __init__(self, max_distance: int | None = 10, workers: int = 1, progress: bool = False) -> None:
        self.max_distance = max_distance
        self.workers = workers if workers > 0 else max(1, os.cpu_count() or 1)
        self.progress = progress

    def compute(self, words: Sequence[Word]) -> int:
        """모든 단어 쌍의 거리를 계산하고 기록한 쌍 수를 반환한다.

        ``words`` 는 id 순서여야 한다. 결과는 샤드 순서대로 기록하므로
        워커 수와 무관하게 같은 버킷 순서를 얻는다.
        """
        keys = [word.key for word in words]
        size = len(keys)
        shard_count = max(self.workers, math.ceil(size * (size - 1) // 2 / SHARD_PAIRS_TARGET))
        shards = partition_pairs(size, shard_count)
        if not shards:
            return 0

        logger.info(
            "🔍 단어 %d개의 편집 거리를 계산합니다 (샤드 %d개, workers=%d, max_distance=%s)",
            size, len(shards), self.workers, self.max_distance,
        )

        recorded = 0
        for records in tqdm(
            self._iter_results(keys, shards),
            total=len(shards),
            desc="🧮 편집 거리",
            unit="샤드",
            disable=not self.progress,
        ):
            for a, b, distance, variance in records:
                edit_distance = WordEditDistance(distance, variance)
                words[a].set_distance(words[b].key, edit_distance)
                words[b].set_distance(words[a].key, edit_distance)
            recorded += len(records)

        logger.info("✅ 한도 안의 단어 쌍 %d개를 기록했습니다.", recorded)
        return recorded

    def _iter_results(self, keys: list[str], shards: list[PairShard]) -> Iterator[list[DistanceRecord]]:
        if self.workers == 1 or len(shards) == 1:
            for shard in shards:
                yield compute_shard(keys, shard, self.max_distance)
            return

        # 샤드 제출 순서대로 결과를 받는다
        with ProcessPoolExecutor(max_workers=self.workers) as executor:
            yield from executor.map(
                _compute_shard_task,
                ((keys, shard, self.max_distance) for shard in shards),
            )
