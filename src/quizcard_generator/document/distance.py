"""Levenshtein 편집 거리 계산.

Wagner–Fischer 동적 계획법으로 두 문자열의 편집 거리를 계산한다.
최대 거리가 주어지면 현재 행의 최솟값이 이미 한도를 넘는 순간
계산을 중단하고 ``DISTANCE_BEYOND`` 를 반환한다.
"""

from __future__ import annotations

from dataclasses import dataclass

DISTANCE_BEYOND = -1

# 편집 거리 분산(variance)을 동일하게 취급할 소수점 자릿수
VARIANCE_PRECISION = 2


class EditDistanceMatrix:
    """재사용 가능한 편집 거리 행렬.

    워커 하나가 여러 단어 쌍을 연속으로 계산할 때 행렬 버퍼를 한 번만
    할당하고, 더 긴 문자열이 나올 때만 확장한다. 스레드 간 공유하지 않는다.
    """

    def __init__(self) -> None:
        self._cells: list[int] = []

    def _reserve(self, size: int) -> list[int]:
        if len(self._cells) < size:
            self._cells.extend([0] * (size - len(self._cells)))
        return self._cells

    def distance(self, a: str, b: str, max_distance: int | None = None) -> int:
        """두 문자열의 편집 거리를 반환한다.

        Args:
            a: 행렬의 첫 행에 놓이는 문자열
            b: 행렬의 첫 열에 놓이는 문자열
            max_distance: 최대 거리 (None이면 제한 없음)

        Returns:
            편집 거리, 또는 한도를 넘으면 DISTANCE_BEYOND
        """
        if a == b:
            return 0
        if max_distance is not None and abs(len(a) - len(b)) > max_distance:
            return DISTANCE_BEYOND

        w = len(a) + 1
        h = len(b) + 1
        d = self._reserve(w * h)

        # 첫 행과 첫 열 초기화
        for x in range(w):
            d[x] = x
        for y in range(h):
            d[y * w] = y

        for y in range(1, h):
            row = y * w
            prev = row - w
            cb = b[y - 1]
            row_min = d[row]
            for x in range(1, w):
                cost = d[prev + x - 1] + (0 if a[x - 1] == cb else 1)
                c = d[row + x - 1] + 1
                if c < cost:
                    cost = c
                c = d[prev + x] + 1
                if c < cost:
                    cost = c
                d[row + x] = cost
                if cost < row_min:
                    row_min = cost

            # 어떤 경로든 이 행을 지나므로 행 최솟값이 최종 거리의 하한이다
            if max_distance is not None and row_min > max_distance:
                return DISTANCE_BEYOND

        dist = d[h * w - 1]
        if max_distance is not None and dist > max_distance:
            return DISTANCE_BEYOND
        return dist


def edit_distance(a: str, b: str, max_distance: int | None = None) -> int:
    """두 문자열의 Levenshtein 편집 거리를 반환한다."""
    return EditDistanceMatrix().distance(a, b, max_distance)


def distance_variance(distance: int, a: str, b: str) -> float:
    """길이에 무관한 정규화 거리 ``distance / max(len(a), len(b))`` 를 반환한다."""
    if distance == DISTANCE_BEYOND:
        return float(DISTANCE_BEYOND)
    longest = max(len(a), len(b))
    if longest == 0:
        return 0.0
    return round(distance / longest, VARIANCE_PRECISION)


@dataclass(frozen=True, slots=True)
class WordEditDistance:
    """두 단어 사이의 편집 거리와 정규화 분산.

    Attributes:
        distance: 편집 거리 (한도 초과 시 DISTANCE_BEYOND)
        variance: ``distance / max(len)`` 을 소수 둘째 자리로 반올림한 값, [0, 1]
    """

    distance: int
    variance: float

    @property
    def is_beyond(self) -> bool:
        return self.distance == DISTANCE_BEYOND

    @classmethod
    def between(cls, a: str, b: str, max_distance: int | None = None) -> WordEditDistance:
        """두 키 문자열 사이의 거리를 계산한다."""
        distance = edit_distance(a, b, max_distance)
        return cls(distance, distance_variance(distance, a, b))

    @staticmethod
    def sort_key(value: WordEditDistance) -> float:
        """분산 기준 정렬 키. 문자열 길이와 무관하게 비교할 수 있다."""
        return value.variance

    def __str__(self) -> str:
        return f"{self.distance}-{self.variance:.{VARIANCE_PRECISION}f}"
