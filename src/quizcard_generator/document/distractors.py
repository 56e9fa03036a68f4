"""오답 보기(distractor) 선택.

단어의 거리 버킷을 거리 0부터 바깥쪽으로 훑어 가까운 단어를 모은다.
``random_probability`` 가 주어지면 버킷의 슬롯마다 독립적으로 굴려
성공 시 어휘 전체에서 무작위 단어를 대신 넣는다.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable

from .words import Word

logger = logging.getLogger(__name__)

RandomWordPicker = Callable[[random.Random], Word | None]


def closest_words(
    word: Word,
    count: int,
    random_probability: float | None = None,
    rng: random.Random | None = None,
    random_word: RandomWordPicker | None = None,
) -> list[str]:
    """``word`` 와 가장 가까운 단어 키를 최대 ``count`` 개 반환한다.

    Args:
        word: 기준 단어
        count: 반환할 최대 키 개수
        random_probability: 슬롯마다 무작위 단어로 대체할 확률 [0, 1]
        rng: 난수 생성기 (None이면 새 ``random.Random``)
        random_word: 난수 생성기로 어휘에서 무작위 단어를 고르는 함수

    Returns:
        중복 없는 키 목록. ``word`` 자신은 포함하지 않으며 ``count`` 보다 적을 수 있다.
    """
    if count <= 0:
        return []
    if random_probability is not None and not 0 <= random_probability <= 1:
        raise ValueError(f"random_probability는 [0, 1] 범위여야 합니다: {random_probability}")

    distance_range = word.distance_range
    if distance_range is None:
        return []

    rng = rng or random.Random()
    closest: dict[str, None] = {}
    _, distance_max = distance_range
    distance = 0

    while len(closest) < count and distance <= distance_max:
        candidates = word.get_words_at_distance(distance)

        if random_probability is not None and random_word is not None:
            for _ in range(len(candidates)):
                if len(closest) >= count:
                    break
                if rng.random() < random_probability:
                    picked = random_word(rng)
                    if picked is not None and picked.key != word.key:
                        closest.setdefault(picked.key)

        remaining = count - len(closest)
        if len(candidates) > remaining:
            # 같은 거리의 후보는 순서에 의미가 없으므로 무작위 부분집합을 고른다
            rng.shuffle(candidates)
            candidates = candidates[:remaining]
        for candidate in candidates:
            closest.setdefault(candidate)

        distance += 1

    logger.debug("%s 가까운 단어 = %s", word.key, list(closest))
    return list(closest)
