"""
윈도우 기반 축약 연산

시계열의 최근 N개 원소에 대한 평균, 가중 평균, 최고/최저값 탐색을 제공합니다.
최고/최저값은 값과 함께 역방향 인덱스(꼬리 = 0, 과거로 갈수록 증가)를 반환합니다.

동점 처리 규칙:
    탐색은 꼬리에서 시작하여 머리 방향으로 진행하며, 현재 후보보다 엄격하게
    더 극단적인 값만 후보를 교체합니다. 따라서 같은 값이 여러 개 있으면
    가장 최근(꼬리에 가까운) 원소가 선택됩니다.
"""

from collections import deque
from typing import Any, Callable, Deque, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from .exceptions import InvalidValueError

# 최고값 탐색은 +1, 최저값 탐색은 -1
HIGHEST = 1
LOWEST = -1

Comparator = Callable[[Any, Any], int]


class SeriesPoint(NamedTuple):
    """윈도우 탐색 결과: 값과 역방향 인덱스"""
    value: Any
    reversed_index: int


def natural_compare(a: Any, b: Any) -> int:
    """기본 비교 함수 (a > b이면 양수, a < b이면 음수, 같으면 0)"""
    if a > b:
        return 1
    if a < b:
        return -1
    return 0


def validate_window(window: Any, name: str = "window") -> int:
    """
    윈도우 크기 검증

    Args:
        window: 검증할 윈도우 크기
        name: 오류 메시지에 사용할 매개변수 이름

    Returns:
        int: 검증된 윈도우 크기

    Raises:
        InvalidValueError: 양의 정수가 아닌 경우
    """
    if isinstance(window, bool) or not isinstance(window, (int, np.integer)):
        raise InvalidValueError(f"{name}는 정수여야 합니다", details={name: window})
    if window <= 0:
        raise InvalidValueError(f"{name}는 1 이상이어야 합니다", details={name: window})
    return int(window)


def _validate_direction(direction: int) -> int:
    if direction not in (HIGHEST, LOWEST):
        raise InvalidValueError("direction은 +1(최고) 또는 -1(최저)이어야 합니다",
                                details={'direction': direction})
    return direction


def scan_extreme(sequence: Sequence, window: int, comparator: Optional[Comparator] = None,
                 direction: int = HIGHEST) -> Optional[SeriesPoint]:
    """
    최근 window개 원소에서 최고(또는 최저)값과 역방향 인덱스 탐색

    매 호출마다 윈도우 전체를 다시 탐색합니다 (O(window)).

    Args:
        sequence: 탐색할 시계열 (머리 -> 꼬리 순서)
        window: 꼬리를 포함한 탐색 원소 수 (원소가 부족하면 가능한 만큼만 사용)
        comparator: cmp(a, b) 형식 비교 함수 (None이면 natural_compare)
        direction: HIGHEST(+1) 또는 LOWEST(-1)

    Returns:
        Optional[SeriesPoint]: 탐색 결과, 시계열이 비어 있으면 None

    Raises:
        InvalidValueError: window 또는 direction이 잘못된 경우

    Example:
        >>> scan_extreme([5, 5, 5], 3)
        SeriesPoint(value=5, reversed_index=0)
    """
    window = validate_window(window)
    direction = _validate_direction(direction)
    compare = comparator or natural_compare

    size = len(sequence)
    n = min(window, size)
    if n < 1:
        return None

    value = sequence[size - 1]
    reversed_index = 0
    for idx in range(size - 2, size - n - 1, -1):
        candidate = sequence[idx]
        if compare(value, candidate) * direction < 0:
            value = candidate
            reversed_index = size - 1 - idx

    return SeriesPoint(value, reversed_index)


def _window_values(sequence: Sequence, window: int) -> np.ndarray:
    window = validate_window(window)
    size = len(sequence)
    n = min(window, size)
    return np.asarray([sequence[i] for i in range(size - n, size)], dtype=np.float64)


def windowed_average(sequence: Sequence, window: int) -> Optional[float]:
    """
    최근 window개 원소의 산술 평균

    Returns:
        Optional[float]: 평균값, 시계열이 비어 있으면 None
    """
    values = _window_values(sequence, window)
    if values.size == 0:
        return None
    with np.errstate(invalid="ignore", over="ignore"):
        return float(np.mean(values))


def windowed_weighted_average(sequence: Sequence, window: int) -> Optional[float]:
    """
    최근 window개 원소의 선형 가중 평균

    가장 오래된 원소의 가중치가 1, 가장 최근 원소의 가중치가 w이며
    w(w+1)/2로 나눕니다 (w = 실제 사용된 원소 수).

    Returns:
        Optional[float]: 가중 평균값, 시계열이 비어 있으면 None
    """
    values = _window_values(sequence, window)
    n = values.size
    if n == 0:
        return None
    weights = np.arange(1, n + 1, dtype=np.float64)
    with np.errstate(invalid="ignore", over="ignore"):
        return float(np.dot(values, weights) / (n * (n + 1) / 2.0))


class SlidingExtremum:
    """
    단조 덱(monotonic deque) 기반 슬라이딩 윈도우 최고/최저값

    scan_extreme과 동일한 값과 역방향 인덱스(동점 시 최근 원소 우선)를
    원소당 분할 상환 O(1)로 제공합니다. 원소는 push로만 추가됩니다.
    """

    def __init__(self, window: int, direction: int = HIGHEST,
                 comparator: Optional[Comparator] = None):
        self._window = validate_window(window)
        self._direction = _validate_direction(direction)
        self._compare = comparator or natural_compare
        self._candidates: Deque[Tuple[int, Any]] = deque()
        self._count = 0

    def push(self, value: Any) -> SeriesPoint:
        """
        새 원소를 추가하고 현재 윈도우의 극값 반환

        Args:
            value: 추가할 원소

        Returns:
            SeriesPoint: 추가 후 윈도우의 극값과 역방향 인덱스
        """
        # 새 원소보다 엄격하게 더 극단적이지 않은 과거 후보는 다시 선택될 수 없음
        while self._candidates and \
                self._compare(self._candidates[-1][1], value) * self._direction <= 0:
            self._candidates.pop()
        self._candidates.append((self._count, value))
        self._count += 1

        oldest_allowed = self._count - self._window
        while self._candidates[0][0] < oldest_allowed:
            self._candidates.popleft()

        return self.current

    @property
    def current(self) -> Optional[SeriesPoint]:
        """현재 윈도우 극값 (원소가 없으면 None)"""
        if not self._candidates:
            return None
        index, value = self._candidates[0]
        return SeriesPoint(value, self._count - 1 - index)

    @property
    def window(self) -> int:
        return self._window

    def __len__(self) -> int:
        """지금까지 추가된 원소 수"""
        return self._count
