"""
추가 전용(append-only) 시계열 구현

모든 이동평균 계열 지표는 원소의 순서에 강하게 의존합니다.
과거 원소를 삽입/삭제/재정렬하면 이후의 모든 파생 값이 재계산 없이 무효화되므로,
이 모듈의 Series는 꼬리에 추가하는 연산과 읽기 연산만 허용합니다.
"""

import logging
from typing import Any, Generic, Iterable, Iterator, List, NamedTuple, Optional, TypeVar, Union

import numpy as np

from .exceptions import IndexOutOfRangeError, UnsupportedOperationError
from .windowing import HIGHEST, LOWEST, Comparator, SeriesPoint, scan_extreme

logger = logging.getLogger(__name__)

T = TypeVar('T')

_ORDER_REASON = "시계열 값은 원소 순서에 의존하므로 꼬리 외의 위치에 추가하거나 순서를 바꿀 수 없습니다"
_REMOVAL_REASON = "원소를 제거하면 그 이후의 모든 파생 값이 무효화됩니다"
_VIEW_REASON = "읽기 전용 뷰에는 원소를 추가할 수 없습니다"


class MacdElement(NamedTuple):
    """MACD 출력 원소"""
    macd: float
    dif: float
    dea: float


class KdjElement(NamedTuple):
    """KDJ 출력 원소"""
    k: float
    d: float
    j: float


class Series(Generic[T]):
    """
    추가 전용 시계열

    인덱스 0이 가장 오래된 원소(머리), len-1이 가장 최근 원소(꼬리)입니다.
    한 번 추가된 원소는 변경, 재정렬, 제거되지 않으며 인덱스는 시계열 수명 동안 유지됩니다.

    역방향 인덱스(reversed index)는 꼬리를 0으로 하여 머리 방향으로 증가합니다.

    스레드 안전하지 않습니다. 하나의 시계열은 하나의 데이터 스트림이 순서대로 갱신해야 합니다.
    """

    def __init__(self, values: Optional[Iterable[T]] = None):
        self._items: List[T] = []
        if values is not None:
            self.extend(values)

    # -------------------------------------------------------------------------
    # 추가
    # -------------------------------------------------------------------------
    def append(self, value: T) -> bool:
        """
        꼬리에 원소 추가

        Returns:
            bool: 항상 True
        """
        self._items.append(value)
        return True

    def extend(self, values: Iterable[T]) -> bool:
        """
        여러 원소를 순서대로 꼬리에 추가

        Returns:
            bool: 하나 이상 추가했으면 True, 입력이 비어 있으면 False
        """
        added = False
        for value in values:
            self.append(value)
            added = True
        return added

    # -------------------------------------------------------------------------
    # 읽기
    # -------------------------------------------------------------------------
    def head(self) -> Optional[T]:
        """첫 번째 원소 (비어 있으면 None)"""
        if not self._items:
            return None
        return self._items[0]

    def tail(self, reversed_index: int = 0) -> Optional[T]:
        """
        꼬리에서 reversed_index만큼 떨어진 원소

        Args:
            reversed_index: 역방향 인덱스 (0 = 꼬리)

        Returns:
            원소, 시계열이 비어 있으면 None

        Raises:
            IndexOutOfRangeError: 비어 있지 않은 시계열에서 범위를 벗어난 경우
        """
        if not self._items:
            return None
        return self.get(reversed_index)

    def get(self, reversed_index: int) -> T:
        """
        역방향 인덱스로 원소 조회 (엄격한 범위 검사)

        Raises:
            IndexOutOfRangeError: 범위를 벗어나거나 시계열이 비어 있는 경우
        """
        size = len(self._items)
        if isinstance(reversed_index, bool) or not isinstance(reversed_index, (int, np.integer)) \
                or not 0 <= reversed_index < size:
            raise IndexOutOfRangeError(
                f"역방향 인덱스 {reversed_index}는 [0, {size}) 범위를 벗어났습니다",
                details={'reversed_index': reversed_index, 'size': size}
            )
        return self._items[size - 1 - int(reversed_index)]

    def get_high(self, days: int, comparator: Optional[Comparator] = None) -> Optional[SeriesPoint]:
        """
        최근 days개 원소 중 최고값과 역방향 인덱스 (동점이면 최근 원소)

        Returns:
            Optional[SeriesPoint]: 비어 있으면 None
        """
        return scan_extreme(self, days, comparator, HIGHEST)

    def get_low(self, days: int, comparator: Optional[Comparator] = None) -> Optional[SeriesPoint]:
        """
        최근 days개 원소 중 최저값과 역방향 인덱스 (동점이면 최근 원소)

        Returns:
            Optional[SeriesPoint]: 비어 있으면 None
        """
        return scan_extreme(self, days, comparator, LOWEST)

    def to_numpy(self) -> np.ndarray:
        """숫자 시계열을 float64 배열로 복사"""
        return np.asarray(self._items, dtype=np.float64)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __getitem__(self, index: Union[int, slice]) -> Any:
        try:
            if isinstance(index, slice):
                return list(self._items[index])
            return self._items[index]
        except IndexError:
            raise IndexOutOfRangeError(
                f"인덱스 {index}는 범위를 벗어났습니다",
                details={'index': index, 'size': len(self._items)}
            ) from None

    def __contains__(self, value: Any) -> bool:
        return value in self._items

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Series):
            return self._items == other._items
        if isinstance(other, (list, tuple)):
            return self._items == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._items!r})"

    # -------------------------------------------------------------------------
    # 허용되지 않는 변경 연산
    # -------------------------------------------------------------------------
    def _reject(self, operation: str, reason: str):
        logger.error(f"{self.__class__.__name__}.{operation} 거부: {reason}")
        raise UnsupportedOperationError(f"{operation}: {reason}", details={'operation': operation})

    def insert(self, index: int, value: T) -> None:
        self._reject('insert', _ORDER_REASON)

    def remove(self, value: T) -> None:
        self._reject('remove', _REMOVAL_REASON)

    def pop(self, index: int = -1) -> T:
        self._reject('pop', _REMOVAL_REASON)

    def clear(self) -> None:
        self._reject('clear', _REMOVAL_REASON)

    def sort(self, *args, **kwargs) -> None:
        self._reject('sort', _ORDER_REASON)

    def reverse(self) -> None:
        self._reject('reverse', _ORDER_REASON)

    def __setitem__(self, index: Any, value: Any) -> None:
        self._reject('__setitem__', _ORDER_REASON)

    def __delitem__(self, index: Any) -> None:
        self._reject('__delitem__', _REMOVAL_REASON)

    def __iadd__(self, other: Any) -> 'Series[T]':
        self._reject('__iadd__', _ORDER_REASON)


class SeriesView(Series[T]):
    """
    다른 시계열의 읽기 전용 뷰

    원본과 원소 저장소를 공유하므로 원본에 추가된 원소가 바로 보이지만,
    뷰를 통해서는 append/extend를 포함한 어떤 변경도 할 수 없습니다.
    """

    def __init__(self, source: Series[T]):
        self._items = source._items

    def append(self, value: T) -> bool:
        self._reject('append', _VIEW_REASON)

    def extend(self, values: Iterable[T]) -> bool:
        self._reject('extend', _VIEW_REASON)
