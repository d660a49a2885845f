"""
기술적 지표 계산을 위한 기본 엔진 클래스

모든 기술적 지표 클래스가 상속받을 기본 클래스를 정의합니다.
새 입력 샘플 하나마다 파생 값 하나를 출력 시계열에 추가하는 증분 계산 인터페이스를 제공합니다.
"""

import logging
import numbers
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Optional, Tuple

import numpy as np

from .exceptions import InvalidValueError, UnsupportedOperationError
from .series import Series, SeriesView

logger = logging.getLogger(__name__)


class TechnicalIndicatorEngine(ABC):
    """
    모든 기술적 지표 계산 클래스의 기본 클래스

    공통 기능:
    - 입력 데이터 검증
    - 파생 값 출력 시계열 관리 (추가 전용)
    - 일괄 추가 (add_all)
    - 읽기 접근자 및 히스토리 조회

    allow_non_finite가 True이면 NaN/무한값 입력을 그대로 받아들입니다
    (KDJ 내부 평활화처럼 상위 지표가 비유한 값을 전파하는 경우).

    출력 시계열은 add()를 통해서만 증가하며 외부에서 직접 원소를 추가할 수 없습니다.
    하나의 인스턴스는 하나의 데이터 스트림이 순서대로 갱신해야 합니다 (스레드 안전하지 않음).
    """

    # 다중 출력 지표의 원소 필드 이름 (단일 값 지표는 빈 튜플)
    _fields: Tuple[str, ...] = ()

    def __init__(self, allow_non_finite: bool = False):
        self._output: Series = Series()
        self._allow_non_finite = allow_non_finite

    def _validate_input(self, value: Any, name: str = "value") -> float:
        """
        입력 샘플을 검증하고 float로 변환

        Args:
            value: 검증할 샘플
            name: 오류 메시지에 사용할 이름

        Returns:
            float: 검증된 값

        Raises:
            InvalidValueError: 실수가 아니거나, allow_non_finite가 아닌데 NaN/무한값인 경우
        """
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            logger.error(f"데이터 검증 실패: {name}={value!r}는 실수가 아닙니다")
            raise InvalidValueError(f"{name}는 실수여야 합니다", details={name: value})

        result = float(value)
        if not self._allow_non_finite and not np.isfinite(result):
            logger.error(f"데이터 검증 실패: {name}={value!r}")
            raise InvalidValueError(f"{name}에 NaN이나 무한값은 사용할 수 없습니다",
                                    details={name: value})
        return result

    @abstractmethod
    def add(self, *args: Any) -> bool:
        """
        새 샘플을 추가하고 지표 값 하나를 출력 시계열에 추가

        Returns:
            bool: 새 값이 추가되었으면 True
        """

    def _add_item(self, item: Any) -> bool:
        """add_all의 원소 하나를 add로 전달"""
        return self.add(item)

    def add_all(self, items: Iterable[Any]) -> bool:
        """
        여러 샘플을 순서대로 add

        한 번에 계산하지 않고 원소마다 add를 호출하므로, 중간에 실패하면
        그 이전까지의 결과는 유효하게 남습니다.

        Returns:
            bool: 하나 이상 처리했으면 True, 입력이 비어 있으면 False
        """
        added = False
        for item in items:
            self._add_item(item)
            added = True
        return added

    def _record(self, element: Any) -> bool:
        """계산된 파생 값을 출력 시계열에 추가"""
        self._output.append(element)
        logger.debug(f"{self.__class__.__name__}[{len(self._output) - 1}] = {element}")
        return True

    def append(self, element: Any) -> None:
        """파생 값은 내부에서만 계산되므로 직접 추가할 수 없음"""
        raise UnsupportedOperationError(
            f"{self.__class__.__name__}의 값은 add()로만 계산됩니다",
            details={'operation': 'append'}
        )

    def extend(self, elements: Iterable[Any]) -> None:
        """파생 값은 내부에서만 계산되므로 직접 추가할 수 없음"""
        raise UnsupportedOperationError(
            f"{self.__class__.__name__}의 값은 add_all()로만 계산됩니다",
            details={'operation': 'extend'}
        )

    # -------------------------------------------------------------------------
    # 읽기 접근자
    # -------------------------------------------------------------------------
    @property
    def values(self) -> SeriesView:
        """출력 시계열의 읽기 전용 뷰"""
        return SeriesView(self._output)

    def head(self) -> Any:
        return self._output.head()

    def tail(self, reversed_index: int = 0) -> Any:
        return self._output.tail(reversed_index)

    def get(self, reversed_index: int) -> Any:
        return self._output.get(reversed_index)

    def get_current_value(self) -> Any:
        """
        현재 지표 값 반환

        Returns:
            가장 최근 지표 값, 계산된 값이 없으면 None
        """
        return self._output.tail()

    def get_history(self, count: Optional[int] = None) -> np.ndarray:
        """
        지표 히스토리 반환

        Args:
            count: 반환할 최근 데이터 개수 (None이면 전체)

        Returns:
            np.ndarray: 지표 히스토리 배열 (다중 출력 지표는 필드별 열을 갖는 2차원 배열)
        """
        if not self._output and self._fields:
            return np.empty((0, len(self._fields)), dtype=np.float64)
        history = np.asarray(list(self._output), dtype=np.float64)
        if count is None:
            return history
        if count <= 0:
            return history[:0]
        return history[-count:]

    @abstractmethod
    def _parameters(self) -> Dict[str, Any]:
        """상태 보고에 포함할 지표 매개변수"""

    def get_status(self) -> Dict[str, Any]:
        """
        현재 엔진 상태 정보 반환

        Returns:
            Dict: 상태 정보 딕셔너리
        """
        return {
            'indicator': self.__class__.__name__,
            'parameters': self._parameters(),
            'count': len(self._output),
            'current_value': self.get_current_value(),
        }

    def __len__(self) -> int:
        return len(self._output)

    def __str__(self) -> str:
        params = ", ".join(f"{k}={v}" for k, v in self._parameters().items())
        return f"{self.__class__.__name__}({params}, count={len(self)}, current={self.get_current_value()})"

    def __repr__(self) -> str:
        return self.__str__()
