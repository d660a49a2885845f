"""
이동평균 지표 구현

단순 이동평균(SMA), 가중 이동평균(WMA), 지수 이동평균(EMA)을 계산하는 클래스들을 제공합니다.
샘플 하나가 추가될 때마다 출력 값 하나가 추가되는 증분 계산 방식입니다.
"""

import logging
import numbers
from typing import Any, Callable, Dict, Optional, Sequence

from .base_engine import TechnicalIndicatorEngine
from .exceptions import InvalidValueError
from .series import Series
from .windowing import validate_window, windowed_average, windowed_weighted_average

logger = logging.getLogger(__name__)

# 첫 샘플 이전의 EMA 값
ZERO_DAY_EMA = 0.0


def period_to_alpha(period: float) -> float:
    """
    기간을 EMA 평활화 계수로 변환 (alpha = 2 / (period + 1))

    Raises:
        InvalidValueError: period가 1보다 작은 경우
    """
    if isinstance(period, bool) or not isinstance(period, numbers.Real) or not period >= 1:
        raise InvalidValueError("기간은 1 이상이어야 합니다", details={'period': period})
    return 2.0 / (float(period) + 1.0)


class _RawHistoryAverage(TechnicalIndicatorEngine):
    """
    원본 입력 히스토리를 보관하고 윈도우 축약 함수로 출력 값을 계산하는 이동평균

    원본 히스토리는 외부에 노출되지 않으며, 출력 시계열만 공개됩니다.
    """

    _reducer: Callable[[Sequence, int], Optional[float]]
    _label = "MA"

    def __init__(self, window: int, allow_non_finite: bool = False):
        super().__init__(allow_non_finite)
        self._window = validate_window(window)
        self._raw: Series = Series()
        logger.info(f"{self._label} 계산기 생성: {self._window}일 기간")

    @property
    def window(self) -> int:
        return self._window

    def add(self, value: float) -> bool:
        """
        새 가격을 추가하고 이동평균 값 하나를 계산

        Args:
            value (float): 새로운 가격 데이터

        Returns:
            bool: 항상 True

        Raises:
            InvalidValueError: 가격이 실수가 아니거나 유한하지 않은 경우
        """
        price = self._validate_input(value)
        self._raw.append(price)
        return self._record(type(self)._reducer(self._raw, self._window))

    def _parameters(self) -> Dict[str, Any]:
        return {'window': self._window}


class SimpleMovingAverage(_RawHistoryAverage):
    """
    단순 이동평균(Simple Moving Average, SMA) 계산 클래스

    SMA 공식: SMA = (P1 + P2 + ... + Pw) / w
    - w = min(window, 지금까지 입력된 샘플 수)

    데이터가 window보다 적으면 사용 가능한 모든 샘플의 평균을 출력합니다 (패딩/NaN 없음).

    Example:
        >>> sma = SimpleMovingAverage(3)
        >>> sma.add_all([1.0, 2.0, 3.0, 4.0])
        True
        >>> list(sma.values)
        [1.0, 1.5, 2.0, 3.0]
    """

    _reducer = staticmethod(windowed_average)
    _label = "SMA"


class WeightedMovingAverage(_RawHistoryAverage):
    """
    가중 이동평균(Weighted Moving Average, WMA) 계산 클래스

    WMA 공식: (w*Pw + (w-1)*Pw-1 + ... + 1*P1) / (w(w+1)/2)
    - P1..Pw: 최근 w개 가격 (오래된 순)
    - 가장 최근 가격에 가장 큰 가중치
    """

    _reducer = staticmethod(windowed_weighted_average)
    _label = "WMA"


class ExponentialMovingAverage(TechnicalIndicatorEngine):
    """
    지수 이동평균(Exponential Moving Average, EMA) 계산 클래스

    EMA 공식: EMA(t) = α × P(t) + (1-α) × EMA(t-1)
    - EMA(-1) = 0.0 (첫 샘플 이전 값)

    샘플당 O(1)로 계산되며, 이전 EMA 값은 출력 시계열의 꼬리와 같습니다.
    """

    def __init__(self, alpha: float):
        """
        지수 이동평균 계산기 초기화

        Args:
            alpha (float): 평활화 계수, 0 < alpha < 1

        Raises:
            InvalidValueError: alpha가 (0, 1) 범위를 벗어난 경우
        """
        super().__init__()
        if isinstance(alpha, bool) or not isinstance(alpha, numbers.Real) or not 0 < alpha < 1:
            raise InvalidValueError(f"{alpha} not in (0, 1)", details={'alpha': alpha})
        self._alpha = float(alpha)
        self._prev = ZERO_DAY_EMA

        logger.info(f"EMA 계산기 생성: α={self._alpha:.4f}")

    @property
    def alpha(self) -> float:
        return self._alpha

    def add(self, value: float) -> bool:
        """새 가격으로 EMA 값 하나를 계산하여 추가"""
        price = self._validate_input(value)
        ema = self._alpha * price + (1 - self._alpha) * self._prev
        self._prev = ema
        return self._record(ema)

    def _parameters(self) -> Dict[str, Any]:
        return {'alpha': self._alpha}


class MovingAverageFactory:
    """
    이동평균 객체를 생성하는 팩토리 클래스
    """

    @staticmethod
    def create_sma(window: int) -> SimpleMovingAverage:
        return SimpleMovingAverage(window)

    @staticmethod
    def create_wma(window: int) -> WeightedMovingAverage:
        return WeightedMovingAverage(window)

    @staticmethod
    def create_ema(alpha: float) -> ExponentialMovingAverage:
        return ExponentialMovingAverage(alpha)

    @staticmethod
    def create_ema_for_period(period: int) -> ExponentialMovingAverage:
        """기간으로부터 alpha = 2 / (period + 1)인 EMA 생성"""
        return ExponentialMovingAverage(period_to_alpha(period))

    @staticmethod
    def create_standard_set() -> Dict[str, TechnicalIndicatorEngine]:
        """
        표준 이동평균 세트 생성 (5, 10, 20, 60, 120일)

        Returns:
            dict: 생성된 이동평균 객체들의 딕셔너리

        Example:
            >>> ma_set = MovingAverageFactory.create_standard_set()
            >>> sma_20 = ma_set['sma_20']
            >>> ema_12 = ma_set['ema_12']
        """
        result: Dict[str, TechnicalIndicatorEngine] = {}
        for window in (5, 10, 20, 60, 120):
            result[f'sma_{window}'] = SimpleMovingAverage(window)
            result[f'wma_{window}'] = WeightedMovingAverage(window)
        for period in (5, 10, 12, 20, 26, 60):
            result[f'ema_{period}'] = ExponentialMovingAverage(period_to_alpha(period))
        return result
