"""
오실레이터 지표 구현

MACD와 KDJ(스토캐스틱) 지표를 계산하는 클래스들을 제공합니다.
두 지표 모두 단순 지표(EMA, SMA)를 내부에 조합하며, 출력 값은 add()로만 계산됩니다.
"""

import logging
import numbers
from typing import Any, Dict, Optional, Tuple, Union

import numpy as np

from .base_engine import TechnicalIndicatorEngine
from .config import FLAT_RANGE_POLICIES, FLAT_RANGE_RAISE, get_settings
from .exceptions import FlatRangeError, InvalidValueError
from .moving_averages import ExponentialMovingAverage, SimpleMovingAverage, period_to_alpha
from .series import KdjElement, MacdElement, Series
from .windowing import HIGHEST, LOWEST, validate_window

logger = logging.getLogger(__name__)


def term_to_alpha(term: float) -> float:
    """
    MACD 기간 매개변수를 EMA 평활화 계수로 변환

    - 0 < term < 1: 평활화 계수로 그대로 사용
    - term >= 1: 기간으로 보고 2 / (term + 1)로 변환

    Raises:
        InvalidValueError: term이 0 이하이거나 실수가 아닌 경우
    """
    if isinstance(term, bool) or not isinstance(term, numbers.Real) or not term > 0:
        raise InvalidValueError(f"{term}는 양수여야 합니다", details={'term': term})
    if term < 1:
        return float(term)
    return period_to_alpha(term)


class Macd(TechnicalIndicatorEngine):
    """
    MACD (Moving Average Convergence Divergence) 계산 클래스

    구성 요소:
    - DIF = EMA(short) - EMA(long)
    - DEA = EMA(DIF, mid)
    - MACD = (DIF - DEA) × 2

    세 EMA 모두 첫 샘플 이전 값을 0.0으로 시작하므로 첫 샘플부터 값이 출력됩니다.
    """

    _fields = MacdElement._fields

    def __init__(self, short_term: Optional[float] = None, long_term: Optional[float] = None,
                 mid_term: Optional[float] = None):
        """
        MACD 지표 초기화

        Args:
            short_term: 단기 EMA 매개변수 (None이면 설정값, 기본 12)
            long_term: 장기 EMA 매개변수 (None이면 설정값, 기본 26)
            mid_term: 시그널(DEA) EMA 매개변수 (None이면 설정값, 기본 9)

        매개변수는 term_to_alpha 규칙에 따라 평활화 계수로 변환됩니다.

        Raises:
            InvalidValueError: 매개변수가 유효한 평활화 계수로 변환되지 않는 경우
        """
        super().__init__()
        settings = get_settings()
        self.short_term = settings.MACD_SHORT_TERM if short_term is None else short_term
        self.long_term = settings.MACD_LONG_TERM if long_term is None else long_term
        self.mid_term = settings.MACD_MID_TERM if mid_term is None else mid_term

        self._ema_short = ExponentialMovingAverage(term_to_alpha(self.short_term))
        self._ema_long = ExponentialMovingAverage(term_to_alpha(self.long_term))
        self._ema_signal = ExponentialMovingAverage(term_to_alpha(self.mid_term))

        logger.info(f"MACD 지표 생성: EMA({self.short_term}, {self.long_term}), Signal({self.mid_term})")

    @property
    def short_alpha(self) -> float:
        return self._ema_short.alpha

    @property
    def long_alpha(self) -> float:
        return self._ema_long.alpha

    @property
    def mid_alpha(self) -> float:
        return self._ema_signal.alpha

    def add(self, close: float) -> bool:
        """
        종가를 추가하고 MACD 원소 하나를 계산

        Args:
            close (float): 종가

        Returns:
            bool: 항상 True
        """
        price = self._validate_input(close, "close")

        self._ema_short.add(price)
        self._ema_long.add(price)
        dif = self._ema_short.tail() - self._ema_long.tail()

        self._ema_signal.add(dif)
        dea = self._ema_signal.tail()

        return self._record(MacdElement((dif - dea) * 2.0, dif, dea))

    def get_history_components(self) -> Dict[str, np.ndarray]:
        """
        MACD 구성 요소들의 히스토리 반환

        Returns:
            Dict: 'macd', 'dif', 'dea' 각각의 히스토리 배열
        """
        return {
            field: np.asarray([getattr(e, field) for e in self._output], dtype=np.float64)
            for field in MacdElement._fields
        }

    def _parameters(self) -> Dict[str, Any]:
        return {
            'short_term': self.short_term,
            'long_term': self.long_term,
            'mid_term': self.mid_term,
        }


class Kdj(TechnicalIndicatorEngine):
    """
    KDJ 스토캐스틱 오실레이터 계산 클래스

    공식:
    - RSV = (Close - LL) / (HH - LL) × 100
      (HH, LL: 최근 n일 최고가의 최고값, 최저가의 최저값)
    - K = SMA(RSV, k_days)
    - D = SMA(K, d_days)
    - J = 3K - 2D

    HH == LL이면 RSV의 분모가 0이 됩니다. flat_range 정책에 따라
    "propagate"는 IEEE 부동소수점 규칙(0/0 = NaN, x/0 = ±inf)대로 값을 전파하고,
    "raise"는 상태를 변경하지 않고 FlatRangeError를 발생시킵니다.
    """

    _fields = KdjElement._fields

    def __init__(self, n_days: Optional[int] = None, k_days: Optional[int] = None,
                 d_days: Optional[int] = None, flat_range: Optional[str] = None):
        """
        KDJ 지표 초기화

        Args:
            n_days: RSV 최고/최저 탐색 기간 (None이면 설정값, 기본 9)
            k_days: K 평활화 기간 (None이면 설정값, 기본 3)
            d_days: D 평활화 기간 (None이면 설정값, 기본 3)
            flat_range: "propagate" 또는 "raise" (None이면 설정값)

        Raises:
            InvalidValueError: 기간이 양의 정수가 아니거나 정책이 잘못된 경우
        """
        super().__init__()
        settings = get_settings()
        self._n_days = validate_window(settings.KDJ_N_DAYS if n_days is None else n_days, "n_days")
        self._k_days = validate_window(settings.KDJ_K_DAYS if k_days is None else k_days, "k_days")
        self._d_days = validate_window(settings.KDJ_D_DAYS if d_days is None else d_days, "d_days")

        policy = settings.KDJ_FLAT_RANGE_POLICY if flat_range is None else flat_range
        if policy not in FLAT_RANGE_POLICIES:
            raise InvalidValueError(f"flat_range는 {FLAT_RANGE_POLICIES} 중 하나여야 합니다",
                                    details={'flat_range': policy})
        self._flat_range = policy

        self._high: Series = Series()
        self._low: Series = Series()
        self._k_sma = SimpleMovingAverage(self._k_days, allow_non_finite=True)
        self._d_sma = SimpleMovingAverage(self._d_days, allow_non_finite=True)

        logger.info(f"KDJ 지표 생성: {self._n_days}일 기간, K={self._k_days}, D={self._d_days}, "
                    f"flat_range={self._flat_range}")

    @property
    def n_days(self) -> int:
        return self._n_days

    @property
    def k_days(self) -> int:
        return self._k_days

    @property
    def d_days(self) -> int:
        return self._d_days

    @property
    def flat_range(self) -> str:
        return self._flat_range

    def _window_extreme(self, history: Series, value: float, direction: int) -> float:
        """새 값을 포함한 최근 n_days개 원소의 극값 (history는 변경하지 않음)"""
        if self._n_days == 1 or not history:
            return value
        if direction == HIGHEST:
            previous = history.get_high(self._n_days - 1).value
            return max(previous, value)
        previous = history.get_low(self._n_days - 1).value
        return min(previous, value)

    def add(self, close: float, high: float, low: float) -> bool:
        """
        종가/고가/저가를 추가하고 KDJ 원소 하나를 계산

        Args:
            close (float): 종가
            high (float): 고가
            low (float): 저가

        Returns:
            bool: 항상 True

        Raises:
            InvalidValueError: 값이 유효하지 않거나 고가가 저가보다 낮은 경우
            FlatRangeError: flat_range="raise"이고 HH == LL인 경우
        """
        close = self._validate_input(close, "close")
        high = self._validate_input(high, "high")
        low = self._validate_input(low, "low")
        if high < low:
            logger.error(f"데이터 검증 실패: 고가({high})가 저가({low})보다 낮습니다")
            raise InvalidValueError(f"고가({high})가 저가({low})보다 낮을 수 없습니다",
                                    details={'high': high, 'low': low})

        hh = self._window_extreme(self._high, high, HIGHEST)
        ll = self._window_extreme(self._low, low, LOWEST)

        if hh == ll:
            if self._flat_range == FLAT_RANGE_RAISE:
                logger.warning(f"KDJ 최고가와 최저가가 같습니다 (HH=LL={hh}), 샘플 거부")
                raise FlatRangeError(details={'hh': hh, 'll': ll, 'index': len(self._output)})
            logger.warning(f"KDJ 최고가와 최저가가 같습니다 (HH=LL={hh}), RSV가 유한하지 않습니다")

        self._high.append(high)
        self._low.append(low)

        with np.errstate(divide="ignore", invalid="ignore"):
            rsv = float((np.float64(close) - ll) / (np.float64(hh) - ll) * 100.0)

        self._k_sma.add(rsv)
        k_value = self._k_sma.tail()
        self._d_sma.add(k_value)
        d_value = self._d_sma.tail()
        j_value = 3 * k_value - 2 * d_value

        return self._record(KdjElement(k_value, d_value, j_value))

    def _add_item(self, item: Union[Tuple[float, float, float], Any]) -> bool:
        try:
            close, high, low = item
        except (TypeError, ValueError):
            raise InvalidValueError("KDJ 입력은 (close, high, low) 형태여야 합니다",
                                    details={'item': item}) from None
        return self.add(close, high, low)

    def get_history_components(self) -> Dict[str, np.ndarray]:
        """
        KDJ 구성 요소들의 히스토리 반환

        Returns:
            Dict: 'k', 'd', 'j' 각각의 히스토리 배열
        """
        return {
            field: np.asarray([getattr(e, field) for e in self._output], dtype=np.float64)
            for field in KdjElement._fields
        }

    def _parameters(self) -> Dict[str, Any]:
        return {
            'n_days': self._n_days,
            'k_days': self._k_days,
            'd_days': self._d_days,
            'flat_range': self._flat_range,
        }


class OscillatorFactory:
    """
    오실레이터 지표 객체를 생성하는 팩토리 클래스
    """

    @staticmethod
    def create_macd(short_term: Optional[float] = None, long_term: Optional[float] = None,
                    mid_term: Optional[float] = None) -> Macd:
        return Macd(short_term, long_term, mid_term)

    @staticmethod
    def create_kdj(n_days: Optional[int] = None, k_days: Optional[int] = None,
                   d_days: Optional[int] = None, flat_range: Optional[str] = None) -> Kdj:
        return Kdj(n_days, k_days, d_days, flat_range)

    @staticmethod
    def create_standard_set() -> Dict[str, TechnicalIndicatorEngine]:
        """
        표준 오실레이터 세트 생성

        Example:
            >>> oscillators = OscillatorFactory.create_standard_set()
            >>> macd_std = oscillators['macd_standard']
        """
        return {
            'macd_standard': Macd(12, 26, 9),
            'macd_fast': Macd(8, 17, 9),
            'kdj_standard': Kdj(9, 3, 3),
            'kdj_slow': Kdj(14, 3, 3),
        }
