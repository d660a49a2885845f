"""
추가 전용 시계열 기반 기술적 지표 패키지

가격 샘플이 하나 추가될 때마다 지표 값 하나를 증분 계산합니다.
이동평균(SMA, WMA, EMA), MACD, KDJ 지표와 이들이 사용하는 추가 전용 시계열,
윈도우 축약 연산을 포함합니다.
"""

from .base_engine import TechnicalIndicatorEngine
from .config import Settings, configure_logging, get_settings, settings, validate_settings
from .exceptions import (
    TechnicalAnalysisError, InvalidValueError, ValueOutOfRangeError,
    UnsupportedOperationError, IndexOutOfRangeError, FlatRangeError
)
from .moving_averages import (
    SimpleMovingAverage, WeightedMovingAverage, ExponentialMovingAverage,
    MovingAverageFactory, period_to_alpha
)
from .oscillators import Macd, Kdj, OscillatorFactory, term_to_alpha
from .series import Series, SeriesView, MacdElement, KdjElement
from .windowing import (
    SeriesPoint, SlidingExtremum, HIGHEST, LOWEST, natural_compare,
    scan_extreme, windowed_average, windowed_weighted_average
)

__all__ = [
    'TechnicalIndicatorEngine',
    'Settings',
    'settings',
    'get_settings',
    'validate_settings',
    'configure_logging',
    'TechnicalAnalysisError',
    'InvalidValueError',
    'ValueOutOfRangeError',
    'UnsupportedOperationError',
    'IndexOutOfRangeError',
    'FlatRangeError',
    'SimpleMovingAverage',
    'WeightedMovingAverage',
    'ExponentialMovingAverage',
    'MovingAverageFactory',
    'period_to_alpha',
    'Macd',
    'Kdj',
    'OscillatorFactory',
    'term_to_alpha',
    'Series',
    'SeriesView',
    'MacdElement',
    'KdjElement',
    'SeriesPoint',
    'SlidingExtremum',
    'HIGHEST',
    'LOWEST',
    'natural_compare',
    'scan_extreme',
    'windowed_average',
    'windowed_weighted_average',
]

__version__ = '1.0.0'
