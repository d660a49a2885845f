"""
설정 및 예외 모듈 테스트
"""

import logging
import unittest
from unittest import mock

from ta_series import (
    FlatRangeError, IndexOutOfRangeError, InvalidValueError, Kdj, Macd, Settings,
    TechnicalAnalysisError, UnsupportedOperationError, ValueOutOfRangeError,
    configure_logging, get_settings, settings, validate_settings
)


class TestSettings(unittest.TestCase):
    """설정 로드 및 검증 테스트"""

    def test_get_settings_returns_global_instance(self):
        self.assertIs(get_settings(), settings)

    def test_log_level_value(self):
        with mock.patch.object(Settings, 'LOG_LEVEL', 'debug'):
            self.assertEqual(settings.log_level_value(), logging.DEBUG)
        with mock.patch.object(Settings, 'LOG_LEVEL', 'LOUD'):
            self.assertIsNone(settings.log_level_value())

    def test_validate_settings_flags_bad_values(self):
        with mock.patch.object(Settings, 'KDJ_FLAT_RANGE_POLICY', 'clamp'), \
                mock.patch.object(Settings, 'KDJ_K_DAYS', 0), \
                mock.patch.object(Settings, 'MACD_SHORT_TERM', 30.0), \
                mock.patch.object(Settings, 'MACD_LONG_TERM', 26.0):
            warnings = validate_settings()
        self.assertTrue(any('KDJ_FLAT_RANGE_POLICY' in w for w in warnings))
        self.assertTrue(any('KDJ_K_DAYS' in w for w in warnings))
        self.assertTrue(any('MACD_SHORT_TERM' in w for w in warnings))

    def test_validate_settings_clean(self):
        with mock.patch.object(Settings, 'LOG_LEVEL', 'INFO'), \
                mock.patch.object(Settings, 'KDJ_FLAT_RANGE_POLICY', 'propagate'), \
                mock.patch.object(Settings, 'KDJ_N_DAYS', 9), \
                mock.patch.object(Settings, 'KDJ_K_DAYS', 3), \
                mock.patch.object(Settings, 'KDJ_D_DAYS', 3), \
                mock.patch.object(Settings, 'MACD_SHORT_TERM', 12.0), \
                mock.patch.object(Settings, 'MACD_LONG_TERM', 26.0), \
                mock.patch.object(Settings, 'MACD_MID_TERM', 9.0):
            self.assertEqual(validate_settings(), [])

    def test_indicator_defaults_follow_settings(self):
        """생성자 기본값은 생성 시점의 설정을 따름"""
        with mock.patch.object(Settings, 'MACD_SHORT_TERM', 0.5), \
                mock.patch.object(Settings, 'KDJ_N_DAYS', 5), \
                mock.patch.object(Settings, 'KDJ_FLAT_RANGE_POLICY', 'raise'):
            macd = Macd()
            kdj = Kdj()
        self.assertEqual(macd.short_alpha, 0.5)
        self.assertEqual(kdj.n_days, 5)
        self.assertEqual(kdj.flat_range, 'raise')

    def test_configure_logging(self):
        with mock.patch('logging.basicConfig') as basic_config:
            configure_logging('debug')
        basic_config.assert_called_once_with(level='DEBUG', format=settings.LOG_FORMAT)


class TestExceptions(unittest.TestCase):
    """예외 계층 테스트"""

    def test_hierarchy(self):
        self.assertTrue(issubclass(InvalidValueError, ValueError))
        self.assertIs(ValueOutOfRangeError, InvalidValueError)
        self.assertTrue(issubclass(UnsupportedOperationError, TypeError))
        self.assertTrue(issubclass(IndexOutOfRangeError, IndexError))
        self.assertTrue(issubclass(FlatRangeError, ArithmeticError))
        for cls in (InvalidValueError, UnsupportedOperationError, IndexOutOfRangeError, FlatRangeError):
            self.assertTrue(issubclass(cls, TechnicalAnalysisError))

    def test_message_and_details(self):
        error = InvalidValueError("잘못된 window", details={'window': 0})
        self.assertEqual(error.message, "잘못된 window")
        self.assertEqual(error.details, {'window': 0})
        self.assertIn("InvalidValueError", str(error))
        self.assertIn("'window': 0", str(error))

    def test_default_message(self):
        self.assertEqual(FlatRangeError().message, "최고가와 최저가가 같습니다")
        self.assertEqual(str(UnsupportedOperationError()), "UnsupportedOperationError: 지원하지 않는 연산")


if __name__ == '__main__':
    unittest.main()
