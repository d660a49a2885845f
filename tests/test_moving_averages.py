"""
이동평균 지표 구현 테스트

SMA, WMA, EMA 계산 정확성과 매개변수 검증, 일괄 추가 동작을 검증합니다.
"""

import unittest

import numpy as np

from ta_series import (
    ExponentialMovingAverage, InvalidValueError, MovingAverageFactory, SimpleMovingAverage,
    UnsupportedOperationError, WeightedMovingAverage, period_to_alpha
)


def _reference_sma(data, window):
    return [float(np.mean(data[max(0, i - window + 1):i + 1])) for i in range(len(data))]


class TestSimpleMovingAverage(unittest.TestCase):
    """SMA 테스트"""

    def test_sma_accuracy(self):
        """SMA 계산 정확성 테스트"""
        sma = SimpleMovingAverage(3)
        self.assertTrue(sma.add_all([1, 2, 3, 4, 5]))
        np.testing.assert_allclose(list(sma.values), [1.0, 1.5, 2.0, 3.0, 4.0])

    def test_matches_reference_for_random_data(self):
        """임의 데이터에서 구간 평균과 일치"""
        rng = np.random.default_rng(42)
        data = list(rng.uniform(90, 110, size=60))
        for window in (1, 2, 5, 20, 100):
            with self.subTest(window=window):
                sma = SimpleMovingAverage(window)
                sma.add_all(data)
                self.assertEqual(len(sma), len(data))
                np.testing.assert_allclose(sma.get_history(), _reference_sma(data, window))

    def test_invalid_window(self):
        for bad in (0, -3, 2.5, True, "5"):
            with self.subTest(window=bad):
                with self.assertRaises(InvalidValueError):
                    SimpleMovingAverage(bad)

    def test_add_returns_true(self):
        sma = SimpleMovingAverage(2)
        self.assertTrue(sma.add(10))
        self.assertEqual(sma.tail(), 10.0)

    def test_add_all_empty_is_noop(self):
        sma = SimpleMovingAverage(2)
        self.assertFalse(sma.add_all([]))
        self.assertEqual(len(sma), 0)
        self.assertIsNone(sma.tail())

    def test_partial_batch_keeps_prefix(self):
        """일괄 추가 중 실패하면 이전 결과는 유지"""
        sma = SimpleMovingAverage(2)
        with self.assertRaises(InvalidValueError):
            sma.add_all([1, 3, "x", 4])
        np.testing.assert_allclose(list(sma.values), [1.0, 2.0])

    def test_non_finite_input_rejected(self):
        sma = SimpleMovingAverage(2)
        for bad in (float('nan'), float('inf'), None, True):
            with self.subTest(value=bad):
                with self.assertRaises(InvalidValueError):
                    sma.add(bad)
        self.assertEqual(len(sma), 0)

    def test_derived_values_cannot_be_appended(self):
        sma = SimpleMovingAverage(2)
        sma.add(1)
        with self.assertRaises(UnsupportedOperationError):
            sma.append(5.0)
        with self.assertRaises(UnsupportedOperationError):
            sma.extend([5.0])
        with self.assertRaises(UnsupportedOperationError):
            sma.values.insert(0, 5.0)
        with self.assertRaises(UnsupportedOperationError):
            sma.values.append(5.0)
        with self.assertRaises(UnsupportedOperationError):
            sma.values.extend([99.0])
        self.assertEqual(list(sma.values), [1.0])
        self.assertEqual(sma.tail(), 1.0)

    def test_history_and_status(self):
        sma = SimpleMovingAverage(2)
        sma.add_all([2, 4, 6])
        np.testing.assert_allclose(sma.get_history(2), [3.0, 5.0])
        self.assertEqual(sma.get_history(0).size, 0)
        status = sma.get_status()
        self.assertEqual(status['indicator'], 'SimpleMovingAverage')
        self.assertEqual(status['parameters'], {'window': 2})
        self.assertEqual(status['count'], 3)
        self.assertEqual(status['current_value'], 5.0)
        self.assertIn('window=2', str(sma))


class TestWeightedMovingAverage(unittest.TestCase):
    """WMA 테스트"""

    def test_wma_accuracy(self):
        wma = WeightedMovingAverage(3)
        wma.add_all([1, 2, 3, 4])
        np.testing.assert_allclose(list(wma.values), [1.0, 5 / 3, 14 / 6, 20 / 6])

    def test_newest_weighted_highest(self):
        wma = WeightedMovingAverage(4)
        sma = SimpleMovingAverage(4)
        for price in (10, 10, 10, 20):
            wma.add(price)
            sma.add(price)
        self.assertGreater(wma.tail(), sma.tail())

    def test_window_property(self):
        self.assertEqual(WeightedMovingAverage(7).window, 7)
        with self.assertRaises(InvalidValueError):
            WeightedMovingAverage(0)


class TestExponentialMovingAverage(unittest.TestCase):
    """EMA 테스트"""

    def test_alpha_range(self):
        for bad in (0.0, 1.0, -0.1, 1.5, True):
            with self.subTest(alpha=bad):
                with self.assertRaises(InvalidValueError):
                    ExponentialMovingAverage(bad)
        self.assertEqual(ExponentialMovingAverage(0.5).alpha, 0.5)

    def test_zero_day_convention(self):
        """첫 값은 alpha * 첫 가격"""
        ema = ExponentialMovingAverage(0.5)
        ema.add_all([2, 4, 8])
        np.testing.assert_allclose(list(ema.values), [1.0, 2.5, 5.25])

    def test_recursion(self):
        rng = np.random.default_rng(7)
        data = rng.uniform(10, 20, size=40)
        alpha = 0.3
        ema = ExponentialMovingAverage(alpha)
        ema.add_all(data)

        expected = []
        prev = 0.0
        for price in data:
            prev = alpha * price + (1 - alpha) * prev
            expected.append(prev)
        np.testing.assert_allclose(ema.get_history(), expected)

    def test_deterministic(self):
        """같은 입력은 같은 출력"""
        data = [5.0, 3.0, 8.5, 2.25, 7.0]
        first = ExponentialMovingAverage(0.25)
        second = ExponentialMovingAverage(0.25)
        first.add_all(data)
        second.add_all(data)
        self.assertEqual(first.values, second.values)


class TestMovingAverageFactory(unittest.TestCase):
    """팩토리 테스트"""

    def test_create(self):
        self.assertIsInstance(MovingAverageFactory.create_sma(5), SimpleMovingAverage)
        self.assertIsInstance(MovingAverageFactory.create_wma(5), WeightedMovingAverage)
        self.assertEqual(MovingAverageFactory.create_ema(0.2).alpha, 0.2)
        self.assertAlmostEqual(MovingAverageFactory.create_ema_for_period(12).alpha, 2 / 13)

    def test_standard_set(self):
        ma_set = MovingAverageFactory.create_standard_set()
        self.assertEqual(ma_set['sma_20'].window, 20)
        self.assertEqual(ma_set['wma_5'].window, 5)
        self.assertAlmostEqual(ma_set['ema_26'].alpha, 2 / 27)

    def test_period_to_alpha(self):
        self.assertAlmostEqual(period_to_alpha(9), 0.2)
        for bad in (0, 0.5, -2, None):
            with self.subTest(period=bad):
                with self.assertRaises(InvalidValueError):
                    period_to_alpha(bad)


if __name__ == '__main__':
    unittest.main()
