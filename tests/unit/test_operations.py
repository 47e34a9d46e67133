"""
Unit tests for algebraic composition of indicators.
"""

from decimal import Decimal
from datetime import datetime, timezone, timedelta

import pytest

from tagraph.models.bar import Bar
from tagraph.models.bar_series import FixedDateBarSeries
from tagraph.indicators.base import Indicator
from tagraph.indicators.numeric_indicator import NumericIndicator
from tagraph.utils.errors import IncompatibleSeriesError

BASE_DATE = datetime(2010, 1, 1, tzinfo=timezone.utc)
PERIOD = timedelta(minutes=5)
CLOSES = ['4', '9', '2.25', '16', '1']


def _create_series(closes=CLOSES, base_date=BASE_DATE, name="OPS") -> FixedDateBarSeries:
    """Series starting at index 0 with high/low one above/below close and volume = 10 * close."""
    bars = []
    for i, c in enumerate(closes):
        close = Decimal(c)
        bars.append(Bar(
            time_period=PERIOD,
            end_time=base_date + PERIOD * i,
            open=close,
            high=close + 1,
            low=close - 1,
            close=close,
            volume=close * 10,
        ))
    return FixedDateBarSeries(name, base_date, bars)


class CountingIndicator(Indicator):
    """Close price indicator that counts evaluations."""

    def __init__(self, bar_series):
        super().__init__(bar_series)
        self.calls = 0

    def get_value(self, index):
        self.calls += 1
        return self.bar_series.get_bar(index).close


class TestBinaryOperations:

    def setup_method(self):
        self.series = _create_series()
        self.close = NumericIndicator.close_price(self.series)
        self.volume = NumericIndicator.volume(self.series)

    def _indices(self):
        return range(self.series.begin_index, self.series.end_index + 1)

    def test_pointwise_arithmetic(self):
        plus = self.close.plus(self.volume)
        minus = self.close.minus(self.volume)
        product = self.close.multiplied_by(self.volume)
        quotient = self.close.divided_by(self.volume)

        for i in self._indices():
            a, b = self.close.get_value(i), self.volume.get_value(i)
            assert plus.get_value(i) == a + b
            assert minus.get_value(i) == a - b
            assert product.get_value(i) == a * b
            assert quotient.get_value(i) == a / b

    def test_min_and_max(self):
        high = NumericIndicator.high_price(self.series)
        low = NumericIndicator.low_price(self.series)
        three = Decimal(3)

        for i in self._indices():
            c = self.close.get_value(i)
            assert self.close.min(three).get_value(i) == min(c, three)
            assert self.close.max(three).get_value(i) == max(c, three)
            assert self.close.min(high).get_value(i) == c
            assert self.close.max(low).get_value(i) == c

    def test_min_and_max_return_left_operand_on_ties(self):
        # 4 == 4.0 but they print differently
        assert str(self.close.min('4.0').get_value(0)) == '4'
        assert str(self.close.max('4.0').get_value(0)) == '4'
        assert str(NumericIndicator.constant(self.series, '4.0').min(self.close).get_value(0)) == '4.0'

    def test_number_literals(self):
        assert self.close.plus(1).get_value(1) == Decimal(10)
        assert self.close.minus('0.5').get_value(1) == Decimal('8.5')
        assert self.close.multiplied_by(0.1).get_value(1) == Decimal('0.9')
        assert self.close.divided_by(Decimal(2)).get_value(1) == Decimal('4.5')
        assert self.close.multiply(2).get_value(1) == Decimal(18)
        assert self.close.div(3).get_value(1) == Decimal(3)

    def test_python_operators(self):
        assert (self.close + self.volume).get_value(0) == Decimal(44)
        assert (self.close - 1).get_value(0) == Decimal(3)
        assert (10 - self.close).get_value(0) == Decimal(6)
        assert (2 * self.close).get_value(0) == Decimal(8)
        assert (self.close / 2).get_value(0) == Decimal(2)
        assert (8 / self.close).get_value(0) == Decimal(2)
        assert (-self.close).get_value(0) == Decimal(-4)
        assert (1 + self.close).get_value(0) == Decimal(5)

    def test_division_by_zero_raises_at_evaluation(self):
        quotient = self.close.divided_by(0)
        with pytest.raises(ArithmeticError):
            quotient.get_value(0)


class TestUnaryOperations:

    def setup_method(self):
        self.series = _create_series()
        self.close = NumericIndicator.close_price(self.series)

    def test_sqrt(self):
        expected = [Decimal(2), Decimal(3), Decimal('1.5'), Decimal(4), Decimal(1)]
        sqrt = self.close.sqrt()
        for i, value in enumerate(expected):
            assert sqrt.get_value(i) == value
            assert sqrt.get_value(i) == self.close.get_value(i).sqrt()

    def test_abs(self):
        shifted = self.close.minus(5)
        for i in range(self.series.bar_count):
            assert shifted.abs().get_value(i) == abs(self.close.get_value(i) - 5)
            assert abs(shifted).get_value(i) == abs(self.close.get_value(i) - 5)

    def test_squared(self):
        squared = self.close.squared()
        for i in range(self.series.bar_count):
            c = self.close.get_value(i)
            assert squared.get_value(i) == c * c

    def test_negate(self):
        assert self.close.negate().get_value(3) == Decimal(-16)


class TestEvaluationModel:
    """Composition nodes are lazy and uncached."""

    def setup_method(self):
        self.series = _create_series()
        self.counter = CountingIndicator(self.series)
        self.source = NumericIndicator.of(self.counter)

    def test_operations_recompute_every_query(self):
        composite = self.source.plus(1)
        composite.get_value(2)
        composite.get_value(2)
        assert self.counter.calls == 2

    def test_construction_does_not_evaluate(self):
        self.source.plus(1).multiplied_by(self.source).sqrt()
        assert self.counter.calls == 0

    def test_squared_evaluates_operand_twice(self):
        self.source.squared().get_value(1)
        assert self.counter.calls == 2

    def test_cached_wrapper_memoizes(self):
        cached = self.source.squared().cached()
        first = cached.get_value(1)
        second = cached.get_value(1)
        assert first is second
        assert self.counter.calls == 2

    def test_composition_reports_no_unstable_bars(self):
        sma = self.source.sma(3)
        assert sma.unstable_bars == 3
        assert sma.plus(1).unstable_bars == 0
        assert sma.minus(sma).unstable_bars == 0
        assert sma.sqrt().unstable_bars == 0
        assert sma.cached().unstable_bars == 3

    def test_repr_describes_graph(self):
        assert repr(NumericIndicator.close_price(self.series).plus(1)) == "(ClosePriceIndicator + Constant(1))"
        assert repr(NumericIndicator.close_price(self.series).sqrt()) == "sqrt(ClosePriceIndicator)"


class TestCrossSeriesComposition:

    def test_different_base_date_is_rejected(self):
        close_a = NumericIndicator.close_price(_create_series(name="A"))
        close_b = NumericIndicator.close_price(_create_series(base_date=BASE_DATE + PERIOD, name="B"))

        with pytest.raises(IncompatibleSeriesError):
            close_a.plus(close_b)
        with pytest.raises(ValueError):
            close_a.max(close_b)

    def test_sub_series_with_shifted_base_is_rejected(self):
        series = _create_series()
        sub_series = series.get_sub_series(1, 3)
        with pytest.raises(IncompatibleSeriesError):
            NumericIndicator.close_price(series).minus(NumericIndicator.close_price(sub_series))

    def test_same_grid_is_accepted(self):
        close_a = NumericIndicator.close_price(_create_series(name="A"))
        close_b = NumericIndicator.close_price(_create_series(closes=['1', '1', '1', '1', '1'], name="B"))
        assert close_a.plus(close_b).get_value(0) == Decimal(5)
