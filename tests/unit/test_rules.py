"""
Unit tests for indicator rules and rule combinators.
"""

import logging
from decimal import Decimal
from datetime import datetime, timezone, timedelta

import pytest

from tagraph.models.bar import Bar
from tagraph.models.bar_series import FixedDateBarSeries
from tagraph.indicators.numeric_indicator import NumericIndicator
from tagraph.rules.indicator_rules import CrossedUpIndicatorRule, OverIndicatorRule
from tagraph.utils.errors import IncompatibleSeriesError

BASE_DATE = datetime(2010, 1, 1, tzinfo=timezone.utc)
PERIOD = timedelta(minutes=5)
CLOSES = [Decimal(c) for c in [1, 2, 3, 2, 1, 2, 3]]


def _create_series(closes=CLOSES, base_date=BASE_DATE) -> FixedDateBarSeries:
    bars = [
        Bar(time_period=PERIOD, end_time=base_date + PERIOD * i, open=c, high=c, low=c, close=c)
        for i, c in enumerate(closes)
    ]
    return FixedDateBarSeries("RULES", base_date, bars)


class TestCrossRules:

    def setup_method(self):
        self.series = _create_series()
        self.close = NumericIndicator.close_price(self.series)
        self.level = NumericIndicator.constant(self.series, 2)

    def test_crossed_over_number(self):
        rule = self.close.crossed_over(2)
        assert [i for i in range(len(CLOSES)) if rule.is_satisfied(i)] == [2, 6]

    def test_crossed_under_number(self):
        rule = self.close.crossed_under(2)
        assert [i for i in range(len(CLOSES)) if rule.is_satisfied(i)] == [4]

    def test_crossed_over_matches_definition(self):
        other = self.close.previous(1)
        rule = self.close.crossed_over(other)
        for i in range(1, len(CLOSES)):
            a0, b0 = self.close.get_value(i - 1), other.get_value(i - 1)
            a1, b1 = self.close.get_value(i), other.get_value(i)
            assert rule.is_satisfied(i) == (a0 <= b0 and a1 > b1)

    def test_crossed_under_is_mirror(self):
        over = self.close.crossed_over(self.level)
        under = self.level.crossed_under(self.close)
        for i in range(len(CLOSES)):
            assert over.is_satisfied(i) == under.is_satisfied(i)

    def test_never_satisfied_at_index_zero(self):
        rule = CrossedUpIndicatorRule(NumericIndicator.constant(self.series, 5), self.level)
        assert not rule.is_satisfied(0)


class TestComparisonRules:

    def setup_method(self):
        self.series = _create_series()
        self.close = NumericIndicator.close_price(self.series)

    def test_is_greater_than(self):
        rule = self.close.is_greater_than(2)
        assert [rule.is_satisfied(i) for i in range(len(CLOSES))] == [c > 2 for c in CLOSES]

    def test_is_less_than(self):
        rule = self.close.is_less_than(self.close.sma(2))
        sma = self.close.sma(2)
        for i in range(len(CLOSES)):
            assert rule.is_satisfied(i) == (CLOSES[i] < sma.get_value(i))

    def test_equal_values_satisfy_neither(self):
        assert not self.close.is_greater_than(self.close).is_satisfied(3)
        assert not self.close.is_less_than(self.close).is_satisfied(3)


class TestCombinators:

    def setup_method(self):
        self.series = _create_series()
        self.close = NumericIndicator.close_price(self.series)
        self.above = self.close.is_greater_than(2)
        self.below = self.close.is_less_than(2)

    def test_or_and_not(self):
        away_from_two = self.above | self.below
        at_two = ~away_from_two
        for i, c in enumerate(CLOSES):
            assert away_from_two.is_satisfied(i) == (c != 2)
            assert at_two.is_satisfied(i) == (c == 2)

    def test_and_and_xor(self):
        never = self.above.and_(self.below)
        either = self.above.xor(self.below)
        for i, c in enumerate(CLOSES):
            assert not never.is_satisfied(i)
            assert either.is_satisfied(i) == (c != 2)

    def test_negation(self):
        assert self.above.negation().is_satisfied(0)


class TestRuleConstruction:

    def test_incompatible_series_rejected(self):
        close_a = NumericIndicator.close_price(_create_series())
        close_b = NumericIndicator.close_price(_create_series(base_date=BASE_DATE + PERIOD))
        with pytest.raises(IncompatibleSeriesError):
            close_a.crossed_over(close_b)
        with pytest.raises(IncompatibleSeriesError):
            OverIndicatorRule(close_a, close_b)

    def test_evaluation_is_logged_at_debug(self, caplog: pytest.LogCaptureFixture):
        close = NumericIndicator.close_price(_create_series())
        rule = close.is_greater_than(1)
        with caplog.at_level(logging.DEBUG, logger="tagraph.rules.base"):
            rule.is_satisfied(2)
        records = [r for r in caplog.records if r.getMessage() == "rule_evaluated"]
        assert records
        assert records[-1].index == 2
        assert records[-1].satisfied is True
