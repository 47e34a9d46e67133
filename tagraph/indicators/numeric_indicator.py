"""
Fluent decorator for numeric indicators.

Arithmetic methods (plus, minus, sqrt, ...) build lightweight uncached
nodes. Methods like sma() and ema() build cached indicators with this
indicator as their source. crossed_over(), is_greater_than() and friends
build rules. Every method taking another operand also accepts a plain
number, which is wrapped as a constant indicator on the same series.
"""

from collections.abc import Sequence
from decimal import Decimal
from typing import List, Optional, Union

import pandas as pd

from configs import config_loader
from ..models.bar_series import BarSeries
from ..rules.base import Rule
from ..rules.indicator_rules import (
    CrossedUpIndicatorRule,
    CrossedDownIndicatorRule,
    OverIndicatorRule,
    UnderIndicatorRule,
)
from ..utils.errors import UnsupportedOperationError
from ..utils.numeric import D
from .base import Indicator
from .cached import MemoizedIndicator
from .helpers import (
    ClosePriceIndicator,
    ConstantIndicator,
    HighPriceIndicator,
    LowPriceIndicator,
    OpenPriceIndicator,
    VolumeIndicator,
)
from .operations import BinaryOperation, UnaryOperation
from .averages import SMAIndicator, EMAIndicator
from .statistics import StandardDeviationIndicator
from .window import HighestValueIndicator, LowestValueIndicator, PreviousValueIndicator

Operand = Union[Indicator, Decimal, int, float, str]


def _bar_count(name: str, bar_count: Optional[int]) -> int:
    if bar_count is not None:
        return bar_count
    return config_loader.get_config('indicators').get('default_bar_counts', {}).get(name, 1 if name == 'previous' else 20)


class NumericIndicator(Indicator):
    """Wraps an indicator and adds arithmetic, derived indicators and rule builders."""

    def __init__(self, delegate: Indicator):
        super().__init__(delegate.bar_series)
        self._delegate = delegate

    @classmethod
    def of(cls, delegate: Indicator) -> 'NumericIndicator':
        return cls(delegate)

    @classmethod
    def close_price(cls, bar_series: BarSeries) -> 'NumericIndicator':
        return cls(ClosePriceIndicator(bar_series))

    @classmethod
    def open_price(cls, bar_series: BarSeries) -> 'NumericIndicator':
        return cls(OpenPriceIndicator(bar_series))

    @classmethod
    def high_price(cls, bar_series: BarSeries) -> 'NumericIndicator':
        return cls(HighPriceIndicator(bar_series))

    @classmethod
    def low_price(cls, bar_series: BarSeries) -> 'NumericIndicator':
        return cls(LowPriceIndicator(bar_series))

    @classmethod
    def volume(cls, bar_series: BarSeries) -> 'NumericIndicator':
        return cls(VolumeIndicator(bar_series))

    @classmethod
    def constant(cls, bar_series: BarSeries, value) -> 'NumericIndicator':
        return cls(ConstantIndicator(bar_series, D(value)))

    @property
    def delegate(self) -> Indicator:
        return self._delegate

    def _operand(self, other: Operand) -> Indicator:
        if isinstance(other, Indicator):
            return other
        return ConstantIndicator(self.bar_series, D(other))

    # Arithmetic (uncached)

    def plus(self, other: Operand) -> 'NumericIndicator':
        """``self + other``"""
        return NumericIndicator(BinaryOperation.sum(self, self._operand(other)))

    def minus(self, other: Operand) -> 'NumericIndicator':
        """``self - other``"""
        return NumericIndicator(BinaryOperation.difference(self, self._operand(other)))

    def multiplied_by(self, other: Operand) -> 'NumericIndicator':
        """``self * other``"""
        return NumericIndicator(BinaryOperation.product(self, self._operand(other)))

    multiply = multiplied_by

    def divided_by(self, other: Operand) -> 'NumericIndicator':
        """``self / other``; division by zero raises decimal.DivisionByZero at evaluation."""
        return NumericIndicator(BinaryOperation.quotient(self, self._operand(other)))

    div = divided_by

    def min(self, other: Operand) -> 'NumericIndicator':
        """The smaller of ``self`` and ``other``; ``self`` on ties."""
        return NumericIndicator(BinaryOperation.min(self, self._operand(other)))

    def max(self, other: Operand) -> 'NumericIndicator':
        """The greater of ``self`` and ``other``; ``self`` on ties."""
        return NumericIndicator(BinaryOperation.max(self, self._operand(other)))

    def abs(self) -> 'NumericIndicator':
        return NumericIndicator(UnaryOperation.abs(self))

    def sqrt(self) -> 'NumericIndicator':
        return NumericIndicator(UnaryOperation.sqrt(self))

    def squared(self) -> 'NumericIndicator':
        """``self * self``; the operand is evaluated twice per query."""
        return self.multiplied_by(self)

    def negate(self) -> 'NumericIndicator':
        return NumericIndicator(UnaryOperation.negate(self))

    def __add__(self, other: Operand) -> 'NumericIndicator':
        return self.plus(other)

    def __radd__(self, other: Operand) -> 'NumericIndicator':
        return NumericIndicator.constant(self.bar_series, other).plus(self)

    def __sub__(self, other: Operand) -> 'NumericIndicator':
        return self.minus(other)

    def __rsub__(self, other: Operand) -> 'NumericIndicator':
        return NumericIndicator.constant(self.bar_series, other).minus(self)

    def __mul__(self, other: Operand) -> 'NumericIndicator':
        return self.multiplied_by(other)

    def __rmul__(self, other: Operand) -> 'NumericIndicator':
        return NumericIndicator.constant(self.bar_series, other).multiplied_by(self)

    def __truediv__(self, other: Operand) -> 'NumericIndicator':
        return self.divided_by(other)

    def __rtruediv__(self, other: Operand) -> 'NumericIndicator':
        return NumericIndicator.constant(self.bar_series, other).divided_by(self)

    def __neg__(self) -> 'NumericIndicator':
        return self.negate()

    def __abs__(self) -> 'NumericIndicator':
        return self.abs()

    # Derived (cached)

    def sma(self, bar_count: Optional[int] = None) -> 'NumericIndicator':
        return NumericIndicator(SMAIndicator(self, _bar_count('sma', bar_count)))

    def ema(self, bar_count: Optional[int] = None) -> 'NumericIndicator':
        return NumericIndicator(EMAIndicator(self, _bar_count('ema', bar_count)))

    def stddev(self, bar_count: Optional[int] = None) -> 'NumericIndicator':
        return NumericIndicator(StandardDeviationIndicator(self, _bar_count('stddev', bar_count)))

    def highest(self, bar_count: Optional[int] = None) -> 'NumericIndicator':
        return NumericIndicator(HighestValueIndicator(self, _bar_count('highest', bar_count)))

    def lowest(self, bar_count: Optional[int] = None) -> 'NumericIndicator':
        return NumericIndicator(LowestValueIndicator(self, _bar_count('lowest', bar_count)))

    def previous(self, n: Optional[int] = None) -> 'NumericIndicator':
        return NumericIndicator(PreviousValueIndicator(self, _bar_count('previous', n)))

    def cached(self) -> 'NumericIndicator':
        """Memoize this indicator's values per index."""
        return NumericIndicator(MemoizedIndicator(self))

    # Rules

    def crossed_over(self, other: Operand) -> Rule:
        return CrossedUpIndicatorRule(self, self._operand(other))

    def crossed_under(self, other: Operand) -> Rule:
        return CrossedDownIndicatorRule(self, self._operand(other))

    def is_greater_than(self, other: Operand) -> Rule:
        return OverIndicatorRule(self, self._operand(other))

    def is_less_than(self, other: Operand) -> Rule:
        return UnderIndicatorRule(self, self._operand(other))

    # Indicator capability

    def get_value(self, index: int) -> Decimal:
        return self._delegate.get_value(index)

    @property
    def unstable_bars(self) -> int:
        return self._delegate.unstable_bars

    # Latest-value comparison

    def latest_value(self) -> Decimal:
        """Value at the series' end index."""
        return self.get_value(self.bar_series.end_index)

    def compare_latest(self, other: Indicator) -> int:
        """
        Compare latest values: -1, 0 or 1.

        Each side is evaluated at its own series' end index. This is not
        structural equality; indicators comparing equal here may differ at
        every other index.
        """
        mine = self.latest_value()
        theirs = other.get_value(other.bar_series.end_index)
        return (mine > theirs) - (mine < theirs)

    # Interop

    def as_sequence(self) -> 'IndicatorSequenceView':
        return IndicatorSequenceView(self)

    def to_series(self) -> pd.Series:
        """Values over the stored bars, indexed by bar end time."""
        series = self.bar_series
        indices = range(series.begin_index, series.end_index + 1)
        return pd.Series(
            [self.get_value(i) for i in indices],
            index=pd.DatetimeIndex([series.get_bar(i).end_time for i in indices], name='end_time'),
            dtype=object,
            name=repr(self),
        )

    def __repr__(self) -> str:
        return repr(self._delegate)


class IndicatorSequenceView(Sequence):
    """
    Read-only sequence over an indicator's values.

    Length is the series' stored bar count and item ``i`` is the value at
    absolute index ``i``. Mutating list methods raise UnsupportedOperationError.
    """

    def __init__(self, indicator: Indicator):
        self._indicator = indicator

    def __len__(self) -> int:
        return self._indicator.bar_series.bar_count

    def __getitem__(self, index):
        if isinstance(index, slice):
            return [self._indicator.get_value(i) for i in range(*index.indices(len(self)))]
        size = len(self)
        if index < 0:
            index += size
        if index < 0 or index >= size:
            raise IndexError(f"Index {index} out of range for sequence of length {size}")
        return self._indicator.get_value(index)

    def _unsupported(self, method: str):
        raise UnsupportedOperationError(f"{method}() is not supported on a read-only indicator view")

    def __setitem__(self, index, value):
        self._unsupported('__setitem__')

    def __delitem__(self, index):
        self._unsupported('__delitem__')

    def __iadd__(self, other):
        self._unsupported('__iadd__')

    def append(self, value):
        self._unsupported('append')

    def extend(self, values):
        self._unsupported('extend')

    def insert(self, index, value):
        self._unsupported('insert')

    def pop(self, index=-1):
        self._unsupported('pop')

    def remove(self, value):
        self._unsupported('remove')

    def clear(self):
        self._unsupported('clear')

    def sort(self, *args, **kwargs):
        self._unsupported('sort')

    def reverse(self):
        self._unsupported('reverse')

    def to_list(self) -> List[Decimal]:
        return list(self)

    def __repr__(self) -> str:
        return f"IndicatorSequenceView({self._indicator!r}, len={len(self)})"
