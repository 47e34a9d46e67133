"""
Rules comparing two indicators.
"""

from ..indicators.base import Indicator, ensure_compatible
from .base import Rule


class IndicatorPairRule(Rule):
    """Rule over two indicators built on compatible series."""

    label = None

    def __init__(self, first: Indicator, second: Indicator):
        ensure_compatible(first, second)
        self.first = first
        self.second = second

    def __repr__(self) -> str:
        return f"{self.label}({self.first!r}, {self.second!r})"


class CrossedUpIndicatorRule(IndicatorPairRule):
    """
    Satisfied when ``first`` crosses above ``second``.

    True at index i iff ``first(i-1) <= second(i-1)`` and ``first(i) > second(i)``.
    Never satisfied at index 0.
    """

    label = 'CrossedUp'

    def is_satisfied(self, index: int) -> bool:
        if index < 1:
            return self._trace(index, False)
        satisfied = (
            self.first.get_value(index - 1) <= self.second.get_value(index - 1)
            and self.first.get_value(index) > self.second.get_value(index)
        )
        return self._trace(index, satisfied)


class CrossedDownIndicatorRule(IndicatorPairRule):
    """
    Satisfied when ``first`` crosses below ``second``.

    True at index i iff ``first(i-1) >= second(i-1)`` and ``first(i) < second(i)``.
    Never satisfied at index 0.
    """

    label = 'CrossedDown'

    def is_satisfied(self, index: int) -> bool:
        if index < 1:
            return self._trace(index, False)
        satisfied = (
            self.first.get_value(index - 1) >= self.second.get_value(index - 1)
            and self.first.get_value(index) < self.second.get_value(index)
        )
        return self._trace(index, satisfied)


class OverIndicatorRule(IndicatorPairRule):
    """Satisfied when ``first`` is strictly greater than ``second``."""

    label = 'Over'

    def is_satisfied(self, index: int) -> bool:
        return self._trace(index, self.first.get_value(index) > self.second.get_value(index))


class UnderIndicatorRule(IndicatorPairRule):
    """Satisfied when ``first`` is strictly less than ``second``."""

    label = 'Under'

    def is_satisfied(self, index: int) -> bool:
        return self._trace(index, self.first.get_value(index) < self.second.get_value(index))
