"""
Lookback indicators: extrema over a window and previous values.
"""

from abc import abstractmethod
from decimal import Decimal
from typing import Dict

from .base import Indicator
from .cached import CachedIndicator
from .averages import check_bar_count


class ExtremeValueIndicator(CachedIndicator):
    """
    Extreme value over the last ``bar_count`` values.

    The position of the extreme is cached alongside its value. While that
    position stays inside the window only the newest sample has to be
    compared; otherwise the window is rescanned.
    """

    label = None

    def __init__(self, indicator: Indicator, bar_count: int):
        super().__init__(indicator.bar_series)
        self.indicator = indicator
        self.bar_count = check_bar_count(bar_count)
        self._extreme_index: Dict[int, int] = {}

    @abstractmethod
    def _better(self, candidate: Decimal, current: Decimal) -> bool:
        """True if candidate is strictly more extreme than current."""
        pass

    def calculate(self, index: int) -> Decimal:
        start = max(self.first_index, index - self.bar_count + 1)
        sample = self.indicator.get_value(index)

        if index > self.first_index and self._extreme_index[index - 1] >= start:
            previous = self.get_value(index - 1)
            if not self._better(previous, sample):
                self._extreme_index[index] = index
                return sample
            self._extreme_index[index] = self._extreme_index[index - 1]
            return previous

        # newest position wins ties so the extreme stays in the window longer
        best_index = index
        best = sample
        for i in range(index - 1, start - 1, -1):
            value = self.indicator.get_value(i)
            if self._better(value, best):
                best_index, best = i, value
        self._extreme_index[index] = best_index
        return best

    @property
    def unstable_bars(self) -> int:
        return self.bar_count

    def __repr__(self) -> str:
        return f"{self.label}({self.indicator!r}, {self.bar_count})"


class HighestValueIndicator(ExtremeValueIndicator):
    label = 'Highest'

    def _better(self, candidate: Decimal, current: Decimal) -> bool:
        return candidate > current


class LowestValueIndicator(ExtremeValueIndicator):
    label = 'Lowest'

    def _better(self, candidate: Decimal, current: Decimal) -> bool:
        return candidate < current


class PreviousValueIndicator(CachedIndicator):
    """Value ``n`` bars back; indices before 0 clamp to index 0."""

    def __init__(self, indicator: Indicator, n: int = 1):
        super().__init__(indicator.bar_series)
        self.indicator = indicator
        self.n = check_bar_count(n)

    def calculate(self, index: int) -> Decimal:
        return self.indicator.get_value(max(0, index - self.n))

    @property
    def unstable_bars(self) -> int:
        return self.n

    def __repr__(self) -> str:
        return f"Previous({self.indicator!r}, {self.n})"
