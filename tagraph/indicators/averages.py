"""
Moving averages.
"""

from decimal import Decimal

from ..utils.numeric import D, ZERO, ONE
from .base import Indicator
from .cached import CachedIndicator


def check_bar_count(bar_count: int) -> int:
    """
    Validate a window length.

    Raises:
        ValueError: If bar_count is not a positive integer
    """
    if isinstance(bar_count, bool) or not isinstance(bar_count, int) or bar_count < 1:
        raise ValueError(f"Bar count must be a positive integer, got {bar_count!r}")
    return bar_count


class SMAIndicator(CachedIndicator):
    """
    Simple moving average over the last ``bar_count`` values.

    Windows that would reach before the first stored bar are shortened, and
    the average is taken over the bars actually in the window.
    """

    def __init__(self, indicator: Indicator, bar_count: int):
        super().__init__(indicator.bar_series)
        self.indicator = indicator
        self.bar_count = check_bar_count(bar_count)

    def calculate(self, index: int) -> Decimal:
        start = max(self.first_index, index - self.bar_count + 1)
        total = sum((self.indicator.get_value(i) for i in range(start, index + 1)), ZERO)
        return total / D(index - start + 1)

    @property
    def unstable_bars(self) -> int:
        return self.bar_count

    def __repr__(self) -> str:
        return f"SMA({self.indicator!r}, {self.bar_count})"


class EMAIndicator(CachedIndicator):
    """
    Exponential moving average.

    ``ema(t) = alpha * x(t) + (1 - alpha) * ema(t - 1)`` with
    ``alpha = 2 / (bar_count + 1)``, seeded with ``x`` at the first stored bar.
    """

    def __init__(self, indicator: Indicator, bar_count: int):
        super().__init__(indicator.bar_series)
        self.indicator = indicator
        self.bar_count = check_bar_count(bar_count)
        self.alpha = D(2) / D(bar_count + 1)
        self.one_minus_alpha = ONE - self.alpha

    def calculate(self, index: int) -> Decimal:
        sample = self.indicator.get_value(index)
        if index <= self.first_index:
            return sample
        return self.alpha * sample + self.one_minus_alpha * self.get_value(index - 1)

    @property
    def unstable_bars(self) -> int:
        return self.bar_count

    def __repr__(self) -> str:
        return f"EMA({self.indicator!r}, {self.bar_count})"
