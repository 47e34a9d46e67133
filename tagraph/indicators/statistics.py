"""Statistical indicators."""

from decimal import Decimal

from ..utils.numeric import D, ZERO, num_sqrt
from .base import Indicator
from .cached import CachedIndicator
from .averages import SMAIndicator, check_bar_count


class StandardDeviationIndicator(CachedIndicator):
    """Population standard deviation over the last ``bar_count`` values."""

    def __init__(self, indicator: Indicator, bar_count: int):
        super().__init__(indicator.bar_series)
        self.indicator = indicator
        self.bar_count = check_bar_count(bar_count)
        self.sma = SMAIndicator(indicator, bar_count)

    def calculate(self, index: int) -> Decimal:
        start = max(self.first_index, index - self.bar_count + 1)
        mean = self.sma.get_value(index)
        variance = ZERO
        for i in range(start, index + 1):
            diff = self.indicator.get_value(i) - mean
            variance += diff * diff
        variance = variance / D(index - start + 1)
        return num_sqrt(variance)

    @property
    def unstable_bars(self) -> int:
        return self.bar_count

    def __repr__(self) -> str:
        return f"StdDev({self.indicator!r}, {self.bar_count})"
