"""
Base indicator classes.
"""

from abc import ABC, abstractmethod
from decimal import Decimal

from ..models.bar_series import BarSeries
from ..utils.errors import IncompatibleSeriesError


class Indicator(ABC):
    """Produces a value for every valid absolute index of a bar series."""

    def __init__(self, bar_series: BarSeries):
        self._bar_series = bar_series

    @abstractmethod
    def get_value(self, index: int) -> Decimal:
        """
        Value at an absolute index.

        Args:
            index: Absolute index into the bar series

        Returns:
            Indicator value
        """
        pass

    @property
    def bar_series(self) -> BarSeries:
        return self._bar_series

    @property
    def unstable_bars(self) -> int:
        """Number of leading bars whose values are not yet reliable."""
        return 0

    def __repr__(self) -> str:
        return self.__class__.__name__


def ensure_compatible(*indicators: Indicator) -> None:
    """
    Check that all indicators are built over interchangeable series.

    Raises:
        IncompatibleSeriesError: If base date or time period differ
    """
    first = indicators[0].bar_series
    for other in indicators[1:]:
        series = other.bar_series
        if series is first:
            continue
        if not first.is_compatible(series):
            raise IncompatibleSeriesError(
                f"Cannot combine indicators over `{first.name}` and `{series.name}`: "
                f"base date or time period differ"
            )
