"""Base indicators reading bar fields, and constants."""

from decimal import Decimal

from ..models.bar_series import BarSeries
from .base import Indicator


class BarFieldIndicator(Indicator):
    """Reads one Decimal field of the bar at each index."""

    field_name = None

    def get_value(self, index: int) -> Decimal:
        return getattr(self.bar_series.get_bar(index), self.field_name)


class ClosePriceIndicator(BarFieldIndicator):
    field_name = 'close'


class OpenPriceIndicator(BarFieldIndicator):
    field_name = 'open'


class HighPriceIndicator(BarFieldIndicator):
    field_name = 'high'


class LowPriceIndicator(BarFieldIndicator):
    field_name = 'low'


class VolumeIndicator(BarFieldIndicator):
    field_name = 'volume'


class ConstantIndicator(Indicator):
    """Same value at every index."""

    def __init__(self, bar_series: BarSeries, value: Decimal):
        super().__init__(bar_series)
        self.value = value

    def get_value(self, index: int) -> Decimal:
        return self.value

    def __repr__(self) -> str:
        return f"Constant({self.value})"
