"""
OHLCV bar model.
"""

from decimal import Decimal
from datetime import datetime, timedelta
from dataclasses import dataclass

from ..utils.numeric import ZERO


@dataclass(frozen=True)
class Bar:
    """Single OHLCV bar for a fixed time period ending at ``end_time`` (immutable)."""
    time_period: timedelta
    end_time: datetime
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    volume: Decimal = ZERO
    amount: Decimal = ZERO

    def __post_init__(self):
        if self.time_period <= timedelta(0):
            raise ValueError("Time period must be positive")
        if self.high < self.low:
            raise ValueError("High must be >= Low")
        if self.high < self.open or self.high < self.close:
            raise ValueError("High must be >= Open and Close")
        if self.low > self.open or self.low > self.close:
            raise ValueError("Low must be <= Open and Close")

    @property
    def begin_time(self) -> datetime:
        """Start of the bar's time period."""
        return self.end_time - self.time_period

    @property
    def is_bullish(self) -> bool:
        """True if the bar closed above its open."""
        return self.close > self.open

    @property
    def is_bearish(self) -> bool:
        """True if the bar closed below its open."""
        return self.close < self.open

    @property
    def body_size(self) -> Decimal:
        """Absolute distance between open and close."""
        return abs(self.close - self.open)
