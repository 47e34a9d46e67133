"""
Bar series models: the general series contract and the fixed-date variant.

A fixed-date series addresses bars by an absolute index derived from time:
index ``k`` is the bar ending ``k`` time periods after the series' base
date. Stored bars may start at a non-zero absolute index. Queries before
the first stored bar clamp to it; queries past the last stored bar fail.
"""

import logging
import sys
from abc import ABC, abstractmethod
from decimal import Decimal
from datetime import datetime, timedelta
from typing import Optional, Sequence, Tuple

from configs import config_loader
from ..utils.errors import UnsupportedOperationError
from ..utils.numeric import ZERO
from .bar import Bar

logger = logging.getLogger(__name__)


def periods_between(start: datetime, end: datetime, time_period: timedelta) -> int:
    """
    Whole number of time periods between two datetimes.

    Truncates toward zero, so timestamps before ``start`` give non-positive results.

    Raises:
        ValueError: If time_period is not positive
    """
    if time_period <= timedelta(0):
        raise ValueError("Time period must be positive")
    delta_us = (end - start) // timedelta(microseconds=1)
    period_us = time_period // timedelta(microseconds=1)
    whole = abs(delta_us) // period_us
    return whole if delta_us >= 0 else -whole


class BarSeries(ABC):
    """Contract shared by all bar series."""

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @abstractmethod
    def num(self) -> Decimal:
        """Prototype numeric value used to build compatible literals."""
        pass

    @abstractmethod
    def get_bar(self, index: int) -> Bar:
        pass

    @property
    @abstractmethod
    def bar_count(self) -> int:
        pass

    @property
    @abstractmethod
    def bar_data(self) -> Sequence[Bar]:
        pass

    @property
    @abstractmethod
    def begin_index(self) -> int:
        pass

    @property
    @abstractmethod
    def end_index(self) -> int:
        pass

    @property
    @abstractmethod
    def maximum_bar_count(self) -> int:
        pass

    @property
    @abstractmethod
    def removed_bars_count(self) -> int:
        pass

    @abstractmethod
    def set_maximum_bar_count(self, maximum_bar_count: int) -> None:
        pass

    @abstractmethod
    def add_bar(self, *args, **kwargs) -> None:
        pass

    @abstractmethod
    def add_trade(self, trade_volume: Decimal, trade_price: Decimal) -> None:
        pass

    @abstractmethod
    def add_price(self, price: Decimal) -> None:
        pass

    @abstractmethod
    def get_sub_series(self, start_index: int, end_index: int) -> 'BarSeries':
        pass

    @abstractmethod
    def clamp_index(self, index: int) -> int:
        """Validate an absolute index and map pre-data indices onto begin_index."""
        pass

    @abstractmethod
    def is_compatible(self, other: 'BarSeries') -> bool:
        pass

    def get_bar_count(self) -> int:
        return self.bar_count

    @property
    def is_empty(self) -> bool:
        """True if the series holds no bars."""
        return self.bar_count == 0

    @property
    def first_bar(self) -> Optional[Bar]:
        """First stored bar, or None if empty."""
        return None if self.is_empty else self.get_bar(self.begin_index)

    @property
    def last_bar(self) -> Optional[Bar]:
        """Last stored bar, or None if empty."""
        return None if self.is_empty else self.get_bar(self.end_index)

    @property
    def begin_time(self) -> Optional[datetime]:
        """Begin time of the first stored bar, or None if empty."""
        return None if self.is_empty else self.first_bar.begin_time

    @property
    def end_time(self) -> Optional[datetime]:
        """End time of the last stored bar, or None if empty."""
        return None if self.is_empty else self.last_bar.end_time

    def series_period_description(self) -> str:
        """Human-readable span of the series, e.g. ``'2010-01-01T00:05:00+00:00 - 2010-01-01T00:15:00+00:00'``."""
        if self.is_empty:
            return ""
        return f"{self.first_bar.end_time.isoformat()} - {self.last_bar.end_time.isoformat()}"


class FixedDateBarSeries(BarSeries):
    """
    Immutable bar series indexed by time elapsed since a base date.

    Every stored bar must end exactly one time period after its predecessor.
    The absolute index of a bar is the number of whole periods between the
    base date and the bar's end time.
    """

    def __init__(self, name: str, base_date: datetime, bars: Sequence[Bar]):
        """
        Initialize series.

        Args:
            name: Series name
            base_date: Reference datetime for absolute index 0
            bars: Bars ordered by end time, uniformly spaced

        Raises:
            ValueError: If consecutive bars are not exactly one time period apart
        """
        self._name = name
        self._base_date = base_date
        self._bars: Tuple[Bar, ...] = tuple(bars)

        if not self._bars:
            self._num = ZERO
            self._time_period = timedelta(0)
            self._begin_index = 0
        else:
            self._num = self._bars[0].close
            self._time_period = self._bars[0].time_period
            self._validate_bars_time_period()
            self._begin_index = periods_between(base_date, self._bars[0].end_time, self._time_period)

        logger.info("bar_series_created", extra={
            "series": name,
            "bars": len(self._bars),
            "begin_index": self._begin_index,
            "time_period_s": self._time_period.total_seconds(),
        })

    def _validate_bars_time_period(self) -> None:
        """Check that every bar ends one time period after the previous one."""
        for i in range(1, len(self._bars)):
            actual = self._bars[i].end_time - self._bars[i - 1].end_time
            if actual != self._time_period:
                logger.error("bar_series_period_mismatch", extra={
                    "series": self._name,
                    "position": i,
                    "expected_s": self._time_period.total_seconds(),
                    "actual_s": actual.total_seconds(),
                })
                raise ValueError("All bars must have the same time period.")

    @property
    def name(self) -> str:
        return self._name

    @property
    def base_date(self) -> datetime:
        return self._base_date

    @property
    def time_period(self) -> timedelta:
        return self._time_period

    def num(self) -> Decimal:
        return self._num

    def _out_of_bounds_message(self, index: int) -> str:
        return f"Index {index} is out of bounds for BarSeries `{self._name}` with {len(self._bars)} bars"

    def clamp_index(self, index: int) -> int:
        """
        Validate an absolute index and clamp it to the first stored bar.

        Args:
            index: Absolute index

        Returns:
            ``max(index, begin_index)``

        Raises:
            IndexError: If index is negative or past end_index
        """
        if index < 0 or index > self.end_index:
            raise IndexError(self._out_of_bounds_message(index))
        return max(index, self._begin_index)

    def get_bar(self, index: int) -> Bar:
        """
        Get the bar at an absolute index.

        Indices in ``[0, begin_index)`` return the first stored bar.

        Raises:
            IndexError: If index is negative or past end_index
        """
        return self._bars[self.clamp_index(index) - self._begin_index]

    @property
    def bar_count(self) -> int:
        """Number of stored bars."""
        return len(self._bars)

    @property
    def bar_data(self) -> Tuple[Bar, ...]:
        return self._bars

    @property
    def begin_index(self) -> int:
        return self._begin_index

    @property
    def end_index(self) -> int:
        return self._begin_index + len(self._bars) - 1

    @property
    def index_span(self) -> int:
        """Size of the absolute index range ``[0, end_index]``."""
        return self.end_index + 1

    @property
    def maximum_bar_count(self) -> int:
        return sys.maxsize

    @property
    def removed_bars_count(self) -> int:
        return 0

    def set_maximum_bar_count(self, maximum_bar_count: int) -> None:
        raise UnsupportedOperationError("set_maximum_bar_count() is not supported by FixedDateBarSeries")

    def add_bar(self, *args, **kwargs) -> None:
        raise UnsupportedOperationError("add_bar() is not supported by FixedDateBarSeries")

    def add_trade(self, trade_volume: Decimal, trade_price: Decimal) -> None:
        raise UnsupportedOperationError("add_trade() is not supported by FixedDateBarSeries")

    def add_price(self, price: Decimal) -> None:
        raise UnsupportedOperationError("add_price() is not supported by FixedDateBarSeries")

    def get_index(self, timestamp: datetime) -> int:
        """
        Absolute index of the bar ending at ``timestamp``.

        Raises:
            ValueError: If the series is empty (no time period)
        """
        if self.is_empty:
            raise ValueError(f"BarSeries `{self._name}` is empty and has no time period")
        return periods_between(self._base_date, timestamp, self._time_period)

    def get_sub_series(self, start_index: int, end_index: int) -> 'FixedDateBarSeries':
        """
        Extract the half-open absolute range ``[start_index, end_index)``.

        The range is clamped to the stored bars. The returned series shares
        the bar objects and has its base date shifted by ``start_index``
        periods.

        Raises:
            ValueError: If end_index <= start_index or start_index < 0,
                or if the clamped range holds no stored bars
        """
        if end_index <= start_index or start_index < 0:
            raise ValueError("Invalid start or end index.")

        start_index = max(start_index, self._begin_index)
        end_index = min(end_index, self.end_index + 1)
        if end_index <= start_index:
            raise ValueError("Invalid start or end index.")

        sub_bars = self._bars[start_index - self._begin_index:end_index - self._begin_index]
        suffix = config_loader.get_config('series').get('sub_series_suffix', '_sub')
        logger.debug("sub_series_extracted", extra={
            "series": self._name,
            "start_index": start_index,
            "end_index": end_index,
            "bars": len(sub_bars),
        })
        return FixedDateBarSeries(
            self._name + suffix,
            self._base_date + self._time_period * start_index,
            sub_bars,
        )

    def is_compatible(self, other: BarSeries) -> bool:
        """True if both series share base date and time period."""
        if self is other:
            return True
        return (
            self._base_date == getattr(other, 'base_date', None)
            and self._time_period == getattr(other, 'time_period', None)
        )

    def __len__(self) -> int:
        return len(self._bars)

    def __repr__(self) -> str:
        return (
            f"FixedDateBarSeries(name={self._name!r}, base_date={self._base_date.isoformat()}, "
            f"bars={len(self._bars)}, begin_index={self._begin_index})"
        )
