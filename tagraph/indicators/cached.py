"""
Memoizing indicators.

Two caching tiers exist. Plain algebraic nodes are never cached.
``CachedIndicator`` is the base of recurrence indicators: values are
filled forward from the first stored bar so that each value can use the
already cached value of the previous index. ``MemoizedIndicator`` is an
opt-in wrapper that caches any indicator per index.
"""

import logging
from decimal import Decimal
from abc import abstractmethod
from typing import Dict, Optional

from ..models.bar_series import BarSeries
from .base import Indicator

logger = logging.getLogger(__name__)


class CachedIndicator(Indicator):
    """Indicator whose values are computed once per absolute index."""

    def __init__(self, bar_series: BarSeries):
        super().__init__(bar_series)
        self._cache: Dict[int, Decimal] = {}
        self._highest_index: Optional[int] = None

    @property
    def first_index(self) -> int:
        """Index at which recurrences are seeded (first stored bar)."""
        return self.bar_series.begin_index

    @abstractmethod
    def calculate(self, index: int) -> Decimal:
        """
        Compute the value at ``index``.

        Called in ascending index order starting at ``first_index``, so the
        value at ``index - 1`` is already cached when ``index > first_index``.
        """
        pass

    def get_value(self, index: int) -> Decimal:
        """
        Cached value at an absolute index.

        Indices before the first stored bar return the value at the first
        stored bar.

        Raises:
            IndexError: If index is negative or past the series' end index
        """
        index = self.bar_series.clamp_index(index)
        if self._highest_index is not None and index <= self._highest_index:
            return self._cache[index]

        start = self.first_index if self._highest_index is None else self._highest_index + 1
        for i in range(start, index + 1):
            self._cache[i] = self.calculate(i)
            self._highest_index = i
        logger.debug("indicator_cache_filled", extra={
            "indicator": repr(self),
            "from_index": start,
            "to_index": index,
        })
        return self._cache[index]

    @property
    def cached_count(self) -> int:
        """Number of cached values."""
        return len(self._cache)


class MemoizedIndicator(Indicator):
    """Caches the values of any indicator, one entry per queried index."""

    def __init__(self, delegate: Indicator):
        super().__init__(delegate.bar_series)
        self.delegate = delegate
        self._cache: Dict[int, Decimal] = {}

    def get_value(self, index: int) -> Decimal:
        value = self._cache.get(index)
        if value is None:
            value = self.delegate.get_value(index)
            self._cache[index] = value
        return value

    @property
    def unstable_bars(self) -> int:
        return self.delegate.unstable_bars

    @property
    def cached_count(self) -> int:
        return len(self._cache)

    def __repr__(self) -> str:
        return f"Memoized({self.delegate!r})"
