"""
Data Loader — Switchable Source (Synthetic | CSV)

Provides a unified interface for building Bars and FixedDateBarSeries
from generated data or CSV files.
"""

import logging
import os
from datetime import datetime, timedelta
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional

import pandas as pd

from tagraph.models.bar import Bar
from tagraph.models.bar_series import FixedDateBarSeries
from tagraph.utils.numeric import D

logger = logging.getLogger(__name__)

TIME_COLUMNS = ["timestamp_utc", "timestamp", "datetime", "end_time", "time", "date"]
VOLUME_COLUMNS = ["volume", "vol", "tickvol", "tick_volume"]


def _price_cell(row: pd.Series, column: str, row_number: int) -> Decimal:
    """Required price cell; blank cells are rejected."""
    value = row[column].strip()
    if not value:
        raise ValueError(f"Blank '{column}' value in CSV data row {row_number}")
    return D(value)


def _optional_cell(row: pd.Series, column: Optional[str]) -> Decimal:
    """Volume-like cell; a missing column or blank cell reads as zero."""
    if column is None:
        return Decimal(0)
    value = row[column].strip()
    return D(value) if value else Decimal(0)


class DataSource(Enum):
    """Data source types."""
    SYNTHETIC = "synthetic"
    CSV = "csv"


class DataLoader:
    """
    Unified bar loader with switchable sources.

    Supports:
    - Synthetic data generation (tests, demos)
    - CSV files with one row per bar
    """

    def __init__(self, config: Dict):
        """
        Initialize data loader.

        Args:
            config: Data loader config
                {
                  "source": "synthetic|csv",
                  "time_period_minutes": 5,
                  "synthetic": {"start": "...", "count": 100, "base_price": "1.1000"},
                  "csv": {"path": "..."}
                }
        """
        self.config = config
        self.source = DataSource(config.get("source", "synthetic"))
        self.time_period = timedelta(minutes=config.get("time_period_minutes", 5))

        self.synthetic_config = config.get("synthetic", {})
        self.csv_config = config.get("csv", {})

        logger.info("Data loader initialized", extra={"source": self.source.value})

    def fetch_bars(self, count: Optional[int] = None) -> List[Bar]:
        """
        Fetch bars from the configured source.

        Args:
            count: Number of most recent bars to return (all if None)

        Returns:
            Bars ordered by end time
        """
        if self.source == DataSource.SYNTHETIC:
            bars = self._fetch_synthetic()
        else:
            bars = self._fetch_csv()
        return bars if count is None else bars[-count:]

    def load_series(self, name: str, base_date: datetime, count: Optional[int] = None) -> FixedDateBarSeries:
        """
        Build a FixedDateBarSeries over the fetched bars.

        Args:
            name: Series name
            base_date: Reference datetime for absolute index 0
            count: Number of most recent bars to use (all if None)
        """
        return FixedDateBarSeries(name, base_date, self.fetch_bars(count))

    def _fetch_synthetic(self) -> List[Bar]:
        """
        Generate deterministic synthetic bars.

        Returns:
            List of Bars
        """
        start = self.synthetic_config.get("start", "2010-01-01T00:05:00+00:00")
        end_time = datetime.fromisoformat(start) if isinstance(start, str) else start
        count = self.synthetic_config.get("count", 100)
        base_price = D(self.synthetic_config.get("base_price", "1.1000"))

        bars = []
        for i in range(count):
            price_change = Decimal((i % 10) - 5) * Decimal("0.0001")
            open_price = base_price + price_change
            close_price = open_price + Decimal((i % 3) - 1) * Decimal("0.0002")
            bars.append(Bar(
                time_period=self.time_period,
                end_time=end_time,
                open=open_price,
                high=max(open_price, close_price) + Decimal("0.0003"),
                low=min(open_price, close_price) - Decimal("0.0003"),
                close=close_price,
                volume=Decimal("1000000"),
            ))
            base_price = close_price
            end_time += self.time_period

        logger.info("Synthetic data generated", extra={"bars": len(bars)})
        return bars

    def _fetch_csv(self) -> List[Bar]:
        """
        Load bars from a CSV file.

        Returns:
            List of Bars

        Raises:
            FileNotFoundError: If the CSV file does not exist
            ValueError: If required columns are missing or a price cell is blank
        """
        csv_path = self.csv_config.get("path")
        if not csv_path or not os.path.exists(csv_path):
            logger.error("CSV file not found", extra={"path": csv_path})
            raise FileNotFoundError(f"File not found: {csv_path}")

        df = pd.read_csv(csv_path, dtype=str, keep_default_na=False)

        # Standardize column names
        df.columns = [c.strip().lower() for c in df.columns]

        time_col = next((c for c in TIME_COLUMNS if c in df.columns), None)
        if time_col is None:
            raise ValueError("No timestamp column found in CSV")
        missing = [c for c in ("open", "high", "low", "close") if c not in df.columns]
        if missing:
            raise ValueError(f"Missing price columns: {missing}")
        vol_col = next((c for c in VOLUME_COLUMNS if c in df.columns), None)

        df[time_col] = pd.to_datetime(df[time_col], utc=True)
        df = df.sort_values(time_col)

        amount_col = "amount" if "amount" in df.columns else None

        bars = []
        for row_number, row in df.iterrows():
            bars.append(Bar(
                time_period=self.time_period,
                end_time=row[time_col].to_pydatetime(),
                open=_price_cell(row, "open", row_number),
                high=_price_cell(row, "high", row_number),
                low=_price_cell(row, "low", row_number),
                close=_price_cell(row, "close", row_number),
                volume=_optional_cell(row, vol_col),
                amount=_optional_cell(row, amount_col),
            ))

        logger.info("CSV data loaded", extra={"bars": len(bars), "path": csv_path})
        return bars

    def get_source(self) -> str:
        """Get current data source."""
        return self.source.value
