"""
ta-graph Indicator Demo

Builds a fixed-date series from synthetic bars and evaluates a small
indicator graph and a crossover rule over it.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, Any

from infra.data.data_loader import DataLoader
from tagraph.indicators.numeric_indicator import NumericIndicator

logger = logging.getLogger(__name__)

BASE_DATE = datetime(2010, 1, 1, tzinfo=timezone.utc)


def run_demo(bar_count: int = 60) -> Dict[str, Any]:
    """
    Run the demo and return a summary.

    Args:
        bar_count: Number of synthetic bars

    Returns:
        Summary dict with series bounds, latest values and crossover indices
    """
    loader = DataLoader({"source": "synthetic", "time_period_minutes": 5, "synthetic": {"count": bar_count}})
    series = loader.load_series("DEMO", BASE_DATE)

    close = NumericIndicator.close_price(series)
    fast = close.ema(5)
    slow = close.sma(20)
    band_width = close.stddev(20).multiplied_by(2)
    entry = fast.crossed_over(slow)
    exit_ = fast.crossed_under(slow)

    summary = {
        "series": series.name,
        "begin_index": series.begin_index,
        "end_index": series.end_index,
        "latest_close": close.latest_value(),
        "latest_fast": fast.latest_value(),
        "latest_slow": slow.latest_value(),
        "latest_band_width": band_width.latest_value(),
        "entries": [i for i in range(series.begin_index, series.end_index + 1) if entry.is_satisfied(i)],
        "exits": [i for i in range(series.begin_index, series.end_index + 1) if exit_.is_satisfied(i)],
    }
    logger.info("demo_completed", extra={"entries": len(summary["entries"]), "exits": len(summary["exits"])})
    return summary


def main():
    """Run the demo and print the summary."""
    logging.basicConfig(level=logging.INFO)
    summary = run_demo()

    print("ta-graph Indicator Demo")
    print("=" * 40)
    for key, value in summary.items():
        print(f"{key}: {value}")


if __name__ == "__main__":
    main()
