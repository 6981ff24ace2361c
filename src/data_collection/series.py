"""Helpers for working with a daily price series."""
from typing import Sequence, Tuple

import pandas as pd

from src.data_collection.models import PricePoint

COLUMNS = ["open", "high", "low", "close", "volume"]


def price_range(points: Sequence[PricePoint], padding: float = 0.1) -> Tuple[float, float]:
    """Y-axis bounds for a chart: min/max over low, open and close, padded.

    ``padding`` is a fraction of the span added on both sides. A flat series
    is padded by the same fraction of its price instead.
    """
    if not points:
        raise ValueError("Cannot compute a price range for an empty series")
    prices = [value for p in points for value in (p.low, p.open, p.close)]
    low, high = min(prices), max(prices)
    span = high - low
    pad = span * padding if span > 0 else abs(high) * padding
    return low - pad, high + pad


def to_dataframe(points: Sequence[PricePoint]) -> pd.DataFrame:
    """Convert to a pandas DataFrame indexed by timestamp, oldest first."""
    if not points:
        return pd.DataFrame(columns=COLUMNS)

    df = pd.DataFrame(
        [
            {
                "timestamp": p.timestamp,
                "open": p.open,
                "high": p.high,
                "low": p.low,
                "close": p.close,
                "volume": p.volume,
            }
            for p in points
        ]
    )
    df.set_index("timestamp", inplace=True)
    return df.sort_index()
