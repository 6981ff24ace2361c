"""Placeholder data for when the quote API is throttled or unreachable.

Synthetic values are only ever served as a whole: a series is either entirely
real or entirely generated.
"""
from __future__ import annotations

import random
from datetime import date, datetime, time, timedelta, timezone
from typing import List, Optional

from src.data_collection.models import PricePoint

SERIES_DAYS = 30
PRICE_JITTER = 0.10
DAILY_JITTER = 0.02
WICK_JITTER = 0.01
CLOSE_JITTER = 0.005
VOLUME_RANGE = (1000.0, 5000.0)


def synthesize_price(base_price: float = 1.0, rng: Optional[random.Random] = None) -> float:
    """Base price perturbed by up to +/-10%."""
    rng = rng or random.Random()
    return base_price * (1 + rng.uniform(-PRICE_JITTER, PRICE_JITTER))


def synthesize_series(
    base_price: float = 1.0,
    rng: Optional[random.Random] = None,
    days: int = SERIES_DAYS,
    today: Optional[date] = None,
) -> List[PricePoint]:
    """Generate ``days`` consecutive daily bars ending ``today`` (UTC).

    Each bar satisfies ``low <= open, close <= high``.
    """
    rng = rng or random.Random()
    today = today or datetime.now(timezone.utc).date()
    midnight = datetime.combine(today, time.min, tzinfo=timezone.utc)

    points = []
    for offset in range(days):
        price = base_price * (1 + rng.uniform(-DAILY_JITTER, DAILY_JITTER))
        open_ = price
        high = open_ * (1 + rng.uniform(0, WICK_JITTER))
        low = open_ * (1 - rng.uniform(0, WICK_JITTER))
        close = price * (1 + rng.uniform(-CLOSE_JITTER, CLOSE_JITTER))
        points.append(PricePoint(
            timestamp=midnight - timedelta(days=offset),
            open=open_,
            high=high,
            low=low,
            close=min(max(close, low), high),
            volume=rng.uniform(*VOLUME_RANGE),
        ))

    points.sort(key=lambda p: p.timestamp)
    return points
