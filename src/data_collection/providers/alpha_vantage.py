"""
Alpha Vantage API provider implementation.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import httpx

from src.data_collection.models import PricePoint
from src.data_collection.providers.base import QuoteProvider
from src.utils.decorators import log_execution
from src.utils.errors import (
    RateLimitError,
    ResponseDecodeError,
    ServerError,
    TransportError,
    UpstreamError,
    UpstreamNoteError,
    ValidationError,
)
from src.utils.logging import get_logger


logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://www.alphavantage.co/query"

EXCHANGE_RATE_KEY = "Realtime Currency Exchange Rate"
RATE_VALUE_KEY = "5. Exchange Rate"
DAILY_SERIES_KEY = "Time Series FX (Daily)"
ERROR_KEY = "Error Message"
NOTE_KEY = "Note"
RATE_LIMIT_PHRASES = ("API call frequency", "rate limit")
DATE_FORMAT = "%Y-%m-%d"


def is_rate_limit_note(note: str) -> bool:
    return any(phrase in note for phrase in RATE_LIMIT_PHRASES)


def classify_payload(payload: Dict[str, Any]) -> None:
    """Raise for the advisory/error shapes Alpha Vantage returns with HTTP 200.

    Raises:
        UpstreamError: payload carries ``Error Message``
        RateLimitError: ``Note`` mentions call frequency or rate limit
        UpstreamNoteError: any other ``Note``
    """
    error_message = payload.get(ERROR_KEY)
    if isinstance(error_message, str):
        raise UpstreamError(error_message)

    note = payload.get(NOTE_KEY)
    if isinstance(note, str):
        if is_rate_limit_note(note):
            raise RateLimitError(note)
        raise UpstreamNoteError(note)


def parse_exchange_rate(payload: Dict[str, Any]) -> float:
    """Extract the realtime rate; raises ResponseDecodeError when absent."""
    rate_data = payload.get(EXCHANGE_RATE_KEY)
    try:
        return float(rate_data[RATE_VALUE_KEY])
    except (KeyError, TypeError, ValueError) as e:
        raise ResponseDecodeError("Invalid response format") from e


def parse_daily_series(payload: Dict[str, Any]) -> List[PricePoint]:
    """Turn an FX_DAILY payload into points sorted by date.

    Records with an unparsable date or price are dropped individually.
    """
    series = payload.get(DAILY_SERIES_KEY)
    if not isinstance(series, dict):
        logger.warning(f"Invalid time series data format; keys: {', '.join(payload)}")
        raise ResponseDecodeError("Invalid time series data format")

    points = []
    for day, values in series.items():
        try:
            points.append(PricePoint(
                timestamp=datetime.strptime(day, DATE_FORMAT).replace(tzinfo=timezone.utc),
                open=float(values["1. open"]),
                high=float(values["2. high"]),
                low=float(values["3. low"]),
                close=float(values["4. close"]),
                volume=float(values.get("5. volume", "0")),
            ))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.debug(f"Failed to parse data point for {day}: {values!r} ({e})")

    points.sort(key=lambda p: p.timestamp)
    return points


class AlphaVantageProvider(QuoteProvider):
    """
    Provider for the Alpha Vantage FX API.

    API Documentation: https://www.alphavantage.co/documentation/#fx
    Free tier: 25 requests/day, 5 requests/minute
    """

    NAME = "alpha_vantage"

    def __init__(self, api_key: str, base_url: str = DEFAULT_BASE_URL, timeout: float = 10.0):
        if not api_key:
            raise ValueError("Alpha Vantage requires an API key")
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout

    @classmethod
    def from_config(cls, cfg) -> "AlphaVantageProvider":
        return cls(
            api_key=cfg.alpha_vantage_api_key,
            base_url=cfg.alpha_vantage_base_url,
            timeout=cfg.alpha_vantage_timeout,
        )

    @log_execution(log_args=False)
    async def get_exchange_rate(self, base: str, quote: str) -> Dict[str, Any]:
        """
        GET /query?function=CURRENCY_EXCHANGE_RATE&from_currency=EUR&to_currency=USD&apikey=KEY
        """
        params = {
            'function': 'CURRENCY_EXCHANGE_RATE',
            'from_currency': base,
            'to_currency': quote,
            'apikey': self.api_key,
        }
        return await self._get(params, f"{base}/{quote}")

    @log_execution(log_args=False)
    async def get_daily_series(self, base: str, quote: str) -> Dict[str, Any]:
        """
        GET /query?function=FX_DAILY&from_symbol=EUR&to_symbol=USD&apikey=KEY&outputsize=compact

        Compact output holds the latest 100 daily bars.
        """
        params = {
            'function': 'FX_DAILY',
            'from_symbol': base,
            'to_symbol': quote,
            'apikey': self.api_key,
            'outputsize': 'compact',
        }
        return await self._get(params, f"{base}/{quote}")

    async def _get(self, params: Dict[str, str], symbol: str) -> Dict[str, Any]:
        logger.info(f"Requesting {params['function']} for {symbol}", extra={"symbol": symbol})
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(self.base_url, params=params)
        except httpx.InvalidURL as e:
            raise ValidationError("Invalid URL") from e
        except httpx.HTTPError as e:
            raise TransportError(str(e) or e.__class__.__name__) from e

        status_code: Optional[int] = getattr(response, "status_code", None)
        logger.debug(f"Alpha Vantage response status code: {status_code}")
        if status_code is None or not 200 <= status_code < 300:
            raise ServerError(status_code or 0)

        try:
            data = response.json()
        except ValueError as e:
            raise ResponseDecodeError(f"Failed to parse response: {e}") from e

        if not isinstance(data, dict):
            raise ResponseDecodeError("Failed to parse response: expected a JSON object")
        return data
