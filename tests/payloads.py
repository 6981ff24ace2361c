"""Canned Alpha Vantage payloads and test doubles."""
from datetime import datetime, timedelta

from src.data_collection.providers.base import QuoteProvider


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


def rate_payload(price: float) -> dict:
    return {
        "Realtime Currency Exchange Rate": {
            "1. From_Currency Code": "EUR",
            "3. To_Currency Code": "USD",
            "5. Exchange Rate": f"{price:.8f}",
            "6. Last Refreshed": "2024-05-01 12:00:01",
        }
    }


def daily_bar(open_, high, low, close, volume="0"):
    return {
        "1. open": str(open_),
        "2. high": str(high),
        "3. low": str(low),
        "4. close": str(close),
        "5. volume": str(volume),
    }


def daily_payload(series: dict) -> dict:
    return {
        "Meta Data": {"1. Information": "Forex Daily Prices (open, high, low, close)"},
        "Time Series FX (Daily)": series,
    }


RATE_LIMIT_NOTE = {
    "Note": "Thank you for using Alpha Vantage! Our standard API call frequency is 5 calls per minute."
}

ERROR_PAYLOAD = {"Error Message": "Invalid API call. Please retry or visit the documentation."}


class FakeProvider(QuoteProvider):
    """Serves canned payloads (or raises canned exceptions) and records calls."""

    NAME = "fake"

    def __init__(self):
        self.rate_response = rate_payload(1.085)
        self.series_response = daily_payload({})
        self.calls = []

    async def get_exchange_rate(self, base, quote):
        self.calls.append(("rate", base, quote))
        return self._respond(self.rate_response)

    async def get_daily_series(self, base, quote):
        self.calls.append(("series", base, quote))
        return self._respond(self.series_response)

    @staticmethod
    def _respond(response):
        if isinstance(response, Exception):
            raise response
        return response
