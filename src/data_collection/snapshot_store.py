"""Durable last-known-good snapshot of prices and daily series."""
from __future__ import annotations

import json
from typing import List, Optional, Sequence

from sqlalchemy import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from src.data_collection.models import PricePoint
from src.database.connection import create_tables, get_session_factory
from src.database.models import ForexSnapshot
from src.database.session import get_db
from src.utils.errors import StorageError
from src.utils.logging import get_logger


logger = get_logger(__name__)

SERIES_KEY_PREFIX = "lastValidForexData"
PRICE_KEY_PREFIX = "lastValidForexPrice"


def series_key(symbol: str) -> str:
    return f"{SERIES_KEY_PREFIX}_{symbol}"


def price_key(symbol: str) -> str:
    return f"{PRICE_KEY_PREFIX}_{symbol}"


class SnapshotStore:
    """Key/value snapshot table with one row per pair per data kind.

    Loads never raise: a missing or undecodable row reads as ``None``.
    Saves raise ``StorageError``.
    """

    def __init__(self, engine: Optional[Engine] = None, session_factory: Optional[sessionmaker] = None):
        if session_factory is None:
            create_tables(engine)
            session_factory = get_session_factory(engine)
        self._session_factory = session_factory

    def save_series(self, symbol: str, points: Sequence[PricePoint]) -> None:
        self._put(series_key(symbol), json.dumps([p.to_dict() for p in points]))

    def load_series(self, symbol: str) -> Optional[List[PricePoint]]:
        raw = self._get(series_key(symbol))
        if raw is None:
            return None
        try:
            return [PricePoint.from_dict(item) for item in json.loads(raw)]
        except (ValueError, TypeError, KeyError) as e:
            logger.debug(f"Ignoring undecodable series snapshot for {symbol}: {e}")
            return None

    def save_price(self, symbol: str, price: float) -> None:
        self._put(price_key(symbol), json.dumps(float(price)))

    def load_price(self, symbol: str) -> Optional[float]:
        raw = self._get(price_key(symbol))
        if raw is None:
            return None
        try:
            return float(json.loads(raw))
        except (ValueError, TypeError) as e:
            logger.debug(f"Ignoring undecodable price snapshot for {symbol}: {e}")
            return None

    def _put(self, key: str, payload: str) -> None:
        try:
            with get_db(self._session_factory) as db:
                row = db.get(ForexSnapshot, key)
                if row is None:
                    db.add(ForexSnapshot(key=key, payload=payload))
                else:
                    row.payload = payload
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to write snapshot {key}: {e}") from e

    def _get(self, key: str) -> Optional[str]:
        try:
            with get_db(self._session_factory) as db:
                row = db.get(ForexSnapshot, key)
                return row.payload if row is not None else None
        except SQLAlchemyError as e:
            logger.debug(f"Snapshot {key} unavailable: {e}")
            return None
