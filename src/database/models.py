"""Database models for Forex Sage."""
from datetime import datetime, timezone
from sqlalchemy import String, DateTime, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class ForexSnapshot(Base):
    """Last known good value per pair and data kind.

    ``key`` is ``lastValidForexData_<SYMBOL>`` (JSON list of points) or
    ``lastValidForexPrice_<SYMBOL>`` (JSON number).
    """
    __tablename__ = "forex_snapshots"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    payload: Mapped[str] = mapped_column(Text)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, onupdate=_utcnow)
