"""Tests for database module."""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from src.database.models import Base, ForexSnapshot


@pytest.fixture
def db_session():
    """Create in-memory test database."""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(bind=engine)
    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()
    yield session
    session.close()


def test_forex_snapshot_model(db_session):
    """Test ForexSnapshot model."""
    row = ForexSnapshot(key="lastValidForexPrice_EUR/USD", payload="1.085")
    db_session.add(row)
    db_session.commit()

    result = db_session.get(ForexSnapshot, "lastValidForexPrice_EUR/USD")
    assert result.payload == "1.085"
    assert result.updated_at is not None


def test_forex_snapshot_update(db_session):
    db_session.add(ForexSnapshot(key="k", payload="1"))
    db_session.commit()

    row = db_session.get(ForexSnapshot, "k")
    row.payload = "2"
    db_session.commit()

    assert db_session.query(ForexSnapshot).count() == 1
    assert db_session.get(ForexSnapshot, "k").payload == "2"
