"""Pytest configuration and fixtures."""
import random
from datetime import datetime, timezone
from pathlib import Path
import tempfile

import pytest
import yaml
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from src.config import reset_config
from src.data_collection.quote_client import QuoteClient
from src.data_collection.snapshot_store import SnapshotStore
from tests.payloads import FakeClock, FakeProvider


@pytest.fixture(autouse=True)
def clean_config():
    """Forget any globally loaded configuration between tests."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def temp_config_file():
    """Create a temporary config file for testing."""
    config_data = {
        'app': {
            'name': 'Test App',
            'version': '0.1.0',
            'debug': True
        },
        'api': {
            'alpha_vantage': {
                'base_url': 'https://example.test/query',
                'timeout': 3,
                'api_key': 'file-key'
            }
        },
        'cache': {
            'current_price_ttl': 60,
            'historical_ttl': 600
        },
        'database': {
            'path': ':memory:'
        },
        'logging': {
            'level': 'DEBUG',
            'format': 'text'
        }
    }

    with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
        yaml.dump(config_data, f)
        config_path = f.name

    yield config_path

    Path(config_path).unlink()


@pytest.fixture
def engine():
    """Shared in-memory SQLite engine."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture
def store(engine):
    return SnapshotStore(engine)


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def make_client(provider, store, clock):
    """Factory for clients wired to the fake provider, store and clock."""
    def _make(**kwargs):
        kwargs.setdefault("rng", random.Random(42))
        return QuoteClient(provider, store, clock=clock, **kwargs)
    return _make
