import itertools
from datetime import datetime

import pytest
from sqlalchemy import create_engine

from cboe_options_snapshot.storage.schema import apply_schema

_ids = itertools.count(1)

T1 = datetime(2025, 1, 10, 16, 15, 0)
T2 = datetime(2025, 1, 10, 16, 20, 3)

BUSINESS_COLUMNS = [
    "symbol", "call_put", "expiration", "strike_price",
    "volume", "matched", "routed",
    "bid_size", "bid_price", "ask_size", "ask_price", "last_price",
    "last_updated_time", "etl_in_dt",
]


def make_row(with_id=False, **overrides):
    """An AAPL call snapshot as a column -> value mapping."""
    row = {
        "symbol": "AAPL",
        "call_put": "CALL",
        "expiration": "2025-01-17",
        "strike_price": 150.0,
        "volume": 100,
        "matched": 80,
        "routed": 20,
        "bid_size": 10,
        "bid_price": 1.20,
        "ask_size": 12,
        "ask_price": 1.25,
        "last_price": 1.22,
        "last_updated_time": T1,
        "etl_in_dt": T2,
    }
    # Left out, the database assigns the id
    if with_id:
        row["id"] = next(_ids)
    row.update(overrides)
    return row


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep a developer's database settings out of the tests."""
    for name in ("DATABASE_URL", "POSTGRES_HOST", "POSTGRES_PORT", "POSTGRES_DATABASE",
                 "POSTGRES_USER", "POSTGRES_PASSWORD", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def engine():
    """A fresh in-memory SQLite database."""
    engine = create_engine("sqlite://")
    yield engine
    engine.dispose()


@pytest.fixture
def schema_engine(engine):
    """In-memory SQLite database with the snapshot schema applied."""
    apply_schema(engine)
    return engine


@pytest.fixture
def row_factory():
    """Builds snapshot rows, see make_row."""
    return make_row
