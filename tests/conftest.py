"""Shared test fixtures for Tigo."""

import datetime as dt
import os
import sys
from pathlib import Path

import pytest
from dotenv import load_dotenv

# Load .env file for test configuration
load_dotenv()

# Unset AWS_PROFILE for local testing (the SQLite store never talks to AWS)
if "AWS_PROFILE" in os.environ:
    del os.environ["AWS_PROFILE"]

# Add src directory to Python path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))


@pytest.fixture
def config(tmp_path):
    from core.config import Config

    return Config(
        aws_region="us-east-1",
        environment="test",
        database_backend="sqlite",
        sqlite_path=str(tmp_path / "tigo.db"),
        postgres_host="localhost",
        postgres_port=5432,
        postgres_database="tigo",
        postgres_user="tigo",
        postgres_password="localdev",
    )


@pytest.fixture
def store(config):
    """A file-backed SQLite store with the full schema, fresh per test."""
    from core.db.store import SqliteStore

    sqlite_store = SqliteStore(config)
    sqlite_store.connect()
    sqlite_store.create_schema()
    yield sqlite_store
    sqlite_store.disconnect()


@pytest.fixture
def make_user(store):
    from core.models.user import UserCreate
    from core.services.users import register_user

    counter = iter(range(1, 10_000))

    def _make(name: str = "Test User", **overrides):
        n = next(counter)
        payload = {"email": f"user{n}@example.com", "name": name, **overrides}
        return register_user(store, UserCreate(**payload))

    return _make


@pytest.fixture
def make_trip(store):
    from core.models.trip import TripCreate
    from core.services.trips import create_trip

    def _make(owner_id: int, **overrides):
        payload = {
            "departure_city": "Paris",
            "arrival_city": "Lyon",
            "date": dt.date(2025, 12, 15),
            "time": dt.time(8, 0),
            **overrides,
        }
        return create_trip(store, owner_id, TripCreate(**payload))

    return _make


# PostgreSQL fixtures
@pytest.fixture
def pg_store():
    """A PostgresStore against DATABASE_URL / POSTGRES_* for integration tests."""
    from core.config import get_config
    from core.db.store import PostgresStore

    postgres_store = PostgresStore(get_config())
    postgres_store.connect()
    postgres_store.drop_schema()
    postgres_store.create_schema()
    yield postgres_store
    postgres_store.drop_schema()
    postgres_store.disconnect()
