"""
Shared fixtures. DATABASE_URL must point somewhere writable before app.db is imported.
"""

import os
import tempfile

os.environ.setdefault(
    "DATABASE_URL",
    f"sqlite:///{os.path.join(tempfile.mkdtemp(prefix='auto_rating_'), 'test.db')}"
)

import pytest
from datetime import datetime, timezone
from sqlmodel import SQLModel, Session, create_engine
from sqlalchemy.pool import StaticPool

from app.cache import load_rating_config
from app.schemas import QuoteRequest


@pytest.fixture
def rating_config():
    return load_rating_config()


@pytest.fixture
def now():
    return datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def today(now):
    return now.date()


@pytest.fixture
def make_request():
    """Build a QuoteRequest for a 30 year old with a current-year Toyota."""
    def _make(**overrides):
        data = {
            "customer_name": "Jane Doe",
            "customer_age": 30,
            "vehicle_year": 2024,
            "vehicle_make": "Toyota",
        }
        data.update(overrides)
        return QuoteRequest(**data)
    return _make


@pytest.fixture
def db_session():
    """In-memory SQLite session with all tables created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
