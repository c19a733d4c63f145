"""Shared test fixtures."""

import os

# Settings are read at import time; keep the app off Postgres in tests.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.pop("OPENAI_API_KEY", None)

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app import models  # noqa: F401
from app.db.base import Base
from app.db.session import get_db
from app.main import app
from app.models.place import CoffeePlace


@pytest.fixture
def test_engine():
    """In-memory SQLite engine shared across connections."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(test_engine) -> Session:
    factory = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = factory()
    yield session
    session.close()


@pytest.fixture
def api_client(db: Session) -> TestClient:
    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_place(db: Session):
    """Insert a CoffeePlace row with sensible defaults."""

    def _make(place_id: str = "place-1", **fields) -> CoffeePlace:
        now = datetime(2026, 1, 1, 12, 0, 0)
        data = {
            "id": place_id,
            "slug": None,
            "name": "Vero Cafe",
            "address": "Gedimino pr. 10, Vilnius",
            "location": {"lat": 54.68, "lng": 25.28},
            "reviews": [],
            "photos": [],
            "created_at": now,
            "last_updated": now,
        }
        data.update(fields)
        place = CoffeePlace(**data)
        db.add(place)
        db.commit()
        return place

    return _make


@pytest.fixture
def google_details() -> dict:
    """A place details result as returned by googlemaps.Client.place()."""
    return {
        "name": "Vero Café",
        "formatted_address": "Gedimino pr. 10, Vilnius, Lithuania",
        "geometry": {"location": {"lat": 54.687, "lng": 25.279}},
        "rating": 4.5,
        "user_ratings_total": 321,
        "website": "https://vero.lt",
        "international_phone_number": "+370 600 00000",
        "price_level": 2,
        "opening_hours": {"open_now": True, "weekday_text": ["Monday: 7:00 AM - 8:00 PM"]},
        "url": "https://maps.google.com/?cid=1",
        "business_status": "OPERATIONAL",
        "editorial_summary": {"language": "en", "overview": "Coffee chain."},
        "types": ["cafe", "food", "point_of_interest"],
        "dine_in": True,
        "takeout": True,
        "reviews": [
            {"author_name": "Ona", "rating": 5, "text": "Great flat white", "time": 1700000000},
            {"author_name": "Jonas", "rating": 4, "text": "Busy at noon", "time": "1700000100"},
        ],
        "photos": [
            {"photo_reference": "ref-0", "width": 1200, "height": 800, "html_attributions": ["<a>Ona</a>"]},
            {"photo_reference": "ref-1", "width": 1000, "height": 750, "html_attributions": []},
        ],
    }


@pytest.fixture
def gmaps_client() -> MagicMock:
    """googlemaps.Client stand-in; tests set return values."""
    return MagicMock()


@pytest.fixture
def s3_client() -> MagicMock:
    return MagicMock()
