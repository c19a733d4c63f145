"""Database initialization utilities."""

from app import models  # noqa: F401
from app.db.base import Base
from app.db.session import engine


def init_db() -> None:
    """Create coffee_places / place_photos tables if missing."""
    Base.metadata.create_all(bind=engine)
