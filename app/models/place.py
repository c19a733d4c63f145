"""Coffee place model."""

from sqlalchemy import JSON, Column, DateTime, Float, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB

from app.db.base import Base

# JSONB on Postgres, plain JSON elsewhere (sqlite in tests).
JSONType = JSON().with_variant(JSONB(), "postgresql")


class CoffeePlace(Base):
    """One coffee shop, keyed by the Google place_id."""

    __tablename__ = "coffee_places"

    id = Column(String(255), primary_key=True)  # Google place_id
    slug = Column(String(255), unique=True, index=True)
    name = Column(Text, nullable=False, default="")
    address = Column(Text, nullable=False, default="")
    location = Column(JSONType)  # {"lat": .., "lng": ..}

    rating = Column(Float)  # Google
    user_ratings_total = Column(Integer)
    ring29_rating = Column(Float)  # secondary source, never touched by the fetcher
    ring29_user_ratings_total = Column(Integer)

    photos = Column(JSONType)  # [{url, width, height, html_attributions}]
    reviews = Column(JSONType)  # [{author_name, rating, text, time}]

    website = Column(Text)
    international_phone_number = Column(String(50))
    price_level = Column(Integer)
    opening_hours = Column(JSONType)
    google_maps_url = Column(Text)
    business_status = Column(String(50))
    editorial_summary = Column(JSONType)
    place_types = Column(JSONType)
    place_features = Column(JSONType)  # sparse {feature: bool}

    ai_summary = Column(JSONType)
    chatgpt_rating = Column(String(100))
    trending_score_web = Column(Float)
    trending_score_social = Column(Float)
    data_last_scraped_at = Column(DateTime(timezone=True))

    created_at = Column(DateTime(timezone=True), nullable=False)
    last_updated = Column(DateTime(timezone=True), nullable=False)

    def to_dict(self) -> dict:
        """Column name -> value snapshot used by the reconciler."""
        return {column.name: getattr(self, column.name) for column in self.__table__.columns}
