"""Pydantic schemas for coffee places."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, model_serializer


class Location(BaseModel):
    lat: float = 0.0
    lng: float = 0.0


class Photo(BaseModel):
    url: str
    width: Optional[int] = None
    height: Optional[int] = None
    html_attributions: list[str] = Field(default_factory=list)


class Review(BaseModel):
    author_name: str
    rating: Optional[float] = None
    text: str = ""
    time: int
    aspects: Optional[list[dict[str, Any]]] = None


class PlaceFeatures(BaseModel):
    """Sparse amenity flags.

    ``None`` means the upstream source never said anything about the
    feature; it is dropped from API output so that unknown never reads
    as ``False``.
    """

    wheelchair_accessible_entrance: Optional[bool] = None
    curbside_pickup: Optional[bool] = None
    delivery: Optional[bool] = None
    dine_in: Optional[bool] = None
    reservable: Optional[bool] = None
    serves_breakfast: Optional[bool] = None
    serves_lunch: Optional[bool] = None
    serves_dinner: Optional[bool] = None
    takeout: Optional[bool] = None

    @model_serializer(mode="wrap")
    def _drop_unknown(self, handler):
        return {key: value for key, value in handler(self).items() if value is not None}


class PlaceOut(BaseModel):
    id: str = Field(..., description="Google place_id")
    slug: Optional[str] = None
    name: str
    address: str
    location: Location = Field(default_factory=Location)
    rating: Optional[float] = None
    user_ratings_total: Optional[int] = None
    ring29_rating: Optional[float] = None
    ring29_user_ratings_total: Optional[int] = None
    photos: list[Photo] = Field(default_factory=list)
    reviews: list[Review] = Field(default_factory=list)
    website: Optional[str] = None
    international_phone_number: Optional[str] = None
    price_level: Optional[int] = None
    opening_hours: Optional[dict[str, Any]] = None
    google_maps_url: Optional[str] = None
    business_status: Optional[str] = None
    editorial_summary: Optional[dict[str, Any]] = None
    place_types: Optional[list[str]] = None
    place_features: Optional[PlaceFeatures] = None
    ai_summary: Optional[dict[str, Any]] = None
    chatgpt_rating: Optional[str] = None
    trending_score_web: Optional[float] = None
    trending_score_social: Optional[float] = None
    created_at: Optional[datetime] = None
    last_updated: Optional[datetime] = None

    model_config = {"from_attributes": True}
