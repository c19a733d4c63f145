"""Schemas for AI place summaries."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Atmosphere(BaseModel):
    vibe: Optional[str] = None
    decor_style: Optional[str] = None
    good_for_work_study: Optional[bool] = None


class CoffeeProgram(BaseModel):
    bean_source_quality: Optional[str] = None
    brewing_methods_available: list[str] = Field(default_factory=list)
    signature_drinks: list[str] = Field(default_factory=list)
    milk_alternatives_offered: list[str] = Field(default_factory=list)


class FoodOfferings(BaseModel):
    types_available: list[str] = Field(default_factory=list)
    specific_popular_items: list[str] = Field(default_factory=list)


class AISummary(BaseModel):
    """Shape the JSON stored on ``coffee_places.ai_summary`` must satisfy."""

    model_config = ConfigDict(extra="ignore")

    place_name: Optional[str] = None
    summary_for_display: str = Field(..., min_length=1)
    chatgpt_rating: Optional[str] = None
    ongoing_events: Optional[str] = None
    sentiment_analysis: Optional[str] = None
    special_features: Optional[str] = None
    atmosphere: Optional[Atmosphere] = None
    coffee_program: Optional[CoffeeProgram] = None
    food_offerings: Optional[FoodOfferings] = None
    key_selling_points: list[str] = Field(default_factory=list)
    primary_target_audience: list[str] = Field(default_factory=list)
    error: Optional[str] = None


class EnrichRequest(BaseModel):
    placeId: Optional[str] = None

    @field_validator("placeId", mode="before")
    @classmethod
    def _numeric_id_as_text(cls, value):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value
