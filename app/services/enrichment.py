"""AI summaries for single places."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

import structlog
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.schemas.enrichment import AISummary
from app.services.llm import LLMService
from app.services.places import get_place

logger = structlog.get_logger()

PLACEHOLDER_SUMMARY = "AI summary is not available for this place right now."

# place_name is filled from the stored row when the model leaves it out.
REQUIRED_FIELDS = (
    "summary_for_display",
    "chatgpt_rating",
    "ongoing_events",
    "sentiment_analysis",
    "special_features",
)


class PlaceNotFoundError(LookupError):
    """Raised when enrichment is requested for an unknown place id."""


def fallback_summary(place_name: str | None, error: str) -> dict[str, Any]:
    return AISummary(
        place_name=place_name,
        summary_for_display=PLACEHOLDER_SUMMARY,
        chatgpt_rating="N/A",
        ongoing_events="No information available.",
        sentiment_analysis="No information available.",
        special_features="No information available.",
        error=error,
    ).model_dump()


def parse_ai_summary(raw: str, place_name: str | None = None) -> dict[str, Any]:
    """Validate the model output and return it as parsed; never raises.

    The returned dict is the model's own JSON object (unknown keys kept, no
    defaults filled in) plus ``place_name`` when the model left it out.
    """
    try:
        data = json.loads(raw)
    except (TypeError, json.JSONDecodeError) as exc:
        return fallback_summary(place_name, f"Failed to parse AI response as JSON: {exc}")
    if not isinstance(data, dict):
        return fallback_summary(place_name, "AI response is not a JSON object.")
    try:
        summary = AISummary.model_validate(data)
    except ValidationError as exc:
        return fallback_summary(place_name, f"AI response failed validation: {exc.error_count()} error(s)")
    missing = [field for field in REQUIRED_FIELDS if not getattr(summary, field)]
    if missing:
        return fallback_summary(place_name, f"AI response is missing required fields: {', '.join(missing)}")
    if not summary.place_name:
        data["place_name"] = place_name
    return data


def reviews_context(reviews: list[dict[str, Any]] | None) -> str:
    return "\n".join(review["text"] for review in reviews or [] if review.get("text"))


def enrich_place(db: Session, place_id: str, llm: LLMService) -> dict[str, Any]:
    """Generate, store and return the AI summary for one place.

    Parse failures come back as a fallback dict with ``error`` set and are
    not stored. Re-running overwrites the stored summary.
    """
    place = get_place(db, place_id)
    if place is None:
        raise PlaceNotFoundError(place_id)

    logger.info("enrichment_started", place_id=place_id, name=place.name)
    raw = llm.summarize_place(place.name, place.address, reviews_context(place.reviews) or None)
    summary = parse_ai_summary(raw, place.name)

    if summary.get("error"):
        logger.warning("enrichment_parse_failed", place_id=place_id, error=summary["error"])
        return summary

    place.ai_summary = summary
    place.chatgpt_rating = summary.get("chatgpt_rating")
    place.last_updated = datetime.now(timezone.utc)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("enrichment_stored", place_id=place_id)
    return summary
