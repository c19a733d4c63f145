"""Merge freshly fetched Google details with what we already store."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from app.services.features import extract_place_features
from app.services.reviews import merge_reviews, normalize_reviews

# stored column -> Google details key
DIRECT_FIELDS = {
    "rating": "rating",
    "user_ratings_total": "user_ratings_total",
    "website": "website",
    "international_phone_number": "international_phone_number",
    "price_level": "price_level",
    "opening_hours": "opening_hours",
    "google_maps_url": "url",
    "business_status": "business_status",
    "editorial_summary": "editorial_summary",
    "place_types": "types",
}

# Columns Google knows nothing about; always copied from the stored row.
PASSTHROUGH_FIELDS = (
    "ring29_rating",
    "ring29_user_ratings_total",
    "ai_summary",
    "chatgpt_rating",
    "trending_score_web",
    "trending_score_social",
    "data_last_scraped_at",
)


def _first_present(*values: Any, default: Any = None) -> Any:
    for value in values:
        if value is not None:
            return value
    return default


def _location(details: dict[str, Any], existing: dict[str, Any]) -> dict[str, float]:
    location = (details.get("geometry") or {}).get("location")
    if location and location.get("lat") is not None and location.get("lng") is not None:
        return {"lat": location["lat"], "lng": location["lng"]}
    return existing.get("location") or {"lat": 0, "lng": 0}


def reconcile_place(
    place_id: str,
    details: dict[str, Any],
    existing: dict[str, Any] | None,
    *,
    slug: str,
    photos: list[dict[str, Any]] | None = None,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Build the full ``coffee_places`` row to upsert.

    Args:
        place_id: Google place_id; always wins over the stored id.
        details: Place details result from Google.
        existing: Stored row as a dict, or ``None`` for a new place.
        slug: Already resolved unique slug.
        photos: Photos re-hosted during this run; empty keeps stored ones.
        now: Timestamp for ``last_updated`` (and ``created_at`` on insert).
    """
    existing = existing or {}
    now = now or datetime.now(timezone.utc)

    record: dict[str, Any] = {
        "id": place_id,
        "slug": slug,
        "name": details.get("name") or existing.get("name") or "",
        "address": details.get("formatted_address") or existing.get("address") or "",
        "location": _location(details, existing),
    }
    for column, key in DIRECT_FIELDS.items():
        record[column] = _first_present(details.get(key), existing.get(column))

    record["reviews"] = merge_reviews(
        existing.get("reviews"),
        normalize_reviews(details.get("reviews"), place_id=place_id),
    )
    record["place_features"] = extract_place_features(details, existing.get("place_features"))
    record["photos"] = photos if photos else (existing.get("photos") or [])

    for column in PASSTHROUGH_FIELDS:
        record[column] = existing.get(column)

    record["created_at"] = existing.get("created_at") or now
    record["last_updated"] = now
    return record
