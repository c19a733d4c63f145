"""Thin wrapper around the googlemaps Places client."""

from __future__ import annotations

from typing import Any

import googlemaps

# Vilnius city centre
VILNIUS_LAT = 54.687157
VILNIUS_LNG = 25.279652
SEARCH_RADIUS_M = 10000
SEARCH_TYPE = "cafe"
SEARCH_KEYWORD = "coffee"

PHOTO_ENDPOINT = "https://maps.googleapis.com/maps/api/place/photo"

# Request names; the response uses plural keys ("photos", "types").
DETAILS_FIELDS = [
    "name", "formatted_address", "geometry", "rating", "user_ratings_total", "photo", "reviews",
    "website", "international_phone_number", "price_level", "opening_hours", "url",
    "business_status", "editorial_summary", "type",
    "wheelchair_accessible_entrance", "curbside_pickup", "delivery", "dine_in",
    "reservable", "serves_breakfast", "serves_lunch", "serves_dinner", "takeout",
]


class PlacesClient:
    """Nearby search, details and photo URLs for one API key."""

    def __init__(self, api_key: str, client: googlemaps.Client | None = None) -> None:
        if not api_key:
            raise RuntimeError("GOOGLE_MAPS_API_KEY is not configured.")
        self.api_key = api_key
        self._client = client or googlemaps.Client(key=api_key)

    def nearby_search(self, page_token: str | None = None) -> tuple[list[dict[str, Any]], str | None]:
        """Return (results, next_page_token) for one page of coffee places."""
        if page_token:
            response = self._client.places_nearby(page_token=page_token)
        else:
            response = self._client.places_nearby(
                location=(VILNIUS_LAT, VILNIUS_LNG),
                radius=SEARCH_RADIUS_M,
                keyword=SEARCH_KEYWORD,
                type=SEARCH_TYPE,
            )
        return response.get("results") or [], response.get("next_page_token")

    def place_details(self, place_id: str) -> dict[str, Any]:
        response = self._client.place(place_id=place_id, fields=DETAILS_FIELDS)
        return response.get("result") or {}

    def photo_params(self, photo_reference: str, max_width: int = 800) -> dict[str, Any]:
        return {
            "maxwidth": max_width,
            "photoreference": photo_reference,
            "key": self.api_key,
        }
