"""Amenity flags from Google place details."""

from __future__ import annotations

from typing import Any

from app.schemas.place import PlaceFeatures

FEATURE_KEYS = tuple(PlaceFeatures.model_fields)


def extract_place_features(
    details: dict[str, Any],
    existing: dict[str, bool] | None = None,
) -> dict[str, bool] | None:
    """Return the boolean flags Google reported for this place.

    Only keys with an explicit ``True``/``False`` are kept. When Google
    reports none of them, the stored mapping is returned untouched; a
    partial answer replaces it entirely.
    """
    features = {key: details[key] for key in FEATURE_KEYS if isinstance(details.get(key), bool)}
    if features:
        return features
    return existing
