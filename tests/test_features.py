"""Tests for place feature extraction."""

from app.schemas.place import PlaceFeatures
from app.services.features import FEATURE_KEYS, extract_place_features


def test_only_explicit_booleans_are_kept():
    details = {"delivery": False, "takeout": True, "dine_in": None, "reservable": "yes", "name": "X"}
    assert extract_place_features(details) == {"delivery": False, "takeout": True}


def test_no_feature_data_falls_back_to_stored_mapping():
    stored = {"delivery": True, "serves_breakfast": False}
    assert extract_place_features({"name": "X"}, stored) == stored


def test_no_feature_data_and_nothing_stored():
    assert extract_place_features({}, None) is None


def test_partial_upstream_replaces_stored_mapping_entirely():
    stored = {"delivery": True, "serves_breakfast": False}
    assert extract_place_features({"takeout": False}, stored) == {"takeout": False}


def test_feature_keys_match_schema():
    assert set(FEATURE_KEYS) == {
        "wheelchair_accessible_entrance",
        "curbside_pickup",
        "delivery",
        "dine_in",
        "reservable",
        "serves_breakfast",
        "serves_lunch",
        "serves_dinner",
        "takeout",
    }


def test_unknown_features_are_not_serialized():
    assert PlaceFeatures(takeout=False).model_dump() == {"takeout": False}
