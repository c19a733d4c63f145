"""Review normalisation and merging."""

from __future__ import annotations

import re
from typing import Any, Iterable

import structlog

logger = structlog.get_logger()

# ASCII digits only; str.isdigit also accepts superscripts int() rejects.
INTEGER_RE = re.compile(r"-?[0-9]+")


class InvalidReviewError(ValueError):
    """Raised when an upstream review cannot be keyed."""


def _parse_time(value: Any) -> int:
    if isinstance(value, bool):
        raise InvalidReviewError(f"invalid review time: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and INTEGER_RE.fullmatch(value.strip()):
        return int(value.strip())
    raise InvalidReviewError(f"invalid review time: {value!r}")


def normalize_review(raw: dict[str, Any]) -> dict[str, Any]:
    """Map a Google review onto the stored review shape."""
    author = raw.get("author_name")
    if not author:
        raise InvalidReviewError("review without author_name")
    review = {
        "author_name": author,
        "rating": raw.get("rating"),
        "text": raw.get("text") or "",
        "time": _parse_time(raw.get("time")),
    }
    if raw.get("aspects"):
        review["aspects"] = raw["aspects"]
    return review


def normalize_reviews(raw_reviews: Iterable[dict[str, Any]] | None, place_id: str | None = None) -> list[dict[str, Any]]:
    """Normalise a list, dropping reviews that fail validation."""
    reviews = []
    for raw in raw_reviews or []:
        try:
            reviews.append(normalize_review(raw))
        except InvalidReviewError as exc:
            logger.warning("review_dropped", place_id=place_id, reason=str(exc))
    return reviews


def review_key(review: dict[str, Any]) -> tuple[str, int]:
    return review.get("author_name"), review.get("time")


def merge_reviews(
    existing: Iterable[dict[str, Any]] | None,
    fetched: Iterable[dict[str, Any]] | None,
) -> list[dict[str, Any]]:
    """Union of stored and fetched reviews keyed by (author_name, time).

    Stored reviews go in first, fetched ones overwrite on a key clash.
    Result keeps insertion order of the keys.
    """
    merged: dict[tuple[str, int], dict[str, Any]] = {}
    for review in existing or []:
        merged[review_key(review)] = review
    for review in fetched or []:
        merged[review_key(review)] = review
    return list(merged.values())
