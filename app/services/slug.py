"""Human-readable place identifiers."""

from __future__ import annotations

import re
import unicodedata
from typing import Mapping

import structlog
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.place import CoffeePlace

logger = structlog.get_logger()

MAX_SLUG_ATTEMPTS = 50

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(text: str | None) -> str:
    """Lower-case ASCII, non-alphanumeric runs -> single hyphen."""
    if not text:
        return ""
    # "Café" -> "Cafe", "Užupio" -> "Uzupio"
    folded = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    return _NON_ALNUM.sub("-", folded.lower()).strip("-")


def generate_base_slug(name: str | None, address: str | None) -> str:
    """Name slug, plus the street part (first comma segment) of the address."""
    name_slug = slugify(name)
    street_slug = slugify(address.split(",")[0]) if address else ""
    if name_slug and street_slug:
        return f"{name_slug}-{street_slug}"
    return name_slug or street_slug


def resolve_unique_slug(
    db: Session,
    base_slug: str,
    place_id: str,
    max_attempts: int = MAX_SLUG_ATTEMPTS,
    reserved: Mapping[str, str] | None = None,
) -> str:
    """Return ``base_slug`` or ``base_slug-N`` not owned by another place.

    Falls back to ``place_id`` when the lookup fails or no free candidate
    is found within ``max_attempts`` tries. ``reserved`` maps slugs already
    handed out in the current run (not yet stored) to their place ids.
    """
    if not base_slug:
        return place_id

    candidate = base_slug
    for attempt in range(1, max_attempts + 1):
        if attempt > 1:
            candidate = f"{base_slug}-{attempt}"
        if reserved and reserved.get(candidate) not in (None, place_id):
            continue
        try:
            owner = db.execute(
                select(CoffeePlace.id).where(CoffeePlace.slug == candidate)
            ).scalar_one_or_none()
        except SQLAlchemyError as exc:
            logger.warning("slug_check_failed", place_id=place_id, slug=candidate, error=str(exc))
            return place_id
        if owner is None or owner == place_id:
            return candidate

    logger.warning("slug_attempts_exhausted", place_id=place_id, base_slug=base_slug)
    return place_id
