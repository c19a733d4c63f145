"""Fetch coffee places from Google Places and store them."""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Any, Callable

import structlog
from googlemaps.exceptions import ApiError, Timeout, TransportError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.schemas.crawl import FetchSummary
from app.services.google_places import PlacesClient
from app.services.photos import PhotoMigrator
from app.services.places import get_place, upsert_place
from app.services.reconciler import reconcile_place
from app.services.slug import generate_base_slug, resolve_unique_slug

logger = structlog.get_logger()

MAX_RESULTS = 100
PAGE_DELAY_SECONDS = 2.0  # next_page_token needs a moment before Google accepts it

UPSTREAM_ERRORS = (ApiError, Timeout, TransportError)


def _existing_record(db: Session, place_id: str) -> dict[str, Any] | None:
    try:
        place = get_place(db, place_id)
    except SQLAlchemyError as exc:
        logger.warning("existing_lookup_failed", place_id=place_id, error=str(exc))
        db.rollback()
        return None
    return place.to_dict() if place else None


def build_place_record(
    db: Session,
    places_client: PlacesClient,
    photo_migrator: PhotoMigrator | None,
    place_id: str,
    reserved_slugs: dict[str, str] | None = None,
) -> dict[str, Any] | None:
    """Fetch details for one place and reconcile them with the stored row."""
    try:
        details = places_client.place_details(place_id)
    except UPSTREAM_ERRORS as exc:
        logger.error("details_fetch_failed", place_id=place_id, error=str(exc))
        return None

    existing = _existing_record(db, place_id)

    if existing and existing.get("slug"):
        slug = existing["slug"]
    else:
        base = generate_base_slug(
            details.get("name") or (existing or {}).get("name"),
            details.get("formatted_address") or (existing or {}).get("address"),
        )
        slug = resolve_unique_slug(db, base, place_id, reserved=reserved_slugs)

    photos: list[dict[str, Any]] = []
    if photo_migrator is not None and details.get("photos"):
        photos = photo_migrator.migrate(place_id, details["photos"])

    return reconcile_place(
        place_id,
        details,
        existing,
        slug=slug,
        photos=photos,
        now=datetime.now(timezone.utc),
    )


def persist_places(db: Session, records: list[dict[str, Any]], summary: FetchSummary) -> None:
    """Best-effort upsert of every record; failures are logged per record."""
    for record in records:
        try:
            upsert_place(db, record)
            summary.places_upserted += 1
        except SQLAlchemyError as exc:
            summary.upsert_failures += 1
            logger.error("place_upsert_failed", place_id=record["id"], name=record.get("name"), error=str(exc))


def run_fetch(
    db: Session,
    places_client: PlacesClient,
    photo_migrator: PhotoMigrator | None = None,
    *,
    max_results: int = MAX_RESULTS,
    page_delay: float = PAGE_DELAY_SECONDS,
    sleep: Callable[[float], None] = time.sleep,
) -> FetchSummary:
    """Page through nearby search, reconcile every place, then upsert them all."""
    summary = FetchSummary()
    records: list[dict[str, Any]] = []
    reserved_slugs: dict[str, str] = {}
    page_token: str | None = None

    logger.info("fetch_started", max_results=max_results)
    while True:
        try:
            results, page_token = places_client.nearby_search(page_token)
        except UPSTREAM_ERRORS as exc:
            logger.error("nearby_search_failed", page=summary.pages_fetched + 1, error=str(exc))
            break
        summary.pages_fetched += 1

        for result in results:
            if len(records) >= max_results:
                break
            place_id = result.get("place_id")
            if not place_id:
                logger.info("place_without_id_skipped", name=result.get("name"))
                summary.places_skipped += 1
                continue
            try:
                record = build_place_record(db, places_client, photo_migrator, place_id, reserved_slugs)
            except Exception as exc:  # noqa: BLE001
                logger.exception("place_reconcile_failed", place_id=place_id, error=str(exc))
                record = None
            if record is None:
                summary.places_skipped += 1
                continue
            reserved_slugs[record["slug"]] = place_id
            records.append(record)
            summary.places_reconciled += 1

        if not page_token or len(records) >= max_results:
            break
        sleep(page_delay)

    logger.info("fetch_finished", places=len(records), pages=summary.pages_fetched)
    persist_places(db, records, summary)
    logger.info(
        "places_stored",
        upserted=summary.places_upserted,
        failed=summary.upsert_failures,
    )
    return summary
