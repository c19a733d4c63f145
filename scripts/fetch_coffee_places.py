"""
Coffee place fetch script
-------------------------
Google Places nearby search (Vilnius, cafe/coffee) -> details -> photo
migration -> reconcile with stored rows -> upsert into coffee_places.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(PROJECT_ROOT / ".env")

sys.path.insert(0, str(PROJECT_ROOT))

import requests

from app.core.config import settings
from app.core.logging_config import configure_logging
from app.db.init_db import init_db
from app.db.session import SessionLocal
from app.schemas.crawl import FetchSummary
from app.services.fetch_runner import run_fetch
from app.services.google_places import PlacesClient
from app.services.photos import PhotoMigrator
from utils.s3_storage import S3PhotoStorage


def fetch_coffee_places(max_results: int | None = None, with_photos: bool = True) -> FetchSummary:
    """One complete fetch run; exits when the Google key is missing."""
    if not settings.google_maps_api_key:
        raise SystemExit("GOOGLE_MAPS_API_KEY is required. Please check your .env file.")

    init_db()
    places_client = PlacesClient(settings.google_maps_api_key)
    db = SessionLocal()
    try:
        with requests.Session() as http:
            migrator = None
            if with_photos:
                migrator = PhotoMigrator(
                    places_client,
                    S3PhotoStorage.from_settings(settings),
                    session=http,
                    db=db,
                    max_photos=settings.max_photos_per_place,
                )
            return run_fetch(
                db,
                places_client,
                migrator,
                max_results=max_results or settings.max_results,
                page_delay=settings.page_delay_seconds,
            )
    finally:
        db.close()


def main() -> None:
    parser = argparse.ArgumentParser(description="Google Places -> coffee_places")
    parser.add_argument(
        "--max-results",
        type=int,
        default=None,
        help=f"maximum number of places (default: {settings.max_results})",
    )
    parser.add_argument(
        "--no-photos",
        action="store_true",
        help="keep stored photos, skip download/upload",
    )
    args = parser.parse_args()

    configure_logging(json_output=settings.log_json, log_level=settings.log_level)
    summary = fetch_coffee_places(args.max_results, with_photos=not args.no_photos)

    print("\n" + "=" * 60)
    print("Coffee place fetch finished")
    print("=" * 60)
    print(f"  pages:      {summary.pages_fetched}")
    print(f"  reconciled: {summary.places_reconciled}")
    print(f"  skipped:    {summary.places_skipped}")
    print(f"  upserted:   {summary.places_upserted}")
    print(f"  failed:     {summary.upsert_failures}")
    print("=" * 60)


if __name__ == "__main__":
    main()
