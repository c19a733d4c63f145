"""Schemas for the Google Places fetch run."""

from pydantic import BaseModel


class FetchSummary(BaseModel):
    pages_fetched: int = 0
    places_reconciled: int = 0
    places_skipped: int = 0
    places_upserted: int = 0
    upsert_failures: int = 0
