"""Expose schemas for easier import."""

from app.schemas.place import (  # noqa: F401
    Location,
    Photo,
    PlaceFeatures,
    PlaceOut,
    Review,
)
from app.schemas.enrichment import AISummary, EnrichRequest  # noqa: F401
from app.schemas.crawl import FetchSummary  # noqa: F401
