"""Expose API endpoint routers."""

from app.api.endpoints import enrichment, places

__all__ = ["enrichment", "places"]
