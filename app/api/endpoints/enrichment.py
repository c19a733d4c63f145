"""AI enrichment endpoint used by the place detail page."""

import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.schemas.enrichment import EnrichRequest
from app.services.enrichment import PlaceNotFoundError, enrich_place
from app.services.llm import get_llm_service

logger = structlog.get_logger()

router = APIRouter(prefix="/api", tags=["enrichment"])


@router.post("/enrich-chatgpt")
def enrich_chatgpt(payload: EnrichRequest | None = None, db: Session = Depends(get_db)):
    """Generate (or regenerate) the AI summary for one place."""
    if payload is None or not payload.placeId:
        return JSONResponse({"message": "Missing placeId"}, status_code=400)

    try:
        summary = enrich_place(db, payload.placeId, get_llm_service())
    except PlaceNotFoundError:
        return JSONResponse({"message": "Place not found"}, status_code=404)
    except Exception as exc:  # noqa: BLE001
        logger.exception("enrich_endpoint_failed", place_id=payload.placeId)
        return JSONResponse(
            {"message": "Internal Server Error", "error": str(exc)},
            status_code=500,
        )
    return summary
