"""Root API router."""

from fastapi import APIRouter

from app.api.endpoints import places

router = APIRouter()


@router.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """Simple health check endpoint."""
    return {"status": "ok"}


router.include_router(places.router)

# enrichment is mounted at /api in main.py (path used by the frontend)
