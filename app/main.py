"""FastAPI application entry point."""

from dotenv import load_dotenv

from fastapi import FastAPI

# Load environment variables from .env file
load_dotenv()

from app import models  # noqa: F401
from app.api.routes import router
from app.api.endpoints import enrichment
from app.core.config import settings
from app.core.logging_config import configure_logging
from app.db.init_db import init_db

configure_logging(json_output=settings.log_json, log_level=settings.log_level)

app = FastAPI(title=settings.project_name)
app.include_router(router, prefix=settings.api_v1_prefix)

# POST /api/enrich-chatgpt, outside the versioned prefix
app.include_router(enrichment.router)


@app.on_event("startup")
def on_startup() -> None:
    """Initialize database artifacts."""
    init_db()


@app.get("/", tags=["root"])
async def root() -> dict[str, str]:
    """Basic sanity endpoint."""
    return {"message": "Vilnius Coffee Finder API is running"}


@app.get("/health", tags=["health"])
async def health() -> dict[str, str]:
    """Health check endpoint for Docker."""
    return {"status": "healthy"}
