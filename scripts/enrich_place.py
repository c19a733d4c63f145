"""
AI enrichment script
--------------------
Generate the structured AI summary for one place and store it.

  python scripts/enrich_place.py <place_id>
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(PROJECT_ROOT / ".env")

sys.path.insert(0, str(PROJECT_ROOT))

from app.core.config import settings
from app.core.logging_config import configure_logging
from app.db.session import SessionLocal
from app.services.enrichment import PlaceNotFoundError, enrich_place
from app.services.llm import LLMService


def main() -> None:
    parser = argparse.ArgumentParser(description="AI summary for one coffee place")
    parser.add_argument("place_id", help="Google place_id")
    args = parser.parse_args()

    if not settings.openai_api_key:
        raise SystemExit("OPENAI_API_KEY is not set. Please check your .env file.")

    configure_logging(json_output=settings.log_json, log_level=settings.log_level)
    llm = LLMService(settings.openai_api_key)

    db = SessionLocal()
    try:
        summary = enrich_place(db, args.place_id, llm)
    except PlaceNotFoundError:
        raise SystemExit(f"Place not found: {args.place_id}")
    finally:
        db.close()

    print(json.dumps(summary, ensure_ascii=False, indent=2))
    if summary.get("error"):
        sys.exit(1)


if __name__ == "__main__":
    main()
