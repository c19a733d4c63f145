"""
Weekly fetch scheduler
----------------------
Runs one fetch immediately, then on FETCH_CRON (default Sunday 00:00).
"""

from __future__ import annotations

import sys
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(PROJECT_ROOT / ".env")

sys.path.insert(0, str(PROJECT_ROOT))

import structlog
from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.cron import CronTrigger

from app.core.config import settings
from app.core.logging_config import configure_logging
from scripts.fetch_coffee_places import fetch_coffee_places

logger = structlog.get_logger()

FETCH_JOB_ID = "weekly_coffee_fetch"


def run_fetch_job() -> None:
    """Scheduled job body; a failed run must not stop the scheduler."""
    logger.info("scheduled_fetch_started")
    try:
        summary = fetch_coffee_places()
    except Exception:  # noqa: BLE001
        logger.exception("scheduled_fetch_failed")
        return
    logger.info("scheduled_fetch_finished", **summary.model_dump())


def build_scheduler(cron: str = settings.fetch_cron) -> BlockingScheduler:
    scheduler = BlockingScheduler()
    scheduler.add_job(
        run_fetch_job,
        CronTrigger.from_crontab(cron),
        id=FETCH_JOB_ID,
        max_instances=1,
        coalesce=True,
    )
    return scheduler


def main() -> None:
    if not settings.google_maps_api_key:
        raise SystemExit("GOOGLE_MAPS_API_KEY is required. Please check your .env file.")

    configure_logging(json_output=settings.log_json, log_level=settings.log_level)
    scheduler = build_scheduler()
    logger.info("scheduler_configured", cron=settings.fetch_cron)

    run_fetch_job()

    print("Cron job server is running. Press Ctrl+C to exit.")
    try:
        scheduler.start()
    except (KeyboardInterrupt, SystemExit):
        pass


if __name__ == "__main__":
    main()
