"""
Database schema initialisation script
-------------------------------------
Creates coffee_places / place_photos, lists the tables and checks that the
photo bucket is reachable.
"""

import sys
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(PROJECT_ROOT / ".env")

sys.path.insert(0, str(PROJECT_ROOT))

from sqlalchemy import inspect

from app.core.config import settings
from app.db.init_db import init_db
from app.db.session import engine
from utils.s3_storage import S3PhotoStorage


def init_db_schema() -> None:
    """Create tables and print what exists."""
    print("Initialising database schema...")
    init_db()
    print("Tables created")

    print("\nTables:")
    for name in sorted(inspect(engine).get_table_names()):
        print(f"  - {name}")

    storage = S3PhotoStorage.from_settings(settings)
    if storage.check_bucket():
        print(f"\nBucket '{settings.photo_bucket}' is reachable")
    else:
        print(f"\nBucket '{settings.photo_bucket}' is NOT reachable", file=sys.stderr)


if __name__ == "__main__":
    init_db_schema()
