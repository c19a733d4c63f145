"""Copy Google place photos into our own object storage."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import requests
import structlog
from botocore.exceptions import BotoCoreError, ClientError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.place_photo import PlacePhoto
from app.services.google_places import PHOTO_ENDPOINT, PlacesClient
from utils.s3_storage import S3PhotoStorage

logger = structlog.get_logger()

MAX_PHOTOS_PER_PLACE = 3
PHOTO_MAX_WIDTH = 800
DOWNLOAD_TIMEOUT = 20

CONTENT_TYPE_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
}


def extension_for(content_type: str | None) -> tuple[str, str]:
    """Return (extension, normalised content type); JPEG when unknown."""
    mime = (content_type or "").split(";")[0].strip().lower()
    ext = CONTENT_TYPE_EXTENSIONS.get(mime)
    if ext is None:
        return "jpg", "image/jpeg"
    return ext, mime


class PhotoMigrator:
    """Download up to ``max_photos`` photos per place and re-host them."""

    def __init__(
        self,
        places_client: PlacesClient,
        storage: S3PhotoStorage,
        session: requests.Session | None = None,
        db: Session | None = None,
        max_photos: int = MAX_PHOTOS_PER_PLACE,
        max_width: int = PHOTO_MAX_WIDTH,
    ) -> None:
        self.places_client = places_client
        self.storage = storage
        self.session = session or requests.Session()
        self.db = db
        self.max_photos = max_photos
        self.max_width = max_width

    def _download(self, place_id: str, index: int, photo_reference: str) -> requests.Response | None:
        try:
            response = self.session.get(
                PHOTO_ENDPOINT,
                params=self.places_client.photo_params(photo_reference, self.max_width),
                timeout=DOWNLOAD_TIMEOUT,
            )
        except requests.exceptions.RequestException as exc:
            logger.warning("photo_download_failed", place_id=place_id, index=index, error=str(exc))
            return None
        if not response.ok:
            logger.warning("photo_download_failed", place_id=place_id, index=index, status=response.status_code)
            return None
        return response

    def _upload_row(self, place_id: str, index: int, key: str, photo: dict[str, Any], url: str) -> PlacePhoto:
        return PlacePhoto(
            place_id=place_id,
            storage_path=key,
            order_index=index,
            width=photo.get("width"),
            height=photo.get("height"),
            public_url=url,
            uploaded_at=datetime.now(timezone.utc),
        )

    def _log_uploads(self, place_id: str, rows: list[PlacePhoto]) -> None:
        """Commit this place's upload rows on their own, apart from the place upsert."""
        if self.db is None or not rows:
            return
        try:
            self.db.add_all(rows)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.warning("photo_log_failed", place_id=place_id, rows=len(rows), error=str(exc))

    def migrate(self, place_id: str, photos: list[dict[str, Any]] | None) -> list[dict[str, Any]]:
        """Return ``[{url, width, height, html_attributions}]`` for the photos that made it.

        A failing photo is skipped; the rest are still processed and keep
        their upstream position in the storage path.
        """
        migrated: list[dict[str, Any]] = []
        uploads: list[PlacePhoto] = []
        for index, photo in enumerate((photos or [])[: self.max_photos]):
            reference = photo.get("photo_reference")
            if not reference:
                logger.warning("photo_without_reference", place_id=place_id, index=index)
                continue

            response = self._download(place_id, index, reference)
            if response is None:
                continue

            ext, content_type = extension_for(response.headers.get("Content-Type"))
            try:
                key = self.storage.upload_place_photo(place_id, index, response.content, ext, content_type)
            except (BotoCoreError, ClientError) as exc:
                logger.warning("photo_upload_failed", place_id=place_id, index=index, error=str(exc))
                continue

            url = self.storage.public_url(key)
            if not url:
                logger.warning("photo_public_url_missing", place_id=place_id, key=key)
                continue

            migrated.append(
                {
                    "url": url,
                    "width": photo.get("width"),
                    "height": photo.get("height"),
                    "html_attributions": photo.get("html_attributions") or [],
                }
            )
            uploads.append(self._upload_row(place_id, index, key, photo, url))

        self._log_uploads(place_id, uploads)
        logger.info("photos_migrated", place_id=place_id, migrated=len(migrated))
        return migrated
