"""S3 storage for place photos.

- {place_id}/{index}.{ext}   photo bytes, overwritten on every re-run
"""

from __future__ import annotations

from typing import Optional

import boto3
from botocore.exceptions import ClientError


class S3PhotoStorage:
    """Upload place photos to an S3-compatible bucket."""

    def __init__(
        self,
        bucket_name: str,
        aws_access_key_id: Optional[str] = None,
        aws_secret_access_key: Optional[str] = None,
        region: str = "eu-central-1",
        endpoint_url: Optional[str] = None,
        public_base_url: Optional[str] = None,
        s3_client=None,
    ) -> None:
        self.bucket_name = bucket_name
        self.region = region
        self.public_base_url = public_base_url.rstrip("/") if public_base_url else None
        self.s3_client = s3_client or boto3.client(
            "s3",
            aws_access_key_id=aws_access_key_id,
            aws_secret_access_key=aws_secret_access_key,
            region_name=region,
            endpoint_url=endpoint_url,
        )

    @classmethod
    def from_settings(cls, settings) -> "S3PhotoStorage":
        return cls(
            bucket_name=settings.photo_bucket,
            aws_access_key_id=settings.aws_access_key_id,
            aws_secret_access_key=settings.aws_secret_access_key,
            region=settings.aws_region,
            endpoint_url=settings.s3_endpoint_url,
            public_base_url=settings.photo_public_base_url,
        )

    @staticmethod
    def photo_key(place_id: str, index: int, ext: str) -> str:
        return f"{place_id}/{index}.{ext}"

    def upload_place_photo(
        self,
        place_id: str,
        index: int,
        image_data: bytes,
        ext: str = "jpg",
        content_type: str = "image/jpeg",
    ) -> str:
        """Upload photo bytes (overwriting) and return the object key."""
        key = self.photo_key(place_id, index, ext)
        self.s3_client.put_object(
            Bucket=self.bucket_name,
            Key=key,
            Body=image_data,
            ContentType=content_type,
        )
        return key

    def public_url(self, key: str) -> Optional[str]:
        """Public URL for an uploaded object, None if it cannot be derived."""
        if self.public_base_url:
            return f"{self.public_base_url}/{key}"
        if not self.bucket_name or not self.region:
            return None
        return f"https://{self.bucket_name}.s3.{self.region}.amazonaws.com/{key}"

    def check_bucket(self) -> bool:
        """True when the bucket is reachable with the configured credentials."""
        try:
            self.s3_client.head_bucket(Bucket=self.bucket_name)
            return True
        except ClientError:
            return False
