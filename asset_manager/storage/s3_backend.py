# asset_manager/storage/s3_backend.py
"""
S3 storage backend implementation using boto3.

Supports:
- AWS S3
- S3-compatible services (MinIO, DigitalOcean Spaces, etc.)
"""

import logging
import os
from typing import BinaryIO, Iterator, Optional

import boto3
from boto3.exceptions import S3UploadFailedError
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from asset_manager.logging_config import log_storage_operation
from asset_manager.storage.base import ObjectRecord, StorageBackend
from asset_manager.storage.exceptions import ObjectNotFound, StorageWriteError

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = ("NoSuchKey", "404", "NotFound")


def _is_not_found(error: ClientError) -> bool:
    return error.response.get("Error", {}).get("Code", "") in _NOT_FOUND_CODES


class S3StorageBackend(StorageBackend):
    """
    S3/S3-compatible storage backend.

    Configuration via environment:
    - S3_BUCKET: Bucket name (required)
    - S3_ENDPOINT_URL: Custom endpoint for S3-compatible services
    - S3_REGION: AWS region (default: us-east-1)
    - AWS_ACCESS_KEY_ID / AWS_SECRET_ACCESS_KEY: resolved by boto3
    """

    def __init__(
        self,
        bucket: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        region: Optional[str] = None,
        client=None,
    ):
        """
        Initialize S3 backend.

        Args:
            bucket: S3 bucket name (or S3_BUCKET env var)
            endpoint_url: Custom endpoint for S3-compatible services
            region: AWS region
            client: Pre-built boto3 S3 client (tests)
        """
        self._bucket = bucket or os.getenv("S3_BUCKET")
        if not self._bucket:
            raise ValueError("S3 bucket required. Set S3_BUCKET env var or pass bucket.")

        self._endpoint_url = endpoint_url or os.getenv("S3_ENDPOINT_URL")
        self._region = region or os.getenv("S3_REGION", "us-east-1")

        if client is None:
            # Retries and backoff are left to botocore
            config = Config(
                retries={"max_attempts": 3, "mode": "adaptive"},
                connect_timeout=5,
                read_timeout=30,
            )
            client = boto3.client(
                "s3",
                endpoint_url=self._endpoint_url,
                region_name=self._region,
                config=config,
            )
        self._client = client

        logger.info(f"S3 storage initialized: bucket={self._bucket}")

    @property
    def name(self) -> str:
        return "s3"

    @property
    def container(self) -> str:
        return self._bucket

    def list_objects(self) -> Iterator[ObjectRecord]:
        """List every object in the bucket, page by page."""
        paginator = self._client.get_paginator("list_objects_v2")
        for page in paginator.paginate(Bucket=self._bucket):
            for obj in page.get("Contents", []):
                yield ObjectRecord(
                    key=obj["Key"],
                    size=obj.get("Size", 0),
                    last_modified=obj["LastModified"],
                )

    def put(self, key: str, stream: BinaryIO, content_type: str) -> None:
        """Stream content to S3 via the managed transfer."""
        try:
            with log_storage_operation("put", key, backend=self.name) as metrics:
                self._client.upload_fileobj(
                    stream,
                    self._bucket,
                    key,
                    ExtraArgs={"ContentType": content_type},
                )
                if stream.seekable():
                    metrics["size_bytes"] = stream.tell()
        except (ClientError, BotoCoreError, S3UploadFailedError) as e:
            raise StorageWriteError(key, str(e)) from e

    def get(self, key: str) -> BinaryIO:
        """Open the object body as a streaming response."""
        try:
            response = self._client.get_object(Bucket=self._bucket, Key=key)
        except ClientError as e:
            if _is_not_found(e):
                logger.debug(f"S3 object not found: {key}")
                raise ObjectNotFound(key) from e
            logger.error(f"S3 get failed for {key}: {e}")
            raise
        return response["Body"]

    def exists(self, key: str) -> bool:
        """Check if object exists in S3."""
        try:
            self._client.head_object(Bucket=self._bucket, Key=key)
            return True
        except ClientError as e:
            if _is_not_found(e):
                return False
            raise

    def get_content_type(self, key: str) -> Optional[str]:
        """ContentType header of the object, or None if it is missing."""
        try:
            response = self._client.head_object(Bucket=self._bucket, Key=key)
        except ClientError as e:
            if _is_not_found(e):
                return None
            raise
        return response.get("ContentType")

    def delete(self, key: str) -> None:
        """
        Delete object from S3.

        S3 reports success for missing keys, so existence is checked first.
        """
        if not self.exists(key):
            raise ObjectNotFound(key)

        try:
            self._client.delete_object(Bucket=self._bucket, Key=key)
        except ClientError as e:
            logger.error(f"S3 delete failed for {key}: {e}")
            raise
        logger.debug(f"Deleted from S3: {key}")
