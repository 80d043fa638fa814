"""
S3-based datastore using one object per key.

Object key: {prefix}/{key}
Body: raw record blob

Relies on S3 strong read-after-write consistency: a get() after a
successful put() always sees the new blob.
"""

import os
from typing import List, Optional

try:
    import boto3
    from botocore.exceptions import BotoCoreError, ClientError
except ImportError:
    boto3 = None  # type: ignore
    BotoCoreError = Exception  # type: ignore
    ClientError = Exception  # type: ignore

from ..core.errors import NotFoundError, StorageError
from .store import Datastore

_NOT_FOUND_CODES = ("NoSuchKey", "404", "NotFound")


class S3Datastore(Datastore):
    """
    S3 record store.

    Concurrent put() calls for the same key are not coordinated; the last
    one to complete wins.
    """

    def __init__(
        self,
        bucket: str,
        prefix: str = "traversals",
        endpoint_url: Optional[str] = None,
        region: str = "us-east-1",
    ) -> None:
        """
        Initialize S3 datastore.

        Args:
            bucket: S3 bucket name
            prefix: Key prefix for record objects (default: "traversals")
            endpoint_url: S3 endpoint URL (for MinIO, localstack, etc.)
            region: AWS region (default: us-east-1)

        Raises:
            StorageError: If boto3 not installed or the bucket is not accessible
        """
        if boto3 is None:
            raise StorageError("boto3 not installed (pip install boto3)")

        self.bucket = bucket
        self.prefix = prefix.rstrip("/")
        self.endpoint_url = endpoint_url
        self.region = region

        # Credentials from environment: AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY
        try:
            self.s3_client = boto3.client(
                "s3",
                endpoint_url=endpoint_url,
                region_name=region,
            )
        except Exception as e:
            raise StorageError(f"Failed to create S3 client: {e}") from e

        if os.getenv("SELSTORE_S3_SKIP_BUCKET_CHECK", "").lower() != "true":
            try:
                self.s3_client.head_bucket(Bucket=bucket)
            except ClientError as e:
                error_code = e.response.get("Error", {}).get("Code", "Unknown")
                raise StorageError(
                    f"Bucket '{bucket}' not accessible (code: {error_code})"
                ) from e

    def _object_key(self, key: str) -> str:
        return f"{self.prefix}/{key}"

    @staticmethod
    def _is_not_found(e: Exception) -> bool:
        if not isinstance(e, ClientError):
            return False
        return e.response.get("Error", {}).get("Code", "") in _NOT_FOUND_CODES

    def put(self, key: str, value: bytes) -> None:
        try:
            self.s3_client.put_object(
                Bucket=self.bucket,
                Key=self._object_key(key),
                Body=value,
                ContentType="application/octet-stream",
            )
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Failed to put {key} to S3: {e}") from e

    def get(self, key: str) -> bytes:
        try:
            response = self.s3_client.get_object(Bucket=self.bucket, Key=self._object_key(key))
            return response["Body"].read()
        except (BotoCoreError, ClientError) as e:
            if self._is_not_found(e):
                raise NotFoundError(key) from e
            raise StorageError(f"Failed to get {key} from S3: {e}") from e

    def has(self, key: str) -> bool:
        try:
            self.s3_client.head_object(Bucket=self.bucket, Key=self._object_key(key))
            return True
        except (BotoCoreError, ClientError) as e:
            if self._is_not_found(e):
                return False
            raise StorageError(f"Failed to check {key} in S3: {e}") from e

    def keys(self) -> List[str]:
        """
        Stored keys in lexicographic order.

        Paginator: list_objects_v2 returns max 1000 keys per call.
        """
        keys = []
        try:
            paginator = self.s3_client.get_paginator("list_objects_v2")
            for page in paginator.paginate(Bucket=self.bucket, Prefix=self.prefix + "/"):
                for obj in page.get("Contents", []):
                    keys.append(obj["Key"][len(self.prefix) + 1 :])
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Failed to list keys in S3: {e}") from e
        return sorted(keys)
