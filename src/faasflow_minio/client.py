"""
Object-store capability used by the data store, and its MinIO implementation.

The data store only needs five calls: create/remove a bucket and
put/get/remove an object. ``ObjectStoreClient`` names that surface so the
store can run against any S3-compatible backend (or an in-memory fake).
Implementations report every store or transport failure, including names
the SDK rejects before sending, as ``ObjectStoreError``.
"""

import io
from typing import Optional, Protocol

import structlog
from minio import Minio
from minio.error import MinioException
from urllib3.exceptions import HTTPError

from .config import StoreConfig
from .exceptions import ObjectStoreError, StoreConnectionError

logger = structlog.get_logger(__name__)


class ObjectStoreClient(Protocol):
    """Minimal bucket/object API of an S3-compatible store."""

    def make_bucket(self, bucket: str, region: str) -> None:
        ...

    def remove_bucket(self, bucket: str) -> None:
        ...

    def put_object(self, bucket: str, path: str, data: bytes) -> None:
        ...

    def get_object(self, bucket: str, path: str) -> bytes:
        ...

    def remove_object(self, bucket: str, path: str) -> None:
        ...


def _to_store_error(exc: Exception) -> ObjectStoreError:
    """Translate a MinIO SDK, urllib3 or name-validation failure into ``ObjectStoreError``."""
    code: Optional[str] = getattr(exc, "code", None)
    message = getattr(exc, "message", None) or str(exc) or type(exc).__name__
    if code:
        return ObjectStoreError(f"{code}: {message}", code=code)
    return ObjectStoreError(message)


class MinioObjectClient:
    """``ObjectStoreClient`` backed by the MinIO Python SDK."""

    def __init__(self, client: Minio):
        self.client = client

    @classmethod
    def from_config(cls, config: StoreConfig) -> "MinioObjectClient":
        """
        Build a MinIO client bound to the configured endpoint.

        Raises:
            StoreConnectionError: If the SDK rejects the configuration
        """
        try:
            client = Minio(
                endpoint=config.endpoint,
                access_key=config.access_key,
                secret_key=config.secret_key,
                secure=config.secure,
                region=config.region,
            )
        except ValueError as e:
            logger.error(
                "Failed to initialize MinIO client",
                endpoint=config.endpoint,
                error=str(e),
            )
            raise StoreConnectionError(f"Failed to initialize minio, error {e}") from e

        logger.info(
            "MinIO client initialized",
            endpoint=config.endpoint,
            region=config.region,
            use_ssl=config.secure,
        )
        return cls(client)

    def make_bucket(self, bucket: str, region: str) -> None:
        try:
            self.client.make_bucket(bucket_name=bucket, location=region)
        except (MinioException, HTTPError, ValueError) as e:
            logger.error("Failed to create bucket", bucket=bucket, error=str(e))
            raise _to_store_error(e) from e
        logger.info("Created bucket", bucket=bucket, region=region)

    def remove_bucket(self, bucket: str) -> None:
        try:
            self.client.remove_bucket(bucket_name=bucket)
        except (MinioException, HTTPError, ValueError) as e:
            logger.error("Failed to remove bucket", bucket=bucket, error=str(e))
            raise _to_store_error(e) from e
        logger.info("Removed bucket", bucket=bucket)

    def put_object(self, bucket: str, path: str, data: bytes) -> None:
        try:
            self.client.put_object(
                bucket_name=bucket,
                object_name=path,
                data=io.BytesIO(data),
                length=len(data),
            )
        except (MinioException, HTTPError, ValueError) as e:
            logger.error("Failed to upload object", bucket=bucket, object_name=path, error=str(e))
            raise _to_store_error(e) from e
        logger.debug("Object uploaded", bucket=bucket, object_name=path, size=len(data))

    def get_object(self, bucket: str, path: str) -> bytes:
        try:
            response = self.client.get_object(bucket_name=bucket, object_name=path)
        except (MinioException, HTTPError, ValueError) as e:
            logger.error("Failed to fetch object", bucket=bucket, object_name=path, error=str(e))
            raise _to_store_error(e) from e

        # A broken body (partial read) fails the whole get.
        try:
            data = response.read()
        except HTTPError as e:
            logger.error("Failed to read object body", bucket=bucket, object_name=path, error=str(e))
            raise _to_store_error(e) from e
        finally:
            response.close()
            response.release_conn()

        logger.debug("Object downloaded", bucket=bucket, object_name=path, size=len(data))
        return data

    def remove_object(self, bucket: str, path: str) -> None:
        try:
            self.client.remove_object(bucket_name=bucket, object_name=path)
        except (MinioException, HTTPError, ValueError) as e:
            logger.error("Failed to remove object", bucket=bucket, object_name=path, error=str(e))
            raise _to_store_error(e) from e
        logger.debug("Object removed", bucket=bucket, object_name=path)
