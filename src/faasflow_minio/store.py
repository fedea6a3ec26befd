"""
MinIO-backed data store for faas-flow.

Each workflow request gets its own bucket and every key is stored as one
object inside it:

  - bucket: faasflow-{flow_name}-{request_id}
  - object: {bucket}/key/{key}.value

Usage:
  store = get_minio_data_store()
  store.init("demo", "req1")
  store.set("x", "hello")
  store.get("x")          # "hello"
  store.delete("x")
  store.cleanup()         # bucket must be empty
"""

from typing import Optional

import structlog

from .base import DataStore, StoreState
from .client import MinioObjectClient, ObjectStoreClient
from .config import DEFAULT_REGION, StoreConfig, load_store_config
from .exceptions import (
    AlreadyInitializedError,
    BucketCreationError,
    BucketRemovalError,
    DeleteError,
    NotInitializedError,
    ObjectStoreError,
    ReadError,
    StoreClosedError,
    WriteError,
)

logger = structlog.get_logger(__name__)


def bucket_name_for(flow_name: str, request_id: str) -> str:
    return f"faasflow-{flow_name}-{request_id}"


def object_path(bucket: str, key: str) -> str:
    """Object name for ``key``. Keys are not escaped."""
    return f"{bucket}/key/{key}.value"


class MinioDataStore(DataStore):
    """
    Per-request key-value store on an S3-compatible object store.

    Lifecycle is UNINITIALIZED -> ACTIVE (``init``) -> CLEANED (``cleanup``).
    Data operations are only legal while ACTIVE. The store holds no locks;
    concurrent ``set``/``get``/``delete`` calls rely on the object store's
    per-object consistency.
    """

    def __init__(
        self,
        config: Optional[StoreConfig] = None,
        client: Optional[ObjectStoreClient] = None,
        region: Optional[str] = None,
    ):
        """
        Args:
            config: Connection configuration, used to build a MinIO client
                when ``client`` is not given
            client: Pre-built object store client
            region: Bucket region, defaults to the config region

        Raises:
            StoreConnectionError: If the MinIO client cannot be built
        """
        if client is None and config is not None:
            client = MinioObjectClient.from_config(config)

        self.client = client
        self.region = region or (config.region if config else DEFAULT_REGION)

        self.bucket_name: Optional[str] = None
        self.flow_name: Optional[str] = None
        self.request_id: Optional[str] = None
        self.state = StoreState.UNINITIALIZED

    def _require_active(self) -> None:
        if self.client is None:
            raise NotInitializedError()
        if self.state is StoreState.CLEANED:
            raise StoreClosedError()
        if self.state is StoreState.UNINITIALIZED:
            raise NotInitializedError("data store not initialized, call init() first")

    def init(self, flow_name: str, request_id: str) -> None:
        """
        Create the bucket for a workflow request.

        Raises:
            NotInitializedError: If no client is configured
            AlreadyInitializedError: If ``init`` already succeeded
            StoreClosedError: If the store was cleaned up
            BucketCreationError: If the bucket cannot be created (including
                when it already exists)
        """
        if self.client is None:
            raise NotInitializedError()
        if self.state is StoreState.ACTIVE:
            raise AlreadyInitializedError(f"data store already initialized with bucket {self.bucket_name}")
        if self.state is StoreState.CLEANED:
            raise StoreClosedError()

        bucket_name = bucket_name_for(flow_name, request_id)
        try:
            self.client.make_bucket(bucket_name, self.region)
        except ObjectStoreError as e:
            raise BucketCreationError(bucket_name, e) from e

        self.flow_name = flow_name
        self.request_id = request_id
        self.bucket_name = bucket_name
        self.state = StoreState.ACTIVE

        logger.info(
            "Data store initialized",
            flow_name=flow_name,
            request_id=request_id,
            bucket=bucket_name,
        )

    def set(self, key: str, value: str) -> None:
        self._require_active()

        path = object_path(self.bucket_name, key)
        try:
            self.client.put_object(self.bucket_name, path, value.encode("utf-8"))
        except ObjectStoreError as e:
            raise WriteError(path, e) from e

    def get(self, key: str) -> str:
        """
        Read the value stored under ``key``.

        Raises:
            ReadError: If the object is missing, cannot be read completely,
                or is not valid UTF-8
        """
        self._require_active()

        path = object_path(self.bucket_name, key)
        try:
            data = self.client.get_object(self.bucket_name, path)
        except ObjectStoreError as e:
            raise ReadError(path, e) from e

        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ReadError(path, e) from e

    def delete(self, key: str) -> None:
        self._require_active()

        path = object_path(self.bucket_name, key)
        try:
            self.client.remove_object(self.bucket_name, path)
        except ObjectStoreError as e:
            raise DeleteError(path, e) from e

    def cleanup(self) -> None:
        """
        Remove the request's bucket.

        Remaining objects are not deleted first, so a non-empty bucket makes
        this fail and the store stays ACTIVE.

        Raises:
            BucketRemovalError: If the bucket cannot be removed
        """
        self._require_active()

        try:
            self.client.remove_bucket(self.bucket_name)
        except ObjectStoreError as e:
            raise BucketRemovalError(self.bucket_name, e) from e

        self.state = StoreState.CLEANED
        logger.info("Data store cleaned up", bucket=self.bucket_name)


def get_minio_data_store() -> MinioDataStore:
    """
    Build a data store from the environment and mounted secrets.

    Reads ``s3_url``, ``s3_region``, ``s3_tls`` and ``secret_mount_path``,
    and the ``s3-access-key``/``s3-secret-key`` secret files.

    Raises:
        StoreConnectionError: If configuration or secrets are missing, or the
            client cannot be built
    """
    return MinioDataStore(config=load_store_config())
