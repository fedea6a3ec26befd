"""faas-flow data store backed by MinIO / S3-compatible object storage."""

from .base import DataStore, StoreState
from .client import MinioObjectClient, ObjectStoreClient
from .config import Settings, StoreConfig, get_settings, load_store_config
from .exceptions import (
    AlreadyInitializedError,
    BucketCreationError,
    BucketRemovalError,
    DataStoreError,
    DeleteError,
    NotInitializedError,
    ObjectStoreError,
    ReadError,
    SecretNotFoundError,
    StoreClosedError,
    StoreConnectionError,
    WriteError,
)
from .logging import setup_logging
from .store import MinioDataStore, bucket_name_for, get_minio_data_store, object_path

__all__ = [
    "DataStore",
    "StoreState",
    "MinioDataStore",
    "get_minio_data_store",
    "bucket_name_for",
    "object_path",
    "ObjectStoreClient",
    "MinioObjectClient",
    "Settings",
    "StoreConfig",
    "get_settings",
    "load_store_config",
    "setup_logging",
    "DataStoreError",
    "NotInitializedError",
    "AlreadyInitializedError",
    "StoreClosedError",
    "StoreConnectionError",
    "SecretNotFoundError",
    "ObjectStoreError",
    "BucketCreationError",
    "BucketRemovalError",
    "WriteError",
    "ReadError",
    "DeleteError",
]

__version__ = "0.1.0"
