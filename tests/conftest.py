"""
Pytest configuration and fixtures for data store tests.

Provides an in-memory object store with S3 semantics so the data store can
be exercised without a running MinIO server.
"""

from typing import Dict, Tuple

import pytest

from faasflow_minio.config import get_settings
from faasflow_minio.exceptions import ObjectStoreError
from faasflow_minio.store import MinioDataStore


class InMemoryObjectStore:
    """ObjectStoreClient fake keeping buckets and objects in dicts."""

    def __init__(self):
        self.buckets: Dict[str, str] = {}
        self.objects: Dict[Tuple[str, str], bytes] = {}
        self.calls = []

    def _require_bucket(self, bucket: str) -> None:
        if bucket not in self.buckets:
            raise ObjectStoreError("The specified bucket does not exist", code="NoSuchBucket")

    def make_bucket(self, bucket: str, region: str) -> None:
        self.calls.append(("make_bucket", bucket, region))
        if bucket in self.buckets:
            raise ObjectStoreError(
                "Your previous request to create the named bucket succeeded and you already own it.",
                code="BucketAlreadyOwnedByYou",
            )
        self.buckets[bucket] = region

    def remove_bucket(self, bucket: str) -> None:
        self.calls.append(("remove_bucket", bucket))
        self._require_bucket(bucket)
        if any(b == bucket for b, _ in self.objects):
            raise ObjectStoreError("The bucket you tried to delete is not empty", code="BucketNotEmpty")
        del self.buckets[bucket]

    def put_object(self, bucket: str, path: str, data: bytes) -> None:
        self.calls.append(("put_object", bucket, path))
        self._require_bucket(bucket)
        self.objects[(bucket, path)] = bytes(data)

    def get_object(self, bucket: str, path: str) -> bytes:
        self.calls.append(("get_object", bucket, path))
        self._require_bucket(bucket)
        try:
            return self.objects[(bucket, path)]
        except KeyError:
            raise ObjectStoreError("The specified key does not exist.", code="NoSuchKey") from None

    def remove_object(self, bucket: str, path: str) -> None:
        self.calls.append(("remove_object", bucket, path))
        self._require_bucket(bucket)
        # S3 DeleteObject succeeds for missing keys.
        self.objects.pop((bucket, path), None)


class FailingObjectStore(InMemoryObjectStore):
    """Fake whose every call fails with the given error."""

    def __init__(self, error: ObjectStoreError):
        super().__init__()
        self.error = error

    def make_bucket(self, bucket, region):
        raise self.error

    def remove_bucket(self, bucket):
        raise self.error

    def put_object(self, bucket, path, data):
        raise self.error

    def get_object(self, bucket, path):
        raise self.error

    def remove_object(self, bucket, path):
        raise self.error


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; reset around every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def object_store():
    return InMemoryObjectStore()


@pytest.fixture
def store(object_store):
    """Data store wired to the in-memory object store."""
    return MinioDataStore(client=object_store)


@pytest.fixture
def active_store(store):
    store.init("demo", "req1")
    return store


@pytest.fixture
def secrets_dir(tmp_path, monkeypatch):
    """Secret mount directory holding access/secret keys, wired via env."""
    (tmp_path / "s3-access-key").write_text("  minio-access-key\n")
    (tmp_path / "s3-secret-key").write_text("minio-secret-key-123\n")
    monkeypatch.setenv("secret_mount_path", str(tmp_path))
    return tmp_path


@pytest.fixture
def s3_env(monkeypatch, secrets_dir):
    """Minimal environment for building a store from configuration."""
    monkeypatch.setenv("s3_url", "http://localhost:9000")
    monkeypatch.delenv("s3_region", raising=False)
    monkeypatch.delenv("s3_tls", raising=False)
    return secrets_dir


@pytest.fixture
def failing_object_store():
    """Factory for object stores that fail every call with ``ObjectStoreError``."""

    def _make(message: str, code: str = None) -> FailingObjectStore:
        return FailingObjectStore(ObjectStoreError(message, code=code))

    return _make
