"""
Exceptions raised by the faas-flow MinIO data store.

Every error carries a human-readable ``detail``. Errors coming from the
object store are chained with ``raise ... from`` so the original cause is
kept on ``__cause__``.
"""

from typing import Optional


class DataStoreError(Exception):
    """Base data store exception."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


class LifecycleError(DataStoreError):
    """Operation not allowed in the store's current lifecycle state."""


class NotInitializedError(LifecycleError):
    """Client missing or ``init`` not called yet."""

    def __init__(self, detail: str = "minio client not initialized, use get_minio_data_store()"):
        super().__init__(detail)


class AlreadyInitializedError(LifecycleError):
    """``init`` called twice on the same store."""

    def __init__(self, detail: str = "data store already initialized"):
        super().__init__(detail)


class StoreClosedError(LifecycleError):
    """Operation attempted after ``cleanup`` removed the bucket."""

    def __init__(self, detail: str = "data store already cleaned up"):
        super().__init__(detail)


class StoreConnectionError(DataStoreError):
    """The object-store client could not be built."""

    def __init__(self, detail: str = "Failed to initialize minio"):
        super().__init__(detail)


class SecretNotFoundError(DataStoreError):
    """A required secret file is missing or unreadable."""


class ObjectStoreError(DataStoreError):
    """Failure reported by the object store or its transport."""

    def __init__(self, detail: str, code: Optional[str] = None):
        self.code = code
        super().__init__(detail)


class BucketError(DataStoreError):
    """Bucket lifecycle failure."""

    action = "processing"

    def __init__(self, bucket_name: str, cause: Exception):
        self.bucket_name = bucket_name
        self.cause = cause
        super().__init__(f"error {self.action}: {bucket_name}, error: {cause}")


class BucketCreationError(BucketError):
    action = "creating"


class BucketRemovalError(BucketError):
    action = "removing"


class ObjectError(DataStoreError):
    """Per-key object failure."""

    action = "processing"

    def __init__(self, path: str, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"error {self.action}: {path}, error: {cause}")


class WriteError(ObjectError):
    action = "writing"


class ReadError(ObjectError):
    action = "reading"


class DeleteError(ObjectError):
    action = "removing"
