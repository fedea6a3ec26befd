"""
Configuration for the faas-flow MinIO data store.

``Settings`` reads the process environment (and an optional ``.env`` file).
``load_store_config`` combines those settings with the mounted secret files
into the explicit ``StoreConfig`` handed to the data store.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Optional
from urllib.parse import urlparse

import structlog
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import SecretNotFoundError, StoreConnectionError
from .secrets import (
    ACCESS_KEY_SECRET,
    DEFAULT_SECRET_MOUNT_PATH,
    SECRET_KEY_SECRET,
    mask_secret,
    read_secret,
)

logger = structlog.get_logger(__name__)

DEFAULT_REGION = "us-east-1"
TLS_ENABLED_VALUES = ("true", "1")


class Settings(BaseSettings):
    """Data store settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Object store
    s3_url: Optional[str] = Field(default=None, description="Object store endpoint")
    s3_region: str = Field(default=DEFAULT_REGION, description="Object store region")
    s3_tls: str = Field(default="", description="Enable TLS when 'true' or '1'")

    # Secrets
    secret_mount_path: str = Field(
        default=DEFAULT_SECRET_MOUNT_PATH,
        description="Directory holding the s3-access-key and s3-secret-key files",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")

    @field_validator("s3_region", mode="before")
    @classmethod
    def default_empty_region(cls, v):
        if v is None or v == "":
            return DEFAULT_REGION
        return v

    @field_validator("secret_mount_path", mode="before")
    @classmethod
    def default_empty_mount_path(cls, v):
        if v is None or v == "":
            return DEFAULT_SECRET_MOUNT_PATH
        return v

    @property
    def tls_enabled(self) -> bool:
        # Only the exact literals count, "True" or "yes" do not.
        return self.s3_tls in TLS_ENABLED_VALUES


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


@dataclass(frozen=True)
class StoreConfig:
    """Connection configuration for the object store."""

    endpoint: str
    access_key: str
    secret_key: str
    region: str = DEFAULT_REGION
    secure: bool = False

    def __repr__(self) -> str:
        return (
            f"StoreConfig(endpoint={self.endpoint!r}, region={self.region!r}, "
            f"secure={self.secure!r}, access_key={mask_secret(self.access_key)!r})"
        )


def normalize_endpoint(url: str) -> str:
    """
    Turn ``s3_url`` into the ``host[:port]`` form the MinIO SDK expects.

    ``http://localhost:9000/`` and ``localhost:9000`` both give
    ``localhost:9000``. The scheme never decides TLS, ``s3_tls`` does.

    Raises:
        StoreConnectionError: If the URL has no host, a path, a query or a
            fragment
    """
    url = url.strip()
    parsed = urlparse(url if "://" in url else f"http://{url}")
    if not parsed.netloc or parsed.path not in ("", "/") or parsed.params or parsed.query or parsed.fragment:
        raise StoreConnectionError(f"Failed to initialize minio, error invalid endpoint: {url!r}")
    return parsed.netloc


def load_store_config(settings: Optional[Settings] = None) -> StoreConfig:
    """
    Build a ``StoreConfig`` from settings and the mounted secret files.

    Raises:
        StoreConnectionError: If the endpoint is missing or a secret cannot be read
    """
    settings = settings or get_settings()

    if not settings.s3_url:
        raise StoreConnectionError("Failed to initialize minio, error: s3_url is not set")

    try:
        access_key = read_secret(ACCESS_KEY_SECRET, settings.secret_mount_path)
        secret_key = read_secret(SECRET_KEY_SECRET, settings.secret_mount_path)
    except SecretNotFoundError as e:
        raise StoreConnectionError(f"Failed to initialize minio, error {e.detail}") from e

    config = StoreConfig(
        endpoint=normalize_endpoint(settings.s3_url),
        access_key=access_key,
        secret_key=secret_key,
        region=settings.s3_region,
        secure=settings.tls_enabled,
    )

    logger.debug(
        "Loaded object store configuration",
        endpoint=config.endpoint,
        region=config.region,
        secure=config.secure,
        access_key=mask_secret(access_key),
    )
    return config
