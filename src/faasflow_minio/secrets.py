"""
File-based secret loading.

Secrets are mounted as one file per secret under a base directory
(``/var/openfaas/secrets/`` by default). Values are returned with
surrounding whitespace stripped.
"""

from pathlib import Path
from typing import Optional

import structlog

from .exceptions import SecretNotFoundError

logger = structlog.get_logger(__name__)

DEFAULT_SECRET_MOUNT_PATH = "/var/openfaas/secrets/"

ACCESS_KEY_SECRET = "s3-access-key"
SECRET_KEY_SECRET = "s3-secret-key"


def read_secret(name: str, mount_path: Optional[str] = None) -> str:
    """
    Read a secret from ``<mount_path>/<name>``.

    Args:
        name: Secret file name (e.g. "s3-access-key")
        mount_path: Directory holding the secret files, defaults to the
            ``secret_mount_path`` setting

    Returns:
        Secret value with leading/trailing whitespace removed

    Raises:
        SecretNotFoundError: If the file cannot be read
    """
    if not mount_path:
        # Import here to avoid circular dependency
        from .config import get_settings

        mount_path = get_settings().secret_mount_path

    secret_file = Path(mount_path) / name
    try:
        value = secret_file.read_text().strip()
    except OSError as e:
        logger.error("Failed to read secret", secret=name, path=str(secret_file), error=str(e))
        raise SecretNotFoundError(f"unable to read secret: {secret_file}, error: {e}") from e

    logger.debug("Loaded secret", secret=name, length=len(value))
    return value


def mask_secret(secret: str, visible_chars: int = 4) -> str:
    """Mask a secret for safe logging."""
    if len(secret) <= visible_chars * 2:
        return "*" * len(secret)
    return secret[:visible_chars] + "*" * (len(secret) - visible_chars * 2) + secret[-visible_chars:]
