"""
Unit tests for file-based secret loading.
"""

import pytest

from faasflow_minio.exceptions import SecretNotFoundError
from faasflow_minio.secrets import mask_secret, read_secret


class TestReadSecret:
    """Test suite for read_secret."""

    def test_reads_and_trims(self, tmp_path):
        (tmp_path / "s3-access-key").write_text("\n  AKIAEXAMPLE \t\n")
        assert read_secret("s3-access-key", str(tmp_path)) == "AKIAEXAMPLE"

    def test_mount_path_without_trailing_slash(self, tmp_path):
        (tmp_path / "s3-secret-key").write_text("value")
        assert read_secret("s3-secret-key", str(tmp_path).rstrip("/")) == "value"

    def test_missing_secret(self, tmp_path):
        with pytest.raises(SecretNotFoundError) as exc_info:
            read_secret("s3-secret-key", str(tmp_path))

        assert str(tmp_path / "s3-secret-key") in exc_info.value.detail
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)

    def test_defaults_to_configured_mount_path(self, secrets_dir):
        assert read_secret("s3-access-key") == "minio-access-key"
        assert read_secret("s3-secret-key") == "minio-secret-key-123"

    def test_unset_mount_path_uses_openfaas_default(self, monkeypatch):
        monkeypatch.delenv("secret_mount_path", raising=False)

        with pytest.raises(SecretNotFoundError) as exc_info:
            read_secret("faasflow-minio-test-missing-secret")
        assert "/var/openfaas/secrets/faasflow-minio-test-missing-secret" in exc_info.value.detail

    def test_directory_is_not_a_secret(self, tmp_path):
        (tmp_path / "s3-access-key").mkdir()
        with pytest.raises(SecretNotFoundError):
            read_secret("s3-access-key", str(tmp_path))


class TestMaskSecret:
    """Test suite for mask_secret."""

    def test_masks_middle(self):
        assert mask_secret("abcdefghijkl") == "abcd****ijkl"

    def test_short_secret_fully_masked(self):
        assert mask_secret("short") == "*****"
