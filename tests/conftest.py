"""Pytest configuration and shared fixtures."""

from unittest.mock import Mock

import pytest

from c14.api import BucketCreation, SSHKey


@pytest.fixture(autouse=True)
def clean_c14_environment(monkeypatch):
    """Keep the developer's C14_* settings out of the tests."""
    for name in ("C14_DEBUG", "C14_PRIVATE_TOKEN", "C14_API_URL", "C14_API_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_api():
    """Online API stand-in with one SSH key and a successful bucket creation."""
    api = Mock()
    api.get_ssh_keys.return_value = [SSHKey(uuid_ref="key-1", description="laptop")]
    api.create_ssh_bucket_from_scratch.return_value = BucketCreation(
        safe_id="safe-1", archive_id="abc-123", bucket={"uuid_ref": "bucket-1"}
    )
    return api
