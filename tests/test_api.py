# ABOUTME: Tests for the Online API client
# ABOUTME: Uses a mocked requests session to check paths, payloads and error mapping

"""Tests for the Online API client."""

from unittest.mock import MagicMock, Mock, patch

import pytest
import requests

from c14.api import BucketRequest, OnlineAPI, SSHKey
from c14.config import APIConfig
from c14.exceptions import OnlineAPIError

API_URL = "https://api.example.test/v1"


def make_response(status_code=200, body=None, text=""):
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.reason = "Error"
    response.text = text
    response.content = b"" if body is None and not text else b"{}"
    if body is None:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = body
    return response


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def api(session):
    return OnlineAPI(APIConfig(token="secret", api_url=API_URL, timeout=5), session=session)


@pytest.fixture
def bucket_request():
    return BucketRequest(
        safe_name="MyBooks_safe",
        archive_name="MyBooks",
        description="hardware books",
        ssh_key_refs=["key-1"],
        quiet=True,
    )


class TestRequests:
    def test_authorization_header(self, api, session):
        session.headers.update.assert_called_once()
        headers = session.headers.update.call_args[0][0]
        assert headers["Authorization"] == "Bearer secret"

    def test_get_ssh_keys_preserves_order(self, api, session):
        session.request.return_value = make_response(
            body=[
                {"uuid_ref": "key-2", "description": "desktop", "fingerprint": "aa"},
                {"uuid_ref": "key-1", "description": "laptop"},
            ]
        )

        keys = api.get_ssh_keys()

        assert keys == [SSHKey("key-2", "desktop", "aa"), SSHKey("key-1", "laptop", "")]
        session.request.assert_called_once_with("GET", f"{API_URL}/user/key/ssh", json=None, timeout=5)

    def test_error_status_raises(self, api, session):
        session.request.return_value = make_response(status_code=403, body={"error": "Forbidden"})

        with pytest.raises(OnlineAPIError) as exc_info:
            api.get_ssh_keys()

        assert exc_info.value.status_code == 403
        assert str(exc_info.value) == "GET /user/key/ssh [403]: Forbidden"

    def test_error_without_json_body(self, api, session):
        session.request.return_value = make_response(status_code=502, text="Bad Gateway")

        with pytest.raises(OnlineAPIError, match="Bad Gateway"):
            api.get_safes()

    def test_transport_error_raises(self, api, session):
        session.request.side_effect = requests.exceptions.ConnectionError("connection refused")

        with pytest.raises(OnlineAPIError, match="connection refused"):
            api.get_ssh_keys()

    def test_timeout_raises(self, api, session):
        session.request.side_effect = requests.exceptions.Timeout()

        with pytest.raises(OnlineAPIError, match="timed out"):
            api.get_ssh_keys()


class TestCreateSSHBucketFromScratch:
    def test_reuses_existing_safe(self, api, session, bucket_request):
        session.request.side_effect = [
            make_response(body=[{"uuid_ref": "safe-9", "name": "MyBooks_safe"}]),
            make_response(body="archive-1"),
            make_response(body={"uuid_ref": "bucket-1"}),
        ]

        result = api.create_ssh_bucket_from_scratch(bucket_request)

        assert result.safe_id == "safe-9"
        assert result.archive_id == "archive-1"
        assert result.bucket == {"uuid_ref": "bucket-1"}
        methods = [call.args[0] for call in session.request.call_args_list]
        assert methods == ["GET", "POST", "GET"]

    def test_creates_missing_safe(self, api, session, bucket_request):
        session.request.side_effect = [
            make_response(body=[{"uuid_ref": "safe-9", "name": "Other"}]),
            make_response(body="safe-1"),
            make_response(body="archive-1"),
            make_response(body={"uuid_ref": "bucket-1"}),
        ]

        result = api.create_ssh_bucket_from_scratch(bucket_request)

        assert result.safe_id == "safe-1"
        create_safe = session.request.call_args_list[1]
        assert create_safe.args == ("POST", f"{API_URL}/storage/c14/safe")
        assert create_safe.kwargs["json"] == {"name": "MyBooks_safe", "description": "hardware books"}

    def test_archive_payload(self, api, session, bucket_request):
        session.request.side_effect = [
            make_response(body=[{"uuid_ref": "safe-9", "name": "MyBooks_safe"}]),
            make_response(body="archive-1"),
            make_response(body={"uuid_ref": "bucket-1"}),
        ]

        api.create_ssh_bucket_from_scratch(bucket_request)

        create_archive = session.request.call_args_list[1]
        assert create_archive.args == ("POST", f"{API_URL}/storage/c14/safe/safe-9/archive")
        assert create_archive.kwargs["json"] == {
            "name": "MyBooks",
            "description": "hardware books",
            "parity": "standard",
            "crypto": "aes-256-cbc",
            "protocols": ["SSH"],
            "ssh_keys": ["key-1"],
            "days": 7,
            "platforms": ["1"],
            "large": False,
        }

    @patch("c14.api.time.sleep")
    def test_waits_for_bucket(self, sleep, api, session, bucket_request):
        session.request.side_effect = [
            make_response(body=[{"uuid_ref": "safe-9", "name": "MyBooks_safe"}]),
            make_response(body="archive-1"),
            make_response(status_code=404, body={"error": "Not found"}),
            make_response(body={"uuid_ref": "bucket-1"}),
        ]

        result = api.create_ssh_bucket_from_scratch(bucket_request)

        assert result.bucket == {"uuid_ref": "bucket-1"}
        sleep.assert_called_once()

    def test_bucket_error_other_than_not_found_propagates(self, api, session, bucket_request):
        session.request.side_effect = [
            make_response(body=[{"uuid_ref": "safe-9", "name": "MyBooks_safe"}]),
            make_response(body="archive-1"),
            make_response(status_code=500, body={"error": "Internal error"}),
        ]

        with pytest.raises(OnlineAPIError, match="Internal error"):
            api.create_ssh_bucket_from_scratch(bucket_request)

    @patch("c14.api.time.sleep")
    def test_gives_up_after_wait_limit(self, sleep, session, bucket_request):
        api = OnlineAPI(APIConfig(token="secret", api_url=API_URL), session=session, wait_limit=0)
        session.request.side_effect = [
            make_response(body=[{"uuid_ref": "safe-9", "name": "MyBooks_safe"}]),
            make_response(body="archive-1"),
            make_response(status_code=404, body={"error": "Not found"}),
        ]

        with pytest.raises(OnlineAPIError, match="not ready"):
            api.create_ssh_bucket_from_scratch(bucket_request)
        sleep.assert_not_called()
