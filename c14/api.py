# ABOUTME: HTTP client for the Online storage API used by c14 commands
# ABOUTME: Lists SSH keys and creates safes, archives and their SSH buckets

"""Online API client."""

import time
from dataclasses import dataclass, field
from typing import Any

import requests
from rich.progress import Progress, SpinnerColumn, TextColumn

from c14 import __version__
from c14.diagnostics import Diagnostics
from c14.config import APIConfig
from c14.exceptions import OnlineAPIError

# Platform "1" is DC2, the only platform new archives are placed on
DEFAULT_PLATFORMS = ["1"]
DEFAULT_LOCK_DAYS = 7

BUCKET_POLL_INTERVAL = 2.0
BUCKET_WAIT_LIMIT = 600.0


@dataclass
class SSHKey:
    """An SSH key registered on the Online account."""

    uuid_ref: str
    description: str = ""
    fingerprint: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SSHKey":
        return cls(
            uuid_ref=data["uuid_ref"],
            description=data.get("description", ""),
            fingerprint=data.get("fingerprint", ""),
        )


@dataclass
class Safe:
    uuid_ref: str
    name: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Safe":
        return cls(
            uuid_ref=data["uuid_ref"],
            name=data.get("name", ""),
        )


@dataclass
class BucketRequest:
    """Everything needed to create an SSH-accessible archive in one call."""

    safe_name: str
    archive_name: str
    description: str
    ssh_key_refs: list[str]
    platforms: list[str] = field(default_factory=lambda: list(DEFAULT_PLATFORMS))
    days: int = DEFAULT_LOCK_DAYS
    quiet: bool = False
    parity: str = "standard"
    large_bucket: bool = False
    crypto: str = "aes-256-cbc"


@dataclass
class BucketCreation:
    """Identifiers returned by create_ssh_bucket_from_scratch."""

    safe_id: str
    archive_id: str
    bucket: dict[str, Any]


class OnlineAPI:
    """Thin wrapper over the Online REST API (https://console.online.net/en/api/)."""

    def __init__(
        self,
        config: APIConfig,
        diagnostics: Diagnostics | None = None,
        session: requests.Session | None = None,
        wait_limit: float = BUCKET_WAIT_LIMIT,
    ):
        self.config = config
        self.diagnostics = diagnostics or Diagnostics()
        self.wait_limit = wait_limit
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {config.token}",
                "Accept": "application/json",
                "User-Agent": f"c14-cli/{__version__}",
            }
        )

    def _request(self, method: str, path: str, payload: dict[str, Any] | None = None) -> Any:
        url = f"{self.config.api_url}{path}"
        self.diagnostics.debug(f"{method} {url}")
        if payload is not None:
            self.diagnostics.debug(f"payload: {payload}")

        try:
            response = self.session.request(method, url, json=payload, timeout=self.config.timeout)
        except requests.exceptions.Timeout as e:
            raise OnlineAPIError(f"request timed out after {self.config.timeout}s", method=method, path=path) from e
        except requests.exceptions.RequestException as e:
            raise OnlineAPIError(str(e), method=method, path=path) from e

        self.diagnostics.debug(f"{method} {url} -> {response.status_code}")

        if not response.ok:
            raise OnlineAPIError(self._error_message(response), status_code=response.status_code, method=method, path=path)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise OnlineAPIError(
                "invalid JSON in response", status_code=response.status_code, method=method, path=path
            ) from e

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        """Extract the server's error message, falling back to the HTTP reason."""
        try:
            body = response.json()
        except ValueError:
            return response.text.strip() or response.reason or "request failed"
        if isinstance(body, dict):
            return body.get("error_description") or body.get("error") or body.get("message") or str(body)
        return str(body)

    def get_ssh_keys(self) -> list[SSHKey]:
        """List the account's SSH keys in the order the API returns them."""
        return [SSHKey.from_dict(item) for item in self._request("GET", "/user/key/ssh") or []]

    def get_safes(self) -> list[Safe]:
        return [Safe.from_dict(item) for item in self._request("GET", "/storage/c14/safe") or []]

    def create_safe(self, name: str, description: str) -> str:
        return self._request("POST", "/storage/c14/safe", {"name": name, "description": description})

    def create_archive(self, safe_id: str, request: BucketRequest) -> str:
        payload = {
            "name": request.archive_name,
            "description": request.description,
            "parity": request.parity,
            "crypto": request.crypto,
            "protocols": ["SSH"],
            "ssh_keys": request.ssh_key_refs,
            "days": request.days,
            "platforms": request.platforms,
            "large": request.large_bucket,
        }
        return self._request("POST", f"/storage/c14/safe/{safe_id}/archive", payload)

    def get_bucket(self, safe_id: str, archive_id: str) -> dict[str, Any]:
        return self._request("GET", f"/storage/c14/safe/{safe_id}/archive/{archive_id}/bucket")

    def _find_or_create_safe(self, name: str, description: str) -> str:
        for safe in self.get_safes():
            if safe.name == name:
                self.diagnostics.debug(f"reusing safe {name} ({safe.uuid_ref})")
                return safe.uuid_ref
        safe_id = self.create_safe(name, description)
        self.diagnostics.debug(f"created safe {name} ({safe_id})")
        return safe_id

    def _wait_for_bucket(self, safe_id: str, archive_id: str) -> dict[str, Any]:
        """Poll until the archive's bucket exists.

        The bucket endpoint answers 404 while the archive is still being set up.
        """
        deadline = time.monotonic() + self.wait_limit
        while True:
            try:
                return self.get_bucket(safe_id, archive_id)
            except OnlineAPIError as e:
                if e.status_code != 404:
                    raise
            if time.monotonic() >= deadline:
                raise OnlineAPIError(
                    f"bucket of archive {archive_id} not ready after {int(self.wait_limit)}s",
                    method="GET",
                    path=f"/storage/c14/safe/{safe_id}/archive/{archive_id}/bucket",
                )
            time.sleep(BUCKET_POLL_INTERVAL)

    def create_ssh_bucket_from_scratch(self, request: BucketRequest) -> BucketCreation:
        """Create (or reuse) the safe, create the archive and wait for its bucket."""
        safe_id = self._find_or_create_safe(request.safe_name, request.description)
        archive_id = self.create_archive(safe_id, request)
        self.diagnostics.debug(f"created archive {request.archive_name} ({archive_id})")

        if request.quiet:
            bucket = self._wait_for_bucket(safe_id, archive_id)
        else:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                console=self.diagnostics.console,
                transient=True,
            ) as progress:
                progress.add_task(f"Waiting for archive {request.archive_name}...", total=None)
                bucket = self._wait_for_bucket(safe_id, archive_id)

        return BucketCreation(safe_id=safe_id, archive_id=archive_id, bucket=bucket)
