# ABOUTME: Configuration records for the c14 command-line client
# ABOUTME: Global options, per-invocation create options and API credentials

"""Configuration management for the c14 client."""

import json
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Callable

from .exceptions import ConfigurationError

TRUTHY_VALUES = ("1", "true", "yes")

DEFAULT_API_URL = "https://api.online.net/api/v1"
DEFAULT_TIMEOUT = 30.0

CRYPTO_CIPHER = "aes-256-cbc"
CRYPTO_NONE = "none"


def default_config_file() -> Path | None:
    """Return ~/.c14rc, or None when no home directory can be resolved."""
    try:
        return Path.home() / ".c14rc"
    except RuntimeError:
        return None


def env_flag(name: str) -> bool:
    """Return True when the environment variable holds a truthy value."""
    return os.getenv(name, "").lower() in TRUTHY_VALUES


@dataclass(frozen=True)
class GlobalOptions:
    """Process-wide options parsed before the subcommand name."""

    debug: bool = False

    @classmethod
    def from_flags(cls, debug_flag: bool) -> "GlobalOptions":
        """Combine the command-line flag with the C14_DEBUG override."""
        return cls(debug=debug_flag or env_flag("C14_DEBUG"))


@dataclass(frozen=True)
class CreateOptions:
    """Options of a single `create` invocation."""

    name: str = ""
    description: str = ""
    safe_name: str = ""
    quiet: bool = False
    parity: str = "standard"
    large_bucket: bool = False
    crypto: bool = True

    def resolved(self, name_generator: Callable[[], str]) -> "CreateOptions":
        """Return a copy with the archive name and description defaults applied.

        The description placeholder is a single space because the remote API
        rejects empty descriptions.
        """
        return replace(
            self,
            name=self.name or name_generator(),
            description=self.description or " ",
        )

    def safe_name_or_default(self) -> str:
        return self.safe_name or f"{self.name}_safe"

    @property
    def crypto_mode(self) -> str:
        return CRYPTO_CIPHER if self.crypto else CRYPTO_NONE


@dataclass(frozen=True)
class APIConfig:
    """Credentials and endpoint used by the Online API client."""

    token: str
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def load(cls, config_file: Path | None = None) -> "APIConfig":
        """Load API settings from the environment, falling back to ~/.c14rc."""
        path = config_file or default_config_file()
        data = {}
        if path is not None and path.exists():
            try:
                with open(path) as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                raise ConfigurationError(f"Could not read {path}: {e}") from e
            if not isinstance(data, dict):
                raise ConfigurationError(f"Could not read {path}: expected a JSON object")

        token = os.getenv("C14_PRIVATE_TOKEN") or data.get("access_token")
        if not token:
            raise ConfigurationError(
                f"No API token found. Set C14_PRIVATE_TOKEN or add an access_token entry to {path or '~/.c14rc'}"
            )

        api_url = os.getenv("C14_API_URL") or data.get("api_url") or DEFAULT_API_URL
        timeout = os.getenv("C14_API_TIMEOUT") or data.get("timeout") or DEFAULT_TIMEOUT
        try:
            timeout = float(timeout)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid API timeout: {timeout!r}") from e

        return cls(token=token, api_url=api_url.rstrip("/"), timeout=timeout)
