# ABOUTME: Error taxonomy for the c14 command-line client
# ABOUTME: Usage, precondition, configuration and remote API failures

"""Exceptions raised by c14 commands and the Online API client."""


class C14Error(Exception):
    """Base class for every error reported at the process boundary."""


class UsageError(C14Error):
    """Malformed invocation: unknown command, bad flags or unexpected arguments."""


class UnknownCommandError(UsageError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"c14: unknown command {name}\nRun 'c14 help' for usage")


class ConfigurationError(C14Error):
    """The API client cannot be configured (usually a missing token)."""


class NoCredentialsError(C14Error):
    """No SSH key is registered on the account."""

    def __init__(self):
        super().__init__("Please add an SSH Key here: https://console.online.net/en/account/ssh-keys")


class OnlineAPIError(C14Error):
    """An HTTP call to the Online API failed."""

    def __init__(self, message: str, status_code: int | None = None, method: str | None = None, path: str | None = None):
        self.status_code = status_code
        self.method = method
        self.path = path
        super().__init__(message)

    def __str__(self) -> str:
        message = super().__str__()
        if self.method and self.path:
            prefix = f"{self.method} {self.path}"
            if self.status_code is not None:
                prefix = f"{prefix} [{self.status_code}]"
            return f"{prefix}: {message}"
        return message


class APIFailure(C14Error):
    """A remote call made by a command failed; annotated with the failing call site."""

    def __init__(self, call_site: str, cause: Exception):
        self.call_site = call_site
        self.cause = cause
        super().__init__(f"{call_site}: {cause}")
