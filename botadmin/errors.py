"""Exceptions raised by the admin console."""

from __future__ import annotations


class ConfigError(RuntimeError):
    """Required configuration is missing (e.g. ADMIN_PASS in production)."""


class LoginRequired(Exception):
    """Request has no valid admin session; handled as a redirect to /login."""

    def __init__(self, reason: str = "not_logged_in") -> None:
        self.reason = reason
        super().__init__(reason)


class ValidationFailure(ValueError):
    """A required form field is missing."""


class MalformedStoredData(RuntimeError):
    """A data file exists but is not a decodable JSON array; mutations refuse to overwrite it."""

    def __init__(self, filename: str, error: str) -> None:
        self.filename = filename
        self.error = error
        super().__init__(f"{filename}: {error}")


class RecordNotFound(LookupError):
    """A record reference (id or position) does not match any stored record."""

    def __init__(self, resource: str, ref: str) -> None:
        self.resource = resource
        self.ref = ref
        super().__init__(f"{resource}: no record for {ref!r}")


__all__ = [
    "ConfigError",
    "LoginRequired",
    "ValidationFailure",
    "MalformedStoredData",
    "RecordNotFound",
]
