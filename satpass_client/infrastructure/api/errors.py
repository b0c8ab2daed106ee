"""Errors raised by the satpass API request executor."""

from __future__ import annotations

UNKNOWN_ERROR_MESSAGE = "Unknown error"


class SatpassApiError(RuntimeError):
    """Base class for every failure of a single API call."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.original = original


class NetworkFailure(SatpassApiError):
    """The request never produced a response (unreachable host, timeout, ...)."""


class DecodeFailure(SatpassApiError):
    """The response body was not valid JSON where JSON was expected."""


class RequestFailed(SatpassApiError):
    """The server answered with a status outside 2xx."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
