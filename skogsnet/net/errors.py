"""Errors raised while fetching data from the measurement service."""

from __future__ import annotations
from typing import Optional


class FetchError(RuntimeError):
    """Base error for a failed fetch. The message is shown to the user."""


class CancelledError(FetchError):
    """The request was superseded. Never shown to the user."""

    def __init__(self, message: str = "request cancelled"):
        super().__init__(message)


class TransportError(FetchError):
    """The service could not be reached."""


class HttpStatusError(FetchError):
    """The service answered with a non-success status."""

    def __init__(self, status_code: int, reason: Optional[str] = None):
        self.status_code = status_code
        self.reason = reason or ""
        message = f"API error: {status_code}"
        if self.reason:
            message += f" {self.reason}"
        super().__init__(message)


class ShapeError(FetchError):
    """The response body did not have the expected JSON shape."""


__all__ = [
    "FetchError",
    "CancelledError",
    "TransportError",
    "HttpStatusError",
    "ShapeError",
]
