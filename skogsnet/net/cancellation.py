"""Cancellation tokens for superseded requests."""

from __future__ import annotations
import itertools
import threading

from .errors import CancelledError

_ids = itertools.count(1)


class CancellationToken:
    """Cooperative cancellation flag passed along with each request.

    `cancel()` may be called from the event loop while the request runs on
    a worker thread, so the flag is a threading.Event. Cancelling twice is
    harmless.
    """

    def __init__(self, label: str = ""):
        self.id = next(_ids)
        self.label = label
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        """Raise CancelledError if the token has been cancelled."""
        if self._event.is_set():
            raise CancelledError(f"{self.label or 'request'} #{self.id} cancelled")

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "active"
        return f"CancellationToken({self.label!r}, id={self.id}, {state})"
