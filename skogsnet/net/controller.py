"""Polling controller: refresh loop, request cancellation and error state.

Each cycle fetches the latest snapshot and, in live mode, the series for the
selected range. The two fetch roles are independent lanes: issuing a new
request for a role first cancels the one still pending, and an outcome is
only applied if its token is still the role's current token. A response to
a superseded request can therefore never overwrite fresher data.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Dict, Optional

from PySide6 import QtCore

from ..core import MeasurementStore, TimeRange
from .cancellation import CancellationToken
from .client import MeasurementClient
from .dispatcher import Dispatcher, FetchOutcome
from .errors import CancelledError
from .scheduler import Scheduler

logger = logging.getLogger(__name__)

# Fetch roles
LATEST = "latest"
SERIES = "series"
ROLES = (LATEST, SERIES)

# Per-role states
IDLE = "idle"
FETCHING = "fetching"
SUCCESS = "success"
CANCELLED = "cancelled"
FAILED = "failed"

_ROLE_LABELS = {LATEST: "latest data", SERIES: "data"}


class PollingController(QtCore.QObject):
    """Owns the poll timer and the pending request of each role.

    Signals:
        latest_changed: New LatestSnapshot (or None) written to the store.
        series_changed: New series written to the store (tuple of Measurement).
        error_changed: Current error message, empty string when cleared.
        state_changed: (role, state) on every state transition.
    """

    latest_changed = QtCore.Signal(object)
    series_changed = QtCore.Signal(object)
    error_changed = QtCore.Signal(str)
    state_changed = QtCore.Signal(str, str)

    DEFAULT_INTERVAL_MS = 10000
    DEFAULT_RETRY_DELAY_MS = 5000

    def __init__(
        self,
        client: MeasurementClient,
        store: MeasurementStore,
        scheduler: Scheduler,
        dispatcher: Dispatcher,
        interval_ms: int = DEFAULT_INTERVAL_MS,
        retry_delay_ms: int = DEFAULT_RETRY_DELAY_MS,
        parent=None,
    ):
        super().__init__(parent)
        self._client = client
        self._store = store
        self._scheduler = scheduler
        self._dispatcher = dispatcher
        self.interval_ms = interval_ms
        self.retry_delay_ms = retry_delay_ms

        self._range: Optional[TimeRange] = None
        self._live = True
        self._running = False

        self._timer_handle: Optional[int] = None
        self._retry_handles: Dict[str, int] = {}
        self._pending: Dict[str, CancellationToken] = {}
        self._states: Dict[str, str] = {role: IDLE for role in ROLES}
        self._succeeded: Dict[str, bool] = {role: False for role in ROLES}
        self._role_errors: Dict[str, str] = {}  # insertion order = age
        self._error = ""

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def start(self, range_token, live_enabled: bool) -> None:
        """Begin polling with the given range and live mode.

        Args:
            range_token: TimeRange, token string, or None/'' for the server
                default
            live_enabled: Fetch the range series on every cycle
        """
        self._range = TimeRange.parse(range_token)
        self._live = bool(live_enabled)
        self._running = True
        self._succeeded = {role: False for role in ROLES}
        logger.info(f"Polling started (range={self._range_name}, live={self._live})")
        self._restart()

    def update_parameters(self, range_token, live_enabled: bool) -> None:
        """Change range or live mode; a running controller re-polls at once."""
        new_range = TimeRange.parse(range_token)
        if new_range != self._range:
            # A range that never loaded gets the first-load retry again
            self._succeeded[SERIES] = False
        self._range = new_range
        self._live = bool(live_enabled)
        if not self._running:
            return
        logger.info(f"Polling parameters changed (range={self._range_name}, live={self._live})")
        self._restart()

    def stop(self) -> None:
        """Halt polling and cancel everything pending."""
        self._cancel_timers()
        for role in ROLES:
            self._cancel_pending(role)
            self._set_state(role, IDLE)
        if self._running:
            logger.info("Polling stopped")
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def range_token(self) -> Optional[TimeRange]:
        return self._range

    @property
    def live_enabled(self) -> bool:
        return self._live

    @property
    def error_message(self) -> str:
        """Newest failure message still outstanding, empty when none."""
        return self._error

    @property
    def store(self) -> MeasurementStore:
        return self._store

    def state(self, role: str) -> str:
        return self._states[role]

    def is_pending(self, role: str) -> bool:
        return role in self._pending

    # -------------------------------------------------------------------------
    # Cycle
    # -------------------------------------------------------------------------

    def _restart(self) -> None:
        """Run a cycle now and re-arm the interval timer from this moment."""
        self._cancel_timers()
        self._run_cycle()
        self._timer_handle = self._scheduler.schedule(self._run_cycle, self.interval_ms)

    def _run_cycle(self) -> None:
        if not self._running:
            return
        # Nothing from the previous cycle may land after this point
        for role in ROLES:
            self._cancel_pending(role)
        self._issue(LATEST)
        if self._live:
            self._issue(SERIES)
        else:
            # Series is not polled, drop its stale error
            self._set_error(SERIES, None)

    def _issue(self, role: str) -> None:
        """Cancel the role's pending request and send a new one."""
        self._cancel_pending(role)

        token = CancellationToken(role)
        self._pending[role] = token
        self._set_state(role, FETCHING)

        if role == LATEST:
            job = partial(self._client.fetch_latest, token=token)
        else:
            job = partial(self._client.fetch_series, self._range, token=token)
        self._dispatcher.submit(job, partial(self._on_outcome, role, token, self._range))

    def _on_outcome(
        self,
        role: str,
        token: CancellationToken,
        requested_range: Optional[TimeRange],
        outcome: FetchOutcome,
    ) -> None:
        if token.cancelled or self._pending.get(role) is not token:
            logger.debug(f"Discarding result of superseded {token!r}")
            return
        del self._pending[role]

        if isinstance(outcome.error, CancelledError):
            logger.debug(f"{role} request cancelled")
            self._set_state(role, CANCELLED)
            return

        if not outcome.ok:
            self._on_failure(role, outcome.error)
            return

        if role == LATEST:
            self._store.set_latest(outcome.value)
            self.latest_changed.emit(outcome.value)
        else:
            self._store.set_series(requested_range, outcome.value)
            self.series_changed.emit(self._store.get_series())

        self._succeeded[role] = True
        self._set_state(role, SUCCESS)
        self._set_error(role, None)

    def _on_failure(self, role: str, error: BaseException) -> None:
        logger.warning(f"Fetching {role} failed: {error}")
        self._set_state(role, FAILED)
        self._set_error(role, f"Error loading {_ROLE_LABELS[role]}: {error}. Retrying...")

        # Nothing shown yet for this role: try again sooner than the next tick
        if not self._succeeded[role] and role not in self._retry_handles:
            self._retry_handles[role] = self._scheduler.schedule_once(
                partial(self._retry, role), self.retry_delay_ms
            )

    def _retry(self, role: str) -> None:
        self._retry_handles.pop(role, None)
        if not self._running:
            return
        if role == SERIES and not self._live:
            return
        if role in self._pending:
            return  # A tick already re-issued it
        logger.info(f"Retrying {role} fetch")
        self._issue(role)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _cancel_pending(self, role: str) -> None:
        token = self._pending.pop(role, None)
        if token is not None:
            token.cancel()
            logger.debug(f"Cancelled {token!r}")
            self._set_state(role, CANCELLED)

    def _cancel_timers(self) -> None:
        if self._timer_handle is not None:
            self._scheduler.cancel(self._timer_handle)
            self._timer_handle = None
        for handle in self._retry_handles.values():
            self._scheduler.cancel(handle)
        self._retry_handles.clear()

    def _set_state(self, role: str, state: str) -> None:
        if self._states[role] == state:
            return
        self._states[role] = state
        self.state_changed.emit(role, state)

    def _set_error(self, role: str, message: Optional[str]) -> None:
        """Record or clear a role's error and publish the newest one left."""
        self._role_errors.pop(role, None)
        if message:
            self._role_errors[role] = message
        current = list(self._role_errors.values())[-1] if self._role_errors else ""
        if current == self._error:
            return
        self._error = current
        self.error_changed.emit(current)

    @property
    def _range_name(self) -> str:
        return self._range.value if self._range else "default"


__all__ = [
    "PollingController",
    "LATEST",
    "SERIES",
    "ROLES",
    "IDLE",
    "FETCHING",
    "SUCCESS",
    "CANCELLED",
    "FAILED",
]
