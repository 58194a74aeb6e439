"""Execution of blocking fetch jobs with results delivered on the event loop.

The HTTP client blocks, so jobs run on a worker pool. Their outcome is
handed back through a queued Qt signal: callbacks always run on the thread
that owns the dispatcher, which is where the controller and store live.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from PySide6 import QtCore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchOutcome:
    """Result of a job: either a value or the exception it raised."""
    value: Any = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


Job = Callable[[], Any]
Callback = Callable[[FetchOutcome], None]


def run_job(job: Job) -> FetchOutcome:
    """Run a job and capture its result or exception."""
    try:
        return FetchOutcome(value=job())
    except Exception as exc:
        return FetchOutcome(error=exc)


class Dispatcher:
    """Runs a job and calls back with its outcome on the event loop."""

    def submit(self, job: Job, callback: Callback) -> None:
        """Queue `job`; `callback(outcome)` runs once it has finished."""
        raise NotImplementedError


class ImmediateDispatcher(Dispatcher):
    """Runs jobs inline. For scripts and tests without an event loop."""

    def submit(self, job: Job, callback: Callback) -> None:
        callback(run_job(job))


class _FetchJob(QtCore.QRunnable):
    """Worker pool task that runs one job."""

    def __init__(self, dispatcher: 'QtDispatcher', job: Job, callback: Callback):
        super().__init__()
        self._dispatcher = dispatcher
        self._job = job
        self._callback = callback

    def run(self) -> None:
        outcome = run_job(self._job)
        # Emitted from the worker thread, delivered on the dispatcher's thread
        self._dispatcher.finished.emit(self._callback, outcome)


class QtDispatcher(QtCore.QObject, Dispatcher):
    """Dispatcher backed by a QThreadPool.

    Signals:
        finished: Internal, carries (callback, outcome) across threads.
    """

    finished = QtCore.Signal(object, object)

    def __init__(self, max_threads: int = 4, parent=None):
        super().__init__(parent)
        self._pool = QtCore.QThreadPool(self)
        self._pool.setMaxThreadCount(max_threads)
        self.finished.connect(self._deliver)

    def submit(self, job: Job, callback: Callback) -> None:
        self._pool.start(_FetchJob(self, job, callback))

    def wait_for_done(self, wait_ms: int = 3000) -> bool:
        """Block until running jobs finish (used on shutdown)."""
        return self._pool.waitForDone(wait_ms)

    @QtCore.Slot(object, object)
    def _deliver(self, callback: Callback, outcome: FetchOutcome) -> None:
        try:
            callback(outcome)
        except Exception:
            logger.exception("Fetch callback failed")
