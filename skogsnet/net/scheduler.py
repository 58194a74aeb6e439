"""Timer scheduling independent of any widget lifecycle."""

from __future__ import annotations
import itertools
from abc import ABC, abstractmethod
from typing import Callable, Dict

from PySide6 import QtCore


class Scheduler(ABC):
    """Runs tasks on the event loop after a delay or at a fixed interval.

    Handles are opaque integers; cancelling an unknown or already fired
    one-shot handle is a no-op.
    """

    @abstractmethod
    def schedule(self, task: Callable[[], None], interval_ms: int) -> int:
        """Run `task` every `interval_ms` until cancelled."""

    @abstractmethod
    def schedule_once(self, task: Callable[[], None], delay_ms: int) -> int:
        """Run `task` once after `delay_ms`."""

    @abstractmethod
    def cancel(self, handle: int) -> None:
        """Stop a scheduled task."""


class QtScheduler(Scheduler):
    """Scheduler backed by QTimer; tasks run on the thread owning the timers."""

    def __init__(self, parent: QtCore.QObject = None):
        self._parent = parent
        self._timers: Dict[int, QtCore.QTimer] = {}
        self._ids = itertools.count(1)

    def schedule(self, task: Callable[[], None], interval_ms: int) -> int:
        return self._start(task, interval_ms, single_shot=False)

    def schedule_once(self, task: Callable[[], None], delay_ms: int) -> int:
        return self._start(task, delay_ms, single_shot=True)

    def cancel(self, handle: int) -> None:
        timer = self._timers.pop(handle, None)
        if timer is not None:
            timer.stop()
            timer.deleteLater()

    def cancel_all(self) -> None:
        for handle in list(self._timers):
            self.cancel(handle)

    def _start(self, task: Callable[[], None], ms: int, single_shot: bool) -> int:
        handle = next(self._ids)
        timer = QtCore.QTimer(self._parent)
        timer.setSingleShot(single_shot)
        if single_shot:
            timer.timeout.connect(lambda: self._fire_once(handle, task))
        else:
            timer.timeout.connect(task)
        self._timers[handle] = timer
        timer.start(int(ms))
        return handle

    def _fire_once(self, handle: int, task: Callable[[], None]) -> None:
        self.cancel(handle)
        task()
