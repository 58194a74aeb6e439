"""In-memory holder for the latest snapshot and the active range series."""

from __future__ import annotations
from typing import Iterable, Optional, Tuple

from .measurement import LatestSnapshot, Measurement
from .time_range import TimeRange


class MeasurementStore:
    """Replace-on-write holder for the data shown by the dashboard.

    Each write swaps in a complete immutable value, so readers never see a
    series from one range mixed with points from another. Writers are
    expected to be serialized by the caller (the polling controller).
    """

    def __init__(self):
        self._series: Tuple[Optional[TimeRange], Tuple[Measurement, ...]] = (None, ())
        self._latest: Optional[LatestSnapshot] = None
        self._revision = 0

    def set_series(self, time_range: Optional[TimeRange], series: Iterable[Measurement]) -> None:
        """Replace the held series with the data for `time_range`."""
        self._series = (time_range, tuple(series))
        self._revision += 1

    def set_latest(self, snapshot: Optional[LatestSnapshot]) -> None:
        """Replace the latest snapshot. None clears it (no data)."""
        self._latest = snapshot
        self._revision += 1

    def get_series(self) -> Tuple[Measurement, ...]:
        return self._series[1]

    def get_latest(self) -> Optional[LatestSnapshot]:
        return self._latest

    @property
    def series_range(self) -> Optional[TimeRange]:
        """Range the held series was fetched for."""
        return self._series[0]

    @property
    def has_latest(self) -> bool:
        return self._latest is not None

    @property
    def revision(self) -> int:
        """Counter bumped on every write."""
        return self._revision
