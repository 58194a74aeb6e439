"""Time range selectors and their tick-label policies."""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, tzinfo
from enum import Enum
from typing import Optional


class TimeRange(str, Enum):
    """Historical window understood by the measurement service.

    The value is sent to the service unchanged; the client only uses it to
    pick a tick-label policy.
    """
    ALL = "all"
    HOUR = "1h"
    SIX_HOURS = "6h"
    TWELVE_HOURS = "12h"
    DAY = "24h"
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    @property
    def label(self) -> str:
        """Human readable name for selectors."""
        return _LABELS[self]

    @classmethod
    def parse(cls, token: Optional[str]) -> Optional['TimeRange']:
        """Parse a range token.

        Args:
            token: Token such as '1h' or 'today'. Empty or None selects the
                server default.

        Returns:
            The matching range, or None for the server default.

        Raises:
            ValueError: If the token is not a known range.
        """
        if token is None or isinstance(token, cls):
            return token
        token = token.strip().lower()
        if not token:
            return None
        try:
            return cls(token)
        except ValueError:
            raise ValueError(f"Unknown time range: {token!r}") from None


_LABELS = {
    TimeRange.ALL: "All",
    TimeRange.HOUR: "1h",
    TimeRange.SIX_HOURS: "6h",
    TimeRange.TWELVE_HOURS: "12h",
    TimeRange.DAY: "24h",
    TimeRange.TODAY: "Today",
    TimeRange.WEEK: "Week",
    TimeRange.MONTH: "Month",
    TimeRange.YEAR: "Year",
}


@dataclass(frozen=True)
class TickPolicy:
    """Decides which timestamps get an x-axis label.

    Either labels every `step_minutes` of the day (time of day labels) or,
    with `step_minutes` unset, labels calendar dates.
    """
    step_minutes: Optional[int] = None

    TIME_FORMAT = "%H:%M"
    DATE_FORMAT = "%d %b"

    @property
    def by_date(self) -> bool:
        return self.step_minutes is None

    def accepts(self, timestamp_ms: int, tz: Optional[tzinfo] = None) -> bool:
        """Check if a timestamp falls on a label boundary."""
        if self.by_date:
            return True
        moment = _to_datetime(timestamp_ms, tz)
        minute_of_day = moment.hour * 60 + moment.minute
        return minute_of_day % self.step_minutes == 0

    def format(self, timestamp_ms: int, tz: Optional[tzinfo] = None) -> str:
        """Format the label text for a timestamp."""
        fmt = self.DATE_FORMAT if self.by_date else self.TIME_FORMAT
        return _to_datetime(timestamp_ms, tz).strftime(fmt)

    @classmethod
    def for_range(cls, time_range: Optional[TimeRange]) -> 'TickPolicy':
        """Get the labelling policy for a range (None = server default)."""
        return _POLICIES.get(time_range, cls())


def _to_datetime(timestamp_ms: int, tz: Optional[tzinfo]) -> datetime:
    if tz is None:
        return datetime.fromtimestamp(timestamp_ms / 1000)
    return datetime.fromtimestamp(timestamp_ms / 1000, tz)


_POLICIES = {
    TimeRange.HOUR: TickPolicy(5),
    TimeRange.SIX_HOURS: TickPolicy(5),
    TimeRange.TWELVE_HOURS: TickPolicy(30),
    TimeRange.DAY: TickPolicy(60),
    TimeRange.TODAY: TickPolicy(60),
    TimeRange.WEEK: TickPolicy(120),
    TimeRange.MONTH: TickPolicy(360),
    TimeRange.YEAR: TickPolicy(),
    TimeRange.ALL: TickPolicy(),
}
