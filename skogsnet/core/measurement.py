"""Measurement data structures."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

# Value used by the service when no outside weather reading is available
MISSING_WEATHER_VALUE = 0.0


@dataclass(frozen=True)
class Measurement:
    """One aggregated sample returned by the measurement service."""
    timestamp: int  # milliseconds since epoch
    avg_temperature: float
    avg_humidity: float
    avg_weather_temp: float = MISSING_WEATHER_VALUE
    avg_weather_humidity: float = MISSING_WEATHER_VALUE
    avg_wind_speed: float = 0.0
    avg_wind_deg: float = 0.0
    avg_clouds: float = 0.0
    weather_code: int = 0
    description: str = ""
    city: str = ""

    @property
    def has_weather_data(self) -> bool:
        """False when the outside weather fields hold the missing sentinel."""
        return self.avg_weather_temp != MISSING_WEATHER_VALUE

    @property
    def outside_temperature(self) -> Optional[float]:
        """Outside temperature, or None when no weather data was available."""
        return self.avg_weather_temp if self.has_weather_data else None


@dataclass(frozen=True)
class LatestSnapshot:
    """Most recent measurement plus the temperature trend leading to it."""
    measurement: Measurement
    trajectory: Optional[float] = None  # degrees since the reference point

    @property
    def trend(self) -> str:
        """'rising', 'falling' or 'steady' depending on the trajectory sign."""
        if not self.trajectory:
            return "steady"
        return "rising" if self.trajectory > 0 else "falling"
