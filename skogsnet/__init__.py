"""Skogsnet dashboard application package."""

from .version import __version__, __version_info__, APP_NAME
from .core import (
    Measurement,
    LatestSnapshot,
    TimeRange,
    MeasurementStore,
    ChartProjector,
    PlotBundle,
    AppSettings,
    moving_average,
)
from .net import MeasurementClient, PollingController

__all__ = [
    "__version__",
    "__version_info__",
    "APP_NAME",
    "Measurement",
    "LatestSnapshot",
    "TimeRange",
    "MeasurementStore",
    "ChartProjector",
    "PlotBundle",
    "AppSettings",
    "moving_average",
    "MeasurementClient",
    "PollingController",
]
