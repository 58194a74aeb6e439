"""Core data structures and models for the Skogsnet dashboard."""

from .measurement import Measurement, LatestSnapshot, MISSING_WEATHER_VALUE
from .time_range import TimeRange, TickPolicy
from .store import MeasurementStore
from .smoothing import moving_average
from .projector import (
    AxisId,
    AxisSpec,
    ChartProjector,
    PlotBundle,
    PlotSeries,
    Quantity,
    Tick,
    DEFAULT_COLORS,
)
from .settings import AppSettings

__all__ = [
    'Measurement',
    'LatestSnapshot',
    'MISSING_WEATHER_VALUE',
    'TimeRange',
    'TickPolicy',
    'MeasurementStore',
    'moving_average',
    'AxisId',
    'AxisSpec',
    'ChartProjector',
    'PlotBundle',
    'PlotSeries',
    'Quantity',
    'Tick',
    'DEFAULT_COLORS',
    'AppSettings',
]
