"""Projection of measurement series into render-ready plot data.

The projector is stateless: it turns a series into a `PlotBundle` value that
the rendering layer consumes. It never holds or mutates a chart object.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import tzinfo
from enum import Enum
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from .measurement import Measurement
from .smoothing import moving_average
from .time_range import TickPolicy, TimeRange


class Quantity(str, Enum):
    """Measured quantities drawn on the chart."""
    TEMPERATURE = "temperature"
    OUTSIDE_TEMPERATURE = "outside_temperature"
    HUMIDITY = "humidity"
    WIND_SPEED = "wind_speed"


class AxisId(str, Enum):
    """Y axes of the chart."""
    TEMPERATURE = "temperature"
    HUMIDITY = "humidity"
    WIND = "wind"


@dataclass(frozen=True)
class AxisSpec:
    """Y axis metadata."""
    axis_id: AxisId
    title: str
    unit: str
    side: str  # 'left' or 'right'
    color: str


@dataclass(frozen=True)
class PlotSeries:
    """One line of the chart.

    `values` holds None where a point is missing; the renderer must break
    the line there rather than drawing a zero.
    """
    quantity: Quantity
    name: str
    axis_id: AxisId
    unit: str
    decimals: int
    color: str
    dashed: bool
    values: Tuple[Optional[float], ...]

    @property
    def array(self) -> np.ndarray:
        """Values as float array with NaN for gaps."""
        return np.array(
            [np.nan if v is None else v for v in self.values], dtype=np.float64
        )

    def format_value(self, value: Optional[float]) -> str:
        """Format a value with this series' unit and precision."""
        if value is None or np.isnan(value):
            return "--"
        return f"{value:.{self.decimals}f} {self.unit}"


@dataclass(frozen=True)
class Tick:
    """X axis label position."""
    index: int
    timestamp: int  # milliseconds
    label: str


@dataclass(frozen=True)
class PlotBundle:
    """Everything the renderer needs to draw one chart frame."""
    time_range: Optional[TimeRange]
    timestamps: Tuple[int, ...]
    series: Tuple[PlotSeries, ...]
    axes: Tuple[AxisSpec, ...]
    ticks: Tuple[Tick, ...]

    @property
    def is_empty(self) -> bool:
        return len(self.timestamps) == 0

    @property
    def x_seconds(self) -> np.ndarray:
        """Timestamps as epoch seconds, the unit pyqtgraph date axes expect."""
        return np.asarray(self.timestamps, dtype=np.float64) / 1000.0

    def get_series(self, quantity: Quantity) -> PlotSeries:
        for series in self.series:
            if series.quantity == quantity:
                return series
        raise KeyError(quantity)

    def get_axis(self, axis_id: AxisId) -> AxisSpec:
        for axis in self.axes:
            if axis.axis_id == axis_id:
                return axis
        raise KeyError(axis_id)


# Default chart palette (temperature, outside, humidity, wind)
DEFAULT_COLORS: Dict[Quantity, str] = {
    Quantity.TEMPERATURE: "#ef4444",
    Quantity.OUTSIDE_TEMPERATURE: "#ffae00",
    Quantity.HUMIDITY: "#3b82f6",
    Quantity.WIND_SPEED: "#ff00ff",
}


@dataclass(frozen=True)
class _QuantityInfo:
    name: str
    axis_id: AxisId
    unit: str
    smoothed: bool
    dashed: bool


_QUANTITIES: Dict[Quantity, _QuantityInfo] = {
    Quantity.TEMPERATURE: _QuantityInfo("Temperature", AxisId.TEMPERATURE, "°C", True, False),
    Quantity.OUTSIDE_TEMPERATURE: _QuantityInfo("Outside temperature", AxisId.TEMPERATURE, "°C", False, False),
    Quantity.HUMIDITY: _QuantityInfo("Humidity", AxisId.HUMIDITY, "%", True, True),
    Quantity.WIND_SPEED: _QuantityInfo("Wind Speed", AxisId.WIND, "m/s", False, True),
}

# axis -> (title, unit, side, quantity that gives the axis its colour)
_AXES = (
    (AxisId.TEMPERATURE, "Temperature (°C)", "°C", "left", Quantity.TEMPERATURE),
    (AxisId.HUMIDITY, "Humidity (%)", "%", "right", Quantity.HUMIDITY),
    (AxisId.WIND, "Wind Speed (m/s)", "m/s", "right", Quantity.WIND_SPEED),
)


class ChartProjector:
    """Maps measurement series into axis-bound, gap-aware plot series."""

    DEFAULT_SMOOTHING_WINDOW = 5
    VALUE_DECIMALS = 1

    def __init__(self, smoothing_window: int = DEFAULT_SMOOTHING_WINDOW):
        """Initialize projector.

        Args:
            smoothing_window: Moving-average window applied to the indoor
                temperature and humidity lines (<= 1 disables smoothing)
        """
        self.smoothing_window = smoothing_window

    def project(
        self,
        series: Sequence[Measurement],
        color_assignment: Optional[Mapping[Quantity, str]] = None,
        time_range: Optional[TimeRange] = None,
        tz: Optional[tzinfo] = None,
    ) -> PlotBundle:
        """Build the plot bundle for a series.

        Args:
            series: Measurements in ascending timestamp order
            color_assignment: Colour per quantity; missing entries use
                DEFAULT_COLORS
            time_range: Range the series was fetched for, selects the tick
                label policy
            tz: Timezone for tick labels (local time when None)
        """
        colors = dict(DEFAULT_COLORS)
        if color_assignment:
            colors.update(color_assignment)

        raw = {
            Quantity.TEMPERATURE: [m.avg_temperature for m in series],
            Quantity.OUTSIDE_TEMPERATURE: [m.outside_temperature for m in series],
            Quantity.HUMIDITY: [m.avg_humidity for m in series],
            Quantity.WIND_SPEED: [m.avg_wind_speed for m in series],
        }

        plot_series: List[PlotSeries] = []
        for quantity, info in _QUANTITIES.items():
            values = raw[quantity]
            if info.smoothed:
                values = moving_average(values, self.smoothing_window)
            plot_series.append(PlotSeries(
                quantity=quantity,
                name=info.name,
                axis_id=info.axis_id,
                unit=info.unit,
                decimals=self.VALUE_DECIMALS,
                color=colors[quantity],
                dashed=info.dashed,
                values=tuple(None if v is None else float(v) for v in values),
            ))

        axes = tuple(
            AxisSpec(axis_id, title, unit, side, colors[color_from])
            for axis_id, title, unit, side, color_from in _AXES
        )

        timestamps = tuple(m.timestamp for m in series)
        return PlotBundle(
            time_range=time_range,
            timestamps=timestamps,
            series=tuple(plot_series),
            axes=axes,
            ticks=tuple(select_ticks(timestamps, time_range, tz)),
        )


def select_ticks(
    timestamps: Sequence[int],
    time_range: Optional[TimeRange],
    tz: Optional[tzinfo] = None,
) -> List[Tick]:
    """Pick labelled x positions for a range.

    Repeated labels (several points inside one minute or one day) keep only
    the first point.
    """
    policy = TickPolicy.for_range(time_range)
    ticks: List[Tick] = []
    last_label = None
    for index, ts in enumerate(timestamps):
        if not policy.accepts(ts, tz):
            continue
        label = policy.format(ts, tz)
        if label == last_label:
            continue
        ticks.append(Tick(index, ts, label))
        last_label = label
    return ticks
