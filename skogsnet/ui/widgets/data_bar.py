"""Row of cards showing the latest reading."""

from __future__ import annotations
from typing import Optional

from PySide6 import QtWidgets

from ...core import DEFAULT_COLORS, LatestSnapshot, Quantity
from .stat_card import StatCard

TREND_COLORS = {
    "rising": "#ef4444",
    "falling": "#22c55e",
    "steady": "#e5e7eb",
}


class DataBar(QtWidgets.QWidget):
    """Current temperature, humidity, outside weather and trend."""

    def __init__(self, parent=None):
        super().__init__(parent)
        layout = QtWidgets.QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(12)

        self.temp_card = StatCard("TEMP", "°C", DEFAULT_COLORS[Quantity.TEMPERATURE])
        self.outside_card = StatCard("OUTSIDE TEMP", "°C", DEFAULT_COLORS[Quantity.OUTSIDE_TEMPERATURE])
        self.humidity_card = StatCard("HUMIDITY", "%", DEFAULT_COLORS[Quantity.HUMIDITY])
        self.wind_card = StatCard("WIND SPEED", "m/s", DEFAULT_COLORS[Quantity.WIND_SPEED])
        self.weather_card = StatCard("WEATHER")
        self.trend_card = StatCard("Δ TEMP", "°C")

        for card in (self.temp_card, self.outside_card, self.humidity_card,
                     self.wind_card, self.weather_card, self.trend_card):
            layout.addWidget(card)
        layout.addStretch()

        self.no_data_label = QtWidgets.QLabel("No data available")
        layout.addWidget(self.no_data_label)
        self.set_snapshot(None)

    def set_snapshot(self, snapshot: Optional[LatestSnapshot]) -> None:
        """Show a snapshot; None shows the no-data state."""
        self.no_data_label.setVisible(snapshot is None)
        if snapshot is None:
            for card in (self.temp_card, self.outside_card, self.humidity_card,
                         self.wind_card, self.trend_card):
                card.set_value(None)
            self.weather_card.set_text("")
            return

        m = snapshot.measurement
        self.temp_card.set_value(m.avg_temperature)
        self.outside_card.set_value(m.outside_temperature)
        self.humidity_card.set_value(m.avg_humidity)
        self.wind_card.set_value(m.avg_wind_speed)
        self.weather_card.set_text(m.description)
        self.trend_card.set_value(snapshot.trajectory or 0.0)
        self.trend_card.set_color(TREND_COLORS[snapshot.trend])
