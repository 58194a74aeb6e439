"""Compact stat display card widget."""

from __future__ import annotations
from typing import Optional

from PySide6 import QtWidgets


class StatCard(QtWidgets.QFrame):
    """Compact stat display card with label, value, and unit.

    Used for the current readings in the data bar.
    """

    PLACEHOLDER = "--"

    def __init__(self, label: str, unit: str = "", color: str = "#e5e7eb", parent=None):
        """Initialize stat card.

        Args:
            label: Label text (e.g., "TEMP")
            unit: Unit text (e.g., "°C")
            color: Color for the value text (hex string)
            parent: Parent widget
        """
        super().__init__(parent)
        self.setFrameShape(QtWidgets.QFrame.StyledPanel)
        self.color = color
        self._setup_ui(label, unit)

    def _setup_ui(self, label: str, unit: str) -> None:
        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(12, 8, 12, 8)
        layout.setSpacing(2)

        layout.addWidget(QtWidgets.QLabel(label))

        value_layout = QtWidgets.QHBoxLayout()
        value_layout.setSpacing(4)

        self.value_label = QtWidgets.QLabel(self.PLACEHOLDER)
        self.value_label.setStyleSheet(f"color: {self.color}; font-size: 18px;")
        value_layout.addWidget(self.value_label)

        value_layout.addWidget(QtWidgets.QLabel(unit))
        value_layout.addStretch()

        layout.addLayout(value_layout)

    def set_value(self, value: Optional[float], decimals: int = 2) -> None:
        """Update the displayed value; None shows the placeholder."""
        if value is None:
            self.value_label.setText(self.PLACEHOLDER)
        else:
            self.value_label.setText(f"{value:.{decimals}f}")

    def set_text(self, text: str) -> None:
        self.value_label.setText(text or self.PLACEHOLDER)

    def set_color(self, color: str) -> None:
        self.color = color
        self.value_label.setStyleSheet(f"color: {self.color}; font-size: 18px;")
