"""Main window for the Skogsnet dashboard."""

from __future__ import annotations

import logging
from typing import Optional

from PySide6 import QtCore, QtWidgets

from ..core import AppSettings, ChartProjector, MeasurementStore, TimeRange
from ..net import MeasurementClient, PollingController, QtDispatcher, QtScheduler
from ..version import __version__, APP_NAME
from .widgets import ChartWidget, DataBar

logger = logging.getLogger(__name__)


# =============================================================================
# Main Window
# =============================================================================

class MainWindow(QtWidgets.QMainWindow):
    """Dashboard window: range selector, live toggle, data bar and chart."""

    STOP_TIMEOUT_MS = 3000

    def __init__(self, settings: Optional[AppSettings] = None):
        super().__init__()
        self.settings = settings or AppSettings.load()
        self._init_state()
        self._setup_ui()
        self._connect_signals()
        self._start_polling()

    def _init_state(self) -> None:
        s = self.settings
        self.store = MeasurementStore()
        self.projector = ChartProjector(smoothing_window=s.smoothing_window)
        self.client = MeasurementClient(s.server_url, timeout=s.request_timeout)
        self.scheduler = QtScheduler(self)
        self.dispatcher = QtDispatcher(parent=self)
        self.controller = PollingController(
            self.client,
            self.store,
            self.scheduler,
            self.dispatcher,
            interval_ms=s.poll_interval_ms,
            retry_delay_ms=s.retry_delay_ms,
            parent=self,
        )

    def _setup_ui(self) -> None:
        self.setWindowTitle(f"{APP_NAME} v{__version__}")
        self.setMinimumSize(1000, 600)
        self.resize(1400, 850)

        central = QtWidgets.QWidget()
        self.setCentralWidget(central)

        main_layout = QtWidgets.QVBoxLayout(central)
        main_layout.setContentsMargins(16, 16, 16, 16)
        main_layout.setSpacing(12)

        self._create_top_bar(main_layout)

        self.data_bar = DataBar()
        main_layout.addWidget(self.data_bar)

        self.chart = ChartWidget()
        main_layout.addWidget(self.chart, stretch=1)

    def _create_top_bar(self, parent: QtWidgets.QVBoxLayout) -> None:
        bar = QtWidgets.QHBoxLayout()

        title = QtWidgets.QLabel(APP_NAME)
        title.setStyleSheet("font-size: 20px; font-weight: bold;")
        bar.addWidget(title)
        bar.addSpacing(24)

        bar.addWidget(QtWidgets.QLabel("Show:"))
        self.range_combo = QtWidgets.QComboBox()
        for time_range in TimeRange:
            self.range_combo.addItem(time_range.label, time_range)
        index = self.range_combo.findData(self._initial_range())
        self.range_combo.setCurrentIndex(max(index, 0))
        bar.addWidget(self.range_combo)
        bar.addSpacing(24)

        self.live_check = QtWidgets.QCheckBox("Live update")
        self.live_check.setChecked(self.settings.live_update)
        bar.addWidget(self.live_check)
        bar.addSpacing(24)

        self.error_label = QtWidgets.QLabel()
        self.error_label.setStyleSheet("color: #dc2626;")
        self.error_label.setVisible(False)
        bar.addWidget(self.error_label)

        bar.addStretch()
        parent.addLayout(bar)

    def _initial_range(self) -> TimeRange:
        try:
            return TimeRange.parse(self.settings.default_range) or TimeRange.TODAY
        except ValueError:
            logger.warning(f"Ignoring unknown stored range {self.settings.default_range!r}")
            return TimeRange.TODAY

    def _connect_signals(self) -> None:
        self.range_combo.currentIndexChanged.connect(self._on_parameters_changed)
        self.live_check.toggled.connect(self._on_parameters_changed)

        self.controller.latest_changed.connect(self.data_bar.set_snapshot)
        self.controller.series_changed.connect(self._on_series_changed)
        self.controller.error_changed.connect(self._on_error_changed)

    # -------------------------------------------------------------------------
    # Polling
    # -------------------------------------------------------------------------

    def _start_polling(self) -> None:
        self.controller.start(self._selected_range(), self.live_check.isChecked())

    def _selected_range(self) -> TimeRange:
        return self.range_combo.currentData()

    def _on_parameters_changed(self, *_args) -> None:
        self.controller.update_parameters(self._selected_range(), self.live_check.isChecked())

    def _on_series_changed(self, series) -> None:
        bundle = self.projector.project(series, time_range=self.store.series_range)
        self.chart.show_bundle(bundle)

    def _on_error_changed(self, message: str) -> None:
        self.error_label.setText(message)
        self.error_label.setVisible(bool(message))

    # -------------------------------------------------------------------------
    # Shutdown
    # -------------------------------------------------------------------------

    def closeEvent(self, event) -> None:
        self.controller.stop()
        self.scheduler.cancel_all()
        self.dispatcher.wait_for_done(self.STOP_TIMEOUT_MS)
        self.client.close()

        self.settings.default_range = self._selected_range().value
        self.settings.live_update = self.live_check.isChecked()
        self.settings.save()
        super().closeEvent(event)
