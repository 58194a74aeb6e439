"""Multi-axis telemetry chart rendering a PlotBundle."""

from __future__ import annotations
from typing import Dict, List

import pyqtgraph as pg
from PySide6.QtCore import Qt

from ...core import AxisId, PlotBundle


class ChartWidget(pg.PlotWidget):
    """Line chart with a temperature axis (left) and humidity and wind axes
    (right), all sharing the time axis.

    The widget keeps no data of its own: every `show_bundle` call replaces
    what is drawn.
    """

    LINE_WIDTH = 2

    def __init__(self, background: str = "#121212", parent=None):
        super().__init__(parent, background=background)
        pg.setConfigOptions(antialias=True)

        self.plot_item = self.getPlotItem()
        self.plot_item.showGrid(x=True, y=True, alpha=0.2)
        self.plot_item.setMouseEnabled(x=True, y=False)
        self.legend = self.plot_item.addLegend(offset=(10, 10))

        self._views: Dict[AxisId, pg.ViewBox] = {}
        self._axes: Dict[AxisId, pg.AxisItem] = {}
        self._curves: List[pg.PlotDataItem] = []
        self._setup_axes()

        self._empty_label = pg.TextItem("No data to display", color="#9ca3af", anchor=(0.5, 0.5))
        self.plot_item.addItem(self._empty_label, ignoreBounds=True)

    def _setup_axes(self) -> None:
        """Create one view box per y axis, linked on x to the main view."""
        main_view = self.plot_item.getViewBox()
        self._views[AxisId.TEMPERATURE] = main_view
        self._axes[AxisId.TEMPERATURE] = self.plot_item.getAxis('left')

        # Humidity uses the built-in right axis
        self.plot_item.showAxis('right')
        humidity_view = pg.ViewBox()
        self.plot_item.scene().addItem(humidity_view)
        self.plot_item.getAxis('right').linkToView(humidity_view)
        humidity_view.setXLink(self.plot_item)
        self._views[AxisId.HUMIDITY] = humidity_view
        self._axes[AxisId.HUMIDITY] = self.plot_item.getAxis('right')

        # Wind gets an extra axis column to the right
        wind_axis = pg.AxisItem('right')
        self.plot_item.layout.addItem(wind_axis, 2, 3)
        wind_view = pg.ViewBox()
        self.plot_item.scene().addItem(wind_view)
        wind_axis.linkToView(wind_view)
        wind_view.setXLink(self.plot_item)
        self._views[AxisId.WIND] = wind_view
        self._axes[AxisId.WIND] = wind_axis

        main_view.sigResized.connect(self._sync_views)
        self._sync_views()

    def _sync_views(self) -> None:
        """Keep the secondary view boxes on top of the main one."""
        main_view = self.plot_item.getViewBox()
        for view in self._views.values():
            if view is main_view:
                continue
            view.setGeometry(main_view.sceneBoundingRect())
            view.linkedViewChanged(main_view, view.XAxis)

    def show_bundle(self, bundle: PlotBundle) -> None:
        """Draw a projected bundle, replacing the previous one."""
        self.clear_data()
        self._empty_label.setVisible(bundle.is_empty)
        if bundle.is_empty:
            return

        xs = bundle.x_seconds
        for axis in bundle.axes:
            item = self._axes[axis.axis_id]
            item.setLabel(axis.title, color=axis.color)
            item.setTextPen(axis.color)

        for series in bundle.series:
            style = Qt.DashLine if series.dashed else Qt.SolidLine
            curve = pg.PlotDataItem(
                xs, series.array,
                pen=pg.mkPen(series.color, width=self.LINE_WIDTH, style=style),
                connect='finite',  # NaN gaps break the line
                name=series.name,
            )
            self._views[series.axis_id].addItem(curve)
            self.legend.addItem(curve, series.name)
            self._curves.append(curve)

        ticks = [(xs[tick.index], tick.label) for tick in bundle.ticks]
        self.plot_item.getAxis('bottom').setTicks([ticks])

        for view in self._views.values():
            view.enableAutoRange(axis=pg.ViewBox.YAxis)
        self.plot_item.setXRange(xs[0], xs[-1], padding=0.02)

    def clear_data(self) -> None:
        """Remove all curves."""
        for curve in self._curves:
            self.legend.removeItem(curve)
            view = curve.getViewBox()
            if view is not None:
                view.removeItem(curve)
        self._curves = []
        self.plot_item.getAxis('bottom').setTicks(None)
        self._empty_label.setVisible(True)
