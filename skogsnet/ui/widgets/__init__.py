"""Reusable UI widgets for the Skogsnet dashboard.

- StatCard: Value display card with color theming
- DataBar: Row of cards for the latest reading
- ChartWidget: Multi-axis chart that renders a PlotBundle
"""

from .stat_card import StatCard
from .data_bar import DataBar
from .chart_widget import ChartWidget

__all__ = ['StatCard', 'DataBar', 'ChartWidget']
