"""UI package for the Skogsnet dashboard."""

from .main_window import MainWindow

__all__ = [
    "MainWindow",
]
