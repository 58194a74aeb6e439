"""Skogsnet dashboard version information."""

__version__ = "0.4.0"
__version_info__ = tuple(int(x) for x in __version__.split("."))

APP_NAME = "Skogsnet"
