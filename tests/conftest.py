"""Shared fixtures."""

import pytest
from PySide6 import QtCore

from skogsnet.core import LatestSnapshot

from helpers import make_measurement


@pytest.fixture(scope="session", autouse=True)
def qapp():
    """Core application for timers and queued signals (no display needed)."""
    app = QtCore.QCoreApplication.instance() or QtCore.QCoreApplication([])
    yield app


@pytest.fixture()
def snapshot():
    return LatestSnapshot(make_measurement(timestamp=1000, temp=21.5), trajectory=0.4)
