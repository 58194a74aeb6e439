"""Measurement service access and polling for the Skogsnet dashboard."""

from .config import ServiceConfig
from .errors import (
    FetchError,
    CancelledError,
    TransportError,
    HttpStatusError,
    ShapeError,
)
from .cancellation import CancellationToken
from .parser import MeasurementParser
from .client import MeasurementClient
from .scheduler import Scheduler, QtScheduler
from .dispatcher import Dispatcher, ImmediateDispatcher, QtDispatcher, FetchOutcome
from .controller import PollingController

__all__ = [
    "ServiceConfig",
    "FetchError",
    "CancelledError",
    "TransportError",
    "HttpStatusError",
    "ShapeError",
    "CancellationToken",
    "MeasurementParser",
    "MeasurementClient",
    "Scheduler",
    "QtScheduler",
    "Dispatcher",
    "ImmediateDispatcher",
    "QtDispatcher",
    "FetchOutcome",
    "PollingController",
]
