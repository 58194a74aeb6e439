"""Test helpers: builders and fakes for the polling pipeline."""

import itertools
import time
from datetime import datetime, timezone

from PySide6 import QtCore

from skogsnet.core import Measurement
from skogsnet.net.dispatcher import Dispatcher, run_job
from skogsnet.net.scheduler import Scheduler


def utc_ms(year, month, day, hour=0, minute=0, second=0):
    """Epoch milliseconds for a UTC wall-clock time."""
    moment = datetime(year, month, day, hour, minute, second, tzinfo=timezone.utc)
    return int(moment.timestamp() * 1000)


def make_measurement(timestamp=0, temp=20.0, humidity=40.0, weather_temp=5.0, **kwargs):
    return Measurement(
        timestamp=timestamp,
        avg_temperature=temp,
        avg_humidity=humidity,
        avg_weather_temp=weather_temp,
        **kwargs,
    )


def api_item(timestamp=0, temp=20.0, humidity=40.0, weather_temp=5.0, **overrides):
    """A measurement object as the service encodes it."""
    item = {
        "AggregatedTimestamp": timestamp,
        "AvgTemperature": temp,
        "AvgHumidity": humidity,
        "City": "Umeå",
        "AvgWeatherTemp": weather_temp,
        "AvgWeatherHumidity": 80.0,
        "AvgWindSpeed": 3.5,
        "AvgWindDeg": 180.0,
        "AvgClouds": 75.0,
        "AvgWeatherCode": 803.0,
        "Description": "broken clouds",
    }
    item.update(overrides)
    return item


class ManualScheduler(Scheduler):
    """Scheduler whose timers only fire when a test says so."""

    def __init__(self):
        self._ids = itertools.count(1)
        self.repeating = {}
        self.once = {}

    def schedule(self, task, interval_ms):
        handle = next(self._ids)
        self.repeating[handle] = (task, interval_ms)
        return handle

    def schedule_once(self, task, delay_ms):
        handle = next(self._ids)
        self.once[handle] = (task, delay_ms)
        return handle

    def cancel(self, handle):
        self.repeating.pop(handle, None)
        self.once.pop(handle, None)

    def tick(self):
        for task, _ in list(self.repeating.values()):
            task()

    def fire_once(self):
        pending = list(self.once.items())
        self.once.clear()
        for _, (task, _) in pending:
            task()


class DeferredDispatcher(Dispatcher):
    """Runs jobs on submit but holds the outcomes until delivered.

    This models a response that is already on the wire when its request
    gets superseded.
    """

    def __init__(self):
        self.queue = []

    def submit(self, job, callback):
        self.queue.append((callback, run_job(job)))

    def deliver(self, index=0):
        callback, outcome = self.queue.pop(index)
        callback(outcome)

    def deliver_all(self):
        while self.queue:
            self.deliver(0)


class FakeClient:
    """Stands in for MeasurementClient."""

    def __init__(self, latest=None, series=None):
        self.latest = latest
        self.series = series or {}
        self.errors = {}
        self.calls = []

    def fetch_latest(self, token=None):
        self.calls.append(("latest", None))
        token.raise_if_cancelled()
        if "latest" in self.errors:
            raise self.errors["latest"]
        return self.latest

    def fetch_series(self, time_range=None, token=None):
        self.calls.append(("series", time_range))
        token.raise_if_cancelled()
        if "series" in self.errors:
            raise self.errors["series"]
        return list(self.series.get(time_range, []))


def wait_until(predicate, timeout_ms=2000):
    """Process Qt events until `predicate()` holds or the timeout expires."""
    deadline = time.monotonic() + timeout_ms / 1000
    while not predicate():
        if time.monotonic() > deadline:
            return False
        QtCore.QCoreApplication.processEvents(QtCore.QEventLoop.ProcessEventsFlag.AllEvents, 20)
        time.sleep(0.005)
    return True
