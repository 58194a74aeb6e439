"""Tests for service payload parsing."""

import pytest

from skogsnet.net import MeasurementParser, ShapeError

from helpers import api_item


def test_parse_service_fields():
    m = MeasurementParser.parse_measurement(api_item(timestamp=1700000000000, temp=21.25))
    assert m.timestamp == 1700000000000
    assert m.avg_temperature == 21.25
    assert m.city == "Umeå"
    assert m.description == "broken clouds"
    assert m.weather_code == 803
    assert isinstance(m.weather_code, int)


def test_averaged_weather_code_is_rounded():
    m = MeasurementParser.parse_measurement(api_item(AvgWeatherCode=802.6))
    assert m.weather_code == 803


def test_optional_fields_default():
    m = MeasurementParser.parse_measurement(
        {"AggregatedTimestamp": 5, "AvgTemperature": 20, "AvgHumidity": 40}
    )
    assert m.avg_weather_temp == 0
    assert not m.has_weather_data
    assert m.description == ""


def test_legacy_field_names():
    m = MeasurementParser.parse_measurement(
        {"timestamp": 10, "temperature": 19.5, "humidity": 33.0, "weather_temp": 0}
    )
    assert (m.timestamp, m.avg_temperature, m.avg_humidity) == (10, 19.5, 33.0)
    assert m.outside_temperature is None


@pytest.mark.parametrize("item", [
    "nope",
    {"AvgTemperature": 20, "AvgHumidity": 40},
    {"AggregatedTimestamp": 1, "AvgHumidity": 40},
    api_item(AvgTemperature="warm"),
    api_item(AvgHumidity=True),
])
def test_bad_measurement(item):
    with pytest.raises(ShapeError):
        MeasurementParser.parse_measurement(item)


def test_latest_object_shape():
    snap = MeasurementParser.parse_latest({"latest": api_item(temp=22.0), "trajectory": -0.35})
    assert snap.measurement.avg_temperature == 22.0
    assert snap.trajectory == -0.35


def test_latest_object_without_trajectory():
    snap = MeasurementParser.parse_latest({"latest": api_item(), "trajectory": None})
    assert snap.trajectory is None


def test_latest_null_means_no_data():
    assert MeasurementParser.parse_latest({"latest": None, "trajectory": None}) is None


def test_latest_legacy_array_shape():
    snap = MeasurementParser.parse_latest([api_item(temp=18.0)])
    assert snap.measurement.avg_temperature == 18.0
    assert snap.trajectory is None


@pytest.mark.parametrize("payload", [
    [],
    [api_item(), api_item()],
    {"trajectory": 1.0},
    "latest",
    42,
    None,
])
def test_latest_bad_shapes(payload):
    with pytest.raises(ShapeError):
        MeasurementParser.parse_latest(payload)


def test_series_keeps_order():
    series = MeasurementParser.parse_series([api_item(timestamp=t) for t in (1, 2, 3)])
    assert [m.timestamp for m in series] == [1, 2, 3]


def test_series_sorted_and_deduplicated():
    payload = [
        api_item(timestamp=3, temp=1.0),
        api_item(timestamp=1, temp=2.0),
        api_item(timestamp=3, temp=9.0),
    ]
    series = MeasurementParser.parse_series(payload)
    assert [m.timestamp for m in series] == [1, 3]
    assert series[-1].avg_temperature == 9.0


def test_empty_series():
    assert MeasurementParser.parse_series([]) == []


@pytest.mark.parametrize("payload", [{"latest": None}, None, "[]", [api_item(), 5]])
def test_series_bad_shapes(payload):
    with pytest.raises(ShapeError):
        MeasurementParser.parse_series(payload)


@pytest.mark.parametrize("field", ["AvgWeatherCode", "AvgTemperature", "AggregatedTimestamp"])
@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf"), 10 ** 400])
def test_non_finite_numbers_rejected(field, value):
    with pytest.raises(ShapeError):
        MeasurementParser.parse_measurement(api_item(**{field: value}))


def test_non_finite_trajectory_rejected():
    with pytest.raises(ShapeError):
        MeasurementParser.parse_latest({"latest": api_item(), "trajectory": float("nan")})
