"""Measurement service configuration for the Skogsnet dashboard."""

from __future__ import annotations


class ServiceConfig:
    """Endpoints and transport defaults of the measurement service."""
    DEFAULT_BASE_URL = "http://localhost:8080"
    DEFAULT_TIMEOUT = 30.0  # Seconds, enforced by the HTTP transport

    LATEST_PATH = "/api/measurements/latest"
    SERIES_PATH = "/api/measurements"
    RANGE_PARAM = "range"

    # Service field name -> Measurement attribute
    FIELD_MAP = {
        'AggregatedTimestamp': 'timestamp',
        'AvgTemperature': 'avg_temperature',
        'AvgHumidity': 'avg_humidity',
        'AvgWeatherTemp': 'avg_weather_temp',
        'AvgWeatherHumidity': 'avg_weather_humidity',
        'AvgWindSpeed': 'avg_wind_speed',
        'AvgWindDeg': 'avg_wind_deg',
        'AvgClouds': 'avg_clouds',
        'AvgWeatherCode': 'weather_code',
        'Description': 'description',
        'City': 'city',
    }

    # Field names written by the older static dashboard API
    LEGACY_FIELD_MAP = {
        'timestamp': 'timestamp',
        'temperature': 'avg_temperature',
        'humidity': 'avg_humidity',
        'weather_temp': 'avg_weather_temp',
    }
