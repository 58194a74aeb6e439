"""Tests for application settings."""

from skogsnet.core.settings import AppSettings, SERVER_URL_ENV, _coerce


def test_defaults(monkeypatch):
    monkeypatch.delenv(SERVER_URL_ENV, raising=False)
    s = AppSettings()
    assert s.server_url == "http://localhost:8080"
    assert s.poll_interval_ms == 10000
    assert s.retry_delay_ms == 5000
    assert s.live_update is True


def test_server_url_from_environment(monkeypatch):
    monkeypatch.setenv(SERVER_URL_ENV, "http://pi.local:8080")
    assert AppSettings().server_url == "http://pi.local:8080"


def test_coerce_stored_strings():
    assert _coerce("false", True) is False
    assert _coerce("true", False) is True
    assert _coerce("2500", 10000) == 2500
    assert _coerce("12.5", 30.0) == 12.5
    assert _coerce("week", "today") == "week"
