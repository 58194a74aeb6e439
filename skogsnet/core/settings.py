"""Application settings with persistence."""

from __future__ import annotations
import logging
import os
from dataclasses import dataclass, field, fields
from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)

SERVER_URL_ENV = "SKOGSNET_SERVER_URL"


def _default_server_url() -> str:
    return os.getenv(SERVER_URL_ENV, "http://localhost:8080")


@dataclass
class AppSettings:
    """Application settings."""
    # Service
    server_url: str = field(default_factory=_default_server_url)
    request_timeout: float = 30.0  # Seconds, passed to the HTTP transport

    # Polling
    poll_interval_ms: int = 10000
    retry_delay_ms: int = 5000  # Faster retry while the first load keeps failing
    live_update: bool = True
    default_range: str = "today"

    # Chart
    smoothing_window: int = 5

    def save(self) -> None:
        """Save settings to persistent storage.

        Uses QSettings which automatically handles:
        - Linux: ~/.config/Skogsnet/Skogsnet.conf
        - Windows: Registry HKEY_CURRENT_USER\\Software\\Skogsnet
        - macOS: ~/Library/Preferences/com.Skogsnet.plist
        """
        try:
            settings = QSettings("Skogsnet", "Skogsnet")
            for f in fields(self):
                settings.setValue(f.name, getattr(self, f.name))
            settings.sync()
        except Exception as e:
            # Settings will use defaults next time
            logger.warning(f"Could not save settings: {e}")

    @classmethod
    def load(cls) -> 'AppSettings':
        """Load settings from persistent storage.

        Returns default settings if nothing is stored or can't be read.
        An explicit SKOGSNET_SERVER_URL always wins over the stored URL.
        """
        instance = cls()  # Start with defaults

        try:
            settings = QSettings("Skogsnet", "Skogsnet")

            for f in fields(instance):
                if settings.contains(f.name):
                    stored = settings.value(f.name)
                    default_val = getattr(instance, f.name)
                    setattr(instance, f.name, _coerce(stored, default_val))
        except Exception as e:
            logger.warning(f"Could not load settings, using defaults: {e}")
            instance = cls()

        if os.getenv(SERVER_URL_ENV):
            instance.server_url = os.environ[SERVER_URL_ENV]

        return instance


def _coerce(stored, default_val):
    """Convert a QSettings value to the type of the default."""
    if isinstance(default_val, bool):
        # QSettings stores bools as strings on some platforms
        if isinstance(stored, bool):
            return stored
        if isinstance(stored, str):
            return stored.lower() in ('true', '1', 'yes')
        return bool(stored)
    if isinstance(default_val, int):
        return int(stored)
    if isinstance(default_val, float):
        return float(stored)
    return str(stored)
