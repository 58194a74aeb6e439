"""HTTP client for the measurement service."""

from __future__ import annotations

import logging
from typing import Any, List, Optional

import requests
from requests import Response

from ..core import LatestSnapshot, Measurement, TimeRange
from .cancellation import CancellationToken
from .config import ServiceConfig
from .errors import HttpStatusError, ShapeError, TransportError
from .parser import MeasurementParser

logger = logging.getLogger(__name__)


class MeasurementClient:
    """Blocking client for the latest and range endpoints.

    Every call takes an optional CancellationToken. The token is checked
    before the request is sent and again once the response is in, so a
    superseded call ends with CancelledError instead of returning data.
    """

    def __init__(
        self,
        base_url: str = ServiceConfig.DEFAULT_BASE_URL,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = ServiceConfig.DEFAULT_TIMEOUT,
    ):
        self.base_url = base_url.rstrip('/')
        self.session = session or requests.Session()
        self.timeout = timeout
        self._parser = MeasurementParser()

    def fetch_latest(self, token: Optional[CancellationToken] = None) -> Optional[LatestSnapshot]:
        """Get the latest snapshot, or None if the service has no data."""
        payload = self._get_json(ServiceConfig.LATEST_PATH, token=token)
        return self._parser.parse_latest(payload)

    def fetch_series(
        self,
        time_range: Optional[TimeRange] = None,
        token: Optional[CancellationToken] = None,
    ) -> List[Measurement]:
        """Get the aggregated series for a range (None = server default)."""
        params = {ServiceConfig.RANGE_PARAM: time_range.value if time_range else ""}
        payload = self._get_json(ServiceConfig.SERIES_PATH, params=params, token=token)
        return self._parser.parse_series(payload)

    def close(self) -> None:
        self.session.close()

    # -------------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------------

    def _get_json(
        self,
        path: str,
        params: Optional[dict] = None,
        token: Optional[CancellationToken] = None,
    ) -> Any:
        if token is not None:
            token.raise_if_cancelled()

        url = self.base_url + path
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.Timeout as exc:
            logger.error(f"Request to {url} timed out")
            raise TransportError(f"Request to {url} timed out") from exc
        except requests.RequestException as exc:
            logger.error(f"Request to {url} failed: {exc}")
            raise TransportError(f"Cannot reach measurement service at {self.base_url}") from exc

        if token is not None:
            token.raise_if_cancelled()

        return self._decode(self._check_status(response))

    def _check_status(self, response: Response) -> Response:
        if not 200 <= response.status_code < 300:
            logger.error(f"Service returned {response.status_code} for {response.url}")
            raise HttpStatusError(response.status_code, response.reason)
        return response

    def _decode(self, response: Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            logger.error(f"Invalid JSON from {response.url}")
            raise ShapeError("Invalid data format: response is not JSON") from exc
