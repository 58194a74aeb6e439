"""Parser for measurement service JSON payloads."""

from __future__ import annotations
import logging
import math
from typing import Any, Dict, List, Optional

from ..core import LatestSnapshot, Measurement
from .config import ServiceConfig
from .errors import ShapeError

logger = logging.getLogger(__name__)


class MeasurementParser:
    """Validates service payloads and turns them into measurements."""

    REQUIRED = ('timestamp', 'avg_temperature', 'avg_humidity')
    TEXT_FIELDS = ('description', 'city')

    @staticmethod
    def parse_measurement(item: Any) -> Measurement:
        """Parse one measurement object.

        Accepts the service's field names ('AggregatedTimestamp',
        'AvgTemperature', ...) and the older lower-case names ('timestamp',
        'temperature', ...).

        Raises:
            ShapeError: If the item is not an object, lacks a required field
                or holds a non-numeric value in a numeric field.
        """
        if not isinstance(item, dict):
            raise ShapeError(f"Invalid data format: expected object, got {type(item).__name__}")

        if 'AggregatedTimestamp' in item:
            field_map = ServiceConfig.FIELD_MAP
        elif 'timestamp' in item:
            field_map = ServiceConfig.LEGACY_FIELD_MAP
        else:
            raise ShapeError("Invalid data format: measurement has no timestamp")

        values: Dict[str, Any] = {}
        for key, attr in field_map.items():
            if key not in item or item[key] is None:
                if attr in MeasurementParser.REQUIRED:
                    raise ShapeError(f"Invalid data format: missing {key}")
                continue
            raw = item[key]
            if attr in MeasurementParser.TEXT_FIELDS:
                values[attr] = str(raw)
            elif attr == 'timestamp':
                values[attr] = int(MeasurementParser._number(key, raw))
            elif attr == 'weather_code':
                # Aggregated rows carry the average code as a float
                values[attr] = int(round(MeasurementParser._number(key, raw)))
            else:
                values[attr] = MeasurementParser._number(key, raw)

        return Measurement(**values)

    @staticmethod
    def parse_series(payload: Any) -> List[Measurement]:
        """Parse the range endpoint payload.

        Returns:
            Measurements in ascending timestamp order without duplicates.

        Raises:
            ShapeError: If the payload is not an array of measurements.
        """
        if not isinstance(payload, list):
            raise ShapeError(
                f"Invalid data format: expected array, got {type(payload).__name__}"
            )

        series = [MeasurementParser.parse_measurement(item) for item in payload]
        return MeasurementParser._normalize(series)

    @staticmethod
    def parse_latest(payload: Any) -> Optional[LatestSnapshot]:
        """Parse the latest endpoint payload.

        Two shapes are accepted:
            - {'latest': Measurement | null, 'trajectory': float | null}
            - [Measurement]  (older servers, no trajectory)

        Returns:
            The snapshot, or None when the service has no latest reading.

        Raises:
            ShapeError: For any other shape.
        """
        if isinstance(payload, dict):
            if 'latest' not in payload:
                raise ShapeError("Invalid data format: missing 'latest'")
            latest = payload['latest']
            if latest is None:
                return None
            trajectory = payload.get('trajectory')
            if trajectory is not None:
                trajectory = MeasurementParser._number('trajectory', trajectory)
            return LatestSnapshot(MeasurementParser.parse_measurement(latest), trajectory)

        if isinstance(payload, list):
            if len(payload) != 1:
                raise ShapeError(
                    f"Invalid data format: expected one measurement, got {len(payload)}"
                )
            return LatestSnapshot(MeasurementParser.parse_measurement(payload[0]))

        raise ShapeError(
            f"Invalid data format: expected object, got {type(payload).__name__}"
        )

    @staticmethod
    def _number(key: str, raw: Any) -> float:
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            raise ShapeError(f"Invalid data format: {key} is not a number")
        try:
            value = float(raw)
        except OverflowError:
            value = math.inf
        if not math.isfinite(value):
            raise ShapeError(f"Invalid data format: {key} is not finite")
        return value

    @staticmethod
    def _normalize(series: List[Measurement]) -> List[Measurement]:
        """Sort by timestamp and drop duplicates, keeping the last one."""
        in_order = all(
            a.timestamp < b.timestamp for a, b in zip(series, series[1:])
        )
        if in_order:
            return series

        by_timestamp = {m.timestamp: m for m in series}
        result = [by_timestamp[ts] for ts in sorted(by_timestamp)]
        logger.warning(
            f"Series was not strictly ascending, reordered "
            f"({len(series)} points -> {len(result)})"
        )
        return result
