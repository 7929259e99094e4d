"""Merged, time-sorted arrival lists for a station across both directions."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime, timezone
import logging
from typing import Any

from caltrain_finder.data.stations import STATION_DIRECTORY, StationDirectory
from caltrain_finder.data.transit_client import TransitClient, TransitClientError

logger = logging.getLogger(__name__)

MISSING_TRAIN_NUMBER = "N/A"


class UnknownStationError(LookupError):
    """Raised when a station name has no entry in the station directory."""

    def __init__(self, station_name: str) -> None:
        super().__init__(f'Station "{station_name}" not found.')
        self.station_name = station_name


class FetchFailedError(RuntimeError):
    """Raised when either directional request of a fetch cycle fails."""


class ArrivalParseError(ValueError):
    """Raised when a MonitoredStopVisit entry lacks required fields."""


@dataclass(frozen=True)
class ArrivalRecord:
    """One real-time arrival prediction."""

    destination_name: str
    line_name: str
    direction_label: str
    train_identifier: str | None
    expected_arrival_time: datetime

    @property
    def train_number(self) -> str:
        return self.train_identifier or MISSING_TRAIN_NUMBER


def parse_time(value: str) -> datetime:
    """Parse an ISO 8601 timestamp into an aware datetime; naive values are UTC."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed


def _text(value: Any) -> str:
    # Some SIRI producers wrap strings as a list of one.
    if isinstance(value, list):
        value = value[0] if value else ""
    return "" if value is None else str(value)


def parse_stop_visit(visit: dict[str, Any]) -> ArrivalRecord:
    """Build an ArrivalRecord from a MonitoredStopVisit entry."""
    if not isinstance(visit, dict):
        raise ArrivalParseError("MonitoredStopVisit entry is not an object")
    journey = visit.get("MonitoredVehicleJourney")
    if not isinstance(journey, dict):
        raise ArrivalParseError("MonitoredStopVisit has no MonitoredVehicleJourney")

    call = journey.get("MonitoredCall") or {}
    raw_time = call.get("ExpectedArrivalTime") if isinstance(call, dict) else None
    if not raw_time:
        raise ArrivalParseError("MonitoredCall has no ExpectedArrivalTime")
    try:
        expected = parse_time(str(raw_time))
    except ValueError as exc:
        raise ArrivalParseError(f"Invalid ExpectedArrivalTime: {raw_time!r}") from exc

    framed = journey.get("FramedVehicleJourneyRef") or {}
    train_id = framed.get("DatedVehicleJourneyRef") if isinstance(framed, dict) else None

    return ArrivalRecord(
        destination_name=_text(journey.get("DestinationName")),
        line_name=_text(journey.get("LineRef")),
        direction_label=_text(journey.get("DirectionRef")),
        train_identifier=str(train_id) if train_id else None,
        expected_arrival_time=expected,
    )


def _fetch_direction(client: TransitClient, stop_code: str) -> list[ArrivalRecord]:
    visits = client.get_stop_visits(stop_code)
    return [parse_stop_visit(visit) for visit in visits]


def fetch_arrivals(
    station_name: str,
    client: TransitClient,
    directory: StationDirectory = STATION_DIRECTORY,
) -> list[ArrivalRecord]:
    """Fetch both directions for a station and return arrivals sorted by time.

    Raises UnknownStationError before any request when the station is not in
    the directory, and FetchFailedError when either direction fails; a partial
    list is never returned.
    """
    stops = directory.get(station_name)
    if stops is None:
        raise UnknownStationError(station_name)

    logger.debug(
        "Fetching NB (%s) and SB (%s) for %s", stops.northbound, stops.southbound, station_name
    )
    with ThreadPoolExecutor(max_workers=2) as pool:
        futures = [
            pool.submit(_fetch_direction, client, stop_code)
            for stop_code in (stops.northbound, stops.southbound)
        ]
        try:
            directional = [future.result() for future in futures]
        except (TransitClientError, ArrivalParseError) as exc:
            raise FetchFailedError(f"Failed to load arrivals for {station_name}: {exc}") from exc

    merged = [record for records in directional for record in records]
    merged.sort(key=lambda record: record.expected_arrival_time)
    return merged


__all__ = [
    "ArrivalParseError",
    "ArrivalRecord",
    "FetchFailedError",
    "UnknownStationError",
    "fetch_arrivals",
    "parse_stop_visit",
    "parse_time",
]
