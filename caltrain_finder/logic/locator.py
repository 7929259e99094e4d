"""Nearest-station recommendations for a user coordinate."""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Callable, Sequence

from caltrain_finder.data.stations import STATION_COORDINATES, StationCoordinate
from caltrain_finder.observable import Observable

EARTH_RADIUS_KM = 6371.0
WALKING_SPEED_KMH = 5.0


@dataclass(frozen=True)
class NearestStationResult:
    """Closest station on one side of the user."""

    name: str
    distance_km: float
    walking_minutes: int


@dataclass(frozen=True)
class NearestStations:
    north: NearestStationResult | None
    south: NearestStationResult | None


NO_RECOMMENDATION = NearestStations(north=None, south=None)


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points in kilometers."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def walking_minutes(distance_km: float, speed_kmh: float = WALKING_SPEED_KMH) -> int:
    """Minutes to walk ``distance_km``, rounded up."""
    return math.ceil((distance_km / speed_kmh) * 60)


def parse_coordinate(value: str | float | None) -> float | None:
    """Parse free-form coordinate input; None when it is empty or not a finite number."""
    if value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    return number if math.isfinite(number) else None


def locate(
    user_lat: str | float | None,
    user_lon: str | float | None,
    stations: Sequence[StationCoordinate] = STATION_COORDINATES,
) -> NearestStations:
    """Find the closest station north and the closest station south of the user.

    North and south are split on latitude alone: a station whose latitude is
    greater than the user's goes to the north side, every other station to the
    south side. This is an approximation, not a bearing calculation; on a line
    that runs north-west to south-east it can label a station "north" that is
    mostly west of the user.
    """
    lat = parse_coordinate(user_lat)
    lon = parse_coordinate(user_lon)
    if lat is None or lon is None:
        return NO_RECOMMENDATION

    closest_north: tuple[StationCoordinate, float] | None = None
    closest_south: tuple[StationCoordinate, float] | None = None
    for station in stations:
        distance = haversine_km(lat, lon, station.latitude, station.longitude)
        if station.latitude > lat:
            if closest_north is None or distance < closest_north[1]:
                closest_north = (station, distance)
        elif closest_south is None or distance < closest_south[1]:
            closest_south = (station, distance)

    return NearestStations(north=_result(closest_north), south=_result(closest_south))


def _result(match: tuple[StationCoordinate, float] | None) -> NearestStationResult | None:
    if match is None:
        return None
    station, distance = match
    return NearestStationResult(
        name=station.name,
        distance_km=distance,
        walking_minutes=walking_minutes(distance),
    )


class StationLocator:
    """Recomputes the recommendation on every coordinate change and publishes it."""

    def __init__(self, stations: Sequence[StationCoordinate] = STATION_COORDINATES) -> None:
        self._stations = tuple(stations)
        self._latest: Observable[NearestStations] = Observable(NO_RECOMMENDATION)

    def update(self, lat_text: str | float | None, lon_text: str | float | None) -> NearestStations:
        result = locate(lat_text, lon_text, self._stations)
        self._latest.set(result)
        return result

    def get_latest(self) -> NearestStations:
        latest = self._latest.get()
        return latest if latest is not None else NO_RECOMMENDATION

    def subscribe(self, callback: Callable[[NearestStations], None]) -> Callable[[], None]:
        return self._latest.subscribe(callback)


__all__ = [
    "EARTH_RADIUS_KM",
    "NO_RECOMMENDATION",
    "NearestStationResult",
    "NearestStations",
    "StationLocator",
    "WALKING_SPEED_KMH",
    "haversine_km",
    "locate",
    "parse_coordinate",
    "walking_minutes",
]
