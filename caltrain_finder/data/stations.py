"""Static Caltrain station tables: stop codes per direction and station coordinates."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping

import yaml


@dataclass(frozen=True)
class StopPair:
    """511.org stop codes for one station, one per direction of travel."""

    northbound: str
    southbound: str


@dataclass(frozen=True)
class StationCoordinate:
    name: str
    latitude: float
    longitude: float


StationDirectory = Mapping[str, StopPair]


def _stop_pair(base: int) -> StopPair:
    return StopPair(northbound=str(base + 1), southbound=str(base + 2))


# Caltrain stop codes: northbound ends in 1, southbound in 2.
STATION_DIRECTORY: StationDirectory = MappingProxyType(
    {
        "San Francisco 4th & King": _stop_pair(70010),
        "22nd Street": _stop_pair(70020),
        "Bayshore": _stop_pair(70030),
        "South San Francisco": _stop_pair(70040),
        "San Bruno": _stop_pair(70050),
        "Millbrae": _stop_pair(70060),
        "Broadway": _stop_pair(70070),
        "Burlingame": _stop_pair(70080),
        "San Mateo": _stop_pair(70090),
        "Hayward Park": _stop_pair(70100),
        "Hillsdale": _stop_pair(70110),
        "Belmont": _stop_pair(70120),
        "San Carlos": _stop_pair(70130),
        "Redwood City": _stop_pair(70140),
        "Menlo Park": _stop_pair(70160),
        "Palo Alto": _stop_pair(70170),
        "California Avenue": _stop_pair(70190),
        "San Antonio": _stop_pair(70200),
        "Mountain View": _stop_pair(70210),
        "Sunnyvale": _stop_pair(70220),
        "Lawrence": _stop_pair(70230),
        "Santa Clara": _stop_pair(70240),
        "College Park": _stop_pair(70250),
        "San Jose Diridon": _stop_pair(70260),
        "Tamien": _stop_pair(70270),
        "Capitol": _stop_pair(70280),
        "Blossom Hill": _stop_pair(70290),
        "Morgan Hill": _stop_pair(70300),
        "San Martin": _stop_pair(70310),
        "Gilroy": _stop_pair(70320),
    }
)

STATION_COORDINATES: tuple[StationCoordinate, ...] = (
    StationCoordinate("San Francisco 4th & King", 37.7764, -122.3943),
    StationCoordinate("22nd Street", 37.7574, -122.3924),
    StationCoordinate("Bayshore", 37.7099, -122.4014),
    StationCoordinate("South San Francisco", 37.6558, -122.4050),
    StationCoordinate("San Bruno", 37.6300, -122.4116),
    StationCoordinate("Millbrae", 37.6000, -122.3867),
    StationCoordinate("Broadway", 37.5874, -122.3626),
    StationCoordinate("Burlingame", 37.5796, -122.3450),
    StationCoordinate("San Mateo", 37.5680, -122.3240),
    StationCoordinate("Hayward Park", 37.5525, -122.3091),
    StationCoordinate("Hillsdale", 37.5378, -122.2973),
    StationCoordinate("Belmont", 37.5207, -122.2759),
    StationCoordinate("San Carlos", 37.5075, -122.2600),
    StationCoordinate("Redwood City", 37.4855, -122.2320),
    StationCoordinate("Menlo Park", 37.4544, -122.1824),
    StationCoordinate("Palo Alto", 37.4434, -122.1650),
    StationCoordinate("California Avenue", 37.4292, -122.1419),
    StationCoordinate("San Antonio", 37.4072, -122.1074),
    StationCoordinate("Mountain View", 37.3943, -122.0766),
    StationCoordinate("Sunnyvale", 37.3784, -122.0308),
    StationCoordinate("Lawrence", 37.3705, -121.9972),
    StationCoordinate("Santa Clara", 37.3532, -121.9365),
    StationCoordinate("College Park", 37.3424, -121.9150),
    StationCoordinate("San Jose Diridon", 37.3297, -121.9027),
    StationCoordinate("Tamien", 37.3116, -121.8840),
    StationCoordinate("Capitol", 37.2843, -121.8419),
    StationCoordinate("Blossom Hill", 37.2527, -121.7975),
    StationCoordinate("Morgan Hill", 37.1295, -121.6504),
    StationCoordinate("San Martin", 37.0855, -121.6104),
    StationCoordinate("Gilroy", 37.0037, -121.5668),
)

COMMUTE_ONLY_NOTE = "Weekday commute hours only"
WEEKEND_ONLY_NOTE = "Weekend and limited service only"

SERVICE_NOTES: Mapping[str, str] = MappingProxyType(
    {
        "College Park": COMMUTE_ONLY_NOTE,
        "Capitol": COMMUTE_ONLY_NOTE,
        "Morgan Hill": COMMUTE_ONLY_NOTE,
        "San Martin": COMMUTE_ONLY_NOTE,
        "Gilroy": COMMUTE_ONLY_NOTE,
        "Broadway": WEEKEND_ONLY_NOTE,
    }
)


def station_names(directory: StationDirectory = STATION_DIRECTORY) -> list[str]:
    """Station names in line order, north to south."""
    return list(directory.keys())


def service_note(station_name: str) -> str | None:
    """Return the limited-service remark for a station, if it has one."""
    return SERVICE_NOTES.get(station_name)


def _parse_station_entry(entry: Any, index: int) -> tuple[str, StopPair, StationCoordinate]:
    if not isinstance(entry, dict):
        raise ValueError(f"Station entry {index} must be a mapping")
    try:
        name = str(entry["name"])
        pair = StopPair(northbound=str(entry["northbound"]), southbound=str(entry["southbound"]))
        coordinate = StationCoordinate(
            name=name,
            latitude=float(entry["latitude"]),
            longitude=float(entry["longitude"]),
        )
    except KeyError as exc:
        raise ValueError(f"Station entry {index} is missing '{exc.args[0]}'") from exc
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Station entry {index} has an invalid value: {exc}") from exc
    return name, pair, coordinate


def load_stations(path: str) -> tuple[StationDirectory, tuple[StationCoordinate, ...]]:
    """Load a station directory and coordinate list from a YAML file.

    The file holds a top-level ``stations`` list; each entry needs ``name``,
    ``northbound``, ``southbound``, ``latitude`` and ``longitude``. List order
    is kept for the coordinate sequence.
    """
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except FileNotFoundError as exc:
        raise ValueError(f"Stations file not found: {path}") from exc

    if not isinstance(data, dict) or not isinstance(data.get("stations"), list):
        raise ValueError("Stations file must contain a 'stations' list")

    directory: dict[str, StopPair] = {}
    coordinates: list[StationCoordinate] = []
    for index, entry in enumerate(data["stations"]):
        name, pair, coordinate = _parse_station_entry(entry, index)
        if name in directory:
            raise ValueError(f"Duplicate station name: {name}")
        directory[name] = pair
        coordinates.append(coordinate)

    return MappingProxyType(directory), tuple(coordinates)


__all__ = [
    "STATION_COORDINATES",
    "STATION_DIRECTORY",
    "SERVICE_NOTES",
    "StationCoordinate",
    "StationDirectory",
    "StopPair",
    "load_stations",
    "service_note",
    "station_names",
]
