from __future__ import annotations

import textwrap

import pytest

from caltrain_finder.data.stations import (
    STATION_COORDINATES,
    STATION_DIRECTORY,
    StopPair,
    load_stations,
    service_note,
    station_names,
)


def test_directory_and_coordinates_cover_same_stations() -> None:
    assert [s.name for s in STATION_COORDINATES] == station_names()
    assert len(STATION_DIRECTORY) == 30


def test_directory_stop_codes() -> None:
    assert STATION_DIRECTORY["San Francisco 4th & King"] == StopPair("70011", "70012")
    assert STATION_DIRECTORY["Menlo Park"] == StopPair("70161", "70162")
    assert STATION_DIRECTORY["Gilroy"] == StopPair("70321", "70322")


def test_directory_is_read_only() -> None:
    with pytest.raises(TypeError):
        STATION_DIRECTORY["Nowhere"] = StopPair("1", "2")  # type: ignore[index]


def test_coordinates_run_north_to_south() -> None:
    latitudes = [s.latitude for s in STATION_COORDINATES]

    assert latitudes == sorted(latitudes, reverse=True)


def test_service_notes() -> None:
    assert service_note("Gilroy") is not None
    assert service_note("Broadway") is not None
    assert service_note("Broadway") != service_note("Gilroy")
    assert service_note("Palo Alto") is None


def _write(tmp_path, contents: str) -> str:
    path = tmp_path / "stations.yaml"
    path.write_text(textwrap.dedent(contents))
    return str(path)


def test_load_stations(tmp_path) -> None:
    path = _write(
        tmp_path,
        """
        stations:
          - name: "North Stop"
            northbound: 101
            southbound: "102"
            latitude: 37.9
            longitude: -122.4
          - name: "South Stop"
            northbound: "201"
            southbound: "202"
            latitude: 37.1
            longitude: -121.6
        """,
    )

    directory, coordinates = load_stations(path)

    assert directory["North Stop"] == StopPair("101", "102")
    assert [c.name for c in coordinates] == ["North Stop", "South Stop"]
    assert coordinates[1].latitude == 37.1


def test_load_stations_missing_field(tmp_path) -> None:
    path = _write(
        tmp_path,
        """
        stations:
          - name: "North Stop"
            northbound: "101"
            latitude: 37.9
            longitude: -122.4
        """,
    )

    with pytest.raises(ValueError) as exc_info:
        load_stations(path)

    assert "southbound" in str(exc_info.value)


def test_load_stations_duplicate_name(tmp_path) -> None:
    entry = """
          - name: "Stop"
            northbound: "1"
            southbound: "2"
            latitude: 37.0
            longitude: -122.0
    """
    path = _write(tmp_path, "stations:" + entry + entry)

    with pytest.raises(ValueError):
        load_stations(path)


def test_load_stations_bad_shape(tmp_path) -> None:
    path = _write(tmp_path, "stations: {}\n")

    with pytest.raises(ValueError):
        load_stations(path)


def test_load_stations_missing_file(tmp_path) -> None:
    with pytest.raises(ValueError):
        load_stations(str(tmp_path / "nope.yaml"))
