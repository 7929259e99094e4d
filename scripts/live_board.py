"""Terminal arrival board and nearest-station finder for Caltrain."""

from __future__ import annotations

import argparse
import logging
import threading

from caltrain_finder.config import load_config
from caltrain_finder.data.arrivals import FetchFailedError, UnknownStationError, fetch_arrivals
from caltrain_finder.data.poller import ArrivalPoller, BoardState
from caltrain_finder.data.stations import (
    STATION_COORDINATES,
    STATION_DIRECTORY,
    load_stations,
    service_note,
    station_names,
)
from caltrain_finder.data.transit_client import TransitClient
from caltrain_finder.logging_setup import configure_logging
from caltrain_finder.logic.board import build_board_rows, is_configuration_error, status_message
from caltrain_finder.logic.locator import NearestStationResult, NearestStations, locate

logger = logging.getLogger("live_board")

PLACEHOLDER = "Enter location to find station"


def _print_side(label: str, result: NearestStationResult | None) -> None:
    print(label)
    if result is None:
        print(f"  {PLACEHOLDER}")
        return
    print(f"  {result.name}")
    print(f"  Distance: {result.distance_km:.2f} km")
    print(f"  Walk Time: ~{result.walking_minutes} mins")


def _print_recommendation(result: NearestStations) -> None:
    _print_side("Closest station north", result.north)
    _print_side("Closest station south", result.south)


def _print_board(state: BoardState) -> None:
    print(f"{state.station_name} - Live Departure Board")
    note = service_note(state.station_name)
    if note:
        print(f"  ({note})")
    message = status_message(state)
    if message:
        print(f"  {message}")
        return
    for row in build_board_rows(state.arrivals):
        print(
            f"  {row.clock_time:>8}  #{row.train_number:<5} {row.direction:<10} "
            f"{row.line_name:<8} {row.destination}"
        )


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", default="config/config.yaml", help="Path to config YAML")
    parser.add_argument("--station", help="Station to show arrivals for")
    parser.add_argument("--lat", default="", help="Your latitude")
    parser.add_argument("--lon", default="", help="Your longitude")
    parser.add_argument(
        "--once",
        action="store_true",
        help="Fetch a single board and exit instead of refreshing",
    )
    parser.add_argument(
        "--list-stations",
        action="store_true",
        help="Print the known station names and exit",
    )
    args = parser.parse_args()

    config = load_config(args.config)
    configure_logging(config.log)

    directory, coordinates = STATION_DIRECTORY, STATION_COORDINATES
    if config.stations.path:
        directory, coordinates = load_stations(config.stations.path)

    if args.list_stations:
        for name in station_names(directory):
            print(name)
        return 0

    _print_recommendation(locate(args.lat, args.lon, coordinates))

    if not args.station:
        return 0

    if not config.transit.api_key:
        logger.warning("TRANSIT_API_KEY is not set; requests will likely be rejected.")

    client = TransitClient(
        api_key=config.transit.api_key,
        agency=config.transit.agency,
        base_url=config.transit.base_url,
        timeout_seconds=config.transit.timeout_seconds,
    )

    if args.once:
        try:
            arrivals = fetch_arrivals(args.station, client, directory)
        except UnknownStationError as exc:
            print(str(exc))
            return 2
        except FetchFailedError as exc:
            logger.error("%s", exc)
            return 1
        _print_board(BoardState(station_name=args.station, arrivals=arrivals))
        return 0

    poller = ArrivalPoller(client, directory, config.transit.poll_interval_seconds)
    done = threading.Event()

    def on_update(state: BoardState) -> None:
        _print_board(state)
        if is_configuration_error(state):
            done.set()

    poller.subscribe(on_update)
    poller.start(args.station)
    try:
        done.wait()
    except KeyboardInterrupt:
        return 0
    finally:
        poller.stop()
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
