"""Station tables, the 511 client and the arrival poller."""

from caltrain_finder.data.arrivals import (
    ArrivalRecord,
    FetchFailedError,
    UnknownStationError,
    fetch_arrivals,
)
from caltrain_finder.data.poller import ArrivalPoller, BoardState, PollHandle
from caltrain_finder.data.stations import STATION_COORDINATES, STATION_DIRECTORY, load_stations
from caltrain_finder.data.transit_client import TransitClient, TransitClientError

__all__ = [
    "ArrivalPoller",
    "ArrivalRecord",
    "BoardState",
    "FetchFailedError",
    "PollHandle",
    "STATION_COORDINATES",
    "STATION_DIRECTORY",
    "TransitClient",
    "TransitClientError",
    "UnknownStationError",
    "fetch_arrivals",
    "load_stations",
]
