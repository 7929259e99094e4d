"""Nearest-station search and board presentation helpers."""

from caltrain_finder.logic.board import BoardRow, build_board_rows, status_message
from caltrain_finder.logic.locator import NearestStations, StationLocator, locate

__all__ = [
    "BoardRow",
    "NearestStations",
    "StationLocator",
    "build_board_rows",
    "locate",
    "status_message",
]
