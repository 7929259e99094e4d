"""Board rows and status text derived from a BoardState."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable

from caltrain_finder.data.arrivals import ArrivalRecord
from caltrain_finder.data.poller import BoardState, UNKNOWN_STATION

NORTHBOUND = "NORTHBOUND"
SOUTHBOUND = "SOUTHBOUND"

LOADING_MESSAGE = "Loading schedule..."
EMPTY_MESSAGE = "No upcoming trains found."


@dataclass(frozen=True)
class BoardRow:
    """Single arrival line for display."""

    destination: str
    train_number: str
    line_name: str
    direction: str
    clock_time: str
    minutes_away: float


def format_clock(dt: datetime) -> str:
    value = dt.astimezone().strftime("%I:%M %p")
    return value.lstrip("0") if value.startswith("0") else value


def _minutes_away(now: datetime, dt: datetime) -> float:
    return (dt - now).total_seconds() / 60.0


def travel_direction(record: ArrivalRecord) -> str:
    """NORTHBOUND or SOUTHBOUND from DirectionRef, else from the destination name."""
    label = record.direction_label.strip().upper()
    if label.startswith("N"):
        return NORTHBOUND
    if label.startswith("S"):
        return SOUTHBOUND
    # Every northbound train terminates in San Francisco.
    if "francisco" in record.destination_name.lower():
        return NORTHBOUND
    return SOUTHBOUND


def build_board_rows(
    arrivals: Iterable[ArrivalRecord], now: datetime | None = None
) -> list[BoardRow]:
    now = now or datetime.now(timezone.utc)
    return [
        BoardRow(
            destination=record.destination_name,
            train_number=record.train_number,
            line_name=record.line_name,
            direction=travel_direction(record),
            clock_time=format_clock(record.expected_arrival_time),
            minutes_away=_minutes_away(now, record.expected_arrival_time),
        )
        for record in arrivals
    ]


def status_message(state: BoardState | None) -> str | None:
    """Text shown in place of the rows, or None when the rows should be shown."""
    if state is None or state.loading:
        return LOADING_MESSAGE
    if state.error:
        return state.error
    if not state.arrivals:
        return EMPTY_MESSAGE
    return None


def is_configuration_error(state: BoardState) -> bool:
    return state.error_kind == UNKNOWN_STATION


__all__ = [
    "BoardRow",
    "EMPTY_MESSAGE",
    "LOADING_MESSAGE",
    "NORTHBOUND",
    "SOUTHBOUND",
    "build_board_rows",
    "format_clock",
    "is_configuration_error",
    "status_message",
    "travel_direction",
]
