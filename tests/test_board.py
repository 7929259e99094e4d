from __future__ import annotations

from datetime import datetime, timedelta, timezone

from caltrain_finder.data.arrivals import ArrivalRecord
from caltrain_finder.data.poller import FETCH_FAILED, FETCH_FAILED_MESSAGE, UNKNOWN_STATION, BoardState
from caltrain_finder.logic.board import (
    EMPTY_MESSAGE,
    LOADING_MESSAGE,
    NORTHBOUND,
    SOUTHBOUND,
    build_board_rows,
    format_clock,
    is_configuration_error,
    status_message,
    travel_direction,
)

NOW = datetime(2026, 10, 19, 15, 0, tzinfo=timezone.utc)


def _record(
    minutes: float = 10,
    destination: str = "San Francisco Caltrain Station",
    direction: str = "N",
    train: str | None = "217",
) -> ArrivalRecord:
    return ArrivalRecord(
        destination_name=destination,
        line_name="Limited",
        direction_label=direction,
        train_identifier=train,
        expected_arrival_time=NOW + timedelta(minutes=minutes),
    )


def test_format_clock_has_no_leading_zero() -> None:
    local = datetime(2026, 10, 19, 9, 5).astimezone()

    assert format_clock(local) == "9:05 AM"


def test_format_clock_keeps_two_digit_hours_and_meridiem() -> None:
    morning = datetime(2026, 10, 19, 11, 45).astimezone()
    evening = datetime(2026, 10, 19, 23, 45).astimezone()

    assert format_clock(morning) == "11:45 AM"
    assert format_clock(evening) == "11:45 PM"


def test_travel_direction_prefers_direction_ref() -> None:
    assert travel_direction(_record(direction="N", destination="Gilroy")) == NORTHBOUND
    assert travel_direction(_record(direction="South", destination="San Francisco")) == SOUTHBOUND


def test_travel_direction_falls_back_to_destination() -> None:
    assert travel_direction(_record(direction="", destination="San Francisco")) == NORTHBOUND
    assert travel_direction(_record(direction="", destination="San Jose Diridon")) == SOUTHBOUND


def test_build_board_rows() -> None:
    rows = build_board_rows([_record(minutes=7.5), _record(minutes=20, train=None, direction="S")], now=NOW)

    assert len(rows) == 2
    assert rows[0].train_number == "217"
    assert rows[0].minutes_away == 7.5
    assert rows[0].direction == NORTHBOUND
    assert rows[0].line_name == "Limited"
    assert rows[1].train_number == "N/A"
    assert rows[1].direction == SOUTHBOUND
    assert rows[1].clock_time == format_clock(NOW + timedelta(minutes=20))


def test_status_message_states() -> None:
    assert status_message(None) == LOADING_MESSAGE
    assert status_message(BoardState("Tamien", loading=True)) == LOADING_MESSAGE
    assert status_message(BoardState("Tamien")) == EMPTY_MESSAGE
    assert (
        status_message(BoardState("Tamien", error=FETCH_FAILED_MESSAGE, error_kind=FETCH_FAILED))
        == FETCH_FAILED_MESSAGE
    )
    assert status_message(BoardState("Tamien", arrivals=[_record()])) is None


def test_is_configuration_error() -> None:
    assert is_configuration_error(BoardState("Atlantis", error="x", error_kind=UNKNOWN_STATION))
    assert not is_configuration_error(BoardState("Tamien", error="x", error_kind=FETCH_FAILED))
