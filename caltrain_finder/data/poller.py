"""Threaded poller that periodically refreshes the arrival board for one station."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import threading
import time
from typing import Callable

from caltrain_finder.data.arrivals import (
    ArrivalRecord,
    FetchFailedError,
    UnknownStationError,
    fetch_arrivals,
)
from caltrain_finder.data.stations import STATION_DIRECTORY, StationDirectory
from caltrain_finder.data.transit_client import TransitClient
from caltrain_finder.observable import Observable

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL_SECONDS = 60

UNKNOWN_STATION = "unknown_station"
FETCH_FAILED = "fetch_failed"

FETCH_FAILED_MESSAGE = "Failed to load train data."


@dataclass(frozen=True)
class BoardState:
    """Snapshot of the arrival board for the selected station."""

    station_name: str
    arrivals: list[ArrivalRecord] = field(default_factory=list)
    fetched_at: float | None = None
    loading: bool = False
    error: str | None = None
    error_kind: str | None = None
    generation: int = 0


class PollHandle:
    """Cancellable polling task for a single station selection."""

    def __init__(self, station_name: str, generation: int) -> None:
        self.station_name = station_name
        self.generation = generation
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def is_active(self) -> bool:
        return (
            not self._stop_event.is_set()
            and self._thread is not None
            and self._thread.is_alive()
        )

    def cancel(self) -> None:
        """Stop polling; a cycle already in flight finishes but is not published."""
        self._stop_event.set()

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)


class ArrivalPoller:
    """Background poller that refreshes arrivals for the selected station on a schedule."""

    def __init__(
        self,
        client: TransitClient,
        directory: StationDirectory = STATION_DIRECTORY,
        poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS,
    ) -> None:
        self._client = client
        self._directory = directory
        self._poll_interval_seconds = poll_interval_seconds
        self._state: Observable[BoardState] = Observable()
        # Reentrant so a subscriber may call start() from inside a publish.
        self._lock = threading.RLock()
        self._generation = 0
        self._handle: PollHandle | None = None

    def get_latest(self) -> BoardState | None:
        """Return the most recently published board state, if any."""
        return self._state.get()

    def subscribe(self, callback: Callable[[BoardState], None]) -> Callable[[], None]:
        return self._state.subscribe(callback)

    @property
    def current_handle(self) -> PollHandle | None:
        with self._lock:
            return self._handle

    def start(self, station_name: str) -> PollHandle:
        """Cancel any previous selection and begin polling ``station_name``."""
        with self._lock:
            if self._handle is not None:
                self._handle.cancel()
            self._generation += 1
            handle = PollHandle(station_name, self._generation)
            self._handle = handle

            if station_name not in self._directory:
                logger.warning('Station name "%s" not found in directory.', station_name)
                handle.cancel()
                self._state.set(
                    BoardState(
                        station_name=station_name,
                        error=str(UnknownStationError(station_name)),
                        error_kind=UNKNOWN_STATION,
                        generation=handle.generation,
                    )
                )
                return handle

            self._state.set(
                BoardState(station_name=station_name, loading=True, generation=handle.generation)
            )
            handle._thread = threading.Thread(
                target=self._run_loop,
                args=(handle,),
                name=f"arrival-poller-{handle.generation}",
                daemon=True,
            )
            handle._thread.start()
            return handle

    def stop(self) -> None:
        """Cancel the current selection; nothing further is published for it."""
        with self._lock:
            if self._handle is not None:
                self._handle.cancel()
            self._generation += 1
            self._handle = None

    def _run_loop(self, handle: PollHandle) -> None:
        while not handle._stop_event.is_set():
            result = self._fetch_once(handle)
            self._publish(handle, result)
            if result.error_kind == UNKNOWN_STATION:
                handle.cancel()
            handle._stop_event.wait(timeout=self._poll_interval_seconds)

    def _fetch_once(self, handle: PollHandle) -> BoardState:
        try:
            arrivals = fetch_arrivals(handle.station_name, self._client, self._directory)
        except UnknownStationError as exc:
            return BoardState(
                station_name=handle.station_name,
                fetched_at=time.time(),
                error=str(exc),
                error_kind=UNKNOWN_STATION,
                generation=handle.generation,
            )
        except FetchFailedError as exc:
            logger.error("Arrival fetch failed for %s: %s", handle.station_name, exc)
            return self._failed_state(handle)
        except Exception:
            # Keep the loop alive; the next tick retries.
            logger.exception("Unexpected error fetching arrivals for %s", handle.station_name)
            return self._failed_state(handle)
        logger.debug("Fetched %d arrivals for %s", len(arrivals), handle.station_name)
        return BoardState(
            station_name=handle.station_name,
            arrivals=arrivals,
            fetched_at=time.time(),
            generation=handle.generation,
        )

    @staticmethod
    def _failed_state(handle: PollHandle) -> BoardState:
        return BoardState(
            station_name=handle.station_name,
            fetched_at=time.time(),
            error=FETCH_FAILED_MESSAGE,
            error_kind=FETCH_FAILED,
            generation=handle.generation,
        )

    def _publish(self, handle: PollHandle, result: BoardState) -> bool:
        with self._lock:
            if handle.generation != self._generation or handle._stop_event.is_set():
                logger.debug(
                    "Dropping stale result for %s (generation %d)",
                    handle.station_name,
                    handle.generation,
                )
                return False
            self._state.set(result)
            return True


__all__ = [
    "ArrivalPoller",
    "BoardState",
    "FETCH_FAILED",
    "FETCH_FAILED_MESSAGE",
    "PollHandle",
    "UNKNOWN_STATION",
]
