"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable, Generator, Optional

import pytest

from src.api.models import Event
from src.game.board import Rows
from src.game.cell import BOARD_DIMENSIONS

PlaceUnits = Callable[[dict[tuple[int, int], str]], Rows]


class RecordingSink:
    """Stand-in for the transport: remembers every event per participant instead of writing to a socket."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, Event]] = []

    def send(self, participant_id: str, event: Event) -> None:
        self.sent.append((participant_id, event))

    def events_for(self, participant_id: str) -> list[Event]:
        return [event for pid, event in self.sent if pid == participant_id]

    def types_for(self, participant_id: str) -> list[str]:
        return [event.type for event in self.events_for(participant_id)]

    def last_for(self, participant_id: str) -> Optional[Event]:
        events = self.events_for(participant_id)
        return events[-1] if events else None

    def clear(self) -> None:
        self.sent.clear()


class BrokenSink:
    """Every delivery fails, as if all connections dropped."""

    def __init__(self) -> None:
        self.attempts = 0

    def send(self, participant_id: str, event: Event) -> None:
        self.attempts += 1
        raise ConnectionError(f"socket for {participant_id} is gone")


@pytest.fixture
def sink() -> Generator[RecordingSink, None, None]:
    """Ensures the recorded events are cleared between tests"""
    recording = RecordingSink()
    try:
        yield recording
    finally:
        recording.clear()


@pytest.fixture
def broken_sink() -> BrokenSink:
    return BrokenSink()


@pytest.fixture
def place_units() -> PlaceUnits:
    """Call the inner function with {(row, col): unit_id} to get a grid with only those units on it."""

    def _rows(placements: dict[tuple[int, int], str]) -> Rows:
        rows: Rows = [[None] * BOARD_DIMENSIONS[1] for _ in range(BOARD_DIMENSIONS[0])]
        for (row, col), unit_id in placements.items():
            rows[row][col] = unit_id
        return rows

    return _rows
