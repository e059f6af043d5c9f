"""Unit tests for /src/game/board.py"""

from typing import Callable

import pytest

from src.core.shared_types import Seat
from src.game.board import Board, Rows
from src.game.cell import Cell
from src.game.moves import Move
from src.game.units import Unit, starting_units

PlaceUnits = Callable[[dict[tuple[int, int], str]], Rows]

STARTING_ROWS: Rows = [
    ["A-P1", "A-P2", "A-H1", "A-H2", "A-P3"],
    [None] * 5,
    [None] * 5,
    [None] * 5,
    ["B-P1", "B-P2", "B-H1", "B-H2", "B-P3"],
]


def test_starting_position() -> None:
    """Side A on row 0, side B on row 4, both in the fixed unit order"""
    board = Board.starting_position()
    assert board.to_rows() == STARTING_ROWS
    assert len(board.units()) == 10


def test_rows_roundtrip() -> None:
    board = Board.from_rows(STARTING_ROWS)
    assert board.to_rows() == STARTING_ROWS
    assert board == Board.starting_position()


def test_empty_board() -> None:
    board = Board.empty()
    assert board.units() == []
    assert all(cell is None for row in board.to_rows() for cell in row)


def test_unit_cannot_be_placed_twice(place_units: PlaceUnits) -> None:
    """A unit occupies exactly one cell"""
    board = Board.from_rows(place_units({(0, 0): "A-P1"}))
    with pytest.raises(ValueError):
        board.place_unit(Unit.from_id("A-P1"), Cell(3, 3))

    with pytest.raises(ValueError):
        _ = Board.from_rows(place_units({(0, 0): "A-P1", (1, 1): "A-P1"}))


def test_locate_unit_and_seat() -> None:
    board = Board.starting_position()
    assert board.locate_unit(Unit.from_id("B-H2")) == Cell(4, 3)
    assert board.locate_seat(Seat.A) == [Cell(0, col) for col in range(5)]


def test_locate_captured_unit(place_units: PlaceUnits) -> None:
    board = Board.from_rows(place_units({(2, 2): "A-H1"}))
    assert board.locate_unit(Unit.from_id("B-H1")) is None


def test_move_unit_to_empty_cell() -> None:
    board = Board.starting_position()
    overwritten = board.move_unit(Move(Cell(0, 0), Cell(1, 0)))
    assert overwritten is None
    assert board.unit(Cell(0, 0)) is None
    assert board.unit(Cell(1, 0)) == Unit.from_id("A-P1")


def test_move_unit_overwrites_destination(place_units: PlaceUnits) -> None:
    board = Board.from_rows(place_units({(1, 1): "A-H2", (2, 2): "B-P1"}))
    overwritten = board.move_unit(Move(Cell(1, 1), Cell(2, 2)))
    assert overwritten == Unit.from_id("B-P1")
    assert board.units() == [Unit.from_id("A-H2")]


def test_remove_unit(place_units: PlaceUnits) -> None:
    board = Board.from_rows(place_units({(3, 1): "B-P2"}))
    assert board.remove_unit(Cell(3, 1)) == Unit.from_id("B-P2")
    assert board.remove_unit(Cell(3, 1)) is None
    assert not board.is_occupied(Cell(3, 1))


def test_has_survivors(place_units: PlaceUnits) -> None:
    roster = starting_units(Seat.A) + starting_units(Seat.B)
    board = Board.from_rows(place_units({(0, 0): "A-P1"}))
    assert board.has_survivors(Seat.A, roster)
    assert not board.has_survivors(Seat.B, roster)
