"""The Game board implements all rules that affect the `position` (the configuration of units on the grid)"""

from dataclasses import dataclass
from typing import Optional, Self

from src.core.shared_types import Seat
from src.game.cell import BOARD_DIMENSIONS, Cell, all_cells
from src.game.moves import Move
from src.game.units import Unit, starting_units

# Wire/test format of a board: one list per row, unit ids or None for empty cells
Rows = list[list[Optional[str]]]

HOME_ROWS: dict[Seat, int] = {
    Seat.A: 0,
    Seat.B: BOARD_DIMENSIONS[0] - 1,
}


@dataclass
class Board:
    position: dict[Cell, Optional[Unit]]

    @classmethod
    def empty(cls) -> Self:
        return cls({cell: None for cell in all_cells()})

    @classmethod
    def starting_position(cls) -> Self:
        """Side A on row 0 and side B on the last row, both in STARTING_ORDER from column 0 onwards."""
        board = cls.empty()
        for seat, row in HOME_ROWS.items():
            for col, unit in enumerate(starting_units(seat)):
                board.place_unit(unit, Cell(row, col))
        return board

    @classmethod
    def from_rows(cls, rows: Rows) -> Self:
        """
        Construct a board from a grid of unit ids.

        ex.
        [["A-P1", None, ...], ..., [..., "B-P3"]]
        """
        board = cls.empty()
        for row_idx, row in enumerate(rows):
            for col_idx, unit_id in enumerate(row):
                if unit_id is not None:
                    board.place_unit(Unit.from_id(unit_id), Cell(row_idx, col_idx))
        return board

    def to_rows(self) -> Rows:
        return [
            [
                self._unit_id(Cell(row, col))
                for col in range(BOARD_DIMENSIONS[1])
            ]
            for row in range(BOARD_DIMENSIONS[0])
        ]

    def _unit_id(self, cell: Cell) -> Optional[str]:
        unit = self.unit(cell)
        return unit.id if unit else None

    def unit(self, cell: Cell) -> Optional[Unit]:
        return self.position[cell]

    def is_occupied(self, cell: Cell) -> bool:
        return self.position[cell] is not None

    def locate_unit(self, unit: Unit) -> Optional[Cell]:
        return next(
            (cell for cell, occupant in self.position.items() if occupant == unit),
            None,
        )

    def locate_seat(self, seat: Seat) -> list[Cell]:
        return [
            cell
            for cell, occupant in self.position.items()
            if occupant is not None and occupant.seat == seat
        ]

    def units(self) -> list[Unit]:
        return [unit for unit in self.position.values() if unit is not None]

    def has_survivors(self, seat: Seat, roster: list[Unit]) -> bool:
        """Is at least one of the given starting units of this side still anywhere on the board?"""
        on_board = set(self.units())
        return any(unit in on_board for unit in roster if unit.seat == seat)

    def place_unit(self, unit: Unit, cell: Cell) -> None:
        if self.locate_unit(unit) is not None:
            raise ValueError(f"{unit.id} is already on the board.")
        self.position[cell] = unit

    def remove_unit(self, cell: Cell) -> Optional[Unit]:
        """Take whatever stands on the cell off the board (a capture)."""
        unit = self.position[cell]
        self.position[cell] = None
        return unit

    def move_unit(self, move: Move) -> Optional[Unit]:
        """Update the position on the board. Returns the unit that was standing on the destination, if any."""
        moving_unit = self.position[move.from_cell]
        overwritten = self.position[move.to_cell]
        self.position[move.from_cell] = None
        self.position[move.to_cell] = moving_unit
        return overwritten
