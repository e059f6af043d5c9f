"""
A cell on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

# (rows, columns). Row 0 is side A's home row, the last row is side B's.
BOARD_DIMENSIONS = (5, 5)


@dataclass(frozen=True)
class Cell:
    row: int
    col: int

    @classmethod
    def from_dict(cls, data: dict[str, int]) -> Cell:
        """Wire format: {"row": 0, "col": 2}"""
        return cls(int(data["row"]), int(data["col"]))

    def to_dict(self) -> dict[str, int]:
        return {"row": self.row, "col": self.col}

    def is_within_bounds(self) -> bool:
        return (0 <= self.row < BOARD_DIMENSIONS[0]) and (
            0 <= self.col < BOARD_DIMENSIONS[1]
        )

    def offset(self, d_row: int, d_col: int) -> Cell:
        return Cell(self.row + d_row, self.col + d_col)


def all_cells() -> list[Cell]:
    """Row by row, left to right."""
    return [
        Cell(row, col)
        for row in range(BOARD_DIMENSIONS[0])
        for col in range(BOARD_DIMENSIONS[1])
    ]
