"""
Geometry/Base movement and attacking rules

Key idea: every unit type maps to a closed set of legal displacements (Δrow, Δcol).
The table below is the single source of truth for movement. Pawns use the orthogonal single step.

Whether the game currently accepts the move (turn order, ownership, friendly destination) is checked later by Game.
"""

from dataclasses import dataclass
from typing import Optional, Protocol

from src.core.shared_types import Seat
from src.game.cell import Cell
from src.game.units import Unit, UnitType

Vector = tuple[int, int]


class Board(Protocol):
    """Just the parts the attack path resolution needs"""

    def unit(self, cell: Cell) -> Optional[Unit]: ...
    def remove_unit(self, cell: Cell) -> Optional[Unit]: ...


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_cell: Cell
    to_cell: Cell

    @property
    def delta(self) -> Vector:
        return (self.to_cell.row - self.from_cell.row, self.to_cell.col - self.from_cell.col)


# --- MOVEMENT RULES ---
ORTHOGONAL_STEPS: set[Vector] = {(1, 0), (-1, 0), (0, 1), (0, -1)}
DIAGONAL_STEPS: set[Vector] = {(1, 1), (1, -1), (-1, 1), (-1, -1)}
ORTHOGONAL_JUMPS: set[Vector] = {(2 * dr, 2 * dc) for dr, dc in ORTHOGONAL_STEPS}

MOVEMENT_RULES: dict[UnitType, set[Vector]] = {
    UnitType.PAWN: ORTHOGONAL_STEPS,
    UnitType.HERO1: ORTHOGONAL_JUMPS,
    UnitType.HERO2: DIAGONAL_STEPS,
}

# Units that move through cells and may capture the first enemy found on the way.
RANGED_TYPES: set[UnitType] = {UnitType.HERO1, UnitType.HERO2}


def is_legal_move(unit_type: UnitType, move: Move) -> bool:
    """Destination on the board and displacement listed for this unit type."""
    if not move.to_cell.is_within_bounds():
        return False
    return move.delta in MOVEMENT_RULES[unit_type]


def legal_destinations(unit_type: UnitType, from_cell: Cell) -> list[Cell]:
    """All on-board cells the unit type could reach from the given cell (ignores occupancy)."""
    destinations = [from_cell.offset(dr, dc) for dr, dc in MOVEMENT_RULES[unit_type]]
    return sorted(
        (cell for cell in destinations if cell.is_within_bounds()),
        key=lambda cell: (cell.row, cell.col),
    )


# --- ATTACK PATH ---
def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def attack_path(move: Move) -> list[Cell]:
    """
    The cells strictly between origin and destination.
    ---
    Walk unit steps of sign(Δrow), sign(Δcol) from the origin until the destination is reached.
    A single diagonal step has an empty path. So does an orthogonal single step.
    """
    d_row, d_col = move.delta
    step_row, step_col = _sign(d_row), _sign(d_col)
    path: list[Cell] = []
    cell = move.from_cell.offset(step_row, step_col)
    while cell != move.to_cell and cell.is_within_bounds():
        path.append(cell)
        cell = cell.offset(step_row, step_col)
    return path


def resolve_attack_path(board: Board, move: Move, seat: Seat) -> Optional[Unit]:
    """
    Capture along the attack path
    ---

    Only the first occupied cell counts:
    * enemy unit: it is removed from the board and the scan stops (at most one capture, whatever the path length)
    * friendly unit: the scan stops, nothing is captured, the move itself still goes ahead

    The destination cell is never looked at here. Capturing on the destination happens when the moving unit overwrites it.

    Returns the captured unit, if any.
    """
    for cell in attack_path(move):
        occupant = board.unit(cell)
        if occupant is None:
            continue
        if occupant.seat != seat:
            return board.remove_unit(cell)
        return None
    return None
