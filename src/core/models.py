"""
Boundary layer data model(s).

These objects are used to communicate with the Session.
Hence, both the API layer (higher) and the game layer (lower) use the models defined here to send to/receive from the Service
(Decouples the wire format of the API layer from the domain objects used by the Game)
"""

from dataclasses import dataclass, field
from typing import Optional

from src.core.shared_types import Seat
from src.game.cell import Cell

UnitId = str


@dataclass(frozen=True)
class MoveIntent:
    """What a participant asks for. The acting seat is never part of it: the session knows who is asking."""

    unit: UnitId
    from_cell: Cell
    to_cell: Cell


@dataclass
class MoveOutcome:
    """Everything that changed after an accepted move."""

    seat: Seat
    unit: UnitId
    from_cell: Cell
    to_cell: Cell
    captured: list[UnitId] = field(default_factory=list)
    current_turn: Seat = Seat.A
    winner: Optional[Seat] = None
