"""
The Game class is the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the business logic required to play a turn of the board game -->
passes the outcome to the service layer, which can then pass it onwards to the participants.

A Game knows nothing about connections, locks or events. GameSession takes care of those.
"""

from dataclasses import dataclass, field
from typing import Optional, Self

from src.core.exceptions import (
    FriendlyOccupiedError,
    IllegalMoveError,
    NotAcceptingMovesError,
    UnitMismatchError,
    WrongTurnError,
)
from src.core.models import MoveIntent, MoveOutcome
from src.core.shared_types import Seat, Status
from src.game.board import Board, Rows
from src.game.cell import Cell
from src.game.moves import (
    RANGED_TYPES,
    Move,
    is_legal_move,
    legal_destinations,
    resolve_attack_path,
)
from src.game.units import Unit, starting_units


def full_roster() -> list[Unit]:
    """All ten units a game starts with. Captured units stay in here for the win bookkeeping."""
    return starting_units(Seat.A) + starting_units(Seat.B)


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    current_turn: Seat = Seat.A
    status: Status = Status.AWAITING_PLAYERS
    winner: Optional[Seat] = None
    roster: list[Unit] = field(default_factory=full_roster)

    @classmethod
    def new_game(cls) -> Self:
        """Starting position, side A to move, waiting for both seats to fill."""
        return cls(board=Board.starting_position())

    @classmethod
    def from_rows(
        cls,
        rows: Rows,
        current_turn: Seat = Seat.A,
        status: Status = Status.IN_PROGRESS,
    ) -> Self:
        """Start from an arbitrary position (mostly useful to set up specific situations)."""
        return cls(board=Board.from_rows(rows), current_turn=current_turn, status=status)

    def start(self) -> None:
        """Both seats are taken."""
        if self.status == Status.AWAITING_PLAYERS:
            self._change_status(Status.IN_PROGRESS)

    def pause(self) -> None:
        """A seat emptied. Board and turn are kept until someone takes the seat again."""
        if self.status == Status.IN_PROGRESS:
            self._change_status(Status.AWAITING_PLAYERS)

    def legal_moves(self, unit_id: str) -> list[Cell]:
        """
        Cells the unit could move to right now.
        ---
        Same checks as a move, minus turn order: on the board, allowed displacement, not onto a friendly unit.
        Captured or unknown units have no moves.
        """
        try:
            unit = Unit.from_id(unit_id)
        except ValueError:
            return []
        from_cell = self.board.locate_unit(unit)
        if from_cell is None:
            return []
        return [
            cell
            for cell in legal_destinations(unit.type, from_cell)
            if not self._is_friendly(unit.seat, cell)
        ]

    def make_move(self, seat: Seat, intent: MoveIntent) -> MoveOutcome:
        """
        Attempt to make a move
        -----

        1. the game must be in progress
        2. it must be your turn
        3. the claimed unit must stand on the origin cell and be yours
        4. the displacement must be allowed for the unit type (and stay on the board)
        5. the destination must not hold one of your own units

        None of the above changes anything. Once they pass:

        6. ranged units capture the first enemy on their attack path
        7. move the unit (an enemy on the destination gets captured by being overwritten)
        8. check whether one side ran out of units --> finished, turn stays where it is
        9. otherwise hand the turn to the opponent
        """
        # make sure the game is (still) in progress
        if self.status != Status.IN_PROGRESS:
            raise NotAcceptingMovesError(
                f"Game is not accepting moves. status: {self.status}"
            )

        # make sure it is your turn
        self._assert_your_turn(seat)

        unit = self._resolve_unit(seat, intent)
        move = Move(from_cell=intent.from_cell, to_cell=intent.to_cell)

        if not is_legal_move(unit.type, move):
            raise IllegalMoveError(
                f"{unit.id} cannot move from {move.from_cell} to {move.to_cell}."
            )

        if self._is_friendly(seat, move.to_cell):
            raise FriendlyOccupiedError(
                f"{move.to_cell} is occupied by your own unit {self.board.unit(move.to_cell).id}."
            )

        captured: list[Unit] = []
        if unit.type in RANGED_TYPES:
            hit = resolve_attack_path(self.board, move, seat)
            if hit is not None:
                captured.append(hit)

        overwritten = self.board.move_unit(move)
        if overwritten is not None:
            captured.append(overwritten)

        self._update_game_status()
        if self.status != Status.FINISHED:
            self.current_turn = self.current_turn.opponent

        return MoveOutcome(
            seat=seat,
            unit=unit.id,
            from_cell=move.from_cell,
            to_cell=move.to_cell,
            captured=[captured_unit.id for captured_unit in captured],
            current_turn=self.current_turn,
            winner=self.winner,
        )

    # -- PRIVATE HELPERS ---
    def _assert_your_turn(self, seat: Seat) -> None:
        """You must wait for your turn before making a move."""
        if seat != self.current_turn:
            raise WrongTurnError(
                f"It is not your turn. Waiting for seat {self.current_turn} to make a move first."
            )

    def _resolve_unit(self, seat: Seat, intent: MoveIntent) -> Unit:
        """The origin is looked up on our own board. The client only gets to name the unit it thinks is there."""
        if not intent.from_cell.is_within_bounds():
            raise UnitMismatchError(f"{intent.from_cell} is not on the board.")

        unit = self.board.unit(intent.from_cell)
        if unit is None:
            raise UnitMismatchError(f"No unit on {intent.from_cell}.")
        if unit.id != intent.unit:
            raise UnitMismatchError(
                f"{intent.from_cell} holds {unit.id}, not {intent.unit}."
            )
        if unit.seat != seat:
            raise UnitMismatchError(f"{unit.id} does not belong to seat {seat}.")
        return unit

    def _is_friendly(self, seat: Seat, cell: Cell) -> bool:
        occupant = self.board.unit(cell)
        return occupant is not None and occupant.seat == seat

    def _update_game_status(self) -> None:
        """
        Performs checks to see if game has ended and changes status accordingly.

        Both sides are checked every time, independent of who moved.
        """
        losers = [
            seat for seat in Seat if not self.board.has_survivors(seat, self.roster)
        ]
        if len(losers) == 1:
            self.winner = losers[0].opponent
            self._change_status(Status.FINISHED)

    def _change_status(self, new_status: Status) -> None:
        self.status = new_status
