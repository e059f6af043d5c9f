"""Inbound request models and outbound event models (the JSON that travels over the socket)"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic.alias_generators import to_camel

from src.core.exceptions import InvalidRequestError
from src.core.models import MoveIntent, MoveOutcome
from src.core.shared_types import RejectReason, Seat, Status
from src.game.board import Rows
from src.game.cell import Cell

UnitId = str


class WireModel(BaseModel):
    """camelCase on the wire, snake_case in Python. Either is accepted on the way in."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


class Position(WireModel):
    """No bounds here: a move off the board is an IllegalMove, not a malformed request."""

    row: int
    col: int

    @classmethod
    def from_cell(cls, cell: Cell) -> "Position":
        return cls(row=cell.row, col=cell.col)

    def to_cell(self) -> Cell:
        return Cell(self.row, self.col)


# --- REQUEST MODELS ---
class MoveRequest(WireModel):
    """
    A move intent.

    `roomId` and `actingSeat` are accepted for compatibility with older clients, but the room and seat bound to the
    connection are the ones that count.
    """

    type: Literal["move"] = "move"
    room_id: Optional[str] = None
    acting_seat: Optional[Seat] = None
    unit: UnitId
    from_cell: Position = Field(alias="from")
    to_cell: Position = Field(alias="to")

    @field_validator("unit")
    @classmethod
    def validate_unit(cls, value: str) -> str:
        if not value.strip():
            raise InvalidRequestError("A move must name the unit being moved.")
        return value.strip()

    def to_intent(self) -> MoveIntent:
        return MoveIntent(
            unit=self.unit,
            from_cell=self.from_cell.to_cell(),
            to_cell=self.to_cell.to_cell(),
        )


class LegalMovesRequest(WireModel):
    type: Literal["legal_moves"] = "legal_moves"
    unit: UnitId


InboundMessage = Annotated[
    Union[MoveRequest, LegalMovesRequest], Field(discriminator="type")
]
_inbound = TypeAdapter(InboundMessage)


def parse_inbound(text: str) -> MoveRequest | LegalMovesRequest:
    """Raises pydantic.ValidationError for anything that is not a well-formed request (including broken JSON)."""
    return _inbound.validate_json(text)


# --- EVENT MODELS ---
class BoardSnapshot(WireModel):
    """Sent direct to a participant right after joining."""

    type: Literal["board_snapshot"] = "board_snapshot"
    board: Rows
    current_turn: Seat
    status: Status
    seat: Optional[Seat] = None


class MoveApplied(WireModel):
    type: Literal["move_applied"] = "move_applied"
    unit: UnitId
    from_cell: Position = Field(alias="from")
    to_cell: Position = Field(alias="to")
    captured: list[UnitId]
    board: Rows
    current_turn: Seat

    @classmethod
    def from_outcome(cls, outcome: MoveOutcome, board: Rows) -> "MoveApplied":
        return cls(
            unit=outcome.unit,
            from_cell=Position.from_cell(outcome.from_cell),
            to_cell=Position.from_cell(outcome.to_cell),
            captured=outcome.captured,
            board=board,
            current_turn=outcome.current_turn,
        )


class GameOver(WireModel):
    """Replaces MoveApplied for the move that ends the game. Nothing follows it."""

    type: Literal["game_over"] = "game_over"
    winner: Seat
    unit: UnitId
    from_cell: Position = Field(alias="from")
    to_cell: Position = Field(alias="to")
    captured: list[UnitId]
    board: Rows

    @classmethod
    def from_outcome(cls, outcome: MoveOutcome, board: Rows) -> "GameOver":
        # for the type checker: only built for finishing moves
        assert outcome.winner is not None
        return cls(
            winner=outcome.winner,
            unit=outcome.unit,
            from_cell=Position.from_cell(outcome.from_cell),
            to_cell=Position.from_cell(outcome.to_cell),
            captured=outcome.captured,
            board=board,
        )


class MoveRejected(WireModel):
    """Direct to the participant whose join or move was refused."""

    type: Literal["move_rejected"] = "move_rejected"
    reason: RejectReason
    message: str = ""


class LegalMoves(WireModel):
    type: Literal["legal_moves"] = "legal_moves"
    unit: UnitId
    destinations: list[Position]


class PlayerLeft(WireModel):
    type: Literal["player_left"] = "player_left"
    seat: Seat


class ErrorEvent(WireModel):
    """Malformed inbound payload. Reported by the transport, never reaches the game."""

    type: Literal["error"] = "error"
    message: str


Event = Union[
    BoardSnapshot,
    MoveApplied,
    GameOver,
    MoveRejected,
    LegalMoves,
    PlayerLeft,
    ErrorEvent,
]
