"""
Type definitions used across layers
"""

from __future__ import annotations

from enum import StrEnum


class Seat(StrEnum):
    """The two fixed player slots of a session. First joiner gets A."""

    A = "A"
    B = "B"

    @property
    def opponent(self) -> Seat:
        return Seat.B if self == Seat.A else Seat.A


class Status(StrEnum):
    AWAITING_PLAYERS = "awaiting players"
    IN_PROGRESS = "in progress"
    FINISHED = "finished"


class RejectReason(StrEnum):
    """Reason codes sent back (direct, never broadcast) when a join or move is refused."""

    WRONG_TURN = "WrongTurn"
    UNIT_MISMATCH = "UnitMismatch"
    ILLEGAL_MOVE = "IllegalMove"
    FRIENDLY_OCCUPIED = "FriendlyOccupied"
    NOT_ACCEPTING_MOVES = "NotAcceptingMoves"
    ROOM_FULL = "RoomFull"
    MISSING_ROOM_ID = "MissingRoomId"
