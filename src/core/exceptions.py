"""
Custom exceptions.

Everything the domain/service layers raise on purpose derives from GameError, so the transport layer only ever needs
to catch that one. Each error knows the reason code that is reported back to the participant.
"""

from src.core.shared_types import RejectReason


class GameError(Exception):
    """Top-level exception for anything the game refuses to do."""

    reason: RejectReason

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.reason.value)


# --- JOINING A ROOM ---
class JoinError(GameError):
    """Joining failed. The transport closes the connection after reporting it."""


class MissingRoomIdError(JoinError):
    reason = RejectReason.MISSING_ROOM_ID


class RoomFullError(JoinError):
    reason = RejectReason.ROOM_FULL


# --- SUBMITTING A MOVE ---
class MoveError(GameError):
    """Move refused. The session is unchanged and the connection stays open."""


class WrongTurnError(MoveError):
    reason = RejectReason.WRONG_TURN


class UnitMismatchError(MoveError):
    reason = RejectReason.UNIT_MISMATCH


class IllegalMoveError(MoveError):
    reason = RejectReason.ILLEGAL_MOVE


class FriendlyOccupiedError(MoveError):
    reason = RejectReason.FRIENDLY_OCCUPIED


class NotAcceptingMovesError(MoveError):
    reason = RejectReason.NOT_ACCEPTING_MOVES


# --- TRANSPORT ---
class InvalidRequestError(ValueError):
    """Inbound payload could not be interpreted. Raised inside pydantic validators, so it must be a ValueError."""
