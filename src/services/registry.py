"""Owns every live GameSession, keyed by room id. One instance per process, created by the app factory."""

import logging
import threading
from typing import Optional

from src.api.models import MoveRejected
from src.core.exceptions import MissingRoomIdError, NotAcceptingMovesError
from src.core.models import MoveIntent, MoveOutcome
from src.core.shared_types import Seat
from src.game.cell import Cell
from src.services.session import GameSession
from src.services.sink import EventSink, deliver

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Creates a session on the first join of a room and drops it when the last participant leaves."""

    def __init__(self, sink: EventSink) -> None:
        self._sink = sink
        self._sessions: dict[str, GameSession] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, room_id: object) -> bool:
        return room_id in self._sessions

    def session(self, room_id: Optional[str]) -> Optional[GameSession]:
        if room_id is None:
            return None
        with self._lock:
            return self._sessions.get(room_id)

    def get_or_create_session(self, room_id: str) -> GameSession:
        """Returns the live session for the room, or creates one in its starting position."""
        with self._lock:
            return self._get_or_create(room_id)

    def join(self, room_id: Optional[str], participant_id: str) -> Seat:
        """
        Seat the participant in the room.
        ---
        Raises MissingRoomIdError for an empty/missing room id and RoomFullError when both seats are taken.
        Either way the participant has been sent a MoveRejected already; the transport should close the connection.
        """
        if room_id is None or not room_id.strip():
            error = MissingRoomIdError("Room ID is required.")
            deliver(
                self._sink,
                participant_id,
                MoveRejected(reason=error.reason, message=str(error)),
            )
            raise error

        with self._lock:
            session = self._get_or_create(room_id)
            return session.join(participant_id)

    def leave(self, room_id: Optional[str], participant_id: str) -> None:
        """Unknown rooms and participants are ignored. An emptied session is destroyed (no history is kept)."""
        if room_id is None:
            return
        with self._lock:
            session = self._sessions.get(room_id)
            if session is None:
                return
            session.leave(participant_id)
            if session.is_empty():
                del self._sessions[room_id]
                logger.info("Room %s is empty and has been removed", room_id)

    def submit_move(
        self, room_id: Optional[str], participant_id: str, intent: MoveIntent
    ) -> MoveOutcome:
        session = self._session_or_reject(room_id, participant_id)
        return session.submit_move(participant_id, intent)

    def legal_moves(
        self, room_id: Optional[str], participant_id: str, unit_id: str
    ) -> list[Cell]:
        session = self._session_or_reject(room_id, participant_id)
        return session.legal_moves(participant_id, unit_id)

    def close(self) -> None:
        """Shutdown: forget every session."""
        with self._lock:
            logger.info("Closing %d session(s)", len(self._sessions))
            self._sessions.clear()

    # -- internal helpers --
    def _get_or_create(self, room_id: str) -> GameSession:
        """Caller holds the registry lock."""
        session = self._sessions.get(room_id)
        if session is None:
            session = GameSession(room_id, self._sink)
            self._sessions[room_id] = session
            logger.info("Created session for room %s", room_id)
        return session

    def _session_or_reject(
        self, room_id: Optional[str], participant_id: str
    ) -> GameSession:
        session = self.session(room_id)
        if session is None:
            error = NotAcceptingMovesError(f"No game is running in room {room_id!r}.")
            deliver(
                self._sink,
                participant_id,
                MoveRejected(reason=error.reason, message=str(error)),
            )
            raise error
        return session
