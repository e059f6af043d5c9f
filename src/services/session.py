"""One room: the seated participants, the Game they play, and the lock that keeps their requests from interleaving."""

import logging
import threading
from dataclasses import dataclass
from typing import NoReturn, Optional

from src.api.models import (
    BoardSnapshot,
    Event,
    GameOver,
    LegalMoves,
    MoveApplied,
    MoveRejected,
    PlayerLeft,
    Position,
)
from src.core.exceptions import (
    GameError,
    MoveError,
    NotAcceptingMovesError,
    RoomFullError,
)
from src.core.models import MoveIntent, MoveOutcome
from src.core.shared_types import Seat, Status
from src.game.board import Board
from src.game.cell import Cell
from src.game.game import Game
from src.services.sink import EventSink, deliver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Participant:
    """Back-reference to a connection. Owned by the session, never the other way around."""

    participant_id: str
    seat: Seat


class GameSession:
    """Orchestration of a single game for the participants of one room."""

    def __init__(self, room_id: str, sink: EventSink, game: Optional[Game] = None) -> None:
        self.room_id = room_id
        self.game = game if game is not None else Game.new_game()
        self.participants: dict[Seat, Participant] = {}
        self._sink = sink
        self._lock = threading.Lock()

    # -- read-only views --
    @property
    def status(self) -> Status:
        return self.game.status

    @property
    def current_turn(self) -> Seat:
        return self.game.current_turn

    @property
    def winner(self) -> Optional[Seat]:
        return self.game.winner

    @property
    def board(self) -> Board:
        return self.game.board

    def seated(self) -> list[Participant]:
        """Seat A first."""
        return [self.participants[seat] for seat in Seat if seat in self.participants]

    def is_empty(self) -> bool:
        return not self.participants

    def snapshot(self, seat: Optional[Seat] = None) -> BoardSnapshot:
        return BoardSnapshot(
            board=self.game.board.to_rows(),
            current_turn=self.game.current_turn,
            status=self.game.status,
            seat=seat,
        )

    # -- participant lifecycle --
    def join(self, participant_id: str) -> Seat:
        """
        Take the first free seat (A before B).

        The newcomer (and only the newcomer) receives the current board. Once both seats are taken the game starts.
        Joining twice with the same participant id returns the seat already held.
        """
        with self._lock:
            existing = self._participant(participant_id)
            if existing is not None:
                return existing.seat

            free_seats = [seat for seat in Seat if seat not in self.participants]
            if not free_seats:
                self._reject(
                    participant_id,
                    RoomFullError(f"Room {self.room_id!r} already has two players."),
                )

            seat = free_seats[0]
            self.participants[seat] = Participant(participant_id, seat)
            if len(self.participants) == len(Seat):
                self.game.start()
            logger.info(
                "Participant %s took seat %s in room %s", participant_id, seat, self.room_id
            )
            deliver(self._sink, participant_id, self.snapshot(seat))
            return seat

    def leave(self, participant_id: str) -> Optional[Seat]:
        """
        Free the participant's seat. The remaining participant is told about it.

        A game in progress goes back to AwaitingPlayers with board and turn kept. The next participant to join takes
        the free seat and its units, whoever they are. A finished game stays finished.
        """
        with self._lock:
            participant = self._participant(participant_id)
            if participant is None:
                return None

            del self.participants[participant.seat]
            self.game.pause()
            logger.info(
                "Seat %s left room %s (%d seated)",
                participant.seat,
                self.room_id,
                len(self.participants),
            )
            self._broadcast(PlayerLeft(seat=participant.seat))
            return participant.seat

    # -- playing --
    def submit_move(self, participant_id: str, intent: MoveIntent) -> MoveOutcome:
        """
        Validate and apply one move, atomically with respect to every other request on this session.
        -----

        Accepted: exactly one broadcast (MoveApplied, or GameOver for the final move).
        Rejected: exactly one MoveRejected sent to the submitter only, nothing changes, and the MoveError is re-raised.
        """
        with self._lock:
            participant = self._participant(participant_id)
            if participant is None:
                self._reject(
                    participant_id,
                    NotAcceptingMovesError(
                        f"Participant {participant_id} holds no seat in room {self.room_id!r}."
                    ),
                )

            try:
                outcome = self.game.make_move(participant.seat, intent)
            except MoveError as error:
                self._reject(participant_id, error)

            board = self.game.board.to_rows()
            event: Event
            if outcome.winner is not None:
                event = GameOver.from_outcome(outcome, board)
                logger.info("Room %s finished, winner: seat %s", self.room_id, outcome.winner)
            else:
                event = MoveApplied.from_outcome(outcome, board)
                logger.debug(
                    "Room %s: %s moved %s, captured %s",
                    self.room_id,
                    outcome.seat,
                    outcome.unit,
                    outcome.captured,
                )
            self._broadcast(event)
            return outcome

    def legal_moves(self, participant_id: str, unit_id: str) -> list[Cell]:
        """Destinations for a unit, sent direct to whoever asked."""
        with self._lock:
            destinations = self.game.legal_moves(unit_id)
            deliver(
                self._sink,
                participant_id,
                LegalMoves(
                    unit=unit_id,
                    destinations=[Position.from_cell(cell) for cell in destinations],
                ),
            )
            return destinations

    # -- internal helpers --
    def _participant(self, participant_id: str) -> Optional[Participant]:
        return next(
            (p for p in self.participants.values() if p.participant_id == participant_id),
            None,
        )

    def _broadcast(self, event: Event) -> None:
        for participant in self.seated():
            deliver(self._sink, participant.participant_id, event)

    def _reject(self, participant_id: str, error: GameError) -> NoReturn:
        """Report the error to the participant only, then raise it for the caller."""
        logger.info("Room %s rejected %s: %s", self.room_id, participant_id, error)
        deliver(
            self._sink,
            participant_id,
            MoveRejected(reason=error.reason, message=str(error)),
        )
        raise error
