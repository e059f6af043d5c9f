"""Protocol for delivering events to participants (implemented by the transport layer, or an in-memory recorder in tests)"""

import logging
from typing import Protocol

from src.api.models import Event

logger = logging.getLogger(__name__)


class EventSink(Protocol):
    """Transport layer orchestration"""

    def send(self, participant_id: str, event: Event) -> None:
        """Queue the event for one participant. Must not block."""
        ...


def deliver(sink: EventSink, participant_id: str, event: Event) -> None:
    """
    Fire-and-forget delivery.

    By the time an event is sent the game state is already committed, so a failing participant connection is logged
    and otherwise ignored.
    """
    try:
        sink.send(participant_id, event)
    except Exception:
        logger.warning(
            "Could not deliver %s to participant %s", event.type, participant_id, exc_info=True
        )
