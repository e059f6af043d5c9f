"""
WebSocket transport.

Each connection gets a participant id and an outbound queue. The game layer only ever puts events on queues (through
WebSocketSink), a writer task per connection does the actual socket I/O.
"""

import asyncio
import logging
from typing import Optional
from uuid import uuid4

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status
from pydantic import ValidationError

from src.api.models import ErrorEvent, Event, MoveRequest, parse_inbound
from src.core.exceptions import GameError, JoinError
from src.services.registry import SessionRegistry

logger = logging.getLogger(__name__)

router = APIRouter()

Outbox = asyncio.Queue[Optional[str]]


class WebSocketSink:
    """EventSink backed by one asyncio queue per connection. `None` on a queue tells its writer to stop."""

    def __init__(self) -> None:
        self._outboxes: dict[str, tuple[Outbox, asyncio.AbstractEventLoop]] = {}

    def __contains__(self, participant_id: object) -> bool:
        return participant_id in self._outboxes

    def register(self, participant_id: str) -> Outbox:
        outbox: Outbox = asyncio.Queue()
        self._outboxes[participant_id] = (outbox, asyncio.get_running_loop())
        return outbox

    def unregister(self, participant_id: str) -> None:
        entry = self._outboxes.pop(participant_id, None)
        if entry is None:
            return
        outbox, loop = entry
        loop.call_soon_threadsafe(outbox.put_nowait, None)

    def send(self, participant_id: str, event: Event) -> None:
        entry = self._outboxes.get(participant_id)
        if entry is None:
            logger.debug("Dropping %s for unknown participant %s", event.type, participant_id)
            return
        outbox, loop = entry
        loop.call_soon_threadsafe(outbox.put_nowait, event.to_json())


async def write_events(
    websocket: WebSocket, sink: WebSocketSink, participant_id: str, outbox: Outbox
) -> None:
    """
    Drain the connection's queue onto the socket until the stop marker arrives.

    A failed send unregisters the participant so nothing more piles up on a queue nobody reads.
    """
    while True:
        payload = await outbox.get()
        if payload is None:
            return
        try:
            await websocket.send_text(payload)
        except (WebSocketDisconnect, RuntimeError):
            logger.warning(
                "Connection of %s closed while sending, dropping remaining events", participant_id
            )
            sink.unregister(participant_id)
            return


def handle_message(
    registry: SessionRegistry,
    sink: WebSocketSink,
    room_id: str,
    participant_id: str,
    text: str,
) -> None:
    """One inbound frame. Anything that does not parse is answered with an error event and goes no further."""
    try:
        message = parse_inbound(text)
    except ValidationError as error:
        sink.send(
            participant_id,
            ErrorEvent(message=f"Malformed message: {error.error_count()} error(s)"),
        )
        return

    try:
        if isinstance(message, MoveRequest):
            registry.submit_move(room_id, participant_id, message.to_intent())
        else:
            registry.legal_moves(room_id, participant_id, message.unit)
    except GameError as error:
        # the participant has already been sent a MoveRejected
        logger.debug("Request from %s refused: %s", participant_id, error)


@router.websocket("/ws")
async def play(websocket: WebSocket) -> None:
    """
    ws://<host>/ws?roomId=<room>

    A refused join (no room id, room full) is reported and the connection is closed. Otherwise frames are handled
    until the client goes away, at which point the seat is freed.
    """
    registry: SessionRegistry = websocket.app.state.registry
    sink: WebSocketSink = websocket.app.state.sink
    room_id = websocket.query_params.get("roomId")

    await websocket.accept()
    participant_id = uuid4().hex
    writer = asyncio.create_task(
        write_events(websocket, sink, participant_id, sink.register(participant_id))
    )

    try:
        registry.join(room_id, participant_id)
    except JoinError as error:
        logger.info("Join to room %r refused: %s", room_id, error.reason)
        sink.unregister(participant_id)
        await writer
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    # for the type checker: join() refuses missing room ids
    assert room_id is not None
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(message.get("code", status.WS_1000_NORMAL_CLOSURE))
            text = message.get("text")
            if text is None:
                sink.send(participant_id, ErrorEvent(message="Binary frames are not supported"))
                continue
            handle_message(registry, sink, room_id, participant_id, text)
    except WebSocketDisconnect:
        logger.info("Participant %s disconnected from room %s", participant_id, room_id)
    finally:
        registry.leave(room_id, participant_id)
        sink.unregister(participant_id)
        await writer
