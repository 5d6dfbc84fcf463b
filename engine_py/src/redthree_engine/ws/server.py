"""
FastAPI WebSocket server for the Red Three game.
"""

import asyncio
import logging
import uuid
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, List, Optional

import orjson
from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from ..errors import ACTION_NOT_ALLOWED, GameError
from ..manager import RoomManager
from ..models import DealResult, RoomState
from ..rules import rules_from_env
from ..serialization import sanitize_state, serialize_deal
from .events import (
    CreateRoomEvent, ErrorCode, EventType, JoinRoomEvent, PlayEvent, ToggleRevealEvent,
    create_dealt_event, create_error_event, create_joined_event, create_room_created_event,
    create_room_list_event, create_state_full_event, error_code_for, parse_inbound_event,
)

logger = logging.getLogger(__name__)

# FastAPI app
app = FastAPI(title="Red Three Game Engine", version="1.0.0")

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

manager = RoomManager(rules=rules_from_env())


@dataclass
class Connection:
    handle: str
    websocket: WebSocket
    name: Optional[str] = None
    room_id: Optional[str] = None


class ConnectionManager:
    """Tracks sockets per handle and pushes personalized state."""

    def __init__(self):
        self.connections: Dict[str, Connection] = {}

    def connect(self, websocket: WebSocket) -> Connection:
        connection = Connection(handle=str(uuid.uuid4()), websocket=websocket)
        self.connections[connection.handle] = connection
        return connection

    def disconnect(self, connection: Connection):
        self.connections.pop(connection.handle, None)

    def in_room(self, room_id: str) -> List[Connection]:
        return [c for c in self.connections.values() if c.room_id == room_id]

    async def send(self, connection: Connection, event: BaseModel):
        await self.send_payload(connection, event.model_dump(mode="json"))

    async def send_payload(self, connection: Connection, payload: Dict):
        try:
            await connection.websocket.send_text(orjson.dumps(payload).decode())
        except Exception as e:
            logger.error(f"Error sending to {connection.handle}: {e}")
            self.disconnect(connection)

    def snapshot_room(self, room_id: str, state: RoomState) -> Dict[str, Dict]:
        """Serialize the state for every seat in the room right now."""
        payloads = {}
        for connection in self.in_room(room_id):
            seat = state.seat_for(connection.handle)
            viewer = seat.seat if seat else None
            event = create_state_full_event(sanitize_state(state, viewer))
            payloads[connection.handle] = event.model_dump(mode="json")
        return payloads

    async def deliver(self, payloads: Dict[str, Dict]):
        for handle, payload in payloads.items():
            connection = self.connections.get(handle)
            if connection is not None:
                await self.send_payload(connection, payload)


connections = ConnectionManager()


def on_room_change(room_id: str, state: RoomState):
    """Manager listener: broadcast the new state to the room."""
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        return
    payloads = connections.snapshot_room(room_id, state)
    if payloads:
        loop.create_task(connections.deliver(payloads))


manager.add_listener(on_room_change)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "rooms": len(manager.registry),
        "connections": len(connections.connections),
    }


@app.get("/rooms")
async def list_rooms():
    """Rooms still waiting for players."""
    return [
        {"room_id": room.room_id, "seat_count": room.seat_count, "host_name": room.host_name}
        for room in manager.list_open_rooms()
    ]


@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    """Main WebSocket endpoint."""
    await websocket.accept()
    connection = connections.connect(websocket)
    logger.info(f"WebSocket connection accepted: {connection.handle}")

    try:
        while True:
            raw_data = await websocket.receive_text()
            try:
                event = parse_inbound_event(orjson.loads(raw_data))
                await handle_event(connection, event)
            except GameError as e:
                await connections.send(connection, create_error_event(error_code_for(e.code), e.message))
            except (ValueError, orjson.JSONDecodeError) as e:
                await connections.send(connection, create_error_event(ErrorCode.INVALID_EVENT, str(e)))
            except Exception as e:
                logger.error(f"Error handling event: {e}", exc_info=True)
                await connections.send(connection, create_error_event(ErrorCode.INTERNAL, "Internal server error"))
    except WebSocketDisconnect:
        logger.info(f"WebSocket disconnected: {connection.handle}")
    finally:
        connections.disconnect(connection)
        if connection.room_id:
            manager.leave_seat(connection.room_id, connection.handle)


async def handle_event(connection: Connection, event):
    """Dispatch an inbound event to its handler."""
    handler = HANDLERS.get(event.type)
    if handler is None:
        raise ValueError(f"Unhandled event type: {event.type}")
    await handler(connection, event)


def _require_seat(connection: Connection) -> int:
    if not connection.room_id:
        raise GameError(ACTION_NOT_ALLOWED, "Not in a room")
    seat = manager.seat_of(connection.room_id, connection.handle)
    if seat is None:
        raise GameError(ACTION_NOT_ALLOWED, "Not seated in this room")
    return seat


async def _send_deal(room_id: str, deal: DealResult):
    for member in connections.in_room(room_id):
        seat = manager.seat_of(room_id, member.handle)
        await connections.send(member, create_dealt_event(serialize_deal(deal, seat)))


async def _send_result(connection: Connection, result):
    if not result.success:
        await connections.send(
            connection, create_error_event(error_code_for(result.error_code), result.error_message)
        )


async def handle_create_room(connection: Connection, event: CreateRoomEvent):
    if connection.room_id:
        manager.leave_seat(connection.room_id, connection.handle)
    connection.name = event.name
    room_id = manager.create_room(connection.handle, event.name)
    connection.room_id = room_id
    await connections.send(connection, create_room_created_event(room_id))
    await connections.send(connection, create_joined_event(room_id, connection.handle, 0))
    on_room_change(room_id, manager.get_state(room_id))


async def handle_join_room(connection: Connection, event: JoinRoomEvent):
    state = manager.join_room(event.room_id, connection.handle, event.name)
    if connection.room_id and connection.room_id != event.room_id:
        manager.leave_seat(connection.room_id, connection.handle)
    connection.name = event.name
    connection.room_id = event.room_id
    seat = state.seat_for(connection.handle)
    await connections.send(connection, create_joined_event(event.room_id, connection.handle, seat.seat))
    on_room_change(event.room_id, state)


async def handle_start(connection: Connection, event):
    _require_seat(connection)
    state = manager.get_state(connection.room_id)
    if state.host_id != connection.handle:
        raise GameError(ACTION_NOT_ALLOWED, "Only the host can start the game")
    deal = manager.start_room(connection.room_id)
    logger.info(f"Game started for room {connection.room_id}")
    await _send_deal(connection.room_id, deal)


async def handle_restart(connection: Connection, event):
    _require_seat(connection)
    deal = manager.restart_room(connection.room_id)
    await _send_deal(connection.room_id, deal)


async def handle_toggle_reveal(connection: Connection, event: ToggleRevealEvent):
    seat = _require_seat(connection)
    await _send_result(connection, manager.toggle_reveal(connection.room_id, seat, event.card))


async def handle_play(connection: Connection, event: PlayEvent):
    seat = _require_seat(connection)
    await _send_result(connection, manager.submit_play(connection.room_id, seat, event.cards))


async def handle_pass(connection: Connection, event):
    seat = _require_seat(connection)
    await _send_result(connection, manager.submit_pass(connection.room_id, seat))


async def handle_leave(connection: Connection, event):
    if connection.room_id:
        manager.leave_seat(connection.room_id, connection.handle)
        connection.room_id = None


async def handle_list_rooms(connection: Connection, event):
    rooms = [
        {"room_id": room.room_id, "seat_count": room.seat_count, "host_name": room.host_name}
        for room in manager.list_open_rooms()
    ]
    await connections.send(connection, create_room_list_event(rooms))


async def handle_request_state(connection: Connection, event):
    seat = _require_seat(connection)
    state = manager.get_state(connection.room_id)
    await connections.send(connection, create_state_full_event(sanitize_state(state, seat)))


HANDLERS: Dict[EventType, Callable[..., Awaitable[None]]] = {
    EventType.CREATE_ROOM: handle_create_room,
    EventType.JOIN_ROOM: handle_join_room,
    EventType.START: handle_start,
    EventType.RESTART: handle_restart,
    EventType.TOGGLE_REVEAL: handle_toggle_reveal,
    EventType.PLAY: handle_play,
    EventType.PASS: handle_pass,
    EventType.LEAVE: handle_leave,
    EventType.LIST_ROOMS: handle_list_rooms,
    EventType.REQUEST_STATE: handle_request_state,
}
