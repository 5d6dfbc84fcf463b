"""
WebSocket event models and validation.
"""

import time
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, ValidationError


class EventType(str, Enum):
    """Inbound event types."""
    CREATE_ROOM = "create_room"
    JOIN_ROOM = "join_room"
    START = "start"
    TOGGLE_REVEAL = "toggle_reveal"
    PLAY = "play"
    PASS = "pass"
    RESTART = "restart"
    LEAVE = "leave"
    LIST_ROOMS = "list_rooms"
    REQUEST_STATE = "request_state"


class OutboundEventType(str, Enum):
    """Outbound event types."""
    ROOM_CREATED = "room_created"
    JOINED = "joined"
    DEALT = "dealt"
    STATE_FULL = "state_full"
    ROOM_LIST = "room_list"
    ERROR = "error"


class ErrorCode(str, Enum):
    """Error codes for client events."""
    INVALID_EVENT = "INVALID_EVENT"
    ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
    ROOM_FULL = "ROOM_FULL"
    ALREADY_STARTED = "ALREADY_STARTED"
    NOT_YOUR_TURN = "NOT_YOUR_TURN"
    INVALID_COMBINATION = "INVALID_COMBINATION"
    MUST_CONTAIN_OPENING_CARD = "MUST_CONTAIN_OPENING_CARD"
    CANNOT_BEAT_REFERENCE = "CANNOT_BEAT_REFERENCE"
    MUST_PLAY = "MUST_PLAY"
    OWNERSHIP_MISMATCH = "OWNERSHIP_MISMATCH"
    INVALID_SEAT = "INVALID_SEAT"
    WRONG_PHASE = "WRONG_PHASE"
    ACTION_NOT_ALLOWED = "ACTION_NOT_ALLOWED"
    INTERNAL = "INTERNAL"


# Inbound event models
class BaseEvent(BaseModel):
    """Base event model."""
    type: EventType


class CreateRoomEvent(BaseEvent):
    """Create a room and take its first seat."""
    type: EventType = EventType.CREATE_ROOM
    name: str = Field(..., min_length=1, max_length=30)


class JoinRoomEvent(BaseEvent):
    """Join room event."""
    type: EventType = EventType.JOIN_ROOM
    room_id: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=30)


class StartEvent(BaseEvent):
    """Start game event (host only)."""
    type: EventType = EventType.START


class ToggleRevealEvent(BaseEvent):
    """Show or hide a 3 during the reveal phase."""
    type: EventType = EventType.TOGGLE_REVEAL
    card: str = Field(..., min_length=2, max_length=6)


class PlayEvent(BaseEvent):
    """Play cards event."""
    type: EventType = EventType.PLAY
    cards: List[str] = Field(..., min_length=1, max_length=4)


class PassEvent(BaseEvent):
    """Pass turn event."""
    type: EventType = EventType.PASS


class RestartEvent(BaseEvent):
    """Deal again with the same seats."""
    type: EventType = EventType.RESTART


class LeaveEvent(BaseEvent):
    """Leave the current room."""
    type: EventType = EventType.LEAVE


class ListRoomsEvent(BaseEvent):
    """List rooms still waiting for players."""
    type: EventType = EventType.LIST_ROOMS


class RequestStateEvent(BaseEvent):
    """Request full state event."""
    type: EventType = EventType.REQUEST_STATE


# Union type for all inbound events
InboundEvent = Union[
    CreateRoomEvent,
    JoinRoomEvent,
    StartEvent,
    ToggleRevealEvent,
    PlayEvent,
    PassEvent,
    RestartEvent,
    LeaveEvent,
    ListRoomsEvent,
    RequestStateEvent,
]


# Outbound event models
class RoomCreatedEvent(BaseModel):
    type: OutboundEventType = OutboundEventType.ROOM_CREATED
    room_id: str
    timestamp: float


class JoinedEvent(BaseModel):
    type: OutboundEventType = OutboundEventType.JOINED
    room_id: str
    handle: str
    seat: int
    timestamp: float


class DealtEvent(BaseModel):
    """Private deal summary for one seat."""
    type: OutboundEventType = OutboundEventType.DEALT
    deal: Dict[str, Any]
    timestamp: float


class StateFullEvent(BaseModel):
    """Full state event."""
    type: OutboundEventType = OutboundEventType.STATE_FULL
    state: Dict[str, Any]
    timestamp: float


class RoomSummary(BaseModel):
    room_id: str
    seat_count: int
    host_name: Optional[str] = None


class RoomListEvent(BaseModel):
    type: OutboundEventType = OutboundEventType.ROOM_LIST
    rooms: List[RoomSummary]
    timestamp: float


class ErrorEvent(BaseModel):
    """Error event."""
    type: OutboundEventType = OutboundEventType.ERROR
    code: ErrorCode
    message: str
    timestamp: float


OutboundEvent = Union[
    RoomCreatedEvent,
    JoinedEvent,
    DealtEvent,
    StateFullEvent,
    RoomListEvent,
    ErrorEvent,
]


EVENT_MAP = {
    EventType.CREATE_ROOM: CreateRoomEvent,
    EventType.JOIN_ROOM: JoinRoomEvent,
    EventType.START: StartEvent,
    EventType.TOGGLE_REVEAL: ToggleRevealEvent,
    EventType.PLAY: PlayEvent,
    EventType.PASS: PassEvent,
    EventType.RESTART: RestartEvent,
    EventType.LEAVE: LeaveEvent,
    EventType.LIST_ROOMS: ListRoomsEvent,
    EventType.REQUEST_STATE: RequestStateEvent,
}


def parse_inbound_event(data: Dict[str, Any]) -> InboundEvent:
    """
    Parse raw event data into appropriate event model.

    Args:
        data: Raw event data from WebSocket

    Returns:
        Parsed event model

    Raises:
        ValueError: If event type is invalid or data is malformed
    """
    if not isinstance(data, dict):
        raise ValueError("Event must be a JSON object")

    event_type = data.get("type")

    if not event_type:
        raise ValueError("Missing event type")

    try:
        event_type = EventType(event_type)
    except ValueError:
        raise ValueError(f"Invalid event type: {event_type}")

    event_class = EVENT_MAP[event_type]

    try:
        return event_class(**data)
    except ValidationError as e:
        raise ValueError(f"Invalid event data: {e}")


def error_code_for(code: Optional[str]) -> ErrorCode:
    try:
        return ErrorCode(code)
    except ValueError:
        return ErrorCode.INTERNAL


def create_error_event(code: ErrorCode, message: str) -> ErrorEvent:
    """Create an error event."""
    return ErrorEvent(code=code, message=message, timestamp=time.time())


def create_room_created_event(room_id: str) -> RoomCreatedEvent:
    return RoomCreatedEvent(room_id=room_id, timestamp=time.time())


def create_joined_event(room_id: str, handle: str, seat: int) -> JoinedEvent:
    return JoinedEvent(room_id=room_id, handle=handle, seat=seat, timestamp=time.time())


def create_dealt_event(deal: Dict[str, Any]) -> DealtEvent:
    return DealtEvent(deal=deal, timestamp=time.time())


def create_state_full_event(state: Dict[str, Any]) -> StateFullEvent:
    """Create a full state event."""
    return StateFullEvent(state=state, timestamp=time.time())


def create_room_list_event(rooms: List[Dict[str, Any]]) -> RoomListEvent:
    return RoomListEvent(rooms=[RoomSummary(**room) for room in rooms], timestamp=time.time())
