"""
Tests for WebSocket event parsing and the event handlers.
"""

import asyncio

import orjson
import pytest

from redthree_engine.ws.events import (
    CreateRoomEvent, ErrorCode, EventType, PlayEvent, create_error_event,
    error_code_for, parse_inbound_event,
)
from redthree_engine.ws.server import Connection, connections, handle_event, manager


def test_parse_create_room():
    event = parse_inbound_event({"type": "create_room", "name": "Alice"})
    assert isinstance(event, CreateRoomEvent)
    assert event.name == "Alice"


def test_parse_play():
    event = parse_inbound_event({"type": "play", "cards": ["5H", "5S"]})
    assert isinstance(event, PlayEvent)
    assert event.type == EventType.PLAY


@pytest.mark.parametrize("data", [
    [],
    {},
    {"type": "shuffle"},
    {"type": "play", "cards": []},
    {"type": "play", "cards": ["5H", "5S", "5C", "5D", "7H"]},
    {"type": "join_room", "name": "Bob"},
    {"type": "create_room", "name": ""},
])
def test_parse_rejects_bad_events(data):
    with pytest.raises(ValueError):
        parse_inbound_event(data)


def test_error_code_mapping():
    assert error_code_for("NOT_YOUR_TURN") == ErrorCode.NOT_YOUR_TURN
    assert error_code_for("SOMETHING_ELSE") == ErrorCode.INTERNAL
    assert error_code_for(None) == ErrorCode.INTERNAL


def test_error_event_serializes():
    payload = create_error_event(ErrorCode.MUST_PLAY, "You must play").model_dump(mode="json")
    decoded = orjson.loads(orjson.dumps(payload))
    assert decoded["type"] == "error"
    assert decoded["code"] == "MUST_PLAY"


class FakeWebSocket:
    def __init__(self):
        self.sent = []

    async def send_text(self, text):
        self.sent.append(orjson.loads(text))


@pytest.mark.asyncio
async def test_create_room_handler_pushes_state():
    connection = Connection(handle="handler-test", websocket=FakeWebSocket())
    connections.connections[connection.handle] = connection
    try:
        await handle_event(connection, parse_inbound_event({"type": "create_room", "name": "Alice"}))
        await asyncio.sleep(0)

        types = [message["type"] for message in connection.websocket.sent]
        assert types[:2] == ["room_created", "joined"]
        assert "state_full" in types
        state = next(m for m in connection.websocket.sent if m["type"] == "state_full")["state"]
        assert state["phase"] == "waiting"
        assert state["my_seat"] == 0
        assert state["seats"][0]["name"] == "Alice"
    finally:
        connections.disconnect(connection)
        if connection.room_id:
            manager.leave_seat(connection.room_id, connection.handle)
