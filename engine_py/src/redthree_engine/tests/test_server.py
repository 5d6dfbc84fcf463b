"""
HTTP and WebSocket smoke tests against the FastAPI app.
"""

from fastapi.testclient import TestClient

from redthree_engine.main import app


def _receive_until(ws, event_type, limit=20):
    for _ in range(limit):
        message = ws.receive_json()
        if message["type"] == event_type:
            return message
    raise AssertionError(f"no {event_type} event received")


def _create_room(ws, name="Alice"):
    ws.send_json({"type": "create_room", "name": name})
    created = _receive_until(ws, "room_created")
    _receive_until(ws, "joined")
    return created["room_id"]


def test_health():
    client = TestClient(app)
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_root():
    client = TestClient(app)
    assert "Red Three" in client.get("/").json()["message"]


def test_open_rooms_listed():
    client = TestClient(app)
    with client.websocket_connect("/ws") as ws:
        room_id = _create_room(ws)
        rooms = client.get("/rooms").json()
        assert room_id in [room["room_id"] for room in rooms]

        ws.send_json({"type": "list_rooms"})
        listing = _receive_until(ws, "room_list")
        assert room_id in [room["room_id"] for room in listing["rooms"]]


def test_invalid_json():
    client = TestClient(app)
    with client.websocket_connect("/ws") as ws:
        ws.send_text("not json")
        message = ws.receive_json()
        assert message["type"] == "error"
        assert message["code"] == "INVALID_EVENT"


def test_unknown_event_type():
    client = TestClient(app)
    with client.websocket_connect("/ws") as ws:
        ws.send_json({"type": "shuffle"})
        assert ws.receive_json()["code"] == "INVALID_EVENT"


def test_play_without_room():
    client = TestClient(app)
    with client.websocket_connect("/ws") as ws:
        ws.send_json({"type": "play", "cards": ["5H"]})
        assert ws.receive_json()["code"] == "ACTION_NOT_ALLOWED"


def test_join_unknown_room():
    client = TestClient(app)
    with client.websocket_connect("/ws") as ws:
        ws.send_json({"type": "join_room", "room_id": "NOPE", "name": "Bob"})
        assert ws.receive_json()["code"] == "ROOM_NOT_FOUND"


def test_only_host_can_start():
    client = TestClient(app)
    with client.websocket_connect("/ws") as host, client.websocket_connect("/ws") as guest:
        room_id = _create_room(host)
        guest.send_json({"type": "join_room", "room_id": room_id, "name": "Bob"})
        joined = _receive_until(guest, "joined")
        assert joined["seat"] == 1

        guest.send_json({"type": "start"})
        error = _receive_until(guest, "error")
        assert error["code"] == "ACTION_NOT_ALLOWED"


def test_start_deals_private_hand():
    client = TestClient(app)
    with client.websocket_connect("/ws") as ws:
        _create_room(ws)
        ws.send_json({"type": "start"})
        dealt = _receive_until(ws, "dealt")
        deal = dealt["deal"]
        assert deal["my_seat"] == 0
        assert len(deal["my_hand"]) == 10
        assert deal["hand_counts"] == [10] * 5

        ws.send_json({"type": "request_state"})
        state = _receive_until(ws, "state_full")["state"]
        assert state["seats"][0]["hand_count"] == 10
        assert "hand" in state["seats"][0]
        assert all("hand" not in seat for seat in state["seats"][1:])
