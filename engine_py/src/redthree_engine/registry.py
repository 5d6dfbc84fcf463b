"""
Room registry shared by every connection.
"""

import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .errors import RoomNotFound
from .models import RoomState
from .scheduler import TimerHandle


@dataclass
class RoomRecord:
    state: RoomState
    lock: threading.RLock = field(default_factory=threading.RLock)
    timers: List[TimerHandle] = field(default_factory=list)

    def cancel_timers(self):
        for timer in self.timers:
            timer.cancel()
        self.timers.clear()


class RoomRegistry:
    """Thread-safe room id -> room record map."""

    def __init__(self):
        self._rooms: Dict[str, RoomRecord] = {}
        self._lock = threading.Lock()

    def create(self, state: RoomState) -> RoomRecord:
        with self._lock:
            if state.id in self._rooms:
                raise ValueError(f"Room {state.id} already exists")
            record = RoomRecord(state=state)
            self._rooms[state.id] = record
            return record

    def get(self, room_id: str) -> Optional[RoomRecord]:
        with self._lock:
            return self._rooms.get(room_id)

    def require(self, room_id: str) -> RoomRecord:
        record = self.get(room_id)
        if record is None:
            raise RoomNotFound(f"Room {room_id} not found")
        return record

    def remove(self, room_id: str) -> Optional[RoomRecord]:
        with self._lock:
            record = self._rooms.pop(room_id, None)
        if record is not None:
            record.cancel_timers()
        return record

    def contains(self, room_id: str) -> bool:
        with self._lock:
            return room_id in self._rooms

    def all(self) -> List[RoomRecord]:
        with self._lock:
            return list(self._rooms.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._rooms)
