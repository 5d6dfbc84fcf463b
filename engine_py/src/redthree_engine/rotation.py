"""
Seat numbering and turn rotation.
"""

from typing import Collection, NewType

from .constants import NUM_SEATS, TURN_DIRECTION

SeatId = NewType('SeatId', int)


def seat_id(value: int) -> SeatId:
    """Validate a seat index."""
    if not 0 <= value < NUM_SEATS:
        raise ValueError(f"Invalid seat: {value}")
    return SeatId(value)


class RotationOrder:
    """Fixed turn order that skips seats which have emptied their hands."""

    def __init__(self, size: int = NUM_SEATS, step: int = TURN_DIRECTION):
        self.size = size
        self.step = step

    def step_from(self, seat: int) -> SeatId:
        return SeatId((seat + self.step) % self.size)

    def next_active(self, current: int, finished: Collection[int]) -> SeatId:
        """
        Next seat after current that still holds cards.

        Falls back to the plain next seat if every seat has finished.
        """
        candidate = self.step_from(current)
        for _ in range(self.size):
            if candidate not in finished:
                return candidate
            candidate = self.step_from(candidate)
        return self.step_from(current)

    def next_after(self, seat: int, finished: Collection[int]) -> SeatId:
        """Seat itself if still active, otherwise the next active seat."""
        if seat not in finished:
            return SeatId(seat)
        return self.next_active(seat, finished)


default_rotation = RotationOrder()
