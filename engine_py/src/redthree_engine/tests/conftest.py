"""
Shared fixtures for the Red Three engine tests.
"""

from typing import Callable, List, Optional, Sequence

import pytest

from redthree_engine.constants import DIAMOND_THREE, NUM_SEATS, PHASE_PLAYING
from redthree_engine.models import Card, PlayRecord, RoomState, Seat, parse_card
from redthree_engine.scheduler import Scheduler, TimerHandle
from redthree_engine.teams import determine_teams, find_opening_seat


class FakeTimer(TimerHandle):

    def __init__(self, due: float, callback: Callable[[], None], interval: Optional[float] = None):
        self.due = due
        self.callback = callback
        self.interval = interval
        self._active = True

    def cancel(self):
        self._active = False

    @property
    def active(self) -> bool:
        return self._active


class FakeScheduler(Scheduler):
    """Manual clock: timers only fire when the test advances time."""

    def __init__(self):
        self.now = 0.0
        self.timers: List[FakeTimer] = []

    def call_later(self, delay, callback):
        timer = FakeTimer(self.now + delay, callback)
        self.timers.append(timer)
        return timer

    def call_every(self, interval, callback):
        timer = FakeTimer(self.now + interval, callback, interval)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> List[FakeTimer]:
        return [timer for timer in self.timers if timer.active]

    def advance(self, seconds: float):
        """Move the clock forward, firing every timer that falls due."""
        target = self.now + seconds
        while True:
            due = [timer for timer in self.pending if timer.due <= target]
            if not due:
                break
            timer = min(due, key=lambda t: t.due)
            self.now = timer.due
            if timer.interval is None:
                timer._active = False
            else:
                timer.due += timer.interval
            timer.callback()
        self.now = target

    def run_until(self, predicate: Callable[[], bool], step: float = 1.0, limit: int = 5000):
        for _ in range(limit):
            if predicate():
                return
            self.advance(step)
        raise AssertionError("condition never became true")


def cards(*card_ids: str) -> List[Card]:
    return [parse_card(card_id) for card_id in card_ids]


def make_state(
    hands: Sequence[Sequence[str]],
    turn: Optional[int] = None,
    first_play: bool = False,
    last_play: Optional[PlayRecord] = None,
    phase: str = PHASE_PLAYING,
) -> RoomState:
    """Build a room in the given phase from fixed hands, one list of ids per seat."""
    parsed = [cards(*hand) for hand in hands]
    assignment = determine_teams(parsed)
    state = RoomState(id="TEST", host_id="p0", phase=phase)
    state.seats = [Seat(id=f"p{i}", name=f"Player {i}", seat=i) for i in range(NUM_SEATS)]
    state.hands = parsed
    state.teams = assignment.teams
    state.heart_three_seat = assignment.heart_three_seat
    state.diamond_three_seat = assignment.diamond_three_seat
    state.opening_seat = find_opening_seat(parsed)
    state.turn = state.opening_seat if turn is None else turn
    state.first_play = first_play
    state.last_play = last_play
    state.last_actions = [None] * NUM_SEATS
    state.revealed = [[] for _ in range(NUM_SEATS)]
    if assignment.diamond_three_seat >= 0:
        state.revealed[assignment.diamond_three_seat].append(parse_card(DIAMOND_THREE))
    return state


@pytest.fixture
def scheduler():
    return FakeScheduler()
