"""
Base bot interface and utilities.
"""

import random
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from ..comparator import classify
from ..constants import OPENING_CARD, PHASE_PLAYING
from ..hints import find_all_valid_plays
from ..models import Card, Combination, RoomState, parse_card
from ..validate import has_free_lead


class BotAction:
    """Represents a bot action."""

    def __init__(self, action_type: str, **kwargs):
        self.type = action_type
        self.data = kwargs

    @classmethod
    def play(cls, cards: List[str]) -> 'BotAction':
        """Create a play action."""
        return cls('play', cards=cards)

    @classmethod
    def pass_turn(cls) -> 'BotAction':
        """Create a pass action."""
        return cls('pass')

    @classmethod
    def reveal(cls, card: str) -> 'BotAction':
        """Create a reveal toggle action."""
        return cls('reveal', card=card)

    def __repr__(self) -> str:
        return f"BotAction({self.type!r}, {self.data!r})"


class BaseBot(ABC):
    """Abstract base class for automated seats."""

    # Thinking time window in seconds
    delay_range: Tuple[float, float] = (1.0, 2.0)

    def __init__(self, seat: int, rng: Optional[random.Random] = None):
        self.seat = seat
        self.rng = rng or random.Random()

    @abstractmethod
    def choose_action(self, state: RoomState) -> Optional[BotAction]:
        """
        Choose a play or pass for the current turn.

        Args:
            state: Current room state

        Returns:
            BotAction to take, or None if it is not this bot's turn
        """
        pass

    def choose_reveals(self, state: RoomState) -> List[BotAction]:
        """Reveal toggles to submit when the reveal phase opens."""
        return []

    def get_hand(self, state: RoomState) -> List[Card]:
        if self.seat < len(state.hands):
            return state.hands[self.seat]
        return []

    def is_my_turn(self, state: RoomState) -> bool:
        return state.phase == PHASE_PLAYING and state.turn == self.seat

    def is_leading(self, state: RoomState) -> bool:
        """True when the bot may play anything, including the opening play."""
        return state.first_play or has_free_lead(state, self.seat)

    def get_reference(self, state: RoomState) -> Optional[Combination]:
        if self.is_leading(state):
            return None
        return classify(state.last_play.cards)

    def get_valid_plays(self, state: RoomState) -> List[Combination]:
        """All legal plays for this bot's hand in the current state."""
        hand = self.get_hand(state)
        if not hand:
            return []
        must_contain = parse_card(OPENING_CARD) if state.first_play else None
        return find_all_valid_plays(hand, self.get_reference(state), must_contain)
