"""
Strategic bot: holds its bombs and reveals by hand strength.
"""

import random
from collections import Counter
from typing import List, Optional, Sequence

from .base import BaseBot, BotAction
from ..models import Card, Combination, RoomState
from ..rules import RuleConfig, default_rules

HEART_REVEAL_STRENGTH = 0.6
BLACK_REVEAL_STRENGTH = 0.7
# Hand sizes at which the bot stops saving cards
RUSH_HAND_SIZE = 3
BOMB_HAND_SIZE = 5


def calculate_hand_strength(hand: Sequence[Card]) -> float:
    """
    Rough strength of a hand between 0 and 1.

    Every card adds a weight by its single-card value, and every rank held
    two, three or four times adds a bonus for the pair or bomb it makes.
    """
    strength = 0.0
    for card in hand:
        if card.value >= 98:
            strength += 0.15
        elif card.value >= 95:
            strength += 0.1
        elif card.value >= 90:
            strength += 0.05
        else:
            strength += 0.02

    for count in Counter(card.rank for card in hand).values():
        if count == 4:
            strength += 0.3
        elif count == 3:
            strength += 0.2
        elif count == 2:
            strength += 0.05

    return min(1.0, strength)


def _smallest(plays: List[Combination]) -> Combination:
    return min(plays, key=lambda play: (play.value, len(play.cards)))


class StrategicBot(BaseBot):
    """
    Hardest automated seat.

    Strategy:
    - With three cards or fewer, play the strongest legal combination
    - When leading, shed the weakest non-bomb
    - When answering, use the weakest play of the same type; bomb only
      once the hand is down to five cards
    - Reveal a 3 only when the hand is strong enough to carry the stake
    """

    delay_range = (1.0, 2.0)

    def __init__(self, seat: int, rules: RuleConfig = default_rules,
                 rng: Optional[random.Random] = None):
        super().__init__(seat, rng)

    def choose_action(self, state: RoomState) -> Optional[BotAction]:
        if not self.is_my_turn(state):
            return None

        leading = self.is_leading(state)
        valid_plays = self.get_valid_plays(state)
        if not valid_plays:
            return None if leading else BotAction.pass_turn()

        hand = self.get_hand(state)
        if len(hand) <= RUSH_HAND_SIZE:
            best = max(valid_plays, key=lambda play: (play.value, len(play.cards)))
            return BotAction.play(best.card_ids)

        if leading:
            non_bombs = [play for play in valid_plays if not play.is_bomb]
            return BotAction.play(_smallest(non_bombs or valid_plays).card_ids)

        reference = self.get_reference(state)
        same_type = [play for play in valid_plays if play.type == reference.type]
        if same_type:
            return BotAction.play(_smallest(same_type).card_ids)

        bombs = [play for play in valid_plays if play.is_bomb]
        if bombs and len(hand) <= BOMB_HAND_SIZE:
            return BotAction.play(_smallest(bombs).card_ids)
        return BotAction.pass_turn()

    def choose_reveals(self, state: RoomState) -> List[BotAction]:
        hand = self.get_hand(state)
        strength = calculate_hand_strength(hand)
        actions = []
        for card in hand:
            if card.is_heart_three and strength > HEART_REVEAL_STRENGTH:
                actions.append(BotAction.reveal(card.id))
            elif card.is_black_three and strength > BLACK_REVEAL_STRENGTH:
                actions.append(BotAction.reveal(card.id))
        return actions
