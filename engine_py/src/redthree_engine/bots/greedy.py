"""
Greedy bot: sheds its cheapest legal play.
"""

import random
from typing import List, Optional

from .base import BaseBot, BotAction
from ..comparator import can_beat
from ..models import Combination, RoomState
from ..rules import RuleConfig, default_rules


class GreedyBot(BaseBot):
    """
    Bot that always plays as cheaply as it can.

    Strategy:
    - When leading, play the shortest and weakest legal combination
    - When answering, beat the table with the weakest combination that
      does so, but only with probability play_probability
    - Pass whenever nothing beats the table
    """

    def __init__(self, seat: int, rules: RuleConfig = default_rules,
                 rng: Optional[random.Random] = None):
        super().__init__(seat, rng)
        self.play_probability = rules.bot_play_probability
        self.reveal_heart_probability = rules.bot_reveal_heart_probability
        self.reveal_black_probability = rules.bot_reveal_black_probability
        self.delay_range = (rules.bot_delay_min, rules.bot_delay_max)

    def choose_action(self, state: RoomState) -> Optional[BotAction]:
        if not self.is_my_turn(state):
            return None

        valid_plays = self.get_valid_plays(state)

        if self.is_leading(state):
            best = self.cheapest(valid_plays)
            if best is None:
                # Only reachable with an empty hand
                return None
            return BotAction.play(best.card_ids)

        if not valid_plays:
            return BotAction.pass_turn()

        if self.rng.random() >= self.play_probability:
            return BotAction.pass_turn()

        reference = self.get_reference(state)
        beats = [play for play in valid_plays if can_beat(play, reference)]
        if not beats:
            return BotAction.pass_turn()
        best = min(beats, key=lambda play: (play.value, len(play.cards)))
        return BotAction.play(best.card_ids)

    def choose_reveals(self, state: RoomState) -> List[BotAction]:
        actions = []
        for card in self.get_hand(state):
            if card.is_heart_three and self.rng.random() < self.reveal_heart_probability:
                actions.append(BotAction.reveal(card.id))
            elif card.is_black_three and self.rng.random() < self.reveal_black_probability:
                actions.append(BotAction.reveal(card.id))
        return actions

    @staticmethod
    def cheapest(plays: List[Combination]) -> Optional[Combination]:
        if not plays:
            return None
        return min(plays, key=lambda play: (len(play.cards), play.value))
