"""
Random bot: plays any legal combination.
"""

import random
from typing import Optional

from .base import BaseBot, BotAction
from ..models import RoomState
from ..rules import RuleConfig, default_rules


class RandomBot(BaseBot):
    """
    Easiest automated seat.

    Picks uniformly among the legal plays and passes only when nothing
    beats the table. Never shows an optional 3.
    """

    delay_range = (0.5, 1.0)

    def __init__(self, seat: int, rules: RuleConfig = default_rules,
                 rng: Optional[random.Random] = None):
        super().__init__(seat, rng)

    def choose_action(self, state: RoomState) -> Optional[BotAction]:
        if not self.is_my_turn(state):
            return None

        valid_plays = self.get_valid_plays(state)
        if not valid_plays:
            if self.is_leading(state):
                return None
            return BotAction.pass_turn()

        play = self.rng.choice(valid_plays)
        return BotAction.play(play.card_ids)
