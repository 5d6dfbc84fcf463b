"""
Bot construction by configured level.
"""

import random
from typing import Dict, Optional, Type

from .base import BaseBot
from .greedy import GreedyBot
from .random_bot import RandomBot
from .strategic import StrategicBot
from ..constants import BOT_EASY, BOT_HARD, BOT_NORMAL
from ..rules import RuleConfig, default_rules

BOT_CLASSES: Dict[str, Type[BaseBot]] = {
    BOT_EASY: RandomBot,
    BOT_NORMAL: GreedyBot,
    BOT_HARD: StrategicBot,
}


def create_bot(seat: int, rules: RuleConfig = default_rules,
               rng: Optional[random.Random] = None) -> BaseBot:
    """Build the bot for a seat at the level the rules ask for."""
    return BOT_CLASSES[rules.bot_level](seat, rules, rng)
