"""
Game rule configuration and validation.
"""

import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from .constants import BOT_LEVELS, BOT_NORMAL


ENV_PREFIX = "RED3_"


class RuleConfig(BaseModel):
    """Configuration for game rules, pacing and automated players."""

    max_players: int = Field(
        default=5,
        ge=5,
        le=5,
        description="Seats per room (the deck is dealt 10 cards to each of 5 seats)"
    )
    starting_score: int = Field(
        default=100,
        description="Score every seat starts with when it joins a room"
    )
    reveal_seconds: int = Field(
        default=10,
        ge=1,
        le=60,
        description="Length of the reveal countdown in ticks of one second"
    )
    deal_delay: float = Field(
        default=1.0,
        ge=0.0,
        le=10.0,
        description="Presentation delay between dealing and the reveal phase"
    )
    bot_delay_min: float = Field(
        default=1.0,
        ge=0.0,
        description="Shortest bot thinking time in seconds"
    )
    bot_delay_max: float = Field(
        default=2.0,
        ge=0.0,
        description="Longest bot thinking time in seconds"
    )
    bot_play_probability: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Chance a bot answers a reference play it can beat"
    )
    bot_reveal_heart_probability: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Chance a bot shows its hearts 3 during the reveal phase"
    )
    bot_reveal_black_probability: float = Field(
        default=0.3,
        ge=0.0,
        le=1.0,
        description="Chance a bot shows each black 3 during the reveal phase"
    )
    bot_level: str = Field(
        default=BOT_NORMAL,
        description="Strategy used by automated seats: easy, normal or hard"
    )

    @field_validator('bot_delay_max')
    @classmethod
    def validate_bot_delay(cls, v, info):
        """Validate the delay window is not inverted."""
        delay_min = info.data.get('bot_delay_min', 0.0)
        if v < delay_min:
            raise ValueError(f'bot_delay_max ({v}) must be >= bot_delay_min ({delay_min})')
        return v

    @field_validator('bot_level')
    @classmethod
    def validate_bot_level(cls, v):
        """Validate the bot level is a known one."""
        level = v.strip().lower()
        if level not in BOT_LEVELS:
            raise ValueError(f'bot_level must be one of {", ".join(BOT_LEVELS)}, got {v!r}')
        return level


# Default configuration instance
default_rules = RuleConfig()


def create_rules(**overrides) -> RuleConfig:
    """Create a RuleConfig with optional overrides."""
    config_dict = default_rules.model_dump()
    config_dict.update(overrides)
    return RuleConfig(**config_dict)


def rules_from_env(environ: Optional[Mapping[str, str]] = None) -> RuleConfig:
    """Build a RuleConfig from RED3_* environment variables."""
    environ = os.environ if environ is None else environ
    overrides = {}
    for name in RuleConfig.model_fields:
        raw = environ.get(f"{ENV_PREFIX}{name.upper()}")
        if raw is not None:
            overrides[name] = raw
    return create_rules(**overrides)
