"""Game models and data structures"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .constants import (
    BLACK_SUITS, HEARTS, DIAMONDS, JOKER, JOKER_IDS, PHASE_WAITING, RED_SUITS,
    TYPE_INVALID, BOMB_TYPES, card_label, card_value, split_card_id,
)


@dataclass(frozen=True)
class Card:
    suit: str
    rank: int

    @property
    def id(self) -> str:
        if self.suit == JOKER:
            return JOKER_IDS[self.rank]
        return f"{card_label(self.rank)}{self.suit}"

    @property
    def value(self) -> int:
        return card_value(self.suit, self.rank)

    @property
    def is_joker(self) -> bool:
        return self.suit == JOKER

    @property
    def is_red_three(self) -> bool:
        return self.rank == 3 and self.suit in RED_SUITS

    @property
    def is_black_three(self) -> bool:
        return self.rank == 3 and self.suit in BLACK_SUITS

    @property
    def is_heart_three(self) -> bool:
        return self.rank == 3 and self.suit == HEARTS

    @property
    def is_diamond_three(self) -> bool:
        return self.rank == 3 and self.suit == DIAMONDS

    @property
    def is_opening_card(self) -> bool:
        return self.rank == 5 and self.suit == HEARTS

    def __str__(self) -> str:
        return self.id


def parse_card(card_id: str) -> Card:
    suit, rank = split_card_id(card_id)
    return Card(suit=suit, rank=rank)


@dataclass(frozen=True)
class Combination:
    type: str
    value: int
    cards: Tuple[Card, ...] = ()

    @property
    def is_valid(self) -> bool:
        return self.type != TYPE_INVALID

    @property
    def is_bomb(self) -> bool:
        return self.type in BOMB_TYPES

    @property
    def card_ids(self) -> List[str]:
        return [card.id for card in self.cards]


@dataclass
class Seat:
    id: str  # connection handle, or a generated id for bots
    name: str
    seat: int
    is_bot: bool = False
    score: int = 100
    connected: bool = True


@dataclass
class PlayRecord:
    seat: int
    cards: List[Card] = field(default_factory=list)
    passed: bool = False


@dataclass
class GameResult:
    winner_team: Optional[str]
    is_draw: bool = False
    bonus_score: int = 0
    final_base_score: int = 0
    score_changes: List[int] = field(default_factory=list)
    last_finisher: Optional[int] = None


@dataclass
class TeamAssignment:
    teams: List[str]
    heart_three_seat: int = -1
    diamond_three_seat: int = -1


@dataclass
class DealResult:
    hands: List[List[Card]]
    teams: List[str]
    leading_seat: int
    heart_three_seat: int
    diamond_three_seat: int
    revealed_cards: List[List[Card]]


@dataclass
class RoomState:
    id: str
    host_id: Optional[str] = None
    version: int = 0
    deal_id: int = 0
    phase: str = PHASE_WAITING  # waiting|dealing|revealing|playing|round_end
    seats: List[Seat] = field(default_factory=list)
    hands: List[List[Card]] = field(default_factory=list)
    teams: List[str] = field(default_factory=list)
    heart_three_seat: int = -1
    diamond_three_seat: int = -1
    opening_seat: int = -1
    turn: Optional[int] = None
    last_play: Optional[PlayRecord] = None
    last_actions: List[Optional[PlayRecord]] = field(default_factory=list)
    pass_count: int = 0
    round_number: int = 1
    first_play: bool = True
    finished: List[int] = field(default_factory=list)
    revealed: List[List[Card]] = field(default_factory=list)
    reveal_timer: int = 0
    base_score: int = 1
    result: Optional[GameResult] = None
    game_log: List[str] = field(default_factory=list)

    def seat_for(self, handle: str) -> Optional[Seat]:
        for seat in self.seats:
            if seat.id == handle:
                return seat
        return None

    @property
    def human_count(self) -> int:
        return sum(1 for seat in self.seats if not seat.is_bot)

    @property
    def scores(self) -> Dict[int, int]:
        return {seat.seat: seat.score for seat in self.seats}
