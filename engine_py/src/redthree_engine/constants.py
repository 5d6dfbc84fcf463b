"""Game constants and card utilities"""

from typing import Dict, List, Tuple

NUM_SEATS = 5
HAND_SIZE = 10
DECK_SIZE = 50

# Suits
HEARTS = 'H'
DIAMONDS = 'D'
SPADES = 'S'
CLUBS = 'C'
JOKER = 'JOKER'
SUITS = [HEARTS, DIAMONDS, SPADES, CLUBS]
RED_SUITS = (HEARTS, DIAMONDS)
BLACK_SUITS = (SPADES, CLUBS)

# Ranks (no sixes in this game)
RANKS = [1, 2, 3, 4, 5, 7, 8, 9, 10, 11, 12, 13]
SMALL_JOKER = 14
BIG_JOKER = 15

RANK_LABELS: Dict[int, str] = {
    1: 'A', 2: '2', 3: '3', 4: '4', 5: '5', 7: '7', 8: '8', 9: '9',
    10: '10', 11: 'J', 12: 'Q', 13: 'K',
}
LABEL_RANKS: Dict[str, int] = {label: rank for rank, label in RANK_LABELS.items()}

JOKER_IDS: Dict[int, str] = {SMALL_JOKER: 'JOKERs', BIG_JOKER: 'JOKERb'}

# Single card strength, highest first:
# big joker > small joker > red 3 > 4 > black 3 > 2 > A > K > ... > 7 > 5
BIG_JOKER_VALUE = 100
SMALL_JOKER_VALUE = 99
RED_THREE_VALUE = 98
FOUR_VALUE = 97
BLACK_THREE_VALUE = 96
PLAIN_RANK_VALUES: Dict[int, int] = {
    2: 95, 1: 94, 13: 93, 12: 92, 11: 91, 10: 90, 9: 89, 8: 88, 7: 87, 5: 86,
}

# Combination strength bands
THREE_BOMB_OFFSET = 500
FOUR_BOMB_OFFSET = 600
RED_PAIR_BOMB_VALUE = 999
JOKER_BOMB_VALUE = 1000

# Combination types
TYPE_SINGLE = 'single'
TYPE_PAIR = 'pair'
TYPE_THREE_BOMB = 'bomb3'
TYPE_FOUR_BOMB = 'bomb4'
TYPE_RED_PAIR_BOMB = 'bombR3'
TYPE_JOKER_BOMB = 'bombJ'
TYPE_INVALID = 'invalid'
BOMB_TYPES = (TYPE_THREE_BOMB, TYPE_FOUR_BOMB, TYPE_RED_PAIR_BOMB, TYPE_JOKER_BOMB)

# Special cards
OPENING_CARD = '5H'
HEART_THREE = '3H'
DIAMOND_THREE = '3D'

# Teams
TEAM_RED = 'red'
TEAM_OTHER = 'other'
TEAMS = (TEAM_RED, TEAM_OTHER)

# Phases
PHASE_WAITING = 'waiting'
PHASE_DEALING = 'dealing'
PHASE_REVEALING = 'revealing'
PHASE_PLAYING = 'playing'
PHASE_ROUND_END = 'round_end'

# Bot levels
BOT_EASY = 'easy'
BOT_NORMAL = 'normal'
BOT_HARD = 'hard'
BOT_LEVELS = (BOT_EASY, BOT_NORMAL, BOT_HARD)

# Turns rotate towards the lower seat index
TURN_DIRECTION = -1


def card_label(rank: int) -> str:
    return RANK_LABELS[rank]


def split_card_id(card_id: str) -> Tuple[str, int]:
    """Split a card id such as "10S" or "JOKERb" into (suit, rank)."""
    for rank, joker_id in JOKER_IDS.items():
        if card_id == joker_id:
            return JOKER, rank
    if len(card_id) < 2:
        raise ValueError(f"Invalid card ID: {card_id}")
    label, suit = card_id[:-1], card_id[-1]
    if suit not in SUITS or label not in LABEL_RANKS:
        raise ValueError(f"Invalid card ID: {card_id}")
    return suit, LABEL_RANKS[label]


def all_card_ids() -> List[str]:
    ids = [f"{RANK_LABELS[rank]}{suit}" for suit in SUITS for rank in RANKS]
    ids.extend(JOKER_IDS.values())
    return ids


def card_value(suit: str, rank: int) -> int:
    """Single-card strength used for every comparison in the game."""
    if rank == BIG_JOKER:
        return BIG_JOKER_VALUE
    if rank == SMALL_JOKER:
        return SMALL_JOKER_VALUE
    if rank == 3:
        return RED_THREE_VALUE if suit in RED_SUITS else BLACK_THREE_VALUE
    if rank == 4:
        return FOUR_VALUE
    return PLAIN_RANK_VALUES.get(rank, 0)
