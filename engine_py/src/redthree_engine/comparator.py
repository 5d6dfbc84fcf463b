"""
Card-type classification and beat comparison.
"""

from typing import Iterable, Optional, Sequence, Union

from .constants import (
    BLACK_THREE_VALUE, FOUR_BOMB_OFFSET, JOKER_BOMB_VALUE, RED_PAIR_BOMB_VALUE,
    THREE_BOMB_OFFSET, TYPE_FOUR_BOMB, TYPE_INVALID, TYPE_JOKER_BOMB, TYPE_PAIR,
    TYPE_RED_PAIR_BOMB, TYPE_SINGLE, TYPE_THREE_BOMB,
)
from .models import Card, Combination

PlayLike = Union[Combination, Sequence[Card], None]


def get_mixed_cards_value(cards: Sequence[Card]) -> int:
    """
    Strength of a same-rank group.

    Mixing a red 3 with a black 3 drops the whole group to the black 3
    strength; otherwise the weakest member decides.
    """
    if cards[0].rank == 3:
        has_red = any(card.is_red_three for card in cards)
        has_black = any(card.is_black_three for card in cards)
        if has_red and has_black:
            return BLACK_THREE_VALUE
    return min(card.value for card in cards)


def _same_rank(cards: Sequence[Card]) -> bool:
    return all(card.rank == cards[0].rank for card in cards)


def classify(cards: Iterable[Card]) -> Combination:
    """
    Classify a set of cards into a combination.

    Returns:
        Combination with type and strength value; invalid combinations
        carry a value of 0
    """
    cards = tuple(cards)
    count = len(cards)

    if count == 0 or len(set(cards)) != count:
        return Combination(TYPE_INVALID, 0, cards)

    if count == 1:
        return Combination(TYPE_SINGLE, cards[0].value, cards)

    if count == 2:
        if cards[0].is_joker and cards[1].is_joker:
            return Combination(TYPE_JOKER_BOMB, JOKER_BOMB_VALUE, cards)
        if cards[0].is_red_three and cards[1].is_red_three:
            return Combination(TYPE_RED_PAIR_BOMB, RED_PAIR_BOMB_VALUE, cards)
        if _same_rank(cards):
            return Combination(TYPE_PAIR, get_mixed_cards_value(cards), cards)
        return Combination(TYPE_INVALID, 0, cards)

    if count == 3 and _same_rank(cards):
        return Combination(TYPE_THREE_BOMB, get_mixed_cards_value(cards) + THREE_BOMB_OFFSET, cards)

    if count == 4 and _same_rank(cards):
        return Combination(TYPE_FOUR_BOMB, get_mixed_cards_value(cards) + FOUR_BOMB_OFFSET, cards)

    return Combination(TYPE_INVALID, 0, cards)


def _as_combination(play: PlayLike) -> Optional[Combination]:
    if play is None:
        return None
    if isinstance(play, Combination):
        return play
    if len(play) == 0:
        return None
    return classify(play)


def can_beat(candidate: PlayLike, reference: PlayLike = None) -> bool:
    """
    Check whether candidate may be played on top of reference.

    With no reference (leading a round) any valid combination may be played.
    Bombs beat every non-bomb and each other by strength; non-bombs only beat
    a stronger combination of the same type.
    """
    mine = _as_combination(candidate)
    if mine is None or not mine.is_valid:
        return False

    theirs = _as_combination(reference)
    if theirs is None:
        return True

    if mine.is_bomb:
        if not theirs.is_bomb:
            return True
        return mine.value > theirs.value

    if theirs.is_bomb:
        return False

    if mine.type == theirs.type:
        return mine.value > theirs.value

    return False


def contains_opening_card(cards: Iterable[Card]) -> bool:
    """Check if the cards include the hearts 5."""
    return any(card.is_opening_card for card in cards)
