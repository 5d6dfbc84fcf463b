"""
Legal play enumeration, used for play hints and by the bots.
"""

from collections import defaultdict
from itertools import combinations
from typing import Dict, List, Optional, Sequence

from .comparator import PlayLike, can_beat, classify
from .models import Card, Combination


def _group_by_rank(hand: Sequence[Card]) -> Dict[int, List[Card]]:
    groups: Dict[int, List[Card]] = defaultdict(list)
    for card in hand:
        groups[card.rank].append(card)
    return groups


def _collect(candidates, reference: PlayLike) -> List[Combination]:
    plays = []
    seen = set()
    for cards in candidates:
        key = frozenset(cards)
        if key in seen:
            continue
        seen.add(key)
        combo = classify(cards)
        if combo.is_valid and can_beat(combo, reference):
            plays.append(combo)
    return plays


def find_valid_singles(hand: Sequence[Card], reference: PlayLike = None) -> List[Combination]:
    return _collect(((card,) for card in hand), reference)


def find_valid_pairs(hand: Sequence[Card], reference: PlayLike = None) -> List[Combination]:
    """Every same-rank pair that is not a bomb."""
    candidates = []
    for group in _group_by_rank(hand).values():
        for cards in combinations(group, 2):
            if classify(cards).is_bomb:
                continue
            candidates.append(cards)
    return _collect(candidates, reference)


def find_valid_bombs(hand: Sequence[Card], reference: PlayLike = None) -> List[Combination]:
    """Three and four of a kind, plus the red 3 pair and the joker pair."""
    candidates = []
    for group in _group_by_rank(hand).values():
        for size in (3, 4):
            candidates.extend(combinations(group, size))

    red_threes = [card for card in hand if card.is_red_three]
    if len(red_threes) == 2:
        candidates.append(tuple(red_threes))

    jokers = [card for card in hand if card.is_joker]
    if len(jokers) == 2:
        candidates.append(tuple(jokers))

    return _collect(candidates, reference)


def find_all_valid_plays(
    hand: Sequence[Card],
    reference: PlayLike = None,
    must_contain: Optional[Card] = None
) -> List[Combination]:
    """
    Enumerate every legal play from a hand.

    Args:
        hand: Cards held by the seat
        reference: Combination to beat, or None when leading
        must_contain: Card every returned play has to include

    Returns:
        Singles, then pairs, then bombs
    """
    plays = (
        find_valid_singles(hand, reference)
        + find_valid_pairs(hand, reference)
        + find_valid_bombs(hand, reference)
    )
    if must_contain is not None:
        plays = [play for play in plays if must_contain in play.cards]
    return plays
