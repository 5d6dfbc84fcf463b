"""
Card shuffling and dealing utilities.
"""

import random
from typing import Iterable, List, Optional

from .constants import BIG_JOKER, DECK_SIZE, JOKER, NUM_SEATS, RANKS, SMALL_JOKER, SUITS
from .models import Card


def create_deck() -> List[Card]:
    """Create the 50-card deck: four suits without sixes, plus both jokers."""
    deck = [Card(suit=suit, rank=rank) for suit in SUITS for rank in RANKS]
    deck.append(Card(suit=JOKER, rank=SMALL_JOKER))
    deck.append(Card(suit=JOKER, rank=BIG_JOKER))
    return deck


def shuffle_deck(
    deck: List[Card],
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None
) -> List[Card]:
    """
    Shuffle a deck deterministically if a seed or generator is provided.

    Args:
        deck: Cards to shuffle
        seed: Optional seed for deterministic shuffling
        rng: Optional random generator, takes precedence over seed

    Returns:
        Shuffled copy of the deck
    """
    deck_copy = deck.copy()

    if rng is None:
        rng = random.Random(seed) if seed is not None else random
    rng.shuffle(deck_copy)

    return deck_copy


def deal_cards(deck: List[Card], num_seats: int = NUM_SEATS) -> List[List[Card]]:
    """
    Deal cards round-robin to every seat.

    Args:
        deck: Shuffled deck of cards
        num_seats: Number of seats to deal to

    Returns:
        One hand per seat, each sorted by descending strength
    """
    hands: List[List[Card]] = [[] for _ in range(num_seats)]
    for i, card in enumerate(deck):
        hands[i % num_seats].append(card)

    return [sort_hand(hand) for hand in hands]


def sort_hand(hand: Iterable[Card]) -> List[Card]:
    """Sort a hand from strongest to weakest for display."""
    return sorted(hand, key=lambda card: (card.value, card.suit), reverse=True)


def validate_deck_integrity(hands: List[List[Card]]) -> bool:
    """Check the dealt hands together form exactly one full deck."""
    dealt = [card for hand in hands for card in hand]
    if len(dealt) != DECK_SIZE:
        return False
    if len(set(dealt)) != DECK_SIZE:
        return False
    return set(dealt) == set(create_deck())
