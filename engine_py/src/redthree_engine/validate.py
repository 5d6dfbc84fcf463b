"""
Validation for plays, passes and reveal toggles.
"""

from typing import List, Optional

from .comparator import can_beat, classify, contains_opening_card
from .constants import PHASE_PLAYING, PHASE_REVEALING
from .errors import (
    CANNOT_BEAT_REFERENCE, INVALID_COMBINATION, INVALID_SEAT, MUST_CONTAIN_OPENING_CARD,
    MUST_PLAY, NOT_YOUR_TURN, OWNERSHIP_MISMATCH, WRONG_PHASE,
)
from .models import Card, Combination, RoomState, parse_card
from .rotation import seat_id


class ValidationResult:
    """Result of validating a player action."""

    def __init__(
        self,
        valid: bool,
        error_code: Optional[str] = None,
        error_message: Optional[str] = None,
        combination: Optional[Combination] = None,
        cards: Optional[List[Card]] = None
    ):
        self.valid = valid
        self.error_code = error_code
        self.error_message = error_message
        self.combination = combination
        self.cards = cards or []

    @classmethod
    def success(cls, combination: Optional[Combination] = None,
                cards: Optional[List[Card]] = None) -> 'ValidationResult':
        """Create a successful validation result."""
        return cls(valid=True, combination=combination, cards=cards)

    @classmethod
    def error(cls, error_code: str, error_message: str) -> 'ValidationResult':
        """Create an error validation result."""
        return cls(valid=False, error_code=error_code, error_message=error_message)


def validate_ownership(hand: List[Card], cards: List[Card]) -> bool:
    """Check the seat holds every card, each at most once."""
    return len(set(cards)) == len(cards) and all(card in hand for card in cards)


def has_free_lead(state: RoomState, seat: int) -> bool:
    """True when the seat may play anything (no reference, or its own)."""
    return state.last_play is None or state.last_play.seat == seat


def _check_seat(seat: int) -> Optional[ValidationResult]:
    try:
        seat_id(seat)
    except ValueError as e:
        return ValidationResult.error(INVALID_SEAT, str(e))
    return None


def _check_turn(state: RoomState, seat: int) -> Optional[ValidationResult]:
    error = _check_seat(seat)
    if error:
        return error
    if state.phase != PHASE_PLAYING:
        return ValidationResult.error(
            WRONG_PHASE,
            f"Game is not in play phase (current: {state.phase})"
        )
    if state.turn != seat:
        return ValidationResult.error(
            NOT_YOUR_TURN,
            f"It's not your turn (current turn: seat {state.turn})"
        )
    return None


def validate_play(state: RoomState, seat: int, card_ids: List[str]) -> ValidationResult:
    """
    Validate a card play attempt.

    Args:
        state: Current room state
        seat: Seat attempting the play
        card_ids: Card ids being played

    Returns:
        ValidationResult carrying the classified combination on success
    """
    error = _check_turn(state, seat)
    if error:
        return error

    try:
        cards = [parse_card(card_id) for card_id in card_ids]
    except ValueError as e:
        return ValidationResult.error(INVALID_COMBINATION, str(e))

    if not validate_ownership(state.hands[seat], cards):
        return ValidationResult.error(
            OWNERSHIP_MISMATCH,
            "Player does not own all specified cards"
        )

    combination = classify(cards)
    if not combination.is_valid:
        return ValidationResult.error(
            INVALID_COMBINATION,
            "Cards do not form a valid combination"
        )

    if state.first_play and not contains_opening_card(cards):
        return ValidationResult.error(
            MUST_CONTAIN_OPENING_CARD,
            "The first play of the game must contain the 5 of hearts"
        )

    if not has_free_lead(state, seat):
        if not can_beat(combination, classify(state.last_play.cards)):
            return ValidationResult.error(
                CANNOT_BEAT_REFERENCE,
                "Play does not beat the cards on the table"
            )

    return ValidationResult.success(combination, cards)


def validate_pass(state: RoomState, seat: int) -> ValidationResult:
    """Validate a pass; leading seats have to play."""
    error = _check_turn(state, seat)
    if error:
        return error

    if state.first_play:
        return ValidationResult.error(MUST_PLAY, "The opening play cannot be passed")
    if has_free_lead(state, seat):
        return ValidationResult.error(MUST_PLAY, "You are leading this round and must play")

    return ValidationResult.success()


def validate_reveal(state: RoomState, seat: int, card_id: str) -> ValidationResult:
    """Validate a reveal toggle during the reveal phase."""
    error = _check_seat(seat)
    if error:
        return error

    if state.phase != PHASE_REVEALING:
        return ValidationResult.error(
            WRONG_PHASE,
            f"Cards can only be revealed in the reveal phase (current: {state.phase})"
        )

    try:
        card = parse_card(card_id)
    except ValueError as e:
        return ValidationResult.error(INVALID_COMBINATION, str(e))

    if card.rank != 3:
        return ValidationResult.error(INVALID_COMBINATION, "Only 3s can be revealed")
    if card.is_diamond_three:
        return ValidationResult.error(INVALID_COMBINATION, "The 3 of diamonds is always revealed")
    if card not in state.hands[seat]:
        return ValidationResult.error(OWNERSHIP_MISMATCH, f"You don't own {card_id}")

    return ValidationResult.success(cards=[card])
