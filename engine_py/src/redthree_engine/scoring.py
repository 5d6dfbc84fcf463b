"""
Score calculation for the reveal phase and the end of a round.
"""

from typing import List, Optional, Sequence, Union

from .models import Card, GameResult, RoomState

RevealedCards = Union[Sequence[Card], Sequence[Sequence[Card]]]


def _flatten(revealed: RevealedCards) -> List[Card]:
    flat: List[Card] = []
    for item in revealed:
        if isinstance(item, Card):
            flat.append(item)
        else:
            flat.extend(item)
    return flat


def calculate_base_score(revealed: RevealedCards) -> int:
    """
    Base score from the reveal phase.

    The diamonds 3 is always shown and is worth the starting 1 point; each
    revealed hearts 3 adds 2 and each revealed black 3 adds 1.

    Args:
        revealed: Revealed cards, either flat or one list per seat
    """
    base_score = 1
    for card in _flatten(revealed):
        if card.is_heart_three:
            base_score += 2
        elif card.is_black_three:
            base_score += 1
    return base_score


def calculate_bonus_score(
    teams: Sequence[str],
    finished: Sequence[int],
    hands: Sequence[Sequence[Card]],
    winner_team: str
) -> int:
    """Number of losing seats still holding cards."""
    bonus = 0
    for seat, team in enumerate(teams):
        if team == winner_team:
            continue
        if seat not in finished and seat < len(hands) and len(hands[seat]) > 0:
            bonus += 1
    return bonus


def calculate_score_changes(
    teams: Sequence[str],
    heart_three_seat: int,
    winner_team: Optional[str],
    final_base_score: int
) -> List[int]:
    """
    Per-seat score delta. The hearts 3 holder wins or loses double.
    A draw (no winner team) changes nothing.
    """
    if winner_team is None:
        return [0] * len(teams)

    changes = []
    for seat, team in enumerate(teams):
        change = final_base_score
        if seat == heart_three_seat:
            change *= 2
        if team != winner_team:
            change = -change
        changes.append(change)
    return changes


def calculate_full_scores(state: RoomState, winner_team: Optional[str]) -> GameResult:
    """Bonus, final base and deltas for the round held in state."""
    if winner_team is None:
        return GameResult(
            winner_team=None,
            is_draw=True,
            final_base_score=state.base_score,
            score_changes=[0] * len(state.teams),
        )

    bonus = calculate_bonus_score(state.teams, state.finished, state.hands, winner_team)
    final_base = state.base_score + bonus
    return GameResult(
        winner_team=winner_team,
        bonus_score=bonus,
        final_base_score=final_base,
        score_changes=calculate_score_changes(
            state.teams, state.heart_three_seat, winner_team, final_base
        ),
    )
