# engine_py/src/redthree_engine/teams.py

from typing import List, Sequence

from .constants import TEAM_OTHER, TEAM_RED
from .models import Card, TeamAssignment


def get_player_team(hand: Sequence[Card]) -> str:
    return TEAM_RED if any(card.is_red_three for card in hand) else TEAM_OTHER


def determine_teams(hands: Sequence[Sequence[Card]]) -> TeamAssignment:
    """
    Resolve teams and the two special seats from freshly dealt hands.

    Any seat holding a red 3 plays for the red team. The hearts 3 holder
    scores double and the diamonds 3 holder must reveal it. Either seat is
    -1 when the card was not dealt.
    """
    assignment = TeamAssignment(teams=[get_player_team(hand) for hand in hands])

    for seat, hand in enumerate(hands):
        if any(card.is_heart_three for card in hand):
            assignment.heart_three_seat = seat
        if any(card.is_diamond_three for card in hand):
            assignment.diamond_three_seat = seat

    return assignment


def find_opening_seat(hands: Sequence[Sequence[Card]]) -> int:
    """Seat holding the hearts 5, which leads the first round."""
    for seat, hand in enumerate(hands):
        if any(card.is_opening_card for card in hand):
            return seat
    return -1


def team_roster(teams: Sequence[str], team: str) -> List[int]:
    return [seat for seat, seat_team in enumerate(teams) if seat_team == team]


def opposing_team(team: str) -> str:
    return TEAM_OTHER if team == TEAM_RED else TEAM_RED
