"""Per-room game session: dealing, reveal phase, turns, passes and round end"""

import logging
import random
import uuid
from dataclasses import dataclass
from typing import List, Optional

from .constants import (
    DIAMOND_THREE, NUM_SEATS, PHASE_DEALING, PHASE_PLAYING, PHASE_REVEALING,
    PHASE_ROUND_END, PHASE_WAITING, TEAMS,
)
from .errors import ALREADY_STARTED, ROOM_FULL, WRONG_PHASE
from .models import Combination, DealResult, GameResult, PlayRecord, RoomState, Seat, parse_card
from .rotation import RotationOrder, default_rotation
from .rules import RuleConfig, default_rules
from .scoring import calculate_base_score, calculate_full_scores
from .shuffle import create_deck, deal_cards, shuffle_deck, validate_deck_integrity
from .teams import determine_teams, find_opening_seat, opposing_team, team_roster
from .validate import validate_pass, validate_play, validate_reveal

logger = logging.getLogger(__name__)


@dataclass
class ActionResult:
    """Outcome of a state-changing operation on a room."""
    success: bool
    state: Optional[RoomState] = None
    error_code: Optional[str] = None
    error_message: Optional[str] = None
    combination: Optional[Combination] = None

    @classmethod
    def ok(cls, state: RoomState, combination: Optional[Combination] = None) -> 'ActionResult':
        return cls(success=True, state=state, combination=combination)

    @classmethod
    def fail(cls, state: RoomState, error_code: str, error_message: str) -> 'ActionResult':
        return cls(success=False, state=state, error_code=error_code, error_message=error_message)


def _seat_name(state: RoomState, seat: int) -> str:
    if 0 <= seat < len(state.seats):
        return state.seats[seat].name
    return f"Seat {seat}"


def _touch(state: RoomState, message: Optional[str] = None):
    state.version += 1
    if message:
        state.game_log.append(message)


# Seats

def create_room(room_id: str, host_id: Optional[str] = None, host_name: Optional[str] = None,
                rules: RuleConfig = default_rules) -> RoomState:
    state = RoomState(id=room_id, host_id=host_id)
    if host_id is not None:
        state.seats.append(Seat(id=host_id, name=host_name or "Host", seat=0, score=rules.starting_score))
    return state


def join_room(state: RoomState, handle: str, name: str, rules: RuleConfig = default_rules) -> ActionResult:
    """Seat a human participant in a waiting room."""
    if state.phase != PHASE_WAITING:
        return ActionResult.fail(state, ALREADY_STARTED, "Game has already started")
    if len(state.seats) >= rules.max_players:
        return ActionResult.fail(state, ROOM_FULL, "Room is full")

    if state.seat_for(handle) is None:
        state.seats.append(Seat(id=handle, name=name, seat=len(state.seats), score=rules.starting_score))
        if state.host_id is None:
            state.host_id = handle
        _touch(state, f"{name} joined the room")
    return ActionResult.ok(state)


def add_bot(state: RoomState, rules: RuleConfig = default_rules) -> Seat:
    seat_index = len(state.seats)
    bot = Seat(
        id=f"bot-{str(uuid.uuid4())[:8]}",
        name=f"Bot {seat_index}",
        seat=seat_index,
        is_bot=True,
        score=rules.starting_score,
    )
    state.seats.append(bot)
    return bot


def fill_with_bots(state: RoomState, rules: RuleConfig = default_rules) -> List[Seat]:
    """Backfill empty seats with bots; only called before a deal."""
    added = []
    while len(state.seats) < NUM_SEATS:
        added.append(add_bot(state, rules))
    return added


def remove_seat(state: RoomState, handle: str) -> Optional[Seat]:
    """
    Remove a participant.

    While waiting the seat is dropped and the others move up. Once cards are
    dealt the seat is handed to a bot so the round can still be finished.
    This is the one case where a bot takes a seat mid-round: humans can
    never join a room that has started, so empty seats are only backfilled
    when the game starts.
    """
    seat = state.seat_for(handle)
    if seat is None:
        return None

    if state.phase == PHASE_WAITING:
        state.seats.remove(seat)
        for index, remaining in enumerate(state.seats):
            remaining.seat = index
        if state.host_id == handle:
            humans = [s for s in state.seats if not s.is_bot]
            state.host_id = humans[0].id if humans else None
        _touch(state, f"{seat.name} left the room")
        return seat

    seat.is_bot = True
    seat.connected = False
    if state.host_id == handle:
        humans = [s for s in state.seats if not s.is_bot]
        state.host_id = humans[0].id if humans else None
    _touch(state, f"{seat.name} left, a bot takes over")
    return seat


# Dealing and reveal phase

def deal_round(state: RoomState, rng: Optional[random.Random] = None, seed: Optional[int] = None) -> DealResult:
    """
    Shuffle, deal and reset every per-round field.

    The room keeps its seats and their accumulated scores.
    """
    if len(state.seats) != NUM_SEATS:
        raise RuntimeError(f"Cannot deal with {len(state.seats)} seats")

    hands = deal_cards(shuffle_deck(create_deck(), seed=seed, rng=rng))
    if not validate_deck_integrity(hands):
        raise RuntimeError("Deal does not cover the deck")

    assignment = determine_teams(hands)
    if assignment.heart_three_seat < 0 or assignment.diamond_three_seat < 0:
        raise RuntimeError("Deal is missing a red 3")

    state.phase = PHASE_DEALING
    state.deal_id += 1
    state.hands = hands
    state.teams = assignment.teams
    state.heart_three_seat = assignment.heart_three_seat
    state.diamond_three_seat = assignment.diamond_three_seat
    state.opening_seat = find_opening_seat(hands)
    state.turn = state.opening_seat
    state.last_play = None
    state.last_actions = [None] * NUM_SEATS
    state.pass_count = 0
    state.round_number = 1
    state.first_play = True
    state.finished = []
    state.revealed = [[] for _ in range(NUM_SEATS)]
    state.revealed[state.diamond_three_seat].append(parse_card(DIAMOND_THREE))
    state.reveal_timer = 0
    state.base_score = 1
    state.result = None
    state.game_log = []
    _touch(state, f"Cards dealt, {_seat_name(state, state.opening_seat)} holds the 5 of hearts")

    return DealResult(
        hands=[list(hand) for hand in hands],
        teams=list(state.teams),
        leading_seat=state.opening_seat,
        heart_three_seat=state.heart_three_seat,
        diamond_three_seat=state.diamond_three_seat,
        revealed_cards=[list(cards) for cards in state.revealed],
    )


def begin_reveal(state: RoomState, rules: RuleConfig = default_rules) -> ActionResult:
    if state.phase != PHASE_DEALING:
        return ActionResult.fail(state, WRONG_PHASE, f"Cannot start reveal from {state.phase}")
    state.phase = PHASE_REVEALING
    state.reveal_timer = rules.reveal_seconds
    _touch(state, "Reveal phase started")
    return ActionResult.ok(state)


def toggle_reveal(state: RoomState, seat: int, card_id: str) -> ActionResult:
    """Show or hide a 3; the 3 of diamonds stays revealed."""
    validation = validate_reveal(state, seat, card_id)
    if not validation.valid:
        return ActionResult.fail(state, validation.error_code, validation.error_message)

    card = validation.cards[0]
    revealed = state.revealed[seat]
    if card in revealed:
        revealed.remove(card)
        _touch(state, f"{_seat_name(state, seat)} hid {card.id}")
    else:
        revealed.append(card)
        _touch(state, f"{_seat_name(state, seat)} revealed {card.id}")
    return ActionResult.ok(state)


def tick_reveal(state: RoomState) -> ActionResult:
    """One second of the reveal countdown."""
    if state.phase != PHASE_REVEALING:
        return ActionResult.fail(state, WRONG_PHASE, f"No reveal countdown in {state.phase}")
    state.reveal_timer = max(0, state.reveal_timer - 1)
    if state.reveal_timer == 0:
        return start_playing(state)
    _touch(state)
    return ActionResult.ok(state)


def start_playing(state: RoomState) -> ActionResult:
    if state.phase != PHASE_REVEALING:
        return ActionResult.fail(state, WRONG_PHASE, f"Cannot start playing from {state.phase}")
    state.base_score = calculate_base_score(state.revealed)
    state.reveal_timer = 0
    state.phase = PHASE_PLAYING
    _touch(state, f"Play begins with a base score of {state.base_score}")
    return ActionResult.ok(state)


# Playing

def play_cards(state: RoomState, seat: int, card_ids: List[str],
               rotation: RotationOrder = default_rotation) -> ActionResult:
    """Play cards for a seat."""
    validation = validate_play(state, seat, card_ids)
    if not validation.valid:
        return ActionResult.fail(state, validation.error_code, validation.error_message)

    cards = validation.cards
    state.hands[seat] = [card for card in state.hands[seat] if card not in cards]

    record = PlayRecord(seat=seat, cards=cards)
    state.last_play = record
    state.last_actions[seat] = record
    state.pass_count = 0
    state.first_play = False
    state.game_log.append(f"{_seat_name(state, seat)} played: {', '.join(card.id for card in cards)}")

    if not state.hands[seat]:
        state.finished.append(seat)
        state.game_log.append(f"{_seat_name(state, seat)} finished in position {len(state.finished)}!")
        if evaluate_round_end(state) is not None:
            _touch(state)
            return ActionResult.ok(state, validation.combination)

    state.turn = rotation.next_active(seat, state.finished)
    _touch(state)
    return ActionResult.ok(state, validation.combination)


def passes_needed(state: RoomState) -> int:
    """Passes that close the current round."""
    active = NUM_SEATS - len(state.finished)
    if state.last_play is not None and state.last_play.seat in state.finished:
        return active
    return active - 1


def pass_turn(state: RoomState, seat: int, rotation: RotationOrder = default_rotation) -> ActionResult:
    """Pass for a seat, closing the round once everyone else has passed."""
    validation = validate_pass(state, seat)
    if not validation.valid:
        return ActionResult.fail(state, validation.error_code, validation.error_message)

    state.last_actions[seat] = PlayRecord(seat=seat, passed=True)
    state.pass_count += 1
    state.game_log.append(f"{_seat_name(state, seat)} passed")

    if state.pass_count >= passes_needed(state):
        owner = state.last_play.seat
        state.last_play = None
        state.pass_count = 0
        state.round_number += 1
        state.turn = rotation.next_after(owner, state.finished)
        state.game_log.append(f"Round {state.round_number} starts with {_seat_name(state, state.turn)}")
    else:
        state.turn = rotation.next_active(seat, state.finished)

    _touch(state)
    return ActionResult.ok(state)


# Round end

def decide_winner(teams: List[str], finished: List[int], hands) -> Optional[GameResult]:
    """
    Decide the round from the finishing order.

    Returns None while neither team has emptied every hand. A team that
    finishes completely wins only if it also produced the first finisher and
    the other team still holds cards; every other completion is a draw.
    """
    done = set(finished)
    complete = [
        team for team in TEAMS
        if team_roster(teams, team) and all(seat in done for seat in team_roster(teams, team))
    ]
    if not complete:
        return None

    if len(complete) == 1:
        team = complete[0]
        first_team = teams[finished[0]]
        opponents_hold_cards = any(
            seat not in done and len(hands[seat]) > 0
            for seat in team_roster(teams, opposing_team(team))
        )
        if first_team == team and opponents_hold_cards:
            return GameResult(winner_team=team, last_finisher=finished[-1])

    return GameResult(winner_team=None, is_draw=True, last_finisher=finished[-1])


def evaluate_round_end(state: RoomState) -> Optional[GameResult]:
    """Check for a win or draw and, if found, score it and end the round."""
    outcome = decide_winner(state.teams, state.finished, state.hands)
    if outcome is None:
        return None

    result = calculate_full_scores(state, outcome.winner_team)
    result.last_finisher = outcome.last_finisher
    for seat, change in zip(state.seats, result.score_changes):
        seat.score += change

    state.result = result
    state.phase = PHASE_ROUND_END
    state.turn = None
    state.last_play = None
    if result.is_draw:
        state.game_log.append("Round ended in a draw")
    else:
        state.game_log.append(f"Team {result.winner_team} wins with a base score of {result.final_base_score}")
    logger.info(f"Room {state.id} round over: winner={result.winner_team} draw={result.is_draw}")
    return result
