"""
State serialization and sanitization utilities.
"""

from typing import Any, Dict, List, Optional

from .models import Card, DealResult, GameResult, PlayRecord, RoomState


def _card_ids(cards: List[Card]) -> List[str]:
    return [card.id for card in cards]


def _serialize_play(record: Optional[PlayRecord]) -> Optional[Dict[str, Any]]:
    if record is None:
        return None
    return {
        "seat": record.seat,
        "cards": _card_ids(record.cards),
        "passed": record.passed,
    }


def _serialize_result(result: Optional[GameResult]) -> Optional[Dict[str, Any]]:
    if result is None:
        return None
    return {
        "winner_team": result.winner_team,
        "is_draw": result.is_draw,
        "bonus_score": result.bonus_score,
        "final_base_score": result.final_base_score,
        "score_changes": list(result.score_changes),
        "last_finisher": result.last_finisher,
    }


def sanitize_state(state: RoomState, viewer_seat: Optional[int] = None) -> Dict[str, Any]:
    """
    Sanitize room state for transmission to clients.

    Args:
        state: Room state to sanitize
        viewer_seat: Seat of the player viewing the state (to show their cards)

    Returns:
        Sanitized state dictionary safe for JSON transmission
    """
    sanitized = {
        "id": state.id,
        "version": state.version,
        "phase": state.phase,
        "host_id": state.host_id,
        "turn": state.turn,
        "round_number": state.round_number,
        "pass_count": state.pass_count,
        "first_play": state.first_play,
        "reveal_timer": state.reveal_timer,
        "base_score": state.base_score,
        "teams": list(state.teams),
        "heart_three_seat": state.heart_three_seat,
        "diamond_three_seat": state.diamond_three_seat,
        "opening_seat": state.opening_seat,
        "last_play": _serialize_play(state.last_play),
        "last_actions": [_serialize_play(record) for record in state.last_actions],
        "finished": list(state.finished),
        "revealed": [_card_ids(cards) for cards in state.revealed],
        "result": _serialize_result(state.result),
        "my_seat": viewer_seat,
        "seats": [],
    }

    for seat in state.seats:
        sanitized_seat = {
            "name": seat.name,
            "seat": seat.seat,
            "is_bot": seat.is_bot,
            "connected": seat.connected,
            "score": seat.score,
            "hand_count": len(state.hands[seat.seat]) if seat.seat < len(state.hands) else 0,
        }

        # Show full hand only to the viewer
        if seat.seat == viewer_seat and seat.seat < len(state.hands):
            sanitized_seat["hand"] = _card_ids(state.hands[seat.seat])

        sanitized["seats"].append(sanitized_seat)

    return sanitized


def serialize_deal(deal: DealResult, viewer_seat: Optional[int] = None) -> Dict[str, Any]:
    """Deal summary for one seat; other hands are reduced to counts."""
    return {
        "my_seat": viewer_seat,
        "my_hand": _card_ids(deal.hands[viewer_seat]) if viewer_seat is not None else None,
        "hand_counts": [len(hand) for hand in deal.hands],
        "teams": list(deal.teams),
        "leading_seat": deal.leading_seat,
        "heart_three_seat": deal.heart_three_seat,
        "diamond_three_seat": deal.diamond_three_seat,
        "revealed_cards": [_card_ids(cards) for cards in deal.revealed_cards],
    }
