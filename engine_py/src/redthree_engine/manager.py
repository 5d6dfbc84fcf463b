"""Room lifecycle, phase timers and automated seats"""

import logging
import random
import uuid
from dataclasses import dataclass
from typing import Callable, List, Optional

from . import engine
from .bots.base import BaseBot, BotAction
from .bots.factory import create_bot
from .bots.greedy import GreedyBot
from .comparator import can_beat, classify
from .constants import (
    OPENING_CARD, PHASE_DEALING, PHASE_PLAYING, PHASE_REVEALING, PHASE_ROUND_END, PHASE_WAITING,
)
from .engine import ActionResult
from .errors import (
    CANNOT_BEAT_REFERENCE, INVALID_COMBINATION, MUST_PLAY, STALE_DECISION,
    AlreadyStarted, RoomNotFound, WrongPhase, raise_error,
)
from .hints import find_all_valid_plays
from .models import DealResult, RoomState, parse_card
from .registry import RoomRecord, RoomRegistry
from .rules import RuleConfig, default_rules
from .scheduler import AsyncioScheduler, Scheduler
from .validate import has_free_lead, validate_pass

logger = logging.getLogger(__name__)

Listener = Callable[[str, RoomState], None]
BotFactory = Callable[[int, RuleConfig, random.Random], BaseBot]


@dataclass
class OpenRoom:
    room_id: str
    seat_count: int
    host_name: Optional[str]


class RoomManager:
    """
    Owns every room and serializes all mutations of each room.

    Player submissions are applied synchronously. Phase changes and bot
    moves run from scheduler callbacks that carry the deal id and state
    version they were scheduled for; a callback whose token no longer
    matches the room is dropped.
    A bot decision the rules reject falls back to a pass, or to the
    cheapest legal play when passing is not allowed.
    """

    def __init__(
        self,
        registry: Optional[RoomRegistry] = None,
        scheduler: Optional[Scheduler] = None,
        rules: RuleConfig = default_rules,
        rng: Optional[random.Random] = None,
        bot_factory: BotFactory = create_bot
    ):
        self.registry = registry or RoomRegistry()
        self.scheduler = scheduler or AsyncioScheduler()
        self.rules = rules
        self.rng = rng or random.Random()
        self.bot_factory = bot_factory
        self._listeners: List[Listener] = []

    # Listeners

    def add_listener(self, listener: Listener):
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, state: RoomState):
        for listener in list(self._listeners):
            try:
                listener(state.id, state)
            except Exception as e:
                logger.error(f"Listener failed for room {state.id}: {e}", exc_info=True)

    # Lookup

    def get_state(self, room_id: str) -> RoomState:
        return self.registry.require(room_id).state

    def seat_of(self, room_id: str, handle: str) -> Optional[int]:
        record = self.registry.get(room_id)
        if record is None:
            return None
        seat = record.state.seat_for(handle)
        return seat.seat if seat else None

    def list_open_rooms(self) -> List[OpenRoom]:
        rooms = []
        for record in self.registry.all():
            state = record.state
            if state.phase != PHASE_WAITING:
                continue
            host = state.seat_for(state.host_id) if state.host_id else None
            rooms.append(OpenRoom(
                room_id=state.id,
                seat_count=len(state.seats),
                host_name=host.name if host else None,
            ))
        return rooms

    # Lifecycle

    def create_room(self, host_handle: str, host_name: str) -> str:
        while True:
            room_id = str(uuid.uuid4())[:6].upper()
            if not self.registry.contains(room_id):
                break
        state = engine.create_room(room_id, host_handle, host_name, self.rules)
        self.registry.create(state)
        logger.info(f"Room {room_id} created by {host_name}")
        self._notify(state)
        return room_id

    def join_room(self, room_id: str, handle: str, name: str) -> RoomState:
        record = self.registry.require(room_id)
        with record.lock:
            result = engine.join_room(record.state, handle, name, self.rules)
            if not result.success:
                raise_error(result.error_code, result.error_message)
            logger.info(f"{name} joined room {room_id}")
            self._notify(record.state)
            return record.state

    def start_room(self, room_id: str) -> DealResult:
        """Fill empty seats with bots and deal the first hand."""
        record = self.registry.require(room_id)
        with record.lock:
            state = record.state
            if state.phase != PHASE_WAITING:
                raise AlreadyStarted(f"Room {room_id} has already started")
            bots = engine.fill_with_bots(state, self.rules)
            logger.info(f"Room {room_id} starting with {len(bots)} bot(s)")
            return self._deal(record)

    def restart_room(self, room_id: str) -> DealResult:
        """Deal a fresh hand to the same seats, keeping their scores."""
        record = self.registry.require(room_id)
        with record.lock:
            if record.state.phase == PHASE_WAITING:
                raise WrongPhase(f"Room {room_id} has not started yet")
            record.cancel_timers()
            logger.info(f"Room {room_id} restarting")
            return self._deal(record)

    def leave_seat(self, room_id: str, handle: str) -> Optional[RoomState]:
        """
        Remove a participant; returns the room state or None when the room
        was closed because no human is left.
        """
        record = self.registry.get(room_id)
        if record is None:
            return None
        with record.lock:
            state = record.state
            seat = engine.remove_seat(state, handle)
            if seat is None:
                return state
            if state.human_count == 0:
                self.registry.remove(room_id)
                logger.info(f"Room {room_id} closed")
                return None
            self._notify(state)
            self._schedule_bot_turn(record)
            return state

    def close_room(self, room_id: str):
        if self.registry.remove(room_id) is None:
            raise RoomNotFound(f"Room {room_id} not found")
        logger.info(f"Room {room_id} closed")

    # Player actions

    def toggle_reveal(self, room_id: str, seat: int, card_id: str) -> ActionResult:
        record = self.registry.require(room_id)
        with record.lock:
            result = engine.toggle_reveal(record.state, seat, card_id)
            if result.success:
                self._notify(record.state)
            return result

    def submit_play(self, room_id: str, seat: int, card_ids: List[str]) -> ActionResult:
        record = self.registry.require(room_id)
        with record.lock:
            result = engine.play_cards(record.state, seat, card_ids)
            if result.success:
                self._after_move(record)
            return result

    def submit_pass(self, room_id: str, seat: int) -> ActionResult:
        record = self.registry.require(room_id)
        with record.lock:
            result = engine.pass_turn(record.state, seat)
            if result.success:
                self._after_move(record)
            return result

    # Internals

    def _add_timer(self, record: RoomRecord, timer):
        record.timers = [t for t in record.timers if t.active]
        record.timers.append(timer)

    def _deal(self, record: RoomRecord) -> DealResult:
        state = record.state
        deal = engine.deal_round(state, rng=self.rng)
        token = state.deal_id
        if self.rules.deal_delay > 0:
            self._add_timer(record, self.scheduler.call_later(
                self.rules.deal_delay, lambda: self._on_deal_delay(state.id, token)
            ))
            self._notify(state)
        else:
            self._open_reveal(record)
        return deal

    def _on_deal_delay(self, room_id: str, token: int):
        record = self.registry.get(room_id)
        if record is None:
            return
        with record.lock:
            state = record.state
            if state.deal_id != token or state.phase != PHASE_DEALING:
                logger.debug(f"Room {room_id}: dropping stale deal timer")
                return
            self._open_reveal(record)

    def _open_reveal(self, record: RoomRecord):
        state = record.state
        engine.begin_reveal(state, self.rules)
        for seat in state.seats:
            if not seat.is_bot:
                continue
            bot = self.bot_factory(seat.seat, self.rules, self.rng)
            for action in bot.choose_reveals(state):
                engine.toggle_reveal(state, seat.seat, action.data['card'])

        token = state.deal_id
        holder = {}

        def tick():
            self._on_reveal_tick(state.id, token, holder.get('timer'))

        holder['timer'] = self.scheduler.call_every(1.0, tick)
        self._add_timer(record, holder['timer'])
        self._notify(state)

    def _on_reveal_tick(self, room_id: str, token: int, timer):
        record = self.registry.get(room_id)
        if record is None:
            if timer is not None:
                timer.cancel()
            return
        with record.lock:
            state = record.state
            if state.deal_id != token or state.phase != PHASE_REVEALING:
                logger.debug(f"Room {room_id}: dropping stale reveal tick")
                if timer is not None:
                    timer.cancel()
                return
            engine.tick_reveal(state)
            logger.debug(f"Room {room_id}: reveal timer {state.reveal_timer}")
            if state.phase == PHASE_PLAYING:
                if timer is not None:
                    timer.cancel()
                logger.info(f"Room {room_id}: playing with base score {state.base_score}")
                self._schedule_bot_turn(record)
            self._notify(state)

    def _after_move(self, record: RoomRecord):
        state = record.state
        if state.phase == PHASE_ROUND_END:
            record.cancel_timers()
        self._notify(state)
        self._schedule_bot_turn(record)

    def _schedule_bot_turn(self, record: RoomRecord):
        state = record.state
        if state.phase != PHASE_PLAYING or state.turn is None:
            return
        seat = state.turn
        if not state.seats[seat].is_bot:
            return
        token = (state.deal_id, state.version)
        bot = self.bot_factory(seat, self.rules, self.rng)
        delay = self.rng.uniform(*bot.delay_range)
        self._add_timer(record, self.scheduler.call_later(
            delay, lambda: self._on_bot_turn(state.id, seat, token)
        ))

    def _on_bot_turn(self, room_id: str, seat: int, token):
        record = self.registry.get(room_id)
        if record is None:
            logger.debug(f"[{STALE_DECISION}] room {room_id} is gone")
            return
        with record.lock:
            state = record.state
            current = (state.deal_id, state.version)
            if (current != token or state.phase != PHASE_PLAYING
                    or state.turn != seat or not state.seats[seat].is_bot):
                logger.debug(f"[{STALE_DECISION}] room {room_id} seat {seat}: state moved on")
                return

            bot = self.bot_factory(seat, self.rules, self.rng)
            action = bot.choose_action(state)
            result = self._apply_bot_action(state, seat, action)
            if result is None or not result.success:
                if result is not None:
                    logger.warning(
                        f"Bot at seat {seat} in room {room_id} was rejected: "
                        f"[{result.error_code}] {result.error_message}"
                    )
                result = self._fallback_move(state, seat)

            if not result.success:
                logger.error(f"Room {room_id}: no legal move found for bot at seat {seat}")
                self._schedule_bot_turn(record)
                return

            logger.debug(f"Room {room_id}: bot at seat {seat} -> {state.last_actions[seat]}")
            self._after_move(record)

    def _apply_bot_action(self, state: RoomState, seat: int,
                          action: Optional[BotAction]) -> Optional[ActionResult]:
        if action is None:
            logger.warning(f"Bot at seat {seat} in room {state.id} returned no action")
            return None
        if action.type != 'play':
            return engine.pass_turn(state, seat)

        try:
            cards = [parse_card(card_id) for card_id in action.data['cards']]
        except ValueError as e:
            return ActionResult.fail(state, INVALID_COMBINATION, str(e))
        combination = classify(cards)
        if not combination.is_valid:
            return ActionResult.fail(state, INVALID_COMBINATION, f"{action.data['cards']} is not a combination")
        reference = None if has_free_lead(state, seat) else state.last_play.cards
        if not can_beat(combination, reference):
            return ActionResult.fail(
                state, CANNOT_BEAT_REFERENCE, f"{action.data['cards']} does not beat the table"
            )
        return engine.play_cards(state, seat, action.data['cards'])

    def _fallback_move(self, state: RoomState, seat: int) -> ActionResult:
        """Pass when allowed, otherwise shed the cheapest legal play."""
        if validate_pass(state, seat).valid:
            return engine.pass_turn(state, seat)

        must_contain = parse_card(OPENING_CARD) if state.first_play else None
        plays = find_all_valid_plays(state.hands[seat], None, must_contain)
        play = GreedyBot.cheapest(plays)
        if play is None:
            return ActionResult.fail(state, MUST_PLAY, f"Seat {seat} has no legal play")
        return engine.play_cards(state, seat, play.card_ids)
