"""
Tests for the automated seats at every level.
"""

import random

import pytest

from redthree_engine.bots.factory import create_bot
from redthree_engine.bots.greedy import GreedyBot
from redthree_engine.bots.random_bot import RandomBot
from redthree_engine.bots.strategic import StrategicBot, calculate_hand_strength
from redthree_engine.comparator import can_beat
from redthree_engine.models import PlayRecord
from redthree_engine.rules import create_rules

from conftest import cards, make_state


class FixedRandom(random.Random):
    """Random source whose random() always returns the same value."""

    def __init__(self, value: float):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value


def test_opening_play_contains_hearts_five():
    state = make_state(
        [["5H", "JOKERb", "7S"], ["KS"], ["3D"], ["QH"], ["JH"]],
        first_play=True,
    )
    action = GreedyBot(0).choose_action(state)
    assert action.type == "play"
    assert "5H" in action.data["cards"]


def test_leader_plays_cheapest_single():
    state = make_state([["JOKERb", "KH", "KS", "7S"], ["KD"], ["3D"], ["QH"], ["JH"]], turn=0)
    action = GreedyBot(0).choose_action(state)
    assert action.data["cards"] == ["7S"]


def test_leader_with_own_reference_plays_freely():
    state = make_state(
        [["KH", "8S"], ["KD"], ["3D"], ["QH"], ["JH"]],
        turn=0,
        last_play=PlayRecord(seat=0, cards=cards("2H")),
    )
    action = GreedyBot(0).choose_action(state)
    assert action.data["cards"] == ["8S"]


def test_responder_plays_lowest_beat():
    state = make_state(
        [["KD"], ["JOKERb", "2H", "AH", "8S"], ["3D"], ["QH"], ["JH"]],
        turn=1,
        last_play=PlayRecord(seat=2, cards=cards("KH")),
    )
    bot = GreedyBot(1, rng=FixedRandom(0.0))
    action = bot.choose_action(state)
    assert action.data["cards"] == ["AH"]
    assert can_beat(bot.get_valid_plays(state)[0], state.last_play.cards)


def test_responder_passes_when_reluctant():
    state = make_state(
        [["KD"], ["2H", "AH"], ["3D"], ["QH"], ["JH"]],
        turn=1,
        last_play=PlayRecord(seat=2, cards=cards("KH")),
    )
    action = GreedyBot(1, rng=FixedRandom(0.9)).choose_action(state)
    assert action.type == "pass"


def test_play_probability_is_configurable():
    state = make_state(
        [["KD"], ["2H", "AH"], ["3D"], ["QH"], ["JH"]],
        turn=1,
        last_play=PlayRecord(seat=2, cards=cards("KH")),
    )
    rules = create_rules(bot_play_probability=1.0)
    action = GreedyBot(1, rules, rng=FixedRandom(0.99)).choose_action(state)
    assert action.type == "play"


def test_responder_passes_without_beat():
    state = make_state(
        [["KD"], ["5S", "7S"], ["3D"], ["QH"], ["JH"]],
        turn=1,
        last_play=PlayRecord(seat=2, cards=cards("KH")),
    )
    action = GreedyBot(1, rng=FixedRandom(0.0)).choose_action(state)
    assert action.type == "pass"


def test_no_action_when_not_its_turn():
    state = make_state([["KD"], ["5S"], ["3D"], ["QH"], ["JH"]], turn=0)
    assert GreedyBot(1).choose_action(state) is None


def test_reveals_follow_probabilities():
    state = make_state([["3H", "3S", "3C"], [], ["3D"], [], []])
    always = create_rules(bot_reveal_heart_probability=1.0, bot_reveal_black_probability=1.0)
    never = create_rules(bot_reveal_heart_probability=0.0, bot_reveal_black_probability=0.0)
    revealed = [action.data["card"] for action in GreedyBot(0, always).choose_reveals(state)]
    assert sorted(revealed) == ["3C", "3H", "3S"]
    assert GreedyBot(0, never).choose_reveals(state) == []


def test_bot_never_reveals_diamond_three():
    state = make_state([["KH"], [], ["3D", "3S"], [], []])
    always = create_rules(bot_reveal_heart_probability=1.0, bot_reveal_black_probability=1.0)
    revealed = [action.data["card"] for action in GreedyBot(2, always).choose_reveals(state)]
    assert revealed == ["3S"]


# Random bot

def test_random_bot_opening_contains_hearts_five():
    state = make_state([["5H", "5S", "KH"], ["KS"], ["3D"], ["QH"], ["JH"]], first_play=True)
    for seed in range(10):
        action = RandomBot(0, rng=random.Random(seed)).choose_action(state)
        assert "5H" in action.data["cards"]


def test_random_bot_only_picks_legal_plays():
    state = make_state(
        [["KD"], ["JOKERb", "2H", "AH", "8S", "9S"], ["3D"], ["QH"], ["JH"]],
        turn=1,
        last_play=PlayRecord(seat=2, cards=cards("KH")),
    )
    chosen = set()
    for seed in range(30):
        action = RandomBot(1, rng=random.Random(seed)).choose_action(state)
        assert action.type == "play"
        assert can_beat(cards(*action.data["cards"]), state.last_play.cards)
        chosen.add(tuple(action.data["cards"]))
    assert len(chosen) > 1


def test_random_bot_passes_without_beat():
    state = make_state(
        [["KD"], ["5S", "7S"], ["3D"], ["QH"], ["JH"]],
        turn=1,
        last_play=PlayRecord(seat=2, cards=cards("KH")),
    )
    assert RandomBot(1).choose_action(state).type == "pass"


def test_random_bot_keeps_threes_hidden():
    state = make_state([["3H", "3S", "3C"], [], ["3D"], [], []])
    assert RandomBot(0).choose_reveals(state) == []


# Strategic bot

def test_hand_strength():
    assert calculate_hand_strength([]) == 0
    assert calculate_hand_strength(cards("JOKERb")) == pytest.approx(0.15)
    assert calculate_hand_strength(cards("5S", "5H")) == pytest.approx(0.09)
    assert calculate_hand_strength(cards("7S", "7H", "7C")) == pytest.approx(0.26)
    strong = cards("4S", "4C", "4D", "4H", "JOKERb", "JOKERs", "3H", "3D")
    assert calculate_hand_strength(strong) == 1.0


def test_strategic_bot_rushes_with_short_hand():
    state = make_state([["7S", "KH", "2H"], ["KD"], ["3D"], ["QH"], ["JH"]], turn=0)
    action = StrategicBot(0).choose_action(state)
    assert action.data["cards"] == ["2H"]


def test_strategic_leader_keeps_bombs():
    state = make_state(
        [["KH", "KS", "KC", "7S", "8S", "9S"], ["KD"], ["3D"], ["QH"], ["JH"]],
        turn=0,
    )
    action = StrategicBot(0).choose_action(state)
    assert action.data["cards"] == ["7S"]


def test_strategic_responder_plays_smallest_same_type():
    state = make_state(
        [["KD"], ["2H", "AH", "8S", "9S", "10S", "JS"], ["3D"], ["QH"], ["JH"]],
        turn=1,
        last_play=PlayRecord(seat=2, cards=cards("KH")),
    )
    action = StrategicBot(1).choose_action(state)
    assert action.data["cards"] == ["AH"]


def test_strategic_responder_saves_bomb_with_long_hand():
    state = make_state(
        [["KD"], ["KH", "KS", "KC", "7S", "8S", "9S"], ["3D"], ["QH"], ["JH"]],
        turn=1,
        last_play=PlayRecord(seat=2, cards=cards("2H")),
    )
    assert StrategicBot(1).choose_action(state).type == "pass"


def test_strategic_responder_bombs_with_short_hand():
    state = make_state(
        [["KD"], ["KH", "KS", "KC", "7S", "8S"], ["3D"], ["QH"], ["JH"]],
        turn=1,
        last_play=PlayRecord(seat=2, cards=cards("2H")),
    )
    action = StrategicBot(1).choose_action(state)
    assert sorted(action.data["cards"]) == ["KC", "KH", "KS"]


def test_strategic_reveals_follow_hand_strength():
    weak = make_state([["3H", "3S", "7S", "8S", "9S"], [], ["3D"], [], []])
    assert StrategicBot(0).choose_reveals(weak) == []

    middling = make_state([["3H", "3S", "JOKERb", "2H", "AH", "KH"], [], ["3D"], [], []])
    revealed = [action.data["card"] for action in StrategicBot(0).choose_reveals(middling)]
    assert revealed == ["3H"]

    strong = make_state([["3H", "3S", "JOKERb", "JOKERs", "4S", "4C", "4D", "2H"], [], ["3D"], [], []])
    revealed = [action.data["card"] for action in StrategicBot(0).choose_reveals(strong)]
    assert sorted(revealed) == ["3H", "3S"]


# Levels

@pytest.mark.parametrize("level,bot_class,delay_range", [
    ("easy", RandomBot, (0.5, 1.0)),
    ("normal", GreedyBot, (1.0, 2.0)),
    ("hard", StrategicBot, (1.0, 2.0)),
])
def test_create_bot_by_level(level, bot_class, delay_range):
    bot = create_bot(3, create_rules(bot_level=level))
    assert type(bot) is bot_class
    assert bot.seat == 3
    assert bot.delay_range == delay_range


def test_normal_bot_delay_follows_rules():
    rules = create_rules(bot_delay_min=0.2, bot_delay_max=0.4)
    assert create_bot(0, rules).delay_range == (0.2, 0.4)
