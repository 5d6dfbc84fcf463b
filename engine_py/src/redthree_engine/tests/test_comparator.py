"""
Tests for card-type classification and beat comparison.
"""

import itertools

import pytest

from redthree_engine.comparator import can_beat, classify, contains_opening_card, get_mixed_cards_value
from redthree_engine.constants import (
    TYPE_FOUR_BOMB, TYPE_INVALID, TYPE_JOKER_BOMB, TYPE_PAIR, TYPE_RED_PAIR_BOMB,
    TYPE_SINGLE, TYPE_THREE_BOMB,
)
from redthree_engine.shuffle import create_deck

from conftest import cards


@pytest.mark.parametrize("card_ids,expected_type,expected_value", [
    (["5H"], TYPE_SINGLE, 86),
    (["JOKERb"], TYPE_SINGLE, 100),
    (["KH", "KS"], TYPE_PAIR, 93),
    (["3H", "3S"], TYPE_PAIR, 96),
    (["3S", "3C"], TYPE_PAIR, 96),
    (["7H", "7S", "7C"], TYPE_THREE_BOMB, 587),
    (["3H", "3S", "3C"], TYPE_THREE_BOMB, 596),
    (["2H", "2S", "2C", "2D"], TYPE_FOUR_BOMB, 695),
    (["3H", "3D"], TYPE_RED_PAIR_BOMB, 999),
    (["JOKERs", "JOKERb"], TYPE_JOKER_BOMB, 1000),
])
def test_classify(card_ids, expected_type, expected_value):
    combo = classify(cards(*card_ids))
    assert combo.type == expected_type
    assert combo.value == expected_value


@pytest.mark.parametrize("card_ids", [
    [],
    ["KH", "QH"],
    ["3H", "4S", "4C"],
    ["7H", "7S", "8C"],
    ["5H", "5S", "5C", "7D"],
    ["AH", "AS", "AC", "AD", "KH"],
    ["JOKERs", "5H"],
])
def test_classify_invalid(card_ids):
    combo = classify(cards(*card_ids))
    assert combo.type == TYPE_INVALID
    assert combo.value == 0
    assert not combo.is_valid


def test_classify_rejects_duplicate_cards():
    assert classify(cards("KH", "KH")).type == TYPE_INVALID


def test_red_black_three_mix_drops_to_black_value():
    assert get_mixed_cards_value(cards("3H", "3C")) == 96
    assert get_mixed_cards_value(cards("3D", "3H", "3S", "3C")) == 96
    assert get_mixed_cards_value(cards("KH", "KS")) == 93


def test_no_reference_allows_any_valid_play():
    assert can_beat(cards("5S"))
    assert can_beat(cards("5S"), None)
    assert can_beat(cards("5S"), [])
    assert not can_beat(cards("KH", "QH"), None)


def test_singles_and_pairs_compare_by_strength():
    assert can_beat(cards("4S"), cards("2H"))
    assert not can_beat(cards("2H"), cards("4S"))
    assert can_beat(cards("AH", "AS"), cards("KH", "KS"))
    assert not can_beat(cards("KH", "KS"), cards("AH", "AS"))


def test_type_mismatch_cannot_beat():
    assert not can_beat(cards("JOKERb"), cards("5H", "5S"))
    assert not can_beat(cards("AH", "AS"), cards("5H"))


def test_bombs_beat_non_bombs():
    assert can_beat(cards("7H", "7S", "7C"), cards("JOKERb"))
    assert can_beat(cards("7H", "7S", "7C"), cards("4S", "4C"))
    assert not can_beat(cards("JOKERb"), cards("7H", "7S", "7C"))


def test_four_bomb_of_two_beats_three_bomb_of_seven():
    reference = classify(cards("7H", "7S", "7C"))
    assert reference.value == 587
    assert can_beat(cards("2H", "2S", "2C", "2D"), reference)


def test_bomb_tiers():
    three = cards("AH", "AS", "AC")
    four = cards("5H", "5S", "5C", "5D")
    red_pair = cards("3H", "3D")
    jokers = cards("JOKERs", "JOKERb")
    assert can_beat(four, three)
    assert can_beat(red_pair, four)
    assert can_beat(jokers, red_pair)
    assert not can_beat(red_pair, jokers)
    assert not can_beat(three, four)


def test_identical_hands_never_beat_each_other():
    plays = [cards("5H"), cards("KH", "KS"), cards("7H", "7S", "7C"), cards("3H", "3D")]
    for play in plays:
        assert not can_beat(play, play)


def test_same_type_strength_is_a_total_order():
    singles = [classify([card]) for card in create_deck()]
    for a, b in itertools.combinations(singles, 2):
        if a.value == b.value:
            assert not can_beat(a, b) and not can_beat(b, a)
        else:
            assert can_beat(a, b) != can_beat(b, a)
            assert can_beat(a, b) == (a.value > b.value)


def test_contains_opening_card():
    assert contains_opening_card(cards("5H", "5S"))
    assert not contains_opening_card(cards("5S", "5C"))
