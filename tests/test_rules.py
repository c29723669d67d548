"""Tests covering drop validation and round requirements."""

from __future__ import annotations

import pytest

from carioca import rules
from carioca.cards import Card, parse_hand
from carioca.rules import MeldCandidate, ShedAction, ShedPosition
from carioca.combos import ComboType, DetectedCombo, detect_combos

TRIO = ComboType.TRIO
ESCALA = ComboType.ESCALA


@pytest.mark.parametrize(
    ("group", "card", "expected"),
    [
        ("5H 5C", "5S", True),
        ("5H 5C", "10S", False),
        ("3H 4H 5H", "6H", True),
        ("3H 4H 5H", "6C", False),
        ("5H", "JOKER", True),
        ("5H", "6H", True),
        ("5H", "9C", False),
        ("", "5H", False),
        ("5H 5C 5S", "5D", True),
        ("KH AH", "2H", True),
        ("5H JOKER", "JOKER", False),
    ],
)
def test_can_card_extend_group(group: str, card: str, expected: bool) -> None:
    existing = parse_hand(group)
    assert rules.can_card_extend_group(existing, Card.from_code(card)) is expected
    assert [c.code for c in existing] == group.split()


def test_is_bajada_complete_counts_each_type() -> None:
    two_trios = [DetectedCombo(TRIO, 0, 2), DetectedCombo(TRIO, 3, 5)]
    assert rules.is_bajada_complete(two_trios, 2, 0)
    assert not rules.is_bajada_complete(two_trios, 2, 1)
    assert not rules.is_bajada_complete(two_trios[:1], 2, 0)


def test_extra_escala_never_replaces_a_trio() -> None:
    combos = [DetectedCombo(ESCALA, 0, 3), DetectedCombo(ESCALA, 4, 7)]
    assert not rules.is_bajada_complete(combos, 1, 1)
    assert rules.is_bajada_complete(combos, 0, 2)


def test_is_bajada_complete_with_no_requirements() -> None:
    assert rules.is_bajada_complete([], 0, 0)


def test_round_table_order() -> None:
    assert len(rules.ROUNDS) == 9
    assert [(r.trios, r.escalas) for r in rules.ROUNDS] == [
        (2, 0),
        (1, 1),
        (0, 2),
        (3, 0),
        (2, 1),
        (1, 2),
        (0, 3),
        (4, 0),
        (0, 1),
    ]


@pytest.mark.parametrize(
    ("key", "expected_name"),
    [
        (1, "Two Trios"),
        ("2", "Trio Escala"),
        ("two-escalas", "Two Escalas"),
        ("Escala Real", "Escala Real"),
        ("four_trios", "Four Trios"),
    ],
)
def test_round_requirement_lookup(key: str | int, expected_name: str) -> None:
    assert rules.round_requirement(key).name == expected_name


@pytest.mark.parametrize("key", [0, 10, "ten-trios", "-1"])
def test_round_requirement_unknown(key: str | int) -> None:
    with pytest.raises(KeyError):
        rules.round_requirement(key)


def test_round_requirement_rejects_negative_counts() -> None:
    with pytest.raises(ValueError):
        rules.RoundRequirement("Broken", trios=-1, escalas=0)


def test_missing_combos_from_scanned_hand() -> None:
    hand = parse_hand("AH AC AS 2D 3D 4D 5D 9C")
    combos = detect_combos(hand)
    second_round = rules.round_requirement(2)
    assert second_round.is_met_by(combos)
    assert rules.missing_combos(combos, second_round) == (0, 0)

    two_escalas = rules.round_requirement("two-escalas")
    assert not two_escalas.is_met_by(combos)
    assert rules.missing_combos(combos, two_escalas) == (0, 1)


def test_describe() -> None:
    assert rules.round_requirement(2).describe() == "1 trío, 1 escala"
    assert rules.round_requirement(8).describe() == "4 tríos"


@pytest.mark.parametrize(
    ("meld", "card", "expected"),
    [
        ("5H 5C 5S", "5D", ShedPosition.TRIO_EXTENSION),
        ("5H 5C 5S", "JOKER", ShedPosition.TRIO_EXTENSION),
        ("5H 5C 5S", "6D", None),
        ("5H JOKER 5S", "JOKER", None),
        ("3H 4H 5H 6H", "2H", ShedPosition.EXTEND_LEFT),
        ("3H 4H 5H 6H", "7H", ShedPosition.EXTEND_RIGHT),
        ("3H 4H 5H 6H", "JOKER", ShedPosition.EXTEND_RIGHT),
        ("3H 4H 5H 6H", "7C", None),
        ("3H 4H 5H 6H", "9H", None),
        ("3H JOKER 5H 6H", "JOKER", None),
        ("JH QH KH AH", "2H", ShedPosition.EXTEND_RIGHT),
        ("6H 5H 4H 3H", "7H", ShedPosition.EXTEND_LEFT),
        ("6H 5H 4H 3H", "2H", ShedPosition.EXTEND_RIGHT),
        ("5H 6C", "7H", None),
        ("", "5H", None),
    ],
)
def test_can_shed(meld: str, card: str, expected: ShedPosition | None) -> None:
    assert rules.can_shed(Card.from_code(card), parse_hand(meld)) is expected


def test_find_sheddable_cards_lists_every_lay_off() -> None:
    hand = parse_hand("2H 9C 5D JOKER")
    table = {
        "p1": [parse_hand("3H 4H 5H 6H")],
        "p2": [parse_hand("5H 5C 5S")],
    }
    assert rules.find_sheddable_cards(hand, table) == [
        ShedAction(0, "p1", 0, ShedPosition.EXTEND_LEFT),
        ShedAction(2, "p2", 0, ShedPosition.TRIO_EXTENSION),
        ShedAction(3, "p1", 0, ShedPosition.EXTEND_RIGHT),
        ShedAction(3, "p2", 0, ShedPosition.TRIO_EXTENSION),
    ]


def test_find_sheddable_cards_with_empty_table() -> None:
    assert rules.find_sheddable_cards(parse_hand("2H 9C"), {}) == []


def test_find_best_bajada_uses_scattered_cards() -> None:
    hand = parse_hand("5H 9C 5C 3D 5S 9H 9S")
    assert rules.find_best_bajada(hand, 2, 0) == [
        MeldCandidate(TRIO, (0, 2, 4)),
        MeldCandidate(TRIO, (1, 5, 6)),
    ]


def test_find_best_bajada_trio_and_escala_with_joker() -> None:
    hand = parse_hand("6H 2C 4H JOKER 2D 3H 2S")
    assert rules.find_best_bajada(hand, 1, 1) == [
        MeldCandidate(TRIO, (1, 4, 6)),
        MeldCandidate(ESCALA, (0, 2, 3, 5)),
    ]


def test_find_best_bajada_prefers_fewer_jokers() -> None:
    hand = parse_hand("7H 7C JOKER 7S")
    assert rules.find_best_bajada(hand, 1, 0) == [MeldCandidate(TRIO, (0, 1, 3))]


def test_find_best_bajada_without_solution() -> None:
    assert rules.find_best_bajada(parse_hand("5H 5C 9S 9D"), 1, 0) is None
    assert rules.find_best_bajada(parse_hand("5H 5C 9S 9D"), 0, 0) == []
    with pytest.raises(ValueError):
        rules.find_best_bajada(parse_hand("5H 5C 5S"), -1, 0)


def test_meld_candidate_mask() -> None:
    assert MeldCandidate(TRIO, (0, 2, 4)).mask == 0b10101
