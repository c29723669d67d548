"""Top-level package for the Carioca meld engine."""

from . import cards, combos, encoding, melds, rules
from .cards import JOKER, Card, CardParseError, Suit, Value, parse_hand, rank_of, suit_of
from .combos import (
    DEFAULT_SCAN_CONFIG,
    FIXED_LENGTH_SCAN_CONFIG,
    ComboType,
    DetectedCombo,
    ScanConfig,
    combo_cards,
    detect_combos,
)
from .encoding import wrapped_rank
from .melds import can_form_escala, is_partial_escala, is_partial_trio, is_valid_escala, is_valid_trio
from .rules import (
    ROUNDS,
    MeldCandidate,
    RoundRequirement,
    ShedAction,
    ShedPosition,
    can_card_extend_group,
    can_shed,
    count_combos,
    find_best_bajada,
    find_sheddable_cards,
    is_bajada_complete,
    missing_combos,
    round_requirement,
)

__all__ = [
    "cards",
    "combos",
    "encoding",
    "melds",
    "rules",
    "JOKER",
    "Card",
    "CardParseError",
    "Suit",
    "Value",
    "parse_hand",
    "rank_of",
    "suit_of",
    "ComboType",
    "DetectedCombo",
    "DEFAULT_SCAN_CONFIG",
    "FIXED_LENGTH_SCAN_CONFIG",
    "ScanConfig",
    "combo_cards",
    "detect_combos",
    "wrapped_rank",
    "can_form_escala",
    "is_partial_escala",
    "is_partial_trio",
    "is_valid_escala",
    "is_valid_trio",
    "ROUNDS",
    "RoundRequirement",
    "MeldCandidate",
    "ShedAction",
    "ShedPosition",
    "can_card_extend_group",
    "can_shed",
    "count_combos",
    "find_best_bajada",
    "find_sheddable_cards",
    "is_bajada_complete",
    "missing_combos",
    "round_requirement",
]
