"""Trío and escala validators operating on contiguous card slices."""

from __future__ import annotations

from typing import Final, Sequence, cast

from .cards import Card, rank_of, suit_of
from .encoding import RING_SIZE, wrapped_rank

MIN_TRIO_CARDS: Final[int] = 3
MIN_ESCALA_CARDS: Final[int] = 4
MAX_ESCALA_CARDS: Final[int] = RING_SIZE
MAX_JOKERS_PER_MELD: Final[int] = 1

__all__ = [
    "MIN_TRIO_CARDS",
    "MIN_ESCALA_CARDS",
    "MAX_ESCALA_CARDS",
    "MAX_JOKERS_PER_MELD",
    "joker_count",
    "is_valid_trio",
    "is_partial_trio",
    "is_valid_escala",
    "is_partial_escala",
    "can_form_escala",
]


def joker_count(cards: Sequence[Card]) -> int:
    """Return how many Jokers appear in ``cards``."""

    return sum(1 for card in cards if card.is_joker)


def _shares_one_value(cards: Sequence[Card]) -> bool:
    jokers = 0
    target_rank: int | None = None
    for card in cards:
        if card.is_joker:
            jokers += 1
            continue
        rank = rank_of(card)
        if rank is None:
            return False
        if target_rank is None:
            target_rank = rank
        elif rank != target_rank:
            return False
    return jokers <= MAX_JOKERS_PER_MELD and target_rank is not None


def is_valid_trio(cards: Sequence[Card]) -> bool:
    """Return ``True`` when ``cards`` form a trío.

    Three or more cards sharing one value, at most one Joker and at least one
    standard card. Order is irrelevant.
    """

    if len(cards) < MIN_TRIO_CARDS:
        return False
    return _shares_one_value(cards)


def is_partial_trio(cards: Sequence[Card]) -> bool:
    """Return ``True`` for exactly two cards that one more card could turn into a trío."""

    if len(cards) != MIN_TRIO_CARDS - 1:
        return False
    return _shares_one_value(cards)


def _follows_run(cards: Sequence[Card], anchor_index: int, anchor_rank: int, step: int) -> bool:
    """Check every standard card sits ``step`` ranks per position away from the anchor."""

    for index, card in enumerate(cards):
        if card.is_joker:
            continue
        expected = wrapped_rank(anchor_rank, step * (index - anchor_index))
        if rank_of(card) != expected:
            return False
    return True


def _is_run(cards: Sequence[Card]) -> bool:
    if len(cards) > MAX_ESCALA_CARDS:
        return False
    jokers = joker_count(cards)
    if jokers > MAX_JOKERS_PER_MELD:
        return False

    standard = [card for card in cards if not card.is_joker]
    if not standard:
        return False
    ranks = [rank_of(card) for card in standard]
    if None in ranks:
        return False
    target_suit = suit_of(standard[0])
    if any(suit_of(card) != target_suit for card in standard):
        return False

    anchor_index = next(index for index, card in enumerate(cards) if not card.is_joker)
    anchor_rank = cast(int, ranks[0])
    if _follows_run(cards, anchor_index, anchor_rank, 1):
        return True
    if _follows_run(cards, anchor_index, anchor_rank, -1):
        return True

    if not jokers:
        return False
    # A Joker that fills no gap extends the run at one of its ends.
    return _follows_run(standard, 0, anchor_rank, 1) or _follows_run(standard, 0, anchor_rank, -1)


def is_valid_escala(cards: Sequence[Card]) -> bool:
    """Return ``True`` when ``cards`` form an escala.

    Four to thirteen cards of one suit with consecutive ranks on the wrapping
    ring, read either ascending or descending from the first standard card.
    At most one Joker, which stands in for the rank expected at its position.
    ``K A 2 3`` of one suit is a valid escala.
    """

    if len(cards) < MIN_ESCALA_CARDS:
        return False
    return _is_run(cards)


def is_partial_escala(cards: Sequence[Card]) -> bool:
    """Return ``True`` for two or three cards that could still grow into an escala."""

    if not 2 <= len(cards) < MIN_ESCALA_CARDS:
        return False
    return _is_run(cards)


def can_form_escala(cards: Sequence[Card]) -> bool:
    """Return ``True`` when ``cards``, in any order, could be laid out as an escala.

    Unlike :func:`is_valid_escala` this ignores positions: the standard cards
    need distinct ranks of one suit inside a single window of the rank ring,
    and the Joker (at most one) covers the missing rank.
    """

    if not MIN_ESCALA_CARDS <= len(cards) <= MAX_ESCALA_CARDS:
        return False
    if joker_count(cards) > MAX_JOKERS_PER_MELD:
        return False
    standard = [card for card in cards if not card.is_joker]
    if not standard:
        return False
    ranks = {rank_of(card) for card in standard}
    if None in ranks or len(ranks) != len(standard):
        return False
    target_suit = suit_of(standard[0])
    if any(suit_of(card) != target_suit for card in standard):
        return False

    for first in cast("set[int]", ranks):
        for shift in range(len(cards)):
            start = wrapped_rank(first, -shift)
            window = {wrapped_rank(start, step) for step in range(len(cards))}
            if ranks <= window:
                return True
    return False
