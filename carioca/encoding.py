"""Rank tables, labels, and ring arithmetic for Carioca cards."""

from __future__ import annotations

from typing import Final

VALUES: Final[list[str]] = [
    "Two",
    "Three",
    "Four",
    "Five",
    "Six",
    "Seven",
    "Eight",
    "Nine",
    "Ten",
    "Jack",
    "Queen",
    "King",
    "Ace",
]
SUITS: Final[list[str]] = ["Hearts", "Diamonds", "Clubs", "Spades"]
SHORT_VALUES: Final[list[str]] = ["2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K", "A"]
SHORT_SUITS: Final[list[str]] = ["H", "D", "C", "S"]
SUIT_SYMBOLS: Final[list[str]] = ["♥", "♦", "♣", "♠"]

LOWEST_RANK: Final[int] = 2
RING_SIZE: Final[int] = len(VALUES)

VALUE_TO_RANK: Final[dict[str, int]] = {value: idx + LOWEST_RANK for idx, value in enumerate(VALUES)}
SHORT_TO_VALUE: Final[dict[str, str]] = dict(zip(SHORT_VALUES, VALUES))
SHORT_TO_SUIT: Final[dict[str, str]] = dict(zip(SHORT_SUITS, SUITS))
JOKER_CODE: Final[str] = "JOKER"


def wrapped_rank(start_rank: int, offset: int) -> int:
    """Return the rank ``offset`` steps away from ``start_rank`` on the 13-rank ring.

    Ranks 2..14 are shifted to a zero-based index, moved by ``offset``, reduced
    into ``[0, 13)`` and shifted back, so ``wrapped_rank(14, 1) == 2`` and
    ``wrapped_rank(2, -1) == 14``.
    """

    # Python's modulo already lands in [0, RING_SIZE) for negative offsets.
    index = (start_rank - LOWEST_RANK + offset) % RING_SIZE
    return index + LOWEST_RANK


def short_label(value: str | None, suit: str | None) -> str:
    """Return the compact code (``10H``, ``KS``) used on the command line."""

    value_part = SHORT_VALUES[VALUES.index(value)] if value in VALUES else "?"
    suit_part = SHORT_SUITS[SUITS.index(suit)] if suit in SUITS else "?"
    return f"{value_part}{suit_part}"
