"""Card abstractions and helpers for Carioca."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Mapping

from . import encoding

__all__ = [
    "CardParseError",
    "Suit",
    "Value",
    "Card",
    "JOKER",
    "rank_of",
    "suit_of",
    "parse_hand",
]


class CardParseError(ValueError):
    """Raised when a card code or payload cannot be understood."""


class Suit(str, Enum):
    """Enumeration of the four suits in a Carioca deck."""

    HEARTS = "Hearts"
    DIAMONDS = "Diamonds"
    CLUBS = "Clubs"
    SPADES = "Spades"

    @property
    def symbol(self) -> str:
        return encoding.SUIT_SYMBOLS[encoding.SUITS.index(self.value)]


class Value(str, Enum):
    """Enumeration of card values, lowest rank first."""

    TWO = "Two"
    THREE = "Three"
    FOUR = "Four"
    FIVE = "Five"
    SIX = "Six"
    SEVEN = "Seven"
    EIGHT = "Eight"
    NINE = "Nine"
    TEN = "Ten"
    JACK = "Jack"
    QUEEN = "Queen"
    KING = "King"
    ACE = "Ace"

    @property
    def rank(self) -> int:
        """Return the rank (2..14) of this value."""

        return encoding.VALUE_TO_RANK[self.value]


_VALUE_BY_LABEL = {value.value: value for value in Value}
_SUIT_BY_LABEL = {suit.value: suit for suit in Suit}


@dataclass(frozen=True, slots=True)
class Card:
    """Value object describing a single physical card.

    A Joker carries neither suit nor value. A standard card always has a suit;
    its value is ``None`` only when a collaborator sent a label the engine does
    not recognise, in which case every validator treats it as a non-match.
    """

    suit: Suit | None = None
    value: Value | None = None

    @classmethod
    def standard(cls, suit: Suit, value: Value) -> "Card":
        return cls(suit=suit, value=value)

    @classmethod
    def joker(cls) -> "Card":
        return cls(suit=None, value=None)

    @classmethod
    def from_code(cls, code: str) -> "Card":
        """Parse a compact code such as ``10H``, ``KS``, ``AD`` or ``JOKER``."""

        text = code.strip().upper()
        if text in (encoding.JOKER_CODE, "JK", "*"):
            return cls.joker()
        if len(text) < 2:
            raise CardParseError(f"invalid card code '{code}'")
        value_part, suit_part = text[:-1], text[-1]
        if value_part == "T":
            value_part = "10"
        value_label = encoding.SHORT_TO_VALUE.get(value_part)
        suit_label = encoding.SHORT_TO_SUIT.get(suit_part)
        if value_label is None or suit_label is None:
            raise CardParseError(f"invalid card code '{code}'")
        return cls(suit=_SUIT_BY_LABEL[suit_label], value=_VALUE_BY_LABEL[value_label])

    @classmethod
    def from_wire(cls, payload: Any) -> "Card":
        """Build a card from the ``{"Standard": {...}}`` / ``"Joker"`` payload shape.

        Unknown value labels are kept as a valueless standard card so that the
        validators fail closed; an unknown suit or shape is rejected.
        """

        if payload == "Joker":
            return cls.joker()
        if not isinstance(payload, Mapping) or "Standard" not in payload:
            raise CardParseError(f"unrecognised card payload {payload!r}")
        body = payload["Standard"]
        if not isinstance(body, Mapping):
            raise CardParseError(f"unrecognised card payload {payload!r}")
        suit_label = body.get("suit")
        suit = _SUIT_BY_LABEL.get(suit_label) if isinstance(suit_label, str) else None
        if suit is None:
            raise CardParseError(f"unknown suit {suit_label!r}")
        value_label = body.get("value")
        value = _VALUE_BY_LABEL.get(value_label) if isinstance(value_label, str) else None
        return cls(suit=suit, value=value)

    def to_wire(self) -> Any:
        if self.is_joker:
            return "Joker"
        return {
            "Standard": {
                "suit": self.suit.value if self.suit else None,
                "value": self.value.value if self.value else None,
            }
        }

    @property
    def is_joker(self) -> bool:
        """Return ``True`` when the card represents a Joker."""

        return self.suit is None and self.value is None

    @property
    def rank(self) -> int | None:
        if self.value is None:
            return None
        return self.value.rank

    @property
    def code(self) -> str:
        if self.is_joker:
            return encoding.JOKER_CODE
        return encoding.short_label(
            self.value.value if self.value else None,
            self.suit.value if self.suit else None,
        )

    def label(self) -> str:
        """Create a display label suitable for CLI representations."""

        if self.is_joker:
            return "🃏"
        value_part = self.code[:-1]
        suit_part = self.suit.symbol if self.suit else "?"
        return f"{value_part}{suit_part}"


JOKER = Card.joker()


def rank_of(card: Card) -> int | None:
    """Return the rank of ``card`` or ``None`` for Jokers and unknown values."""

    if card.is_joker:
        return None
    return card.rank


def suit_of(card: Card) -> Suit | None:
    """Return the suit of ``card`` or ``None`` for Jokers."""

    if card.is_joker:
        return None
    return card.suit


def parse_hand(codes: str | Iterable[str]) -> list[Card]:
    """Parse whitespace separated codes (or an iterable of codes) into cards."""

    if isinstance(codes, str):
        codes = codes.split()
    return [Card.from_code(code) for code in codes]
