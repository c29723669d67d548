"""Drop validation and round requirements for Carioca."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from itertools import combinations
from typing import Final, Iterable, Mapping, Sequence

from .cards import Card
from .combos import ComboType, DetectedCombo
from .melds import (
    MIN_ESCALA_CARDS,
    MIN_TRIO_CARDS,
    can_form_escala,
    is_partial_escala,
    is_partial_trio,
    is_valid_escala,
    is_valid_trio,
    joker_count,
)

logger = logging.getLogger(__name__)

__all__ = [
    "RoundRequirement",
    "ROUNDS",
    "ShedPosition",
    "ShedAction",
    "MeldCandidate",
    "can_shed",
    "find_sheddable_cards",
    "find_best_bajada",
    "can_card_extend_group",
    "count_combos",
    "is_bajada_complete",
    "missing_combos",
    "round_requirement",
]


def can_card_extend_group(existing_group: Sequence[Card], candidate: Card) -> bool:
    """Return ``True`` if appending ``candidate`` keeps the group productive.

    The extended group must either be a meld already or still be a partial
    trío or escala. Nothing is mutated.
    """

    extended = [*existing_group, candidate]
    if is_valid_trio(extended) or is_valid_escala(extended):
        return True
    return is_partial_trio(extended) or is_partial_escala(extended)


def count_combos(combos: Iterable[DetectedCombo]) -> tuple[int, int]:
    """Return ``(trios, escalas)`` counted by combo type."""

    trios = 0
    escalas = 0
    for combo in combos:
        if combo.type == ComboType.TRIO:
            trios += 1
        elif combo.type == ComboType.ESCALA:
            escalas += 1
    return trios, escalas


def is_bajada_complete(
    combos: Iterable[DetectedCombo],
    required_trios: int,
    required_escalas: int,
) -> bool:
    """Return ``True`` when both the trío and escala requirements are met.

    An extra escala never stands in for a missing trío, nor the other way round.
    """

    trios, escalas = count_combos(combos)
    return trios >= required_trios and escalas >= required_escalas


@dataclass(frozen=True, slots=True)
class RoundRequirement:
    """Melds a player must lay down to complete the bajada of one round."""

    name: str
    trios: int
    escalas: int

    def __post_init__(self) -> None:
        if self.trios < 0 or self.escalas < 0:
            raise ValueError("round requirements must be non-negative")

    @property
    def key(self) -> str:
        return self.name.lower().replace(" ", "-")

    def is_met_by(self, combos: Iterable[DetectedCombo]) -> bool:
        return is_bajada_complete(combos, self.trios, self.escalas)

    def describe(self) -> str:
        parts = []
        if self.trios:
            parts.append(f"{self.trios} trío{'s' if self.trios != 1 else ''}")
        if self.escalas:
            parts.append(f"{self.escalas} escala{'s' if self.escalas != 1 else ''}")
        return ", ".join(parts) or "nothing"


ROUNDS: Final[tuple[RoundRequirement, ...]] = (
    RoundRequirement("Two Trios", trios=2, escalas=0),
    RoundRequirement("Trio Escala", trios=1, escalas=1),
    RoundRequirement("Two Escalas", trios=0, escalas=2),
    RoundRequirement("Three Trios", trios=3, escalas=0),
    RoundRequirement("Two Trios Escala", trios=2, escalas=1),
    RoundRequirement("Trio Two Escalas", trios=1, escalas=2),
    RoundRequirement("Three Escalas", trios=0, escalas=3),
    RoundRequirement("Four Trios", trios=4, escalas=0),
    RoundRequirement("Escala Real", trios=0, escalas=1),
)


def round_requirement(key: str | int) -> RoundRequirement:
    """Look up a round by 1-based number or by name (``"two-trios"``)."""

    if isinstance(key, int) or (isinstance(key, str) and key.strip().isdigit()):
        number = int(key)
        if not 1 <= number <= len(ROUNDS):
            raise KeyError(f"unknown round {key!r}")
        return ROUNDS[number - 1]
    wanted = key.strip().lower().replace(" ", "-").replace("_", "-")
    for requirement in ROUNDS:
        if requirement.key == wanted:
            return requirement
    raise KeyError(f"unknown round {key!r}")


def missing_combos(combos: Iterable[DetectedCombo], requirement: RoundRequirement) -> tuple[int, int]:
    """Return how many tríos and escalas are still missing for ``requirement``."""

    trios, escalas = count_combos(combos)
    missing = (max(requirement.trios - trios, 0), max(requirement.escalas - escalas, 0))
    logger.debug(
        "round %s: have %d/%d trios, %d/%d escalas",
        requirement.key,
        trios,
        requirement.trios,
        escalas,
        requirement.escalas,
    )
    return missing


class ShedPosition(str, Enum):
    """Where a card lands when laid off onto a meld already on the table."""

    EXTEND_LEFT = "extend_left"
    EXTEND_RIGHT = "extend_right"
    TRIO_EXTENSION = "trio_extension"


@dataclass(frozen=True, slots=True)
class ShedAction:
    """A legal lay-off of a hand card onto another player's meld."""

    hand_index: int
    target_player: str
    target_meld_index: int
    position: ShedPosition


def can_shed(card: Card, meld: Sequence[Card]) -> ShedPosition | None:
    """Return where ``card`` can be laid off onto ``meld``, or ``None``.

    A trío accepts another card of its value. An escala accepts a card of its
    suit at either end, in the direction the meld is laid out. Either kind
    refuses a second Joker.
    """

    if not meld:
        return None
    if is_valid_trio(meld):
        if is_valid_trio([*meld, card]):
            return ShedPosition.TRIO_EXTENSION
        return None
    if not is_valid_escala(meld):
        return None

    left = [card, *meld]
    right = [*meld, card]
    if card.is_joker:
        if is_valid_escala(right):
            return ShedPosition.EXTEND_RIGHT
        if is_valid_escala(left):
            return ShedPosition.EXTEND_LEFT
        return None
    if is_valid_escala(left):
        return ShedPosition.EXTEND_LEFT
    if is_valid_escala(right):
        return ShedPosition.EXTEND_RIGHT
    return None


def find_sheddable_cards(
    hand: Sequence[Card],
    table: Mapping[str, Sequence[Sequence[Card]]],
) -> list[ShedAction]:
    """List every lay-off of a ``hand`` card onto the melds in ``table``.

    ``table`` maps a player id to the melds that player has laid down. Actions
    come out in hand order, then table order.
    """

    actions: list[ShedAction] = []
    for hand_index, card in enumerate(hand):
        for player, melds in table.items():
            for meld_index, meld in enumerate(melds):
                position = can_shed(card, meld)
                if position is not None:
                    actions.append(ShedAction(hand_index, player, meld_index, position))
    return actions


@dataclass(frozen=True, slots=True)
class MeldCandidate:
    """A trío or escala drawn from arbitrary (not necessarily adjacent) hand positions."""

    type: ComboType
    indices: tuple[int, ...]

    @property
    def mask(self) -> int:
        mask = 0
        for index in self.indices:
            mask |= 1 << index
        return mask


def _meld_candidates(hand: Sequence[Card]) -> tuple[list[MeldCandidate], list[MeldCandidate]]:
    """Return minimum-size trío and escala candidates, joker-free ones first."""

    def sort_key(candidate: MeldCandidate) -> tuple[int, tuple[int, ...]]:
        return joker_count([hand[index] for index in candidate.indices]), candidate.indices

    trios = [
        MeldCandidate(ComboType.TRIO, indices)
        for indices in combinations(range(len(hand)), MIN_TRIO_CARDS)
        if is_valid_trio([hand[index] for index in indices])
    ]
    escalas = [
        MeldCandidate(ComboType.ESCALA, indices)
        for indices in combinations(range(len(hand)), MIN_ESCALA_CARDS)
        if can_form_escala([hand[index] for index in indices])
    ]
    return sorted(trios, key=sort_key), sorted(escalas, key=sort_key)


def find_best_bajada(
    hand: Sequence[Card],
    required_trios: int,
    required_escalas: int,
) -> list[MeldCandidate] | None:
    """Pick disjoint melds from anywhere in ``hand`` that satisfy a round.

    Each trío uses three cards and each escala four, which is what a bajada
    lays down. Among all solutions the one using the fewest Jokers wins, ties
    broken by the earliest hand positions. Returns ``None`` when the hand
    cannot meet the requirement.
    """

    if required_trios < 0 or required_escalas < 0:
        raise ValueError("round requirements must be non-negative")
    trios, escalas = _meld_candidates(hand)
    jokers_in = {
        candidate: joker_count([hand[index] for index in candidate.indices])
        for candidate in trios + escalas
    }

    best: list[MeldCandidate] | None = None
    best_key: tuple[int, list[tuple[int, ...]]] | None = None
    chosen: list[MeldCandidate] = []

    def search(
        pool: list[MeldCandidate],
        needed: int,
        start: int,
        used: int,
        remaining_escalas: int,
    ) -> None:
        nonlocal best, best_key
        if needed == 0:
            if remaining_escalas:
                search(escalas, remaining_escalas, 0, used, 0)
                return
            key = (
                sum(jokers_in[meld] for meld in chosen),
                sorted(meld.indices for meld in chosen),
            )
            if best_key is None or key < best_key:
                best_key = key
                best = list(chosen)
            return
        for position in range(start, len(pool)):
            candidate = pool[position]
            if candidate.mask & used:
                continue
            chosen.append(candidate)
            search(pool, needed - 1, position + 1, used | candidate.mask, remaining_escalas)
            chosen.pop()

    search(trios, required_trios, 0, 0, required_escalas)
    logger.debug(
        "bajada search for %d trios, %d escalas over %d cards: %s",
        required_trios,
        required_escalas,
        len(hand),
        "found" if best is not None else "none",
    )
    return best
