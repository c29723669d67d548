"""Greedy combo scanning over an ordered hand."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Final, Sequence

import numpy as np

from .cards import Card
from .melds import MIN_ESCALA_CARDS, MIN_TRIO_CARDS, is_valid_escala, is_valid_trio

logger = logging.getLogger(__name__)

__all__ = [
    "ComboType",
    "DetectedCombo",
    "ScanConfig",
    "DEFAULT_SCAN_CONFIG",
    "FIXED_LENGTH_SCAN_CONFIG",
    "detect_combos",
    "combo_cards",
]


class ComboType(str, Enum):
    """Kinds of meld the scanner can report."""

    TRIO = "trio"
    ESCALA = "escala"


@dataclass(frozen=True, slots=True)
class DetectedCombo:
    """A meld found in a scanned sequence; both bounds are inclusive."""

    type: ComboType
    start_index: int
    end_index: int

    @property
    def length(self) -> int:
        return self.end_index - self.start_index + 1

    def indices(self) -> range:
        return range(self.start_index, self.end_index + 1)


@dataclass(frozen=True, slots=True)
class ScanConfig:
    """Policy knobs for :func:`detect_combos`.

    ``greedy`` grows each match to the longest valid window; when disabled the
    scanner only accepts windows of exactly the minimum length (four for an
    escala, three for a trío).
    """

    greedy: bool = True


DEFAULT_SCAN_CONFIG: Final[ScanConfig] = ScanConfig()
FIXED_LENGTH_SCAN_CONFIG: Final[ScanConfig] = ScanConfig(greedy=False)


def _longest_window(
    cards: Sequence[Card],
    consumed: np.ndarray,
    start: int,
    min_length: int,
    is_valid: Callable[[Sequence[Card]], bool],
    greedy: bool,
) -> int:
    """Return the longest valid window length starting at ``start`` (0 if none)."""

    max_length = len(cards) - start if greedy else min(min_length, len(cards) - start)
    best = 0
    for length in range(min_length, max_length + 1):
        end = start + length
        if consumed[start:end].any():
            # Longer windows contain the same consumed index.
            break
        if is_valid(cards[start:end]):
            best = length
        elif best:
            break
    return best


def _scan_pass(
    cards: Sequence[Card],
    consumed: np.ndarray,
    combo_type: ComboType,
    min_length: int,
    is_valid: Callable[[Sequence[Card]], bool],
    greedy: bool,
) -> list[DetectedCombo]:
    found: list[DetectedCombo] = []
    for start in range(len(cards) - min_length + 1):
        if consumed[start]:
            continue
        length = _longest_window(cards, consumed, start, min_length, is_valid, greedy)
        if not length:
            continue
        consumed[start : start + length] = True
        found.append(DetectedCombo(combo_type, start, start + length - 1))
        logger.debug("detected %s at [%d, %d]", combo_type.value, start, start + length - 1)
    return found


def detect_combos(
    sequence: Sequence[Card],
    config: ScanConfig = DEFAULT_SCAN_CONFIG,
) -> list[DetectedCombo]:
    """Partition ``sequence`` into non-overlapping escalas and tríos.

    Escalas are reserved first, then tríos are taken from whatever positions
    remain. At each free start position the longest valid window wins. The
    result is sorted by ``start_index`` and identical across repeated calls.
    """

    cards = list(sequence)
    if len(cards) < MIN_TRIO_CARDS:
        return []

    consumed = np.zeros(len(cards), dtype=bool)
    combos = _scan_pass(cards, consumed, ComboType.ESCALA, MIN_ESCALA_CARDS, is_valid_escala, config.greedy)
    combos += _scan_pass(cards, consumed, ComboType.TRIO, MIN_TRIO_CARDS, is_valid_trio, config.greedy)
    combos.sort(key=lambda combo: combo.start_index)
    return combos


def combo_cards(sequence: Sequence[Card], combos: Sequence[DetectedCombo]) -> list[list[Card]]:
    """Slice ``sequence`` into the card groups described by ``combos``."""

    groups: list[list[Card]] = []
    for combo in combos:
        if combo.start_index < 0 or combo.end_index >= len(sequence) or combo.start_index > combo.end_index:
            raise IndexError(f"combo {combo} does not fit a sequence of {len(sequence)} cards")
        groups.append(list(sequence[combo.start_index : combo.end_index + 1]))
    return groups
