"""Rendering helpers dedicated to the CLI experience."""

from __future__ import annotations

from typing import Sequence

from rich import box
from rich.table import Table
from rich.text import Text

from ..cards import Card, Suit
from ..combos import ComboType, DetectedCombo
from ..rules import RoundRequirement

_SUIT_COLOURS = {
    Suit.HEARTS: "red",
    Suit.DIAMONDS: "magenta",
    Suit.CLUBS: "green",
    Suit.SPADES: "cyan",
}
_COMBO_STYLES = {
    ComboType.TRIO: "bold yellow",
    ComboType.ESCALA: "bold blue",
}


def format_card(card: Card) -> str:
    """Return a Rich-rendered label for ``card``."""

    if card.is_joker:
        return "[magenta]🃏[/magenta]"
    colour = _SUIT_COLOURS.get(card.suit, "white") if card.suit else "white"
    return f"[{colour}]{card.label()}[/{colour}]"


def format_hand(cards: Sequence[Card], combos: Sequence[DetectedCombo] = ()) -> Text:
    """Render the hand with each combo wrapped in brackets."""

    starts = {combo.start_index: combo for combo in combos}
    ends = {combo.end_index for combo in combos}
    markup: list[str] = []
    for index, card in enumerate(cards):
        label = format_card(card)
        if index in starts:
            style = _COMBO_STYLES[starts[index].type]
            label = f"[{style}]([/{style}]{label}"
        if index in ends:
            label = f"{label}[bold])[/bold]"
        markup.append(label)
    return Text.from_markup(" ".join(markup) if markup else "—")


def combos_table(cards: Sequence[Card], combos: Sequence[DetectedCombo]) -> Table:
    table = Table(box=box.ROUNDED, title="Detected combos")
    table.add_column("#", justify="right")
    table.add_column("Type", justify="left")
    table.add_column("Range", justify="left")
    table.add_column("Cards", justify="left")
    for number, combo in enumerate(combos, start=1):
        style = _COMBO_STYLES[combo.type]
        group = " ".join(format_card(card) for card in cards[combo.start_index : combo.end_index + 1])
        table.add_row(
            str(number),
            f"[{style}]{combo.type.value}[/{style}]",
            f"{combo.start_index}–{combo.end_index}",
            group,
        )
    return table


def rounds_table(rounds: Sequence[RoundRequirement]) -> Table:
    table = Table(box=box.SIMPLE, title="Rounds")
    table.add_column("#", justify="right")
    table.add_column("Key", justify="left")
    table.add_column("Requirement", justify="left")
    for number, requirement in enumerate(rounds, start=1):
        table.add_row(str(number), requirement.key, requirement.describe())
    return table
