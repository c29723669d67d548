"""Typer entry-point wiring for the Carioca CLI."""

from __future__ import annotations

import logging
from typing import List

import typer
from rich.console import Console
from rich.panel import Panel

from .. import cards, combos, rules
from .render import combos_table, format_card, format_hand, rounds_table

app = typer.Typer(
    add_completion=False,
    rich_markup_mode="rich",
    help="Inspect Carioca hands for tríos and escalas.",
)
console = Console()


@app.callback()
def _configure(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log scanner decisions to stderr."),
) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _parse(codes: List[str]) -> list[cards.Card]:
    """Parse card codes, turning bad input into a usage error."""

    try:
        return cards.parse_hand(" ".join(codes))
    except cards.CardParseError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command()
def scan(
    hand: List[str] = typer.Argument(..., help="Card codes in hand order, e.g. KH AH 2H 3H JOKER."),
    fixed: bool = typer.Option(False, "--fixed", help="Only accept minimum-length combos (3 or 4 cards)."),
) -> None:
    """Detect tríos and escalas in the given hand."""

    parsed = _parse(hand)
    config = combos.FIXED_LENGTH_SCAN_CONFIG if fixed else combos.DEFAULT_SCAN_CONFIG
    detected = combos.detect_combos(parsed, config)
    console.print(format_hand(parsed, detected))
    if not detected:
        console.print("[dim]No combos detected[/dim]")
        return
    console.print(combos_table(parsed, detected))


@app.command()
def check(
    hand: List[str] = typer.Argument(..., help="Card codes in hand order."),
    round_key: str = typer.Option("1", "--round", "-r", help="Round number (1-9) or key such as two-trios."),
) -> None:
    """Report whether the hand completes the bajada for a round."""

    try:
        requirement = rules.round_requirement(round_key)
    except KeyError as exc:
        raise typer.BadParameter(f"unknown round '{round_key}'", param_hint="--round") from exc

    parsed = _parse(hand)
    detected = combos.detect_combos(parsed)
    console.print(format_hand(parsed, detected))
    missing_trios, missing_escalas = rules.missing_combos(detected, requirement)
    if requirement.is_met_by(detected):
        console.print(Panel(f"Bajada complete for [bold]{requirement.name}[/bold]", border_style="green"))
        return
    console.print(
        Panel(
            f"Missing {missing_trios} trío(s) and {missing_escalas} escala(s) for "
            f"[bold]{requirement.name}[/bold] ({requirement.describe()})",
            border_style="red",
        )
    )
    raise typer.Exit(code=1)


@app.command()
def extend(
    card: str = typer.Argument(..., help="Card to drop onto the group."),
    group: str = typer.Option("", "--group", "-g", help="Existing group as space separated codes."),
) -> None:
    """Check whether a card keeps a group on track towards a meld."""

    existing = _parse(group.split())
    candidate = _parse([card])[0]
    verdict = rules.can_card_extend_group(existing, candidate)
    label = "[green]accepted[/green]" if verdict else "[red]rejected[/red]"
    shown = " ".join(format_card(item) for item in existing) or "—"
    console.print(f"{format_card(candidate)} onto {shown}: {label}")
    if not verdict:
        raise typer.Exit(code=1)


@app.command("rounds")
def rounds_cli() -> None:
    """List the rounds and their bajada requirements."""

    console.print(rounds_table(rules.ROUNDS))


def main() -> None:
    """Entry-point for the ``carioca`` console script."""

    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation
    main()
