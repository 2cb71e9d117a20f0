"""Prompt helpers that re-ask until the input parses."""

from __future__ import annotations

from datetime import date

import questionary
from rich.console import Console

from aquabill.models import parse_amount

console = Console()


def ask_int(message: str, optional: bool = False) -> int | None:
    while True:
        val = questionary.text(message).ask()
        if val is None:
            return None
        val = val.strip()
        if not val and optional:
            return None
        try:
            return int(val)
        except ValueError:
            console.print("[red]Invalid number. Try again.[/red]")


def ask_amount(message: str, default: str = "") -> float | None:
    while True:
        val = questionary.text(message, default=default).ask()
        if val is None:
            return None
        parsed = parse_amount(val)
        if parsed is not None and parsed >= 0:
            return parsed
        console.print("[red]Invalid amount. Try again.[/red]")


def ask_date(message: str, default: date | None = None) -> date | None:
    default_text = default.isoformat() if default else ""
    while True:
        val = questionary.text(message, default=default_text).ask()
        if val is None:
            return None
        try:
            return date.fromisoformat(val.strip())
        except ValueError:
            console.print("[red]Invalid date. Use YYYY-MM-DD (e.g. 2024-01-15).[/red]")
