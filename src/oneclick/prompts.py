"""Interactive input sources.

Collectors and generators never talk to the terminal directly; they ask a
:class:`Prompter`.  :class:`ConsolePrompter` implements it with
``rich.prompt`` for real runs, and tests substitute a scripted implementation.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from rich.prompt import Confirm, Prompt

from .utils import console, print_error


class Prompter(Protocol):
    """Abstract question/answer surface used by the generation pipeline."""

    def ask(self, question: str, default: str | None = None) -> str:
        """Free-text answer (may be empty)."""
        ...

    def choice(self, question: str, choices: Sequence[str], default: str | None = None) -> str:
        """Exactly one of *choices*."""
        ...

    def multi_choice(
        self, question: str, choices: Sequence[str], default: Sequence[str] | None = None
    ) -> list[str]:
        """Zero or more of *choices*, in the order the user gave them."""
        ...

    def confirm(self, question: str, default: bool = True) -> bool:
        """Yes/no answer."""
        ...


class ConsolePrompter:
    """Prompter backed by ``rich.prompt``; blocks until the user answers."""

    def ask(self, question: str, default: str | None = None) -> str:
        if default is None:
            answer = Prompt.ask(question, console=console)
        else:
            answer = Prompt.ask(question, default=default, console=console)
        return (answer or "").strip()

    def choice(self, question: str, choices: Sequence[str], default: str | None = None) -> str:
        options = list(choices)
        if default is None:
            return Prompt.ask(question, choices=options, console=console)
        return Prompt.ask(question, choices=options, default=default, console=console)

    def multi_choice(
        self, question: str, choices: Sequence[str], default: Sequence[str] | None = None
    ) -> list[str]:
        options = list(choices)
        for index, option in enumerate(options, start=1):
            console.print(f"  [bold]{index}[/bold]. {option}")
        default_text = ",".join(default) if default else ""

        while True:
            raw = Prompt.ask(
                f"{question} (comma-separated names or numbers)",
                default=default_text,
                console=console,
            )
            selected, invalid = parse_multi_choice(raw, options)
            if invalid:
                print_error(f"Invalid selection: {', '.join(invalid)}")
                continue
            return selected

    def confirm(self, question: str, default: bool = True) -> bool:
        return Confirm.ask(question, default=default, console=console)


def parse_multi_choice(raw: str | None, options: Sequence[str]) -> tuple[list[str], list[str]]:
    """Split a comma-separated answer into ``(selected, invalid)`` tokens.

    Tokens may be option names (case-insensitive) or 1-based indexes;
    duplicates are dropped while keeping the first occurrence.
    """
    by_name = {option.lower(): option for option in options}
    selected: list[str] = []
    invalid: list[str] = []

    for token in (raw or "").split(","):
        token = token.strip()
        if not token:
            continue
        if token.isdigit() and 1 <= int(token) <= len(options):
            option = options[int(token) - 1]
        else:
            option = by_name.get(token.lower())
        if option is None:
            invalid.append(token)
        elif option not in selected:
            selected.append(option)
    return selected, invalid
