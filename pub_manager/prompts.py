"""Operator prompts.

The workflow only talks to the Prompter protocol, so it can be driven by a
scripted prompter in tests and by click prompts on a real terminal.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import Protocol

import click


class Prompter(Protocol):
    def choose(
        self, question: str, options: Sequence[str], default: str | None = None
    ) -> str:
        """Return one of options."""
        ...

    def ask(self, question: str) -> str:
        """Return a free-text answer."""
        ...

    def confirm(self, question: str, default: bool) -> bool: ...

    def read_lines(self, question: str) -> list[str]:
        """Collect lines until a blank line; returned lines are trimmed."""
        ...


class ClickPrompter:
    """Prompter backed by click on the controlling terminal."""

    def choose(
        self, question: str, options: Sequence[str], default: str | None = None
    ) -> str:
        return click.prompt(question, type=click.Choice(list(options)), default=default)

    def ask(self, question: str) -> str:
        return click.prompt(question, type=str)

    def confirm(self, question: str, default: bool) -> bool:
        return click.confirm(question, default=default)

    def read_lines(self, question: str) -> list[str]:
        click.echo(question)
        lines: list[str] = []
        while True:
            line = sys.stdin.readline()
            # EOF or an empty line ends the input
            if not line or not line.strip():
                break
            lines.append(line.strip())
        return lines
