"""Shell and output utilities.

Provides a small process-runner seam around subprocess calls (so the publish
step can be tested without spawning anything) plus the output helpers used
by every phase of the release workflow.
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

import click

from .models import ProcessResult


class ProcessRunner(Protocol):
    """Anything that can run a command in a directory and capture its output."""

    def run(self, command: Sequence[str], cwd: Path) -> ProcessResult: ...


class SubprocessRunner:
    """Run commands with subprocess, capturing stdout and stderr.

    Non-zero exits are returned, not raised. An OSError (e.g. the executable
    does not exist) propagates to the caller.
    """

    def run(self, command: Sequence[str], cwd: Path) -> ProcessResult:
        result = subprocess.run(
            list(command), cwd=cwd, capture_output=True, text=True, check=False
        )
        return ProcessResult(
            exit_code=result.returncode,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
        )


def step(msg: str) -> None:
    """Print a visually distinct step header.

    Used to separate the phases of the release workflow in terminal output.
    """
    click.echo(f"\n{'─' * 60}\n{msg}\n{'─' * 60}")


def info(msg: str) -> None:
    click.echo(f"  {msg}")


def warn(msg: str) -> None:
    click.echo(f"Warning: {msg}", err=True)


def error(msg: str) -> None:
    click.echo(f"Error: {msg}", err=True)
