"""CLI entry point for pub-manager."""

from __future__ import annotations

import click

from pub_manager.errors import ReleaseError
from pub_manager.pipeline import run_release


@click.group()
@click.version_option(package_name="pub-manager")
def cli() -> None:
    """Release one package of a monorepo and update everything that depends on it."""


@cli.command()
@click.option(
    "-d",
    "--dry-run",
    is_flag=True,
    help="Preview changes without applying them.",
)
def publish(dry_run: bool) -> None:
    """Update version, changelog, and dependents for a package."""
    try:
        run_release(dry_run=dry_run)
    except ReleaseError as exc:
        failure = click.ClickException(str(exc))
        failure.exit_code = exc.exit_code
        raise failure from exc
