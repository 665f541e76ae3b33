"""Release workflow: discover → decide → confirm → apply → publish.

This module orchestrates a single interactive release of one package:
1. Discover all packages in the workspace
2. Ask which package to release and how to bump its version
3. Collect changelog entries
4. Find the packages that depend on it directly
5. Show a summary and ask for confirmation (dry run stops here)
6. Bump the version, write the changelog, update every dependent
7. Optionally publish the released package and its dependents

Nothing is written before step 6. Fatal errors (discovery, format) are
raised; declining a prompt or giving no input is a clean abort.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from pathlib import Path

import click

from .changelog import utc_today
from .config import Settings, load_settings
from .deps import ChangeApplier
from .graph import find_dependents
from .models import (
    ChangelogEntry,
    DependencyUpdate,
    Package,
    ReleaseOutcome,
    ReleasePlan,
    ReleaseStatus,
    VersionBump,
)
from .prompts import ClickPrompter, Prompter
from .publish import Publisher
from .registry import discover_packages
from .shell import ProcessRunner, SubprocessRunner, info, step, warn
from .versions import resolve_version


class ReleaseWorkflow:
    """Drive one release from discovery to publishing.

    Args:
        root: Workspace root containing the packages directory.
        settings: Workspace settings.
        prompter: Source of operator decisions.
        runner: Runs the external publish command.
        today: Clock returning the UTC release date.
    """

    def __init__(
        self,
        root: Path,
        settings: Settings,
        prompter: Prompter,
        runner: ProcessRunner,
        today: Callable[[], date] = utc_today,
    ) -> None:
        self.root = root
        self.settings = settings
        self.prompter = prompter
        self.runner = runner
        self.today = today
        self.applier = ChangeApplier(settings)
        self.publisher = Publisher(runner, prompter, settings.publish_command)

    def select_package(self, packages: list[Package]) -> Package | None:
        click.echo("\nAvailable packages:")
        for i, package in enumerate(packages, start=1):
            click.echo(f"{i}. {package.name}")

        names = [package.name for package in packages]
        selection = self.prompter.choose("Select package to publish", names)
        if not selection or selection not in names:
            return None
        return packages[names.index(selection)]

    def decide_version(self, package: Package) -> str:
        click.echo(f"Current version: {package.version}")
        choice = self.prompter.choose(
            "Select version bump type",
            [bump.value for bump in VersionBump],
            default=VersionBump.PATCH.value,
        )
        bump = VersionBump(choice)
        custom = None
        if bump is VersionBump.CUSTOM:
            custom = self.prompter.ask("Enter new version")
        return resolve_version(package.version, bump, custom)

    def collect_changelog(self) -> list[ChangelogEntry]:
        lines = self.prompter.read_lines(
            "\nEnter changelog entries (one per line, empty line to finish):"
        )
        entries: list[ChangelogEntry] = []
        for line in lines:
            if not line.strip():
                break
            entries.append(ChangelogEntry.from_input(line))
        return entries

    def print_summary(self, plan: ReleasePlan) -> None:
        step("Summary")
        info(f"Package to publish: {plan.package.name}")
        info(f"Current version: {plan.package.version}")
        info(f"New version: {plan.new_version}")
        click.echo("\nChangelog entries:")
        for entry in plan.changelog_entries:
            info(entry.render())
        click.echo("\nDependent packages to update:")
        if not plan.dependents:
            info("(none)")
        for dependent in plan.dependents:
            info(f"- {dependent.name} → {plan.dependency_range}")

    def report_partial(
        self, plan: ReleasePlan, updates: list[DependencyUpdate]
    ) -> None:
        failed = [u for u in updates if not u.ok]
        if not failed:
            return
        warn(
            f"Release of {plan.package.name} {plan.new_version} is partially applied. "
            "These manifests were not updated:"
        )
        for update in failed:
            warn(f"  {update.package.name}: {update.error}")

    def build_plan(self, dry_run: bool) -> ReleasePlan | None:
        """Run every decision phase. Returns None when the operator aborts."""
        packages = discover_packages(self.root, self.settings)
        if not packages:
            click.echo(f"No packages found in {self.settings.packages_dir}/ directory.")
            return None

        package = self.select_package(packages)
        if package is None:
            click.echo("No package selected. Aborting.")
            return None

        new_version = self.decide_version(package)

        entries = self.collect_changelog()
        if not entries:
            click.echo("No changelog entries provided. Aborting.")
            return None

        step(f"Finding packages that depend on {package.name}")
        dependents = find_dependents(packages, package.name)
        return ReleasePlan(
            package=package,
            new_version=new_version,
            changelog_entries=entries,
            dependents=dependents,
            dry_run=dry_run,
        )

    def run(self, dry_run: bool = False) -> ReleaseOutcome:
        """Execute the full workflow.

        Raises:
            DiscoveryError: If the packages directory is missing.
            FormatError: If a manifest or the current version is malformed.
            ManifestError: If the released package's own files can't be written.
        """
        plan = self.build_plan(dry_run)
        if plan is None:
            return ReleaseOutcome(status=ReleaseStatus.ABORTED)

        self.print_summary(plan)

        if plan.dry_run:
            click.echo("\nDry run completed. No changes applied.")
            return ReleaseOutcome(status=ReleaseStatus.DRY_RUN, plan=plan)

        if not self.prompter.confirm("Apply these changes?", default=False):
            click.echo("Aborted by user.")
            return ReleaseOutcome(status=ReleaseStatus.ABORTED, plan=plan)

        step(f"Releasing {plan.package.name} {plan.new_version}")
        updates = self.applier.apply(plan, self.today())
        click.echo(
            f"\nSuccessfully updated {plan.package.name} to version {plan.new_version}"
        )
        self.report_partial(plan, updates)

        updated = [u.package for u in updates if u.ok]
        results = self.publisher.publish(plan.package, updated)
        for result in results:
            if not result.ok:
                warn(f"{result.package.name} was not published")

        step("Done!")
        return ReleaseOutcome(
            status=ReleaseStatus.DONE,
            plan=plan,
            dependency_updates=updates,
            publish_results=results,
        )


def run_release(*, dry_run: bool = False, root: Path | None = None) -> ReleaseOutcome:
    """Run an interactive release in the given workspace (default: cwd)."""
    root = root or Path.cwd()
    workflow = ReleaseWorkflow(
        root=root,
        settings=load_settings(root),
        prompter=ClickPrompter(),
        runner=SubprocessRunner(),
    )
    return workflow.run(dry_run=dry_run)
