"""Manifest and changelog edits for a release.

Edits run in a fixed order: the released package's manifest, its changelog,
then each dependent manifest in discovery order. Every write is immediately
durable and there is no rollback, so a release can end up partially applied
(e.g. one dependent left stale). Such failures are returned, never hidden.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from pathlib import Path

import tomlkit.exceptions

from .changelog import merge_changelog, render_release_block
from .config import Settings
from .errors import DependencyUpdateError, ManifestError
from .models import ChangelogEntry, DependencyUpdate, Package, ReleasePlan
from .shell import info, warn
from .toml import ManifestEditor

DEPENDENCY_SECTIONS = ("dependencies", "dev_dependencies")


class ChangeApplier:
    """Apply the edits decided in a ReleasePlan to files on disk."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def manifest_path(self, package: Package) -> Path:
        return package.path / self.settings.manifest

    def changelog_path(self, package: Package) -> Path:
        return package.path / self.settings.changelog

    def update_version(self, package: Package, new_version: str) -> None:
        """Set the version field of the package's own manifest.

        Raises:
            ManifestError: If the manifest cannot be read, parsed or written.
        """
        path = self.manifest_path(package)
        try:
            editor = ManifestEditor(path)
            editor.set_field("version", new_version)
            editor.save()
        except (OSError, UnicodeDecodeError, tomlkit.exceptions.ParseError) as exc:
            raise ManifestError(f"Could not update version in {path}: {exc}") from exc
        info(f"Updated version in {package.name}/{self.settings.manifest}")

    def write_changelog(
        self,
        package: Package,
        version: str,
        entries: Sequence[ChangelogEntry],
        release_date: date,
    ) -> None:
        """Merge a new release section into the package's changelog.

        The changelog is created when it does not exist yet.

        Raises:
            ManifestError: If the changelog cannot be read as UTF-8 or written.
        """
        path = self.changelog_path(package)
        block = render_release_block(version, release_date, entries)
        try:
            existing = path.read_text(encoding="utf-8") if path.exists() else ""
            path.write_text(merge_changelog(existing, block), encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ManifestError(f"Could not write {path}: {exc}") from exc
        info(f"Updated {package.name}/{self.settings.changelog}")

    def update_dependency(
        self, package: Package, dependency: str, new_version: str
    ) -> str:
        """Point a dependent's constraint on dependency at ^new_version.

        dependencies.<name> is updated when present, otherwise
        dev_dependencies.<name>.

        Returns:
            The manifest section that was updated.

        Raises:
            DependencyUpdateError: If neither section declares dependency.
        """
        editor = ManifestEditor(self.manifest_path(package))
        section = next(
            (s for s in DEPENDENCY_SECTIONS if editor.has_field((s, dependency))),
            None,
        )
        if section is None:
            raise DependencyUpdateError(package.name, dependency)

        editor.set_field((section, dependency), f"^{new_version}")
        editor.save()
        return section

    def apply(self, plan: ReleasePlan, release_date: date) -> list[DependencyUpdate]:
        """Apply a whole plan and report per-dependent results.

        Own version and changelog failures are fatal. Dependent failures are
        collected and the remaining dependents are still processed.
        """
        package = plan.package
        self.update_version(package, plan.new_version)
        try:
            self.write_changelog(
                package, plan.new_version, plan.changelog_entries, release_date
            )
        except ManifestError as exc:
            stale = ", ".join(d.name for d in plan.dependents) or "none"
            raise ManifestError(
                f"{exc}\nRelease of {package.name} is partially applied: its "
                f"manifest is already at {plan.new_version}, the changelog was not "
                f"written and dependents were not updated ({stale})."
            ) from exc

        updates: list[DependencyUpdate] = []
        for dependent in plan.dependents:
            try:
                section = self.update_dependency(
                    dependent, package.name, plan.new_version
                )
            except (
                DependencyUpdateError,
                OSError,
                UnicodeDecodeError,
                tomlkit.exceptions.ParseError,
            ) as exc:
                warn(f"Could not update {package.name} in {dependent.name}: {exc}")
                updates.append(DependencyUpdate(package=dependent, error=str(exc)))
                continue
            label = "dev_dependency" if section == "dev_dependencies" else "dependency"
            info(f"Updated {package.name} {label} in {dependent.name}")
            updates.append(DependencyUpdate(package=dependent, section=section))
        return updates
