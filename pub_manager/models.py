"""Data models for pub-manager.

These Pydantic models represent the core data structures that flow from the
decision phase of a release to the application phase.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class VersionBump(str, Enum):
    """How the next version is derived from the current one."""

    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"
    CUSTOM = "custom"


class Package(BaseModel):
    """Snapshot of one workspace package, parsed from its manifest.

    The on-disk manifest stays the source of truth; this record is only used
    for decision making and is never written back.

    Attributes:
        name: Package name, unique within the workspace.
        version: Version string as declared in the manifest.
        path: Directory containing the manifest.
        dependencies: Map of dependency name → version constraint.
        dev_dependencies: Same shape as dependencies, separate namespace.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    version: str = Field(min_length=1)
    path: Path
    dependencies: dict[str, Any] = Field(default_factory=dict)
    dev_dependencies: dict[str, Any] = Field(default_factory=dict)


class ChangelogEntry(BaseModel):
    """A single changelog line, rendered with a leading bullet."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(min_length=1)

    @classmethod
    def from_input(cls, line: str) -> ChangelogEntry:
        """Build an entry from operator input, dropping an existing bullet."""
        line = line.strip()
        if line.startswith("- "):
            line = line[2:].strip()
        return cls(text=line)

    def render(self) -> str:
        return f"- {self.text}"


class ReleasePlan(BaseModel):
    """Everything decided before any file is touched.

    new_version is computed once and used verbatim for the package's own
    manifest and for every dependent's caret range.
    """

    model_config = ConfigDict(frozen=True)

    package: Package
    new_version: str
    changelog_entries: list[ChangelogEntry]
    dependents: list[Package] = Field(default_factory=list)
    dry_run: bool = False

    @property
    def dependency_range(self) -> str:
        return f"^{self.new_version}"


class ProcessResult(BaseModel):
    """Outcome of a single external command."""

    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class DependencyUpdate(BaseModel):
    """Result of rewriting one dependent's constraint on the released package.

    Attributes:
        package: The dependent package.
        section: Manifest table that was updated, or None on failure.
        error: Reason the update failed, or None on success.
    """

    package: Package
    section: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class PublishResult(BaseModel):
    """Result of running the publish command for one package."""

    package: Package
    ok: bool
    output: str = ""


class ReleaseStatus(str, Enum):
    ABORTED = "aborted"
    DRY_RUN = "dry_run"
    DONE = "done"


class ReleaseOutcome(BaseModel):
    """What a workflow invocation ended up doing."""

    status: ReleaseStatus
    plan: ReleasePlan | None = None
    dependency_updates: list[DependencyUpdate] = Field(default_factory=list)
    publish_results: list[PublishResult] = Field(default_factory=list)

    @property
    def failed_updates(self) -> list[DependencyUpdate]:
        return [u for u in self.dependency_updates if not u.ok]

    @property
    def failed_publishes(self) -> list[PublishResult]:
        return [r for r in self.publish_results if not r.ok]
