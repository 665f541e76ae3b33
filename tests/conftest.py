"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from pathlib import Path

import pytest
import tomlkit

from pub_manager.config import Settings
from pub_manager.models import ProcessResult
from pub_manager.pipeline import ReleaseWorkflow

RELEASE_DATE = date(2024, 5, 1)


class ScriptedPrompter:
    """Prompter that replays canned answers and records every question."""

    def __init__(
        self,
        choices: Sequence[str] = (),
        answers: Sequence[str] = (),
        confirms: Sequence[bool] = (),
        lines: Sequence[str] = (),
    ) -> None:
        self.choices = list(choices)
        self.answers = list(answers)
        self.confirms = list(confirms)
        self.lines = list(lines)
        self.questions: list[str] = []

    def _next(self, queue: list, question: str):
        self.questions.append(question)
        if not queue:
            raise AssertionError(f"Unexpected prompt: {question}")
        return queue.pop(0)

    def choose(
        self, question: str, options: Sequence[str], default: str | None = None
    ) -> str:
        return self._next(self.choices, question)

    def ask(self, question: str) -> str:
        return self._next(self.answers, question)

    def confirm(self, question: str, default: bool) -> bool:
        return self._next(self.confirms, question)

    def read_lines(self, question: str) -> list[str]:
        self.questions.append(question)
        return list(self.lines)


class FakeRunner:
    """Process runner that records calls instead of spawning processes."""

    def __init__(self, results: dict[str, ProcessResult | Exception] | None = None):
        self.results = results or {}
        self.calls: list[tuple[list[str], Path]] = []

    def run(self, command: Sequence[str], cwd: Path) -> ProcessResult:
        self.calls.append((list(command), cwd))
        result = self.results.get(cwd.name, ProcessResult(exit_code=0, stdout="ok"))
        if isinstance(result, Exception):
            raise result
        return result


def write_package(
    root: Path,
    name: str,
    version: str = "1.0.0",
    dependencies: dict[str, str] | None = None,
    dev_dependencies: dict[str, str] | None = None,
    dirname: str | None = None,
) -> Path:
    """Create packages/<dirname>/package.toml and return the manifest path."""
    package_dir = root / "packages" / (dirname or name)
    package_dir.mkdir(parents=True, exist_ok=True)
    doc = tomlkit.document()
    doc["name"] = name
    doc["version"] = version
    if dependencies is not None:
        doc["dependencies"] = dependencies
    if dev_dependencies is not None:
        doc["dev_dependencies"] = dev_dependencies
    manifest = package_dir / "package.toml"
    manifest.write_text(tomlkit.dumps(doc))
    return manifest


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """An empty workspace with a packages/ directory."""
    (tmp_path / "packages").mkdir()
    return tmp_path


@pytest.fixture
def make_workflow(workspace: Path):
    """Build a ReleaseWorkflow bound to the temporary workspace."""

    def factory(
        prompter: ScriptedPrompter, runner: FakeRunner | None = None
    ) -> ReleaseWorkflow:
        return ReleaseWorkflow(
            root=workspace,
            settings=Settings(),
            prompter=prompter,
            runner=runner or FakeRunner(),
            today=lambda: RELEASE_DATE,
        )

    return factory


@pytest.fixture
def tmp_manifest(tmp_path: Path) -> Path:
    """A hand-formatted manifest with comments and mixed spacing."""
    content = """\
# widgets manifest
name = "widgets"
version = "0.4.1"  # bumped by pub-manager

[dependencies]
core = "^1.2.0"  # keep in sync
http   =   "^2.0.0"

[dev_dependencies]
testkit = "^0.1.0"
"""
    manifest = tmp_path / "package.toml"
    manifest.write_text(content)
    return manifest
