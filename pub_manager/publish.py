"""Publishing released packages with an external command.

Each package is published independently: a failure for one package is
reported with its captured output and the remaining packages still run.
"""

from __future__ import annotations

from collections.abc import Sequence

from .errors import PublishError
from .models import Package, PublishResult
from .prompts import Prompter
from .shell import ProcessRunner, error, info, step


class Publisher:
    """Ask which packages to publish, then run the publish command for each.

    The released package defaults to "yes"; every updated dependent is asked
    about individually and defaults to "no".
    """

    def __init__(
        self, runner: ProcessRunner, prompter: Prompter, command: Sequence[str]
    ) -> None:
        self.runner = runner
        self.prompter = prompter
        self.command = list(command)

    def select(self, package: Package, dependents: Sequence[Package]) -> list[Package]:
        selected: list[Package] = []
        if self.prompter.confirm(f"Publish {package.name}?", default=True):
            selected.append(package)
        for dependent in dependents:
            if self.prompter.confirm(f"Also publish {dependent.name}?", default=False):
                selected.append(dependent)
        return selected

    def publish_one(self, package: Package) -> PublishResult:
        """Run the publish command in the package directory.

        Raises:
            PublishError: If the command cannot be started or exits non-zero.
        """
        try:
            result = self.runner.run(self.command, cwd=package.path)
        except OSError as exc:
            raise PublishError(package.name, str(exc)) from exc
        if not result.ok:
            output = result.stderr.strip() or result.stdout.strip()
            raise PublishError(package.name, output)
        return PublishResult(package=package, ok=True, output=result.stdout)

    def publish(
        self, package: Package, dependents: Sequence[Package]
    ) -> list[PublishResult]:
        selected = self.select(package, dependents)
        if not selected:
            info("Nothing selected for publishing")
            return []

        step(f"Publishing {len(selected)} package(s)")
        results: list[PublishResult] = []
        for pkg in selected:
            info(f"{pkg.name}: {' '.join(self.command)}")
            try:
                results.append(self.publish_one(pkg))
            except PublishError as exc:
                error(f"{exc}\n{exc.output}" if exc.output else str(exc))
                results.append(PublishResult(package=pkg, ok=False, output=exc.output))
                continue
            info(f"Published {pkg.name}")
        return results
