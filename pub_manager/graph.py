"""Dependency graph utilities.

Finds the packages that directly declare a dependency on a given package.
Only one hop is followed: if C depends on B and B depends on A, C is a
dependent of A only when C also lists A itself.
"""

from __future__ import annotations

from collections.abc import Iterable

from .models import Package


def declared_section(package: Package, target: str) -> str | None:
    """Return the manifest section that declares target, if any.

    dependencies is checked first; dev_dependencies only when the target is
    absent from dependencies.
    """
    if target in package.dependencies:
        return "dependencies"
    if target in package.dev_dependencies:
        return "dev_dependencies"
    return None


def find_dependents(packages: Iterable[Package], target: str) -> list[Package]:
    """Return packages that list target in dependencies or dev_dependencies.

    Only key presence matters, version constraints are not compared. Each
    package appears at most once, in input order, and the target package is
    never its own dependent.

    Example:
        core, widgets (deps: core), docs (dev deps: core, widgets)
        find_dependents(..., "core") → [widgets, docs]
    """
    return [
        package
        for package in packages
        if package.name != target and declared_section(package, target) is not None
    ]
