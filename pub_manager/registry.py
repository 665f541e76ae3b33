"""Package discovery.

A package is any immediate subdirectory of the packages directory that
contains a manifest. Every manifest is parsed up front; a malformed one stops
discovery instead of being skipped, since a silently missing package could
hide a real dependent.
"""

from __future__ import annotations

from pathlib import Path

import tomlkit.exceptions
from pydantic import ValidationError

from .config import Settings
from .errors import DiscoveryError, FormatError
from .models import Package
from .shell import info, step
from .toml import load_document


def parse_manifest(manifest: Path) -> Package:
    """Parse a manifest file into a Package record.

    Raises:
        FormatError: If the file cannot be read, is not valid UTF-8 TOML, or
            lacks name/version.
    """
    try:
        data = load_document(manifest).unwrap()
    except (tomlkit.exceptions.ParseError, UnicodeDecodeError, OSError) as exc:
        raise FormatError(f"{manifest}: {exc}") from exc

    missing = [key for key in ("name", "version") if not data.get(key)]
    if missing:
        raise FormatError(
            f"{manifest} is missing required field(s): {', '.join(missing)}"
        )

    try:
        return Package(
            name=data["name"],
            version=data["version"],
            path=manifest.parent,
            dependencies=data.get("dependencies") or {},
            dev_dependencies=data.get("dev_dependencies") or {},
        )
    except ValidationError as exc:
        raise FormatError(f"{manifest}: {exc}") from exc


def discover_packages(root: Path, settings: Settings) -> list[Package]:
    """Scan the packages directory and parse every manifest found.

    Returns:
        Packages in directory order.

    Raises:
        DiscoveryError: If the packages directory does not exist, or two
            manifests declare the same name.
        FormatError: If any manifest is malformed.
    """
    step("Discovering workspace packages")

    packages_dir = root / settings.packages_dir
    if not packages_dir.is_dir():
        raise DiscoveryError(f"{settings.packages_dir}/ directory not found in {root}")

    packages: list[Package] = []
    seen: dict[str, Path] = {}
    for entry in sorted(packages_dir.iterdir()):
        manifest = entry / settings.manifest
        if not entry.is_dir() or not manifest.is_file():
            continue
        package = parse_manifest(manifest)
        if package.name in seen:
            raise DiscoveryError(
                f"Package name {package.name!r} is declared by both "
                f"{seen[package.name]} and {package.path}"
            )
        seen[package.name] = package.path
        packages.append(package)

    # Print discovered packages for user feedback
    names = set(seen)
    for package in packages:
        internal = [
            dep
            for dep in [*package.dependencies, *package.dev_dependencies]
            if dep in names
        ]
        deps = f" → [{', '.join(dict.fromkeys(internal))}]" if internal else ""
        info(f"{package.name} {package.version} ({package.path.name}){deps}")

    return packages
