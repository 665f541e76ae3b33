"""Version parsing and bumping utilities.

Deterministic bumps only accept a strict major.minor.patch triple of
integers. Anything else is rejected rather than padded or truncated, since a
version that cannot be parsed cannot be safely incremented.
"""

from __future__ import annotations

import semver

from .errors import FormatError
from .models import VersionBump
from .shell import warn


def parse_version(version_str: str) -> semver.Version:
    """Parse a strict x.y.z version string into a semver.Version.

    Raises:
        FormatError: If the string is not exactly three dot-separated
            non-negative integers.
    """
    parts = version_str.split(".")
    if len(parts) != 3 or not all(p.isascii() and p.isdigit() for p in parts):
        raise FormatError(
            f"Invalid version format: {version_str}. Expected format: x.y.z"
        )
    major, minor, patch = (int(p) for p in parts)
    return semver.Version(major, minor, patch)


def bump_version(version_str: str, bump: VersionBump) -> str:
    """Apply a patch/minor/major bump to a version string.

    Examples:
        "1.2.3", PATCH → "1.2.4"
        "1.2.3", MINOR → "1.3.0"
        "1.2.3", MAJOR → "2.0.0"
    """
    version = parse_version(version_str)
    if bump is VersionBump.PATCH:
        return str(version.bump_patch())
    if bump is VersionBump.MINOR:
        return str(version.bump_minor())
    if bump is VersionBump.MAJOR:
        return str(version.bump_major())
    raise ValueError(f"{bump.value} is not a deterministic bump")


def resolve_version(
    current: str, bump: VersionBump, custom: str | None = None
) -> str:
    """Compute the next version for a package.

    A custom version is returned unchanged. It is only required to be
    non-blank; a value that is not valid semver triggers a warning.

    Raises:
        FormatError: If current is malformed (deterministic bumps) or the
            custom version is blank.
    """
    if bump is not VersionBump.CUSTOM:
        return bump_version(current, bump)

    if custom is None or not custom.strip():
        raise FormatError("A custom version must not be empty")
    if not semver.Version.is_valid(custom):
        warn(f"{custom!r} is not a valid semantic version; using it as given")
    return custom
