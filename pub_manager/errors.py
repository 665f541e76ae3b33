"""Error taxonomy for pub-manager.

Fatal errors (configuration, discovery, format, own-manifest) stop the
workflow before anything is written. Recoverable errors (dependency update,
publish) are scoped to a single package: the workflow catches them, records
them in the result objects and keeps going.
"""

from __future__ import annotations

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_USAGE = 2


class ReleaseError(Exception):
    """Base class for every error raised by the release workflow."""

    exit_code = EXIT_FATAL


class ConfigError(ReleaseError):
    """The [tool.pub-manager] table in the root pyproject.toml is invalid."""


class DiscoveryError(ReleaseError):
    """The packages directory is missing or the workspace is inconsistent."""


class FormatError(ReleaseError):
    """A manifest lacks required fields or a version string is malformed."""


class ManifestError(ReleaseError):
    """The selected package's own manifest could not be read or written."""


class DependencyUpdateError(ReleaseError):
    """A dependent manifest no longer declares the released package."""

    def __init__(self, package: str, dependency: str) -> None:
        super().__init__(
            f"{package} declares {dependency} in neither dependencies "
            "nor dev_dependencies"
        )
        self.package = package
        self.dependency = dependency


class PublishError(ReleaseError):
    """The external publish command failed for one package."""

    def __init__(self, package: str, output: str) -> None:
        super().__init__(f"Failed to publish {package}")
        self.package = package
        self.output = output
