"""Workspace configuration.

Settings live in an optional [tool.pub-manager] table of the workspace root
pyproject.toml:

    [tool.pub-manager]
    packages-dir = "packages"
    manifest = "package.toml"
    changelog = "CHANGELOG.md"
    publish-command = "make publish"

Every key is optional; a missing file or table means all defaults.
"""

from __future__ import annotations

import shlex
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError
from .toml import load_document

TOOL_NAME = "pub-manager"


class Settings(BaseModel):
    """Where packages live and how they are published."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    packages_dir: str = Field(default="packages", alias="packages-dir")
    manifest: str = "package.toml"
    changelog: str = "CHANGELOG.md"
    publish_command: list[str] = Field(
        default_factory=lambda: ["make", "publish"], alias="publish-command"
    )

    @field_validator("publish_command", mode="before")
    @classmethod
    def _split_command(cls, value: object) -> object:
        if isinstance(value, str):
            value = shlex.split(value)
        if isinstance(value, list) and not value:
            raise ValueError("publish-command must not be empty")
        return value


def load_settings(root: Path) -> Settings:
    """Read [tool.pub-manager] from root/pyproject.toml.

    Raises:
        ConfigError: If the table exists but does not validate.
    """
    pyproject = root / "pyproject.toml"
    if not pyproject.exists():
        return Settings()

    doc = load_document(pyproject).unwrap()
    tool = doc.get("tool", {})
    if not isinstance(tool, dict):
        raise ConfigError(f"[tool] in {pyproject} must be a table")
    table = tool.get(TOOL_NAME)
    if table is None:
        return Settings()
    if not isinstance(table, dict):
        raise ConfigError(f"[tool.{TOOL_NAME}] in {pyproject} must be a table")

    try:
        return Settings.model_validate(table)
    except ValidationError as exc:
        raise ConfigError(f"Invalid [tool.{TOOL_NAME}] in {pyproject}:\n{exc}") from exc
