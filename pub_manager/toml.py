"""TOML reading and writing utilities.

Uses tomlkit to preserve formatting and comments when modifying manifest
files. Only the field being set changes; everything else in the document is
written back byte for byte.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import tomlkit

FieldPath = str | Sequence[str]

_MISSING = object()


def load_document(path: Path) -> tomlkit.TOMLDocument:
    """Load and parse a TOML file.

    Returns a TOMLDocument that preserves formatting when modified and saved.
    """
    return tomlkit.parse(path.read_text(encoding="utf-8"))


def save_document(path: Path, doc: tomlkit.TOMLDocument) -> None:
    """Save a TOMLDocument back to disk, preserving original formatting."""
    path.write_text(tomlkit.dumps(doc), encoding="utf-8")


def split_path(path: FieldPath) -> tuple[str, ...]:
    """Normalize a field path to a tuple of keys.

    Examples:
        "dependencies.core" → ("dependencies", "core")
        ["dev_dependencies", "core"] → ("dev_dependencies", "core")
    """
    keys = tuple(path.split(".")) if isinstance(path, str) else tuple(path)
    if not keys or not all(keys):
        raise ValueError(f"Invalid field path: {path!r}")
    return keys


def _lookup(doc: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    node: Any = doc
    for key in keys:
        if not isinstance(node, Mapping) or key not in node:
            return _MISSING
        node = node[key]
    return node


class ManifestEditor:
    """Format-preserving editor for a single TOML manifest.

    Wraps the document behind a narrow get/has/set interface so callers
    never deal with tomlkit containers directly.

    Example:
        editor = ManifestEditor(Path("packages/widgets/package.toml"))
        if editor.has_field("dependencies.core"):
            editor.set_field("dependencies.core", "^1.3.0")
            editor.save()
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self.doc = load_document(path)

    def has_field(self, path: FieldPath) -> bool:
        return _lookup(self.doc, split_path(path)) is not _MISSING

    def get_field(self, path: FieldPath, default: Any = None) -> Any:
        value = _lookup(self.doc, split_path(path))
        if value is _MISSING:
            return default
        # Hand back plain Python values instead of tomlkit items
        return value.unwrap() if hasattr(value, "unwrap") else value

    def set_field(self, path: FieldPath, value: Any) -> None:
        """Set the value at path, leaving the rest of the document untouched.

        Raises:
            KeyError: If a parent table along the path does not exist.
        """
        keys = split_path(path)
        parent = _lookup(self.doc, keys[:-1]) if len(keys) > 1 else self.doc
        if parent is _MISSING or not isinstance(parent, Mapping):
            raise KeyError(".".join(keys[:-1]))
        parent[keys[-1]] = value

    def dumps(self) -> str:
        return tomlkit.dumps(self.doc)

    def save(self) -> None:
        save_document(self.path, self.doc)

    def unwrap(self) -> dict[str, Any]:
        """Return the whole document as plain Python types."""
        return self.doc.unwrap()
