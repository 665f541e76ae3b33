"""Changelog rendering and merging.

Newest release sections always end up nearest the top of the file, right
below the document title when there is one.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime, timezone

from .models import ChangelogEntry

DOCUMENT_TITLE = "# Changelog"


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def render_release_block(
    version: str, release_date: date, entries: Sequence[ChangelogEntry]
) -> str:
    """Render the section for one release.

    Example:
        ## 1.2.4 - 2024-05-01

        - fix bug
    """
    lines = [f"## {version} - {release_date.isoformat()}", ""]
    lines.extend(entry.render() for entry in entries)
    return "\n".join(lines) + "\n"


def merge_changelog(existing: str, block: str) -> str:
    """Merge a release block into existing changelog content.

    Three cases, checked in order:
    1. No content (empty or whitespace only): a fresh document with a
       title followed by the block.
    2. The first non-blank line is a top-level "# " header: the block goes
       right after that line, and prior content follows unchanged.
    3. Anything else: the block is prepended, separated by a blank line.
    """
    if not existing.strip():
        return f"{DOCUMENT_TITLE}\n\n{block}"

    lines = existing.split("\n")
    title_index = next(i for i, line in enumerate(lines) if line.strip())
    if lines[title_index].strip().startswith("# "):
        head = "\n".join(lines[: title_index + 1])
        rest = "\n".join(lines[title_index + 1 :]).lstrip("\n")
        if not rest.strip():
            return f"{head}\n\n{block}"
        return f"{head}\n\n{block}\n{rest}"

    return f"{block}\n{existing}"
