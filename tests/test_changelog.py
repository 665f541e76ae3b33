"""Tests for pub_manager.changelog."""

from __future__ import annotations

from datetime import date

from pub_manager.changelog import merge_changelog, render_release_block
from pub_manager.models import ChangelogEntry

BLOCK = "## 1.2.4 - 2024-05-01\n\n- fix bug\n"


def entries(*lines: str) -> list[ChangelogEntry]:
    return [ChangelogEntry.from_input(line) for line in lines]


class TestRenderReleaseBlock:
    def test_single_entry(self) -> None:
        assert render_release_block("1.2.4", date(2024, 5, 1), entries("fix bug")) == BLOCK

    def test_entries_keep_input_order(self) -> None:
        block = render_release_block("2.0.0", date(2024, 12, 31), entries("b", "a", "c"))
        assert block == "## 2.0.0 - 2024-12-31\n\n- b\n- a\n- c\n"

    def test_existing_bullet_is_not_doubled(self) -> None:
        block = render_release_block("1.0.0", date(2024, 1, 2), entries("- already bulleted"))
        assert "- already bulleted" in block
        assert "- - " not in block


class TestMergeChangelog:
    def test_empty_content_creates_document(self) -> None:
        result = merge_changelog("", BLOCK)
        assert result == "# Changelog\n\n" + BLOCK
        assert result.count("## ") == 1

    def test_whitespace_only_counts_as_empty(self) -> None:
        assert merge_changelog("  \n\n", BLOCK) == "# Changelog\n\n" + BLOCK

    def test_inserts_after_title(self) -> None:
        existing = (
            "# Changelog\n\n"
            "## 1.2.3 - 2024-04-01\n\n- older\n\n"
            "## 1.2.2 - 2024-03-01\n\n- oldest\n"
        )
        result = merge_changelog(existing, BLOCK)

        assert result.startswith("# Changelog\n\n## 1.2.4 - 2024-05-01\n")
        headers = [line for line in result.splitlines() if line.startswith("## ")]
        assert headers == [
            "## 1.2.4 - 2024-05-01",
            "## 1.2.3 - 2024-04-01",
            "## 1.2.2 - 2024-03-01",
        ]
        assert result.endswith("## 1.2.2 - 2024-03-01\n\n- oldest\n")

    def test_title_with_leading_blank_lines(self) -> None:
        existing = "\n\n# My Project\n\n## 0.1.0 - 2024-01-01\n\n- init\n"
        result = merge_changelog(existing, BLOCK)
        assert result == (
            "\n\n# My Project\n\n" + BLOCK + "\n## 0.1.0 - 2024-01-01\n\n- init\n"
        )

    def test_title_only(self) -> None:
        assert merge_changelog("# Changelog\n", BLOCK) == "# Changelog\n\n" + BLOCK

    def test_no_title_prepends_block(self) -> None:
        existing = "## 1.0.0 - 2024-01-01\n\n- first\n"
        assert merge_changelog(existing, BLOCK) == BLOCK + "\n" + existing

    def test_second_level_header_is_not_a_title(self) -> None:
        existing = "## Unreleased\n"
        assert merge_changelog(existing, BLOCK).startswith(BLOCK)

    def test_hash_without_space_is_not_a_title(self) -> None:
        existing = "#hashtag notes\n"
        assert merge_changelog(existing, BLOCK) == BLOCK + "\n" + existing
