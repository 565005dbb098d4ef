"""Tests for frontmatter extraction and the TagValue / Frontmatter models."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from fmd.domain.frontmatter import (
    Frontmatter,
    TagValue,
    extract_yaml_block,
    parse_frontmatter,
    split_lines,
)


class TestSplitLines:
    def test_lf(self) -> None:
        assert split_lines("a\nb") == ["a", "b"]

    def test_crlf(self) -> None:
        assert split_lines("a\r\nb\r\n") == ["a", "b"]

    def test_trailing_newline_has_no_empty_line(self) -> None:
        assert split_lines("a\n") == ["a"]

    def test_empty(self) -> None:
        assert split_lines("") == []


class TestTagValue:
    def test_single_matches_substring(self) -> None:
        assert TagValue("RustLang").contains_tag("rust")

    def test_single_no_match(self) -> None:
        assert not TagValue("python").contains_tag("rust")

    def test_array_any_element(self) -> None:
        tags = TagValue(["python", "Rust", "cli"])
        assert tags.contains_tag("RUST")

    def test_array_no_element(self) -> None:
        assert not TagValue(["python", "go"]).contains_tag("rust")

    def test_empty_array(self) -> None:
        assert not TagValue([]).contains_tag("rust")


class TestExtractYamlBlock:
    def test_closed_block(self) -> None:
        assert extract_yaml_block("---\ntitle: A\n---\nbody") == "title: A"

    def test_no_opening_delimiter(self) -> None:
        assert extract_yaml_block("# Title\n---\n") is None

    def test_leading_blank_line_is_not_frontmatter(self) -> None:
        assert extract_yaml_block("\n---\ntitle: A\n---\n") is None

    def test_empty_block(self) -> None:
        assert extract_yaml_block("---\n---\nbody") is None

    def test_unterminated_runs_to_end(self) -> None:
        assert extract_yaml_block("---\ntitle: A\n# Heading") == "title: A\n# Heading"

    def test_delimiter_with_surrounding_whitespace(self) -> None:
        assert extract_yaml_block("  ---  \ntitle: A\n --- \n") == "title: A"


class TestParseFrontmatter:
    def test_tags_list(self) -> None:
        fm = parse_frontmatter("---\ntags: [rust]\n---\n# Guide")
        assert fm is not None
        assert fm.tags == TagValue(["rust"])

    def test_tags_scalar(self) -> None:
        fm = parse_frontmatter("---\ntags: rust\n---\n")
        assert fm is not None
        assert fm.tags is not None
        assert fm.tags.root == "rust"

    def test_title_and_author(self) -> None:
        fm = parse_frontmatter("---\ntitle: Meeting Notes\nauthor: Jane Doe\n---\n")
        assert fm is not None
        assert fm.title == "Meeting Notes"
        assert fm.author == "Jane Doe"

    def test_unknown_keys_land_in_extra(self) -> None:
        fm = parse_frontmatter("---\ntitle: T\nstatus: draft\npriority: 3\n---\n")
        assert fm is not None
        assert fm.extra == {"status": "draft", "priority": 3}

    def test_dedicated_keys_not_in_extra(self) -> None:
        fm = parse_frontmatter("---\ntitle: T\nauthor: A\ntags: [x]\n---\n")
        assert fm is not None
        assert fm.extra == {}

    def test_no_frontmatter(self) -> None:
        assert parse_frontmatter("# Just a heading\n\nBody.") is None

    def test_empty_content(self) -> None:
        assert parse_frontmatter("") is None

    def test_crlf_line_endings(self) -> None:
        fm = parse_frontmatter("---\r\ntitle: Windows\r\n---\r\nbody\r\n")
        assert fm is not None
        assert fm.title == "Windows"

    def test_unterminated_valid_yaml_is_parsed(self) -> None:
        fm = parse_frontmatter("---\ntitle: Open\n# Heading")
        assert fm is not None
        assert fm.title == "Open"

    def test_unterminated_bare_heading_is_empty_document(self) -> None:
        assert parse_frontmatter("---\n# Heading") == Frontmatter()

    def test_malformed_yaml_degrades_to_none(self) -> None:
        assert parse_frontmatter("---\ntitle: [unclosed\n---\nbody") is None

    def test_non_mapping_document(self) -> None:
        assert parse_frontmatter("---\n- a\n- b\n---\n") is None

    def test_wrong_type_for_title(self) -> None:
        assert parse_frontmatter("---\ntitle: [a, b]\n---\n") is None

    def test_wrong_type_for_tags(self) -> None:
        assert parse_frontmatter("---\ntags: {a: b}\n---\n") is None

    def test_date_title_kept_as_text(self) -> None:
        fm = parse_frontmatter("---\ntitle: 2024-01-15\n---\n")
        assert fm is not None
        assert fm.title == "2024-01-15"

    def test_date_value_in_extra(self) -> None:
        fm = parse_frontmatter("---\ndate: 2024-01-15\n---\n")
        assert fm is not None
        assert fm.extra["date"] == "2024-01-15"

    def test_invalid_date_kept_as_text(self) -> None:
        fm = parse_frontmatter("---\ntitle: T\ndate: 2024-13-45\n---\n")
        assert fm is not None
        assert fm.title == "T"
        assert fm.extra["date"] == "2024-13-45"

    def test_deeply_nested_yaml_degrades_to_none(self, caplog: pytest.LogCaptureFixture) -> None:
        text = "---\nx: " + "[" * 3000 + "]" * 3000 + "\n---\n"
        with caplog.at_level(logging.WARNING, logger="fmd.domain.frontmatter"):
            assert parse_frontmatter(text) is None
        assert "Failed to parse YAML frontmatter" in caplog.text

    def test_idempotent(self) -> None:
        text = "---\ntitle: A\ntags: [x, y]\nstatus: draft\n---\nbody"
        assert parse_frontmatter(text) == parse_frontmatter(text)

    def test_frozen(self) -> None:
        fm = parse_frontmatter("---\ntitle: A\n---\n")
        assert fm is not None
        with pytest.raises(Exception):
            fm.title = "B"  # type: ignore[misc]

    def test_malformed_yaml_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="fmd.domain.frontmatter"):
            parse_frontmatter("---\nkey: [broken\n---\n", Path("notes/bad.md"))
        assert "notes/bad.md" in caplog.text
        assert "Failed to parse YAML frontmatter" in caplog.text
