"""Metadata view: one file's frontmatter plus the raw text it came from.

Every query checks structured frontmatter first and then falls back to
inline conventions in the raw text:

- tags:    ``#tag`` tokens anywhere in the text
- titles:  Markdown headings (``#`` through ``######``)
- authors and custom fields: ``key: value`` lines

All matching is case-insensitive substring matching. Callers pass
patterns already lowercased (see :mod:`fmd.domain.filters`).
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any

from fmd.domain.dates import parse_iso_date
from fmd.domain.frontmatter import Frontmatter, parse_frontmatter, split_lines

DATE_FIELDS: tuple[str, ...] = ("date", "created", "updated", "modified")

MAX_HEADING_LEVEL = 6


def yaml_value_contains(value: Any, pattern_lower: str) -> bool:
    """Match *pattern_lower* against a YAML value.

    Scalars are compared as text, sequences recursively. Nulls and
    mappings never match.
    """
    if isinstance(value, bool):
        return pattern_lower in str(value).lower()
    if isinstance(value, str):
        return pattern_lower in value.lower()
    if isinstance(value, (int, float)):
        return pattern_lower in str(value).lower()
    if isinstance(value, list):
        return any(yaml_value_contains(item, pattern_lower) for item in value)
    return False


def _date_from_yaml(value: Any) -> date | None:
    # Timestamps load as their source text; see fmd.domain.frontmatter.
    return parse_iso_date(value) if isinstance(value, str) else None


@dataclass(frozen=True)
class Metadata:
    """Per-file working data, built once and dropped after filtering.

    Attributes:
        frontmatter: Parsed frontmatter, or ``None``.
        raw_content: The text that was read, whole file or bounded prefix.
    """

    frontmatter: Frontmatter | None
    raw_content: str

    @classmethod
    def from_text(cls, content: str, path: Path | None = None) -> Metadata:
        """Build the view from text already read from *path*."""
        return cls(frontmatter=parse_frontmatter(content, path), raw_content=content)

    # --- Inline scanning helpers ---

    def _lines(self) -> list[str]:
        return split_lines(self.raw_content)

    def _inline_values(self, key: str) -> Iterator[str]:
        """Yield the text after the first colon of each ``key: ...`` line.

        The key is everything before the first colon, after stripping
        leading whitespace only, compared case-insensitively.
        """
        key_lower = key.lower()
        for line in self._lines():
            head, sep, value = line.lstrip().partition(":")
            if sep and head.lower() == key_lower:
                yield value

    # --- Queries ---

    def has_tag(self, pattern_lower: str, tag_regex: re.Pattern[str]) -> bool:
        """Frontmatter ``tags`` contain the pattern, or ``#pattern`` appears inline."""
        fm = self.frontmatter
        if fm is not None and fm.tags is not None and fm.tags.contains_tag(pattern_lower):
            return True
        return tag_regex.search(self.raw_content) is not None

    def has_title(self, pattern_lower: str) -> bool:
        """Frontmatter ``title`` or any Markdown heading contains the pattern."""
        fm = self.frontmatter
        if fm is not None and fm.title is not None and pattern_lower in fm.title.lower():
            return True

        for line in self._lines():
            stripped = line.lstrip()
            hashes = len(stripped) - len(stripped.lstrip("#"))
            if not 1 <= hashes <= MAX_HEADING_LEVEL:
                continue
            rest = stripped[hashes:]
            if rest.startswith(" ") and pattern_lower in rest.lower():
                return True
        return False

    def has_author(self, pattern_lower: str) -> bool:
        """Frontmatter ``author`` or an inline ``author:`` line contains the pattern."""
        fm = self.frontmatter
        if fm is not None and fm.author is not None and pattern_lower in fm.author.lower():
            return True
        return any(pattern_lower in value.lower() for value in self._inline_values("author"))

    def has_field(self, field_name: str, pattern_lower: str) -> bool:
        """A custom frontmatter field or inline ``field:`` line contains the pattern.

        The frontmatter key must match *field_name* exactly; the inline key
        is compared case-insensitively. Only the value part is searched.
        """
        fm = self.frontmatter
        if fm is not None:
            extra = fm.extra
            if field_name in extra and yaml_value_contains(extra[field_name], pattern_lower):
                return True
        return any(pattern_lower in value.lower() for value in self._inline_values(field_name))

    def extract_dates(self) -> list[date]:
        """Collect dates from ``date``, ``created``, ``updated`` and ``modified``.

        Frontmatter wins outright: inline ``key: value`` lines are only
        scanned when the file has no frontmatter. Unparseable values are
        skipped. The result is sorted and deduplicated.
        """
        found: set[date] = set()
        fm = self.frontmatter
        if fm is not None:
            extra = fm.extra
            for name in DATE_FIELDS:
                if name in extra:
                    parsed = _date_from_yaml(extra[name])
                    if parsed is not None:
                        found.add(parsed)
        else:
            for line in self._lines():
                head, sep, value = line.lstrip().partition(":")
                if not sep or head.strip().lower() not in DATE_FIELDS:
                    continue
                parsed = parse_iso_date(value.strip())
                if parsed is not None:
                    found.add(parsed)
        return sorted(found)

    def matches_date_filters(self, after: date | None, before: date | None) -> bool:
        """True if any extracted date lies in the inclusive ``[after, before]`` range.

        A file without dates never matches, whatever the bounds.
        """
        dates = self.extract_dates()
        if not dates:
            return False
        return any(
            (after is None or d >= after) and (before is None or d <= before) for d in dates
        )
