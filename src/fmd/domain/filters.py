"""Filter compilation and evaluation.

:func:`compile_filters` turns raw user input (:class:`FilterSpec`) into
:class:`CompiledFilters`. All regex compilation and date parsing happens
there, eagerly, so evaluating a file can only fail on I/O.

Evaluation semantics:

- Filename patterns are checked against the path alone, before any read.
- Within one filter type, any pattern may match (OR).
- Across filter types, every type that has patterns must match (AND).
- A filter type without patterns imposes no constraint.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from fmd.domain.dates import parse_iso_date
from fmd.domain.metadata import Metadata
from fmd.errors import InvalidDateFormatError, InvalidFilterFormatError, PatternError

# Word characters are ASCII-only here, so "#tag" followed by an accented
# letter still counts as a complete tag.
_NON_WORD = "[^0-9A-Za-z_]"


@dataclass(frozen=True)
class FilterSpec:
    """Raw filter input, as typed by the user."""

    tags: tuple[str, ...] = ()
    titles: tuple[str, ...] = ()
    authors: tuple[str, ...] = ()
    names: tuple[str, ...] = ()
    fields: tuple[str, ...] = ()
    date_after: str | None = None
    date_before: str | None = None
    ignore_case: bool = False

    def is_empty(self) -> bool:
        """True when no filter of any kind was given."""
        return not (
            self.tags
            or self.titles
            or self.authors
            or self.names
            or self.fields
            or self.date_after is not None
            or self.date_before is not None
        )


@dataclass(frozen=True)
class CompiledFilters:
    """Pre-compiled, read-only filters shared by every worker."""

    tag_patterns: tuple[tuple[str, re.Pattern[str]], ...] = ()
    title_patterns: tuple[str, ...] = ()
    author_patterns: tuple[str, ...] = ()
    name_patterns: tuple[re.Pattern[str], ...] = ()
    field_patterns: tuple[tuple[str, str], ...] = ()
    date_after: date | None = None
    date_before: date | None = None

    @property
    def has_date_filter(self) -> bool:
        return self.date_after is not None or self.date_before is not None

    @property
    def has_content_filters(self) -> bool:
        """True when deciding requires reading the file."""
        return bool(
            self.tag_patterns
            or self.title_patterns
            or self.author_patterns
            or self.field_patterns
            or self.has_date_filter
        )


# ---------------------------------------------------------------------------
# Compilation
# ---------------------------------------------------------------------------


def compile_tag_pattern(tag: str) -> tuple[str, re.Pattern[str]]:
    """Compile a tag filter into ``(lowercased_pattern, inline_regex)``.

    A leading ``#`` is optional. The regex matches ``#tag`` preceded by the
    start of text or a non-word character and followed by a non-word
    character or the end of text.
    """
    pattern = tag.removeprefix("#")
    source = f"(?:^|{_NON_WORD})#{re.escape(pattern)}(?:{_NON_WORD}|$)"
    try:
        regex = re.compile(source, re.IGNORECASE)
    except re.error as exc:
        raise PatternError("tag", tag, str(exc)) from exc
    return pattern.lower(), regex


def compile_name_pattern(name: str, *, ignore_case: bool = False) -> re.Pattern[str]:
    """Compile a filename filter; the pattern is a regex, used verbatim."""
    try:
        return re.compile(name, re.IGNORECASE if ignore_case else 0)
    except re.error as exc:
        raise PatternError("filename", name, str(exc)) from exc


def parse_field_spec(spec: str) -> tuple[str, str]:
    """Split ``"field:pattern"`` on the first colon.

    Returns:
        ``(field_name, lowercased_pattern)``, both trimmed.

    Raises:
        InvalidFilterFormatError: No colon, or either side is empty.
    """
    field_name, sep, pattern = spec.partition(":")
    if not sep:
        msg = f"Invalid field filter format: {spec!r}. Expected 'field:pattern'"
        raise InvalidFilterFormatError(spec, msg)

    field_name = field_name.strip()
    pattern = pattern.strip()
    if not field_name and not pattern:
        msg = f"Both field and pattern cannot be empty in filter {spec!r}"
        raise InvalidFilterFormatError(spec, msg)
    if not field_name:
        msg = f"Field name cannot be empty in filter {spec!r}"
        raise InvalidFilterFormatError(spec, msg)
    if not pattern:
        msg = f"Pattern cannot be empty in filter {spec!r}"
        raise InvalidFilterFormatError(spec, msg)
    return field_name, pattern.lower()


def parse_date_bound(flag: str, value: str | None) -> date | None:
    """Parse an optional ``YYYY-MM-DD`` bound given on ``--<flag>``."""
    if value is None:
        return None
    parsed = parse_iso_date(value)
    if parsed is None:
        raise InvalidDateFormatError(flag, value)
    return parsed


def compile_filters(spec: FilterSpec) -> CompiledFilters:
    """Compile every pattern in *spec* up front.

    Raises:
        FilterConfigError: The first malformed pattern, date, or field spec.
    """
    return CompiledFilters(
        tag_patterns=tuple(compile_tag_pattern(tag) for tag in spec.tags),
        title_patterns=tuple(title.lower() for title in spec.titles),
        author_patterns=tuple(author.lower() for author in spec.authors),
        name_patterns=tuple(
            compile_name_pattern(name, ignore_case=spec.ignore_case) for name in spec.names
        ),
        field_patterns=tuple(parse_field_spec(field) for field in spec.fields),
        date_after=parse_date_bound("date-after", spec.date_after),
        date_before=parse_date_bound("date-before", spec.date_before),
    )


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------


def matches_filename(path: Path, filters: CompiledFilters) -> bool:
    """True if no filename patterns are set or any matches ``path.name``."""
    if not filters.name_patterns:
        return True
    name = path.name
    if not name:
        return False
    return any(regex.search(name) for regex in filters.name_patterns)


def should_include(metadata: Metadata, filters: CompiledFilters) -> bool:
    """Apply all content-based filters to one file's metadata."""
    if filters.tag_patterns and not any(
        metadata.has_tag(pattern, regex) for pattern, regex in filters.tag_patterns
    ):
        return False

    if filters.title_patterns and not any(
        metadata.has_title(pattern) for pattern in filters.title_patterns
    ):
        return False

    if filters.author_patterns and not any(
        metadata.has_author(pattern) for pattern in filters.author_patterns
    ):
        return False

    if filters.field_patterns and not any(
        metadata.has_field(field_name, pattern) for field_name, pattern in filters.field_patterns
    ):
        return False

    if filters.has_date_filter and not metadata.matches_date_filters(
        filters.date_after, filters.date_before
    ):
        return False

    return True
