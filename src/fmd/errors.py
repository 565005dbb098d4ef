"""Exception hierarchy for fmd.

Two families with different blast radius:

- :class:`FilterConfigError`: bad user input (regex, date, field spec).
  Raised while compiling filters, before any file is touched, and aborts
  the whole run.
- :class:`FileReadError`: a single candidate could not be read. The
  search service drops that file and keeps going.

Malformed YAML frontmatter is not an error at all; the parser logs it and
returns ``None``.
"""

from __future__ import annotations

from pathlib import Path


class FmdError(Exception):
    """Base exception for all fmd errors."""


# ---------------------------------------------------------------------------
# Configuration errors (fatal)
# ---------------------------------------------------------------------------


class FilterConfigError(FmdError):
    """A user-supplied filter could not be compiled."""


class PatternError(FilterConfigError):
    """A tag or filename pattern failed to compile as a regex."""

    def __init__(self, kind: str, pattern: str, reason: str) -> None:
        super().__init__(f"Failed to compile {kind} pattern: {pattern!r} ({reason})")
        self.kind = kind
        self.pattern = pattern


class InvalidFilterFormatError(FilterConfigError):
    """A field filter is not of the form ``field:pattern``."""

    def __init__(self, spec: str, message: str) -> None:
        super().__init__(message)
        self.spec = spec


class InvalidDateFormatError(FilterConfigError):
    """A date bound is not a valid ``YYYY-MM-DD`` calendar date."""

    def __init__(self, flag: str, value: str) -> None:
        super().__init__(f"Invalid date format for --{flag}: {value!r}. Expected YYYY-MM-DD")
        self.flag = flag
        self.value = value


# ---------------------------------------------------------------------------
# Per-file errors (recoverable)
# ---------------------------------------------------------------------------


class FileReadError(FmdError):
    """A candidate file could not be read as text."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to read file {path}: {reason}")
        self.path = path


class FrontmatterTooLargeError(FileReadError):
    """Frontmatter kept going past the configured line ceiling."""

    def __init__(self, path: Path, limit: int) -> None:
        super().__init__(path, f"frontmatter exceeds maximum size ({limit} lines)")
        self.limit = limit
