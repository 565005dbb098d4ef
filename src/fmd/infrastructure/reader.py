"""Bounded content reader.

In the default mode only the first ``head_lines`` lines of a file are
read, which is enough for frontmatter plus a few lines of inline
metadata. A frontmatter block is never cut short: reading continues
until it closes, up to ``max_frontmatter_lines``.
"""

from __future__ import annotations

from pathlib import Path

from fmd.domain.frontmatter import FRONTMATTER_DELIMITER
from fmd.domain.metadata import Metadata
from fmd.errors import FileReadError, FrontmatterTooLargeError

DEFAULT_HEAD_LINES = 10
MAX_FRONTMATTER_LINES = 1000


def _strip_line_ending(raw: str) -> str:
    if raw.endswith("\n"):
        raw = raw[:-1]
        if raw.endswith("\r"):
            raw = raw[:-1]
    return raw


def read_file_content(
    path: Path,
    head_lines: int = DEFAULT_HEAD_LINES,
    *,
    full_text: bool = False,
    max_frontmatter_lines: int = MAX_FRONTMATTER_LINES,
) -> str:
    """Return the text of *path* to scan for metadata.

    With *full_text* the whole file is returned verbatim. Otherwise lines
    are read until at least *head_lines* have been consumed and no
    frontmatter block is open; the lines are joined with ``\\n``.

    Raises:
        FileReadError: The file cannot be opened or is not UTF-8 text.
        FrontmatterTooLargeError: An open frontmatter block ran past
            *max_frontmatter_lines*.
    """
    try:
        # newline="\n": only LF splits lines and nothing is translated.
        with path.open(encoding="utf-8", newline="\n") as fh:
            if full_text:
                return fh.read()

            lines: list[str] = []
            in_frontmatter = False
            for raw in fh:
                line = _strip_line_ending(raw)
                marker = line.strip() == FRONTMATTER_DELIMITER
                if not lines and marker:
                    in_frontmatter = True
                elif in_frontmatter and marker:
                    in_frontmatter = False

                lines.append(line)

                if in_frontmatter and len(lines) > max_frontmatter_lines:
                    raise FrontmatterTooLargeError(path, max_frontmatter_lines)
                if len(lines) >= head_lines and not in_frontmatter:
                    break
    except (OSError, UnicodeDecodeError) as exc:
        raise FileReadError(path, str(exc)) from exc

    return "\n".join(lines)


def read_metadata(
    path: Path,
    head_lines: int = DEFAULT_HEAD_LINES,
    *,
    full_text: bool = False,
    max_frontmatter_lines: int = MAX_FRONTMATTER_LINES,
) -> Metadata:
    """Read *path* and build its :class:`Metadata` view."""
    content = read_file_content(
        path,
        head_lines,
        full_text=full_text,
        max_frontmatter_lines=max_frontmatter_lines,
    )
    return Metadata.from_text(content, path)
