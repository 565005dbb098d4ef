"""Stdout formatting for search results.

Paths are written one per line, or NUL-terminated for ``xargs -0``.
``--json`` replaces the listing with the serialized ServiceResult.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fmd.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    """How a result is written to stdout."""

    json_output: bool = False
    nul: bool = False


def format_paths(paths: list[str], *, nul: bool = False) -> str:
    """Join *paths* with a terminator after each one, including the last.

    Examples:
        >>> format_paths(["a.md", "b.md"])
        'a.md\\nb.md\\n'
        >>> format_paths(["a.md"], nul=True)
        'a.md\\x00'
        >>> format_paths([])
        ''
    """
    terminator = "\0" if nul else "\n"
    return "".join(f"{path}{terminator}" for path in paths)


def format_result(result: ServiceResult, *, settings: OutputSettings) -> str:
    """Format a successful ServiceResult for stdout."""
    if settings.json_output:
        return result.model_dump_json(indent=2) + "\n"
    return format_paths(result.paths, nul=settings.nul)
