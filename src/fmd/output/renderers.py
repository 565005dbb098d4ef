"""Rich renderers for the stderr side of a run: summary, warnings, errors."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text

from fmd.output.console import render_lines

if TYPE_CHECKING:
    from fmd.services.result import ServiceResult


def render_summary(result: ServiceResult) -> str:
    """One-line run summary for ``--verbose``.

    Example: ``matched 3 of 12 candidates, 1 skipped (4.2 ms)``
    """
    meta = result.meta or {}
    line = Text.assemble(
        "matched ",
        (str(result.data.get("count", 0)), "fmd.count"),
        " of ",
        (str(meta.get("candidates", 0)), "fmd.count"),
        " candidates",
    )
    skipped = meta.get("skipped", 0)
    if skipped:
        line.append(", ")
        line.append(f"{skipped} skipped", style="fmd.skipped")
    if "elapsed_ms" in meta:
        line.append(f" ({meta['elapsed_ms']} ms)", style="fmd.dim")
    return render_lines([line])


def render_warnings(result: ServiceResult) -> str:
    return render_lines(
        Text.assemble(("WARNING", "fmd.warning"), " ", warning) for warning in result.warnings
    )


def render_error(result: ServiceResult, *, verbose: bool = False) -> str:
    """``Error: <message>``, followed by the error detail when *verbose*."""
    err = result.error
    lines = [Text.assemble(("Error:", "fmd.error"), " ", err.message if err else "Unknown error")]
    if verbose and err is not None:
        lines.extend(
            Text(f"  {key}: {value}", style="fmd.dim") for key, value in err.detail.items()
        )
    return render_lines(lines)
