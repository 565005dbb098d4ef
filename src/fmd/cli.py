"""The ``fmd`` command: find Markdown files by metadata."""

from __future__ import annotations

from pathlib import Path

import click

from fmd import __version__
from fmd.commands._base import FmdCommand
from fmd.commands._context import AppContext
from fmd.config.settings import FmdSettings
from fmd.domain.filters import FilterSpec
from fmd.services.search import SearchService

_EXAMPLES = """\
  fmd                                  # every Markdown file under .
  fmd -t rust -t python notes/         # tagged rust OR python
  fmd -t rust -a alice                 # tagged rust AND by alice
  fmd -T "meeting" --date-after 2024-01-01
  fmd -f status:draft -f status:review
  fmd -n '^2025-' -i --depth 1
  fmd --full-text -t important
  fmd -0 -t todo | xargs -0 grep -l deadline"""


@click.command("fmd", cls=FmdCommand, examples=_EXAMPLES)
@click.version_option(version=__version__, prog_name="fmd")
@click.option("-0", "--nul", is_flag=True, help="Use NUL-delimited output (safe for xargs -0).")
@click.option("-i", "--ignore-case", is_flag=True, help="Case-insensitive filename matching.")
@click.option(
    "-d",
    "--depth",
    type=click.IntRange(min=0),
    default=None,
    help="Limit search depth (1=current dir only, default: unlimited).",
)
@click.option("-t", "--tag", "tags", multiple=True, help="Filter by tag (repeatable, OR logic).")
@click.option("-T", "--title", "titles", multiple=True, help="Filter by title (repeatable, OR logic).")
@click.option(
    "-a", "--author", "authors", multiple=True, help="Filter by author (repeatable, OR logic)."
)
@click.option(
    "-n", "--name", "names", multiple=True, help="Filter by filename regex (repeatable, OR logic)."
)
@click.option(
    "-f",
    "--field",
    "fields",
    multiple=True,
    help='Filter by frontmatter field, "field:pattern" (repeatable, OR logic).',
)
@click.option("--glob", default=None, help="File pattern to match (default: **/*.md).")
@click.option(
    "--head",
    "head_lines",
    type=click.IntRange(min=0),
    default=None,
    help="Lines to scan for metadata (default: 10).",
)
@click.option("--full-text", is_flag=True, help="Search full file content, not just the head.")
@click.option("--date-after", default=None, help="Dates on or after YYYY-MM-DD.")
@click.option("--date-before", default=None, help="Dates on or before YYYY-MM-DD.")
@click.option("-v", "--verbose", is_flag=True, help="Show warnings, skipped files and a summary.")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.argument("dirs", nargs=-1, type=click.Path(path_type=Path))
def cli(
    nul: bool,
    ignore_case: bool,
    depth: int | None,
    tags: tuple[str, ...],
    titles: tuple[str, ...],
    authors: tuple[str, ...],
    names: tuple[str, ...],
    fields: tuple[str, ...],
    glob: str | None,
    head_lines: int | None,
    full_text: bool,
    date_after: str | None,
    date_before: str | None,
    verbose: bool,
    json_output: bool,
    log_json: bool,
    config_path: str | None,
    dirs: tuple[Path, ...],
) -> None:
    """Find Markdown files by metadata.

    Searches DIRS (default: current directory) for Markdown files and
    filters them by tags, titles, authors, frontmatter fields, filenames
    and dates. Patterns of one kind are OR-ed; different kinds are AND-ed.
    """
    # Unset flags are passed as None so fmd.toml and FMD_* values show through.
    settings = FmdSettings.from_cli(
        config_path=config_path,
        verbose=verbose or None,
        json_output=json_output or None,
        log_json=log_json or None,
        search={
            "head_lines": head_lines,
            "full_text": full_text or None,
            "glob": glob,
            "depth": depth,
            "ignore_case": ignore_case or None,
        },
        output={"nul": nul or None},
    )
    app = AppContext(settings)

    spec = FilterSpec(
        tags=tags,
        titles=titles,
        authors=authors,
        names=names,
        fields=fields,
        date_after=date_after,
        date_before=date_before,
        ignore_case=settings.search.ignore_case,
    )
    roots = list(dirs) or [Path(".")]
    app.emit(SearchService(settings.search).find(roots, spec))
