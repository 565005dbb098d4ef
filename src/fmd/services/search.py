"""SearchService: find Markdown files whose metadata matches a filter set.

Pipeline: compile filters -> enumerate candidates -> prune by filename
-> evaluate content filters in parallel -> sort.

Filters are compiled before traversal so that a malformed pattern fails
the run without touching the filesystem. Each candidate is evaluated
independently on a thread pool; the only shared state is the read-only
:class:`CompiledFilters`. A file that cannot be read is dropped and
logged, never fatal.
"""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from fmd.config.models import SearchConfig
from fmd.domain.filters import (
    CompiledFilters,
    FilterSpec,
    compile_filters,
    matches_filename,
    should_include,
)
from fmd.errors import FileReadError, FilterConfigError
from fmd.infrastructure.filesystem import find_markdown_files
from fmd.infrastructure.reader import read_metadata
from fmd.services.result import ServiceResult

logger = logging.getLogger(__name__)


def evaluate_file(
    path: Path,
    filters: CompiledFilters,
    *,
    head_lines: int,
    full_text: bool,
    max_frontmatter_lines: int,
) -> bool:
    """Read one file and decide whether it passes the content filters.

    Raises:
        FileReadError: The file could not be read.
    """
    metadata = read_metadata(
        path,
        head_lines,
        full_text=full_text,
        max_frontmatter_lines=max_frontmatter_lines,
    )
    return should_include(metadata, filters)


class SearchService:
    """Metadata search over one or more directory trees.

    Parameters:
        config: ``[search]`` settings such as head_lines, glob and workers.
    """

    def __init__(self, config: SearchConfig | None = None) -> None:
        self._config = config or SearchConfig()

    @property
    def workers(self) -> int:
        return self._config.workers or os.cpu_count() or 1

    def find(self, dirs: Sequence[Path], spec: FilterSpec) -> ServiceResult:
        """Return the sorted paths under *dirs* that satisfy *spec*.

        ``data`` holds ``paths`` and ``count``; ``meta`` holds
        ``candidates``, ``skipped`` and ``elapsed_ms``.
        """
        start = time.perf_counter()
        try:
            filters = compile_filters(spec)
        except FilterConfigError as exc:
            return ServiceResult.failure("find", "INVALID_FILTER", exc)

        cfg = self._config
        candidates, missing = find_markdown_files(
            dirs,
            glob=cfg.glob,
            depth=cfg.depth,
            excluded_dirs=cfg.exclude_dirs,
        )
        warnings = [f"Directory not found: {path}" for path in missing]

        skipped = 0
        if spec.is_empty():
            matches = candidates
        else:
            pruned = [path for path in candidates if matches_filename(path, filters)]
            if filters.has_content_filters:
                matches, skipped = self._evaluate_all(pruned, filters)
            else:
                matches = pruned

        paths = sorted(str(path) for path in matches)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.debug(
            "Matched %d of %d candidates (%d skipped) in %.1f ms",
            len(paths),
            len(candidates),
            skipped,
            elapsed_ms,
        )
        return ServiceResult(
            ok=True,
            op="find",
            data={"paths": paths, "count": len(paths)},
            warnings=warnings,
            meta={
                "candidates": len(candidates),
                "skipped": skipped,
                "elapsed_ms": round(elapsed_ms, 2),
            },
        )

    def _evaluate_all(
        self,
        paths: list[Path],
        filters: CompiledFilters,
    ) -> tuple[list[Path], int]:
        """Evaluate *paths* on the worker pool; return ``(matches, skipped)``."""
        if not paths:
            return [], 0

        cfg = self._config
        matches: list[Path] = []
        skipped = 0
        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            futures = {
                executor.submit(
                    evaluate_file,
                    path,
                    filters,
                    head_lines=cfg.head_lines,
                    full_text=cfg.full_text,
                    max_frontmatter_lines=cfg.max_frontmatter_lines,
                ): path
                for path in paths
            }
            for future in as_completed(futures):
                try:
                    included = future.result()
                except FileReadError as exc:
                    skipped += 1
                    logger.warning("Skipping file: %s", exc)
                    continue
                if included:
                    matches.append(futures[future])
        return matches, skipped
