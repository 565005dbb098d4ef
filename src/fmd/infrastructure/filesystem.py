"""Candidate discovery: walk directories and yield Markdown paths.

Hidden entries, well-known build/dependency/cache directories, and
anything listed in ``.gitignore`` or ``.ignore`` files are skipped.
Symlinks are not followed.
"""

from __future__ import annotations

import fnmatch
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_GLOB = "**/*.md"

IGNORE_FILES: tuple[str, ...] = (".gitignore", ".ignore")

# Directories skipped even when not hidden and not ignored.
EXCLUDED_DIRS = frozenset(
    {
        # Build artifacts
        "target",
        "build",
        "dist",
        "out",
        "bin",
        "obj",
        # Dependencies
        "node_modules",
        "vendor",
        "bower_components",
        # Python
        "__pycache__",
        # Caches
        ".cache",
        ".parcel-cache",
        ".gradle",
        ".m2",
        # Frontend frameworks
        ".next",
        ".nuxt",
        ".vitepress",
        ".docusaurus",
        ".output",
        ".serverless",
        # IDEs and editors
        ".idea",
        ".vscode",
        ".vs",
        ".obsidian",
        # Temporary and test coverage
        "tmp",
        "temp",
        "coverage",
        ".nyc_output",
        ".pytest_cache",
        ".tox",
    }
)


# ---------------------------------------------------------------------------
# Ignore files
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class IgnoreRule:
    """One line of an ignore file, anchored at the directory holding it."""

    base: Path
    pattern: str
    dir_only: bool = False
    anchored: bool = False

    def matches(self, path: Path, *, is_dir: bool) -> bool:
        if self.dir_only and not is_dir:
            return False
        if not self.anchored:
            return fnmatch.fnmatchcase(path.name, self.pattern)
        try:
            relative = path.relative_to(self.base).as_posix()
        except ValueError:
            return False
        return fnmatch.fnmatchcase(relative, self.pattern)


def parse_ignore_file(path: Path) -> list[IgnoreRule]:
    """Read gitignore-style rules from *path*.

    Negations (``!pattern``) are not supported and are skipped.
    Unreadable files yield no rules.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        logger.debug("Skipping unreadable ignore file %s", path)
        return []

    rules: list[IgnoreRule] = []
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or line.startswith("!"):
            continue
        dir_only = line.endswith("/")
        line = line.rstrip("/")
        anchored = "/" in line
        line = line.lstrip("/")
        if line.startswith("**/"):
            # "**/name" matches at any depth, same as a bare name.
            line = line[3:]
            anchored = "/" in line
        if not line:
            continue
        rules.append(
            IgnoreRule(base=path.parent, pattern=line, dir_only=dir_only, anchored=anchored)
        )
    return rules


def _load_rules(directory: Path) -> list[IgnoreRule]:
    rules: list[IgnoreRule] = []
    for name in IGNORE_FILES:
        candidate = directory / name
        if candidate.is_file():
            rules.extend(parse_ignore_file(candidate))
    return rules


# ---------------------------------------------------------------------------
# Glob matching
# ---------------------------------------------------------------------------


def matches_glob(path: Path, pattern: str) -> bool:
    """Match the full path string against *pattern*.

    ``*`` also crosses ``/``, so ``*.md`` matches at any depth. A leading
    ``**/`` also matches paths with no directory part.
    """
    text = path.as_posix()
    if fnmatch.fnmatchcase(text, pattern):
        return True
    return pattern.startswith("**/") and fnmatch.fnmatchcase(text, pattern[3:])


# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------


def _is_skipped_dir(path: Path, excluded: frozenset[str], rules: list[IgnoreRule]) -> bool:
    name = path.name
    if name.startswith(".") or name in excluded:
        return True
    return any(rule.matches(path, is_dir=True) for rule in rules)


def _walk_root(
    root: Path,
    *,
    glob: str,
    depth: int | None,
    excluded: frozenset[str],
) -> list[Path]:
    found: list[Path] = []
    inherited: dict[Path, list[IgnoreRule]] = {root: _load_rules(root)}

    for dirpath, dirnames, filenames in root.walk(follow_symlinks=False):
        rules = inherited.pop(dirpath, [])
        level = len(dirpath.relative_to(root).parts)

        if depth is None or level + 1 < depth:
            kept: list[str] = []
            for name in sorted(dirnames):
                child = dirpath / name
                if child.is_symlink() or _is_skipped_dir(child, excluded, rules):
                    continue
                kept.append(name)
                inherited[child] = rules + _load_rules(child)
            dirnames[:] = kept
        else:
            dirnames[:] = []

        if depth is not None and level + 1 > depth:
            continue

        for name in filenames:
            if name.startswith("."):
                continue
            path = dirpath / name
            if not path.is_file():
                continue
            if any(rule.matches(path, is_dir=False) for rule in rules):
                continue
            if matches_glob(path, glob):
                found.append(path)

    return found


def find_markdown_files(
    dirs: Iterable[Path],
    *,
    glob: str = DEFAULT_GLOB,
    depth: int | None = None,
    excluded_dirs: Iterable[str] = (),
) -> tuple[list[Path], list[Path]]:
    """Enumerate candidate files under each of *dirs*.

    Args:
        dirs: Roots to search. A root that is a file is yielded as-is
            when it matches *glob*.
        glob: Pattern matched against the full path (see :func:`matches_glob`).
        depth: ``None`` for unlimited; ``1`` for files directly inside a root.
        excluded_dirs: Directory names skipped in addition to
            :data:`EXCLUDED_DIRS`.

    Returns:
        ``(paths, missing)``: deduplicated, sorted candidate paths and
        roots that do not exist.
    """
    excluded = EXCLUDED_DIRS | frozenset(excluded_dirs)
    seen: set[Path] = set()
    missing: list[Path] = []

    for root in dirs:
        if root.is_file():
            if matches_glob(root, glob):
                seen.add(root)
            continue
        if not root.is_dir():
            missing.append(root)
            continue
        seen.update(_walk_root(root, glob=glob, depth=depth, excluded=excluded))

    return sorted(seen, key=str), missing
