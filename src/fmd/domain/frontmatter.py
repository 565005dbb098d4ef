"""Frontmatter model and parser.

A Markdown file carries frontmatter when its very first line is ``---``.
The YAML block runs until the next ``---`` line, or to the end of the
text when no closing delimiter exists. ``title``, ``author`` and ``tags``
get dedicated fields; every other key lands in :attr:`Frontmatter.extra`.

Parsing never raises: a block that is not valid YAML, or does not fit
the :class:`Frontmatter` shape, is logged and treated as absent.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, RootModel, ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.constructor import SafeConstructor
from ruamel.yaml.error import YAMLError
from ruamel.yaml.nodes import ScalarNode

logger = logging.getLogger(__name__)

FRONTMATTER_DELIMITER = "---"


def split_lines(text: str) -> list[str]:
    """Split *text* into lines, accepting both ``\\n`` and ``\\r\\n``.

    A trailing newline does not produce a final empty line.
    """
    lines = text.replace("\r\n", "\n").split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


class TagValue(RootModel[str | list[str]]):
    """``tags:`` as written in YAML, either a single string or a list."""

    model_config = {"frozen": True}

    def contains_tag(self, pattern: str) -> bool:
        """Case-insensitive substring match against the tag or any list item."""
        needle = pattern.lower()
        if isinstance(self.root, str):
            return needle in self.root.lower()
        return any(needle in tag.lower() for tag in self.root)


class Frontmatter(BaseModel):
    """Structured metadata from a file's YAML block."""

    model_config = {"frozen": True, "extra": "allow"}

    title: str | None = None
    author: str | None = None
    tags: TagValue | None = None

    @property
    def extra(self) -> dict[str, Any]:
        """All keys other than ``title``, ``author`` and ``tags``."""
        return dict(self.model_extra or {})


class _FrontmatterConstructor(SafeConstructor):
    """Safe constructor that leaves timestamps as the text that was written.

    Date values are validated later, as strict ``YYYY-MM-DD`` strings, so a
    typo such as ``2024-02-30`` stays a skippable value instead of failing
    the whole block.
    """

    def construct_timestamp_text(self, node: ScalarNode) -> str:
        return str(self.construct_scalar(node))


_FrontmatterConstructor.add_constructor(
    "tag:yaml.org,2002:timestamp", _FrontmatterConstructor.construct_timestamp_text
)


def _new_yaml() -> YAML:
    """Create a fresh safe-mode YAML loader.

    ruamel.yaml's YAML object is stateful, so each parse gets its own
    instance; worker threads never share one.
    """
    yaml = YAML(typ="safe")
    yaml.Constructor = _FrontmatterConstructor
    return yaml


def extract_yaml_block(content: str) -> str | None:
    """Return the raw YAML between the frontmatter delimiters, or ``None``.

    Without a closing delimiter the block extends to the end of *content*.
    An empty block counts as no frontmatter.
    """
    lines = split_lines(content)
    if not lines or lines[0].strip() != FRONTMATTER_DELIMITER:
        return None

    block: list[str] = []
    for line in lines[1:]:
        if line.strip() == FRONTMATTER_DELIMITER:
            break
        block.append(line)

    if not block:
        return None
    return "\n".join(block)


def parse_frontmatter(content: str, path: Path | None = None) -> Frontmatter | None:
    """Parse the frontmatter at the top of *content*.

    Args:
        content: Full file text or a bounded prefix of it.
        path: Source file, used only for diagnostics.

    Returns:
        A :class:`Frontmatter`, or ``None`` when the text has no
        frontmatter or the block cannot be deserialized.
    """
    block = extract_yaml_block(content)
    if block is None:
        return None

    source = path if path is not None else "<text>"
    try:
        data = _new_yaml().load(block)
    except (YAMLError, ValueError, RecursionError) as exc:
        # RecursionError: flow collections nested thousands of levels deep.
        logger.warning("Failed to parse YAML frontmatter in %s: %s", source, exc)
        return None

    if data is None:
        # Comments or blank lines only.
        return Frontmatter()
    if not isinstance(data, dict):
        logger.warning(
            "Failed to parse YAML frontmatter in %s: expected a mapping, got %s",
            source,
            type(data).__name__,
        )
        return None

    try:
        return Frontmatter.model_validate({str(key): value for key, value in data.items()})
    except ValidationError as exc:
        logger.warning(
            "Failed to parse YAML frontmatter in %s: %d invalid field(s)",
            source,
            exc.error_count(),
        )
        return None
