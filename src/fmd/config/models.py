"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, ``fmd.toml`` only holds overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class SearchConfig(BaseModel):
    """[search] section."""

    model_config = {"frozen": True}

    head_lines: int = Field(default=10, ge=0)
    full_text: bool = False
    glob: str = "**/*.md"
    depth: int | None = Field(default=None, ge=0)
    ignore_case: bool = False
    workers: int | None = Field(default=None, ge=1)
    max_frontmatter_lines: int = Field(default=1000, ge=1)
    exclude_dirs: list[str] = Field(default_factory=list)


class OutputConfig(BaseModel):
    """[output] section."""

    model_config = {"frozen": True}

    nul: bool = False
