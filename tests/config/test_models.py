"""Tests for the config section models."""

import pytest
from pydantic import ValidationError

from fmd.config.models import OutputConfig, SearchConfig


class TestSearchConfig:
    def test_defaults(self) -> None:
        cfg = SearchConfig()
        assert cfg.head_lines == 10
        assert cfg.full_text is False
        assert cfg.glob == "**/*.md"
        assert cfg.depth is None
        assert cfg.workers is None
        assert cfg.max_frontmatter_lines == 1000
        assert cfg.exclude_dirs == []

    @pytest.mark.parametrize(
        "overrides",
        [{"head_lines": -1}, {"depth": -1}, {"workers": 0}, {"max_frontmatter_lines": 0}],
    )
    def test_rejects_out_of_range(self, overrides: dict[str, int]) -> None:
        with pytest.raises(ValidationError):
            SearchConfig(**overrides)

    def test_frozen(self) -> None:
        with pytest.raises(ValidationError):
            SearchConfig().head_lines = 20  # type: ignore[misc]


def test_output_defaults() -> None:
    assert OutputConfig().nul is False
