"""Resolved settings for one fmd run.

Layers, highest priority first:

1. CLI flags, passed as init kwargs
2. ``FMD_*`` environment variables (``__`` separates nested keys, e.g.
   ``FMD_SEARCH__HEAD_LINES=20``)
3. ``fmd.toml``, found by walking up from the working directory
4. Defaults baked into :mod:`fmd.config.models`

Sections are deep-merged across layers, so ``--head 20`` replaces
``search.head_lines`` and leaves the rest of ``[search]`` alone.
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from fmd.config.discovery import find_config
from fmd.config.models import OutputConfig, SearchConfig

# The fmd.toml picked by from_cli(), read back in settings_customise_sources().
_active_toml: ContextVar[Path | None] = ContextVar("fmd_active_toml", default=None)


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise click.ClickException(f"Invalid TOML in {path}: {exc}") from exc


class FmdTomlSource(PydanticBaseSettingsSource):
    """Settings layer backed by a parsed ``fmd.toml``."""

    def __init__(self, settings_cls: type[BaseSettings], path: Path | None) -> None:
        super().__init__(settings_cls)
        self.path = path
        self.values: dict[str, Any] = (
            _load_toml(path) if path is not None and path.is_file() else {}
        )

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        return self.values.get(field_name), field_name, field_name in self.values

    def __call__(self) -> dict[str, Any]:
        return dict(self.values)


def _given(values: dict[str, Any]) -> dict[str, Any]:
    """Drop ``None`` entries, which stand for flags not passed."""
    return {key: value for key, value in values.items() if value is not None}


def _resolve_config(config_path: str | None, start: Path | None) -> Path | None:
    if config_path is None:
        return find_config(start)
    path = Path(config_path)
    if not path.is_file():
        raise click.ClickException(f"Config file not found: {config_path}")
    return path


class FmdSettings(BaseSettings):
    """Everything an invocation needs besides its filters.

    Attributes:
        config_path: The TOML file that was loaded, if any.
        verbose: Per-file diagnostics and a run summary on stderr.
        json_output: Emit the ServiceResult as JSON instead of paths.
        log_json: Structured JSON log lines on stderr.
    """

    model_config = {
        "frozen": True,
        "extra": "ignore",
        "env_prefix": "FMD_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None
    verbose: bool = False
    json_output: bool = False
    log_json: bool = False

    search: SearchConfig = Field(default_factory=SearchConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # No .env or secrets-dir layers.
        return init_settings, env_settings, FmdTomlSource(settings_cls, _active_toml.get())

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        search: dict[str, Any] | None = None,
        output: dict[str, Any] | None = None,
        **flags: Any,
    ) -> FmdSettings:
        """Build settings for a CLI invocation.

        *config_path* (``--config``) must exist; otherwise ``fmd.toml`` is
        looked up from *start* (default: cwd). ``None`` values in *flags*,
        *search* and *output* mean "not given" and let lower layers through.

        Raises:
            click.ClickException: Missing ``--config`` file or invalid TOML.
        """
        toml_path = _resolve_config(config_path, start)

        overrides = _given(flags)
        for section, values in (("search", search), ("output", output)):
            section_overrides = _given(values or {})
            if section_overrides:
                overrides[section] = section_overrides

        token = _active_toml.set(toml_path)
        try:
            return cls(config_path=toml_path, **overrides)
        finally:
            _active_toml.reset(token)
