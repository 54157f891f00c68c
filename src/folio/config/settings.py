"""Unified settings: CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs: CLI flags passed by Click
  2. Env vars: ``FOLIO_*`` prefix
  3. TOML file: ``folio.toml`` discovered via walk-up
  4. Code defaults: baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the walk-up discovery from :mod:`folio.config.discovery`.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from folio.config.discovery import ConfigError, find_config, read_toml
from folio.config.models import (
    BuildConfig,
    CssConfig,
    FeedConfig,
    PluginsConfig,
    RobotsConfig,
    SiteConfig,
)


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``folio.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            try:
                self._data = read_toml(toml_path)
            except ConfigError as exc:
                raise click.ClickException(str(exc)) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class FolioSettings(BaseSettings):
    """Unified settings for the entire folio CLI.

    Merges CLI flags, environment variables, TOML config sections,
    and code-baked defaults into a single frozen object.

    Attributes:
        site_root: Resolved site directory (parent of ``folio.toml``,
            or CWD if no config found).
        config_path: The TOML file that was loaded, or None.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "FOLIO_",
        "env_nested_delimiter": "__",
    }

    # --- Resolved path (derived from config location, not read from TOML) ---
    site_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    site: SiteConfig = Field(default_factory=SiteConfig)
    build: BuildConfig = Field(default_factory=BuildConfig)
    css: CssConfig = Field(default_factory=CssConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)
    feed: FeedConfig = Field(default_factory=FeedConfig)
    robots: RobotsConfig = Field(default_factory=RobotsConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        site_root: Path | None = None,
        **cli_flags: Any,
    ) -> FolioSettings:
        """Construct settings from CLI invocation.

        Discovers ``folio.toml`` via walk-up (or explicit *config_path*),
        resolves *site_root* from the config file's parent directory,
        and merges CLI flags as highest-priority overrides.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if not p.is_file():
                raise click.ClickException(f"Config file not found: {config_path}")
            toml_path = p
        else:
            toml_path = find_config(site_root)

        resolved_root = site_root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(
                site_root=resolved_root,
                config_path=toml_path,
                **cli_flags,
            )
        finally:
            _tls.toml_path = None

    @property
    def output_root(self) -> Path:
        """Absolute output directory for generated files."""
        return self.site_root / self.build.output_dir
