"""Locate and read ``folio.toml``.

The file is found the way git finds ``.git/``: start in a directory and
walk up through its parents. ``FOLIO_CONFIG`` pins a file explicitly and
disables the walk.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from folio.config.models import FolioConfig

CONFIG_FILENAME = "folio.toml"
CONFIG_ENV_VAR = "FOLIO_CONFIG"


class ConfigError(ValueError):
    """A config file exists but cannot be parsed."""


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest ``folio.toml`` at or above *start* (default: cwd).

    When ``FOLIO_CONFIG`` is set, that file is returned if it exists and
    None otherwise; no walk happens.
    """
    pinned = os.environ.get(CONFIG_ENV_VAR)
    if pinned:
        path = Path(pinned)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def read_toml(path: Path) -> dict[str, Any]:
    """Parse *path* as TOML.

    Raises:
        ConfigError: The file is not valid TOML.
    """
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc


def load_config(path: Path | None = None, cwd: Path | None = None) -> FolioConfig:
    """Validate a config file into :class:`FolioConfig`.

    With no *path*, the file is discovered from *cwd*; with no file at
    all, every section takes its defaults.
    """
    path = path or find_config(cwd)
    if path is None:
        return FolioConfig()
    return FolioConfig.model_validate(read_toml(path))
