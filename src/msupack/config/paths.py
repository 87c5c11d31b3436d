"""Where msupack keeps its config, caches and logs.

Everything is portable by default and anchored at the checkout root:

- ``config/config.toml`` holds user settings.
- ``.data/`` holds downloaded sprites (``sprite_cache``) and converted
  audio (``pcm_cache``). ``MSUPACK_DATA_DIR`` relocates it.
- ``logs/msupack.log`` receives the rotating debug log.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Final


DATA_DIR_ENV_VAR: Final[str] = "MSUPACK_DATA_DIR"
_ROOT_MARKERS: Final[tuple[str, ...]] = ("pyproject.toml", ".git")


def _detect_repo_root(start: Path | None = None) -> Path:
    """Walk up from ``start`` (this module by default) to the checkout root.

    Falls back to the working directory when no marker is found, which is
    the case for a wheel installed into site-packages.
    """
    origin = (start or Path(__file__).resolve()).parent
    for candidate in (origin, *origin.parents):
        if any((candidate / marker).exists() for marker in _ROOT_MARKERS):
            return candidate
    return Path.cwd()


def data_dir_override(env: Mapping[str, str] | None = None) -> Path | None:
    """Return the data directory named by ``MSUPACK_DATA_DIR``, if set and non-blank."""

    raw = (env if env is not None else os.environ).get(DATA_DIR_ENV_VAR, "").strip()
    if not raw:
        return None
    return Path(raw).expanduser().resolve()


def default_config_path() -> Path:
    """Location of the TOML settings file."""

    return (_detect_repo_root() / "config" / "config.toml").resolve()


def default_data_dir(env: Mapping[str, str] | None = None) -> Path:
    """Root for caches; the environment override wins over ``<root>/.data``."""

    override = data_dir_override(env)
    if override is not None:
        return override
    return (_detect_repo_root() / ".data").resolve()


def default_sprite_cache_dir() -> Path:
    return default_data_dir() / "sprite_cache"


def default_pcm_cache_dir() -> Path:
    return default_data_dir() / "pcm_cache"


def default_log_dir() -> Path:
    return (_detect_repo_root() / "logs").resolve()


def default_log_file() -> Path:
    return default_log_dir() / "msupack.log"


__all__ = [
    "DATA_DIR_ENV_VAR",
    "data_dir_override",
    "default_config_path",
    "default_data_dir",
    "default_sprite_cache_dir",
    "default_pcm_cache_dir",
    "default_log_dir",
    "default_log_file",
]
