"""Where: src/msupack/config/settings.py
What: Derived runtime settings sourced from persisted configuration.
Why: Expose validated constants to feature layers without file I/O.
Assumptions: - Config defaults remain compatible with current runtime expectations.
Trade-offs: - Validation is limited to simple boundary checks.
"""

from __future__ import annotations

from pathlib import Path

from msupack.config.config import config as app_config
from msupack.config.paths import default_pcm_cache_dir, default_sprite_cache_dir

# Output layout ---------------------------------------------------------------

# Extension (without dot) of audio the MSU-1 chip plays directly.
TARGET_AUDIO_FORMAT: str = "pcm"

MARKER_EXTENSION: str = ".msu"
TRACK_EXTENSION: str = f".{TARGET_AUDIO_FORMAT}"

# Audio inputs recognised when scanning a library folder.
SUPPORTED_AUDIO_EXTENSIONS: frozenset[str] = frozenset(
    {".pcm", ".wav", ".flac", ".mp3", ".ogg"}
)


# Overwrite handling ----------------------------------------------------------

OVERWRITE_MODE_CHOICES: tuple[str, ...] = ("ask", "overwrite", "skip")

_overwrite_mode = (app_config.overwrite_mode or "").strip().lower()
DEFAULT_OVERWRITE_MODE: str = (
    _overwrite_mode if _overwrite_mode in OVERWRITE_MODE_CHOICES else "ask"
)


# Sprite catalog --------------------------------------------------------------

SPRITE_CATALOG_URL: str = app_config.sprite_catalog_url or "https://alttpr.com/sprites"
HTTP_USER_AGENT: str = app_config.http_user_agent or "msupack/0.1.0"
HTTP_TIMEOUT_SECONDS: float = 30.0

SPRITE_CACHE_DIR: Path = app_config.sprite_cache_dir or default_sprite_cache_dir()
PCM_CACHE_DIR: Path = app_config.pcm_cache_dir or default_pcm_cache_dir()


__all__ = [
    "TARGET_AUDIO_FORMAT",
    "MARKER_EXTENSION",
    "TRACK_EXTENSION",
    "SUPPORTED_AUDIO_EXTENSIONS",
    "OVERWRITE_MODE_CHOICES",
    "DEFAULT_OVERWRITE_MODE",
    "SPRITE_CATALOG_URL",
    "HTTP_USER_AGENT",
    "HTTP_TIMEOUT_SECONDS",
    "SPRITE_CACHE_DIR",
    "PCM_CACHE_DIR",
]
