"""Configuration management for msupack."""

import tomllib
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, ClassVar

from msupack.config.paths import default_config_path
from msupack.platform.filesystem import write_text_file
from msupack.platform.logging import logger


def _path_field(default: Path | None = None) -> Any:
    """Create a field for Path objects with proper conversion.

    Args:
        default: Default value for the field.

    Returns:
        Field with proper metadata for path handling.
    """
    return field(default=default, metadata={"path": True})


@dataclass
class Config:
    """Application configuration."""

    # Log file path
    log_file: Path | None = _path_field()

    # Default output directory for the apply command
    output_dir: Path | None = _path_field()

    # How existing destination files are handled when the CLI gives no flag
    overwrite_mode: str = "ask"

    # Remote sprite catalog
    sprite_catalog_url: str | None = None
    http_user_agent: str | None = None

    # Cache locations
    sprite_cache_dir: Path | None = _path_field()
    pcm_cache_dir: Path | None = _path_field()

    _instance: ClassVar["Config | None"] = None
    _loaded_from: ClassVar[Path | None] = None

    def __post_init__(self) -> None:
        """Convert string paths to ``Path`` objects using field metadata."""

        for f in fields(self):
            if not f.metadata.get("path", False):
                continue
            value = getattr(self, f.name)
            if isinstance(value, str):
                setattr(self, f.name, Path(value).expanduser() if value.strip() else None)

    def save(self, target: Path | None = None) -> Path:
        """Save configuration to ``target`` (defaults to the portable path)."""

        config_dict = asdict(self)
        for key, value in config_dict.items():
            if isinstance(value, Path):
                config_dict[key] = str(value)

        destination = target or default_config_path()
        try:
            write_text_file(destination, self._render_toml(config_dict))
            logger.info("Configuration saved to %s", destination)
        except OSError as e:
            logger.error("Failed to save configuration: %s", e)
            raise
        return destination

    def _render_toml(self, config: dict[str, Any]) -> str:
        """Render configuration as TOML with inline guidance."""

        lines: list[str] = ["# msupack configuration file", ""]

        def _optional(key: str, comments: list[str]) -> None:
            lines.extend(f"# {comment}" for comment in comments)
            if config[key] is not None:
                lines.append(f"{key} = {self._format_toml_value(config[key])}")
            lines.append("")

        _optional("log_file", ["Log file path (optional)", 'Example: log_file = "/path/to/msupack.log"'])
        _optional(
            "output_dir",
            ["Default output directory for assembled packs (optional)"],
        )

        lines.append("# How to treat files that already exist at the destination")
        lines.append("# One of: ask, overwrite, skip")
        lines.append(f"overwrite_mode = {self._format_toml_value(config['overwrite_mode'])}")
        lines.append("")

        _optional("sprite_catalog_url", ["Remote sprite catalog JSON endpoint (optional)"])
        _optional("http_user_agent", ["User-Agent sent to the sprite catalog (optional)"])
        _optional("sprite_cache_dir", ["Where downloaded sprites are stored (optional)"])
        _optional("pcm_cache_dir", ["Where converted PCM audio is looked up (optional)"])

        return "\n".join(lines)

    def _format_toml_value(self, value: Any) -> str:
        """Format a value for TOML output.

        Args:
            value: Value to format

        Returns:
            str: Formatted value
        """
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (str, Path)):
            escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
            return f'"{escaped}"'
        return str(value)

    @classmethod
    def load(cls, config_file: Path | None = None) -> "Config":
        """Load configuration from file.

        A missing file yields the defaults; nothing is written until
        ``save`` is called.
        """
        if config_file is None and cls._instance is not None:
            return cls._instance

        source = config_file or default_config_path()

        try:
            if source.exists():
                with open(source, "rb") as f:
                    config_dict = tomllib.load(f)

                known = {f.name for f in fields(cls)}
                unknown = sorted(set(config_dict) - known)
                if unknown:
                    logger.warning("Ignoring unknown configuration keys: %s", ", ".join(unknown))
                instance = cls(**{key: value for key, value in config_dict.items() if key in known})
                logger.debug("Configuration loaded from %s", source)
            else:
                instance = cls()
                logger.debug("No configuration at %s; using defaults", source)
        except (OSError, tomllib.TOMLDecodeError, TypeError) as e:
            logger.error("Failed to load configuration: %s", e)
            raise

        if config_file is None:
            cls._instance = instance
            cls._loaded_from = source
        return instance


# Global configuration instance
config = Config.load()
