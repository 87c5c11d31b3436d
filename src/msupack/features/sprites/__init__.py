"""Public surface for the sprite feature: catalog and ROM patcher."""

from .adapters.zspr import SpriteData, SpriteFormatError, ZsprSpriteApplier, parse_sprite
from .domain.models import SpriteEntry
from .usecases.catalog import SpriteCatalog, SpriteCatalogError, sanitize_file_name

__all__ = [
    "SpriteCatalog",
    "SpriteCatalogError",
    "SpriteData",
    "SpriteEntry",
    "SpriteFormatError",
    "ZsprSpriteApplier",
    "parse_sprite",
    "sanitize_file_name",
]
