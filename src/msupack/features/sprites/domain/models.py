"""Data structures describing entries of the remote sprite catalog."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _text_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


@dataclass(slots=True)
class SpriteEntry:
    """One selectable sprite as listed by the catalog."""

    name: str
    author: str = ""
    file: str = ""
    preview: str = ""
    tags: list[str] = field(default_factory=list)
    usage: list[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, payload: Mapping[str, Any]) -> "SpriteEntry":
        """Build an entry from a catalog record; key lookup is case-insensitive."""

        lowered = {str(key).lower(): value for key, value in payload.items()}
        return cls(
            name=_text(lowered.get("name")),
            author=_text(lowered.get("author")),
            file=_text(lowered.get("file")),
            preview=_text(lowered.get("preview")),
            tags=_text_list(lowered.get("tags")),
            usage=_text_list(lowered.get("usage")),
        )

    def matches(self, query: str) -> bool:
        """Return True when ``query`` occurs in the name, author or a tag (any case)."""

        needle = query.strip().casefold()
        if not needle:
            return True
        if needle in self.name.casefold() or needle in self.author.casefold():
            return True
        return any(needle in tag.casefold() for tag in self.tags)


__all__ = ["SpriteEntry"]
