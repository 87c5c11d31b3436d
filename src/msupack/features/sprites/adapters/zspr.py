"""Player sprite patcher for ``.zspr`` and legacy ``.spr`` files.

ZSPR layout (little-endian)::

    0   4s   magic "ZSPR"
    4   B    version
    5   I    checksum
    9   I    sprite data offset
    13  H    sprite data length (0x7000)
    15  I    palette data offset
    19  H    palette data length (120, or 124 with glove colours)
    21  H    sprite type
    23  6s   reserved
    29  ...  display name and author (UTF-16LE, NUL-terminated), author ROM name

A legacy ``.spr`` is the raw 0x7000 graphics block followed by the 0x78
byte palette.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from msupack.features.apply.usecases.ports import SpriteApplierPort

ZSPR_MAGIC: Final[bytes] = b"ZSPR"
ZSPR_VERSION: Final[int] = 1
_HEADER = struct.Struct("<4sBIIHIHH6s")

SPRITE_DATA_LENGTH: Final[int] = 0x7000
PALETTE_LENGTH: Final[int] = 120
PALETTE_WITH_GLOVES_LENGTH: Final[int] = 124
LEGACY_SPR_LENGTH: Final[int] = SPRITE_DATA_LENGTH + PALETTE_LENGTH

ROM_SPRITE_OFFSET: Final[int] = 0x80000
ROM_PALETTE_OFFSET: Final[int] = 0xDD308
ROM_GLOVES_OFFSET: Final[int] = 0xDEDF5
_COPIER_HEADER: Final[int] = 0x200


@dataclass(slots=True, frozen=True)
class SpriteData:
    """Graphics, palette and optional glove colours extracted from a sprite file."""

    graphics: bytes
    palette: bytes
    gloves: bytes | None = None
    display_name: str = ""
    author: str = ""


class SpriteFormatError(ValueError):
    """Raised internally when a sprite file cannot be decoded."""


def _read_utf16z(data: bytes, start: int) -> tuple[str, int]:
    """Decode a NUL-terminated UTF-16LE string; return it with the next offset."""

    end = start
    while end + 1 < len(data) and data[end : end + 2] != b"\x00\x00":
        end += 2
    text = data[start:end].decode("utf-16-le", errors="replace")
    return text, min(end + 2, len(data))


def parse_sprite(data: bytes, *, suffix: str = "") -> SpriteData:
    """Decode ``data`` as ZSPR, or as legacy SPR when it has no ZSPR magic."""

    if not data.startswith(ZSPR_MAGIC):
        if suffix.lower() == ".zspr":
            raise SpriteFormatError("missing ZSPR header")
        if len(data) != LEGACY_SPR_LENGTH:
            raise SpriteFormatError(
                f"legacy sprite must be {LEGACY_SPR_LENGTH} bytes, got {len(data)}"
            )
        return SpriteData(
            graphics=data[:SPRITE_DATA_LENGTH],
            palette=data[SPRITE_DATA_LENGTH:],
        )

    if len(data) < _HEADER.size:
        raise SpriteFormatError("truncated ZSPR header")
    (
        _magic,
        version,
        _checksum,
        sprite_offset,
        sprite_length,
        palette_offset,
        palette_length,
        _sprite_type,
        _reserved,
    ) = _HEADER.unpack_from(data)

    if version != ZSPR_VERSION:
        raise SpriteFormatError(f"unsupported ZSPR version {version}")
    if sprite_length != SPRITE_DATA_LENGTH:
        raise SpriteFormatError(f"unexpected sprite data length {sprite_length:#x}")
    if palette_length not in (PALETTE_LENGTH, PALETTE_WITH_GLOVES_LENGTH):
        raise SpriteFormatError(f"unexpected palette length {palette_length}")
    if sprite_offset + sprite_length > len(data):
        raise SpriteFormatError("sprite data extends past end of file")
    if palette_offset + palette_length > len(data):
        raise SpriteFormatError("palette data extends past end of file")

    display_name, cursor = _read_utf16z(data, _HEADER.size)
    author, _ = _read_utf16z(data, cursor)
    palette_block = data[palette_offset : palette_offset + palette_length]
    return SpriteData(
        graphics=data[sprite_offset : sprite_offset + sprite_length],
        palette=palette_block[:PALETTE_LENGTH],
        gloves=palette_block[PALETTE_LENGTH:] or None,
        display_name=display_name,
        author=author,
    )


class ZsprSpriteApplier(SpriteApplierPort):
    """Validate sprite files and patch them into ROM images in place."""

    def read(self, path: Path) -> SpriteData:
        """Decode ``path``; raises ``SpriteFormatError`` or ``OSError``."""

        return parse_sprite(path.read_bytes(), suffix=path.suffix)

    def read_metadata(self, path: Path) -> tuple[str, str] | None:
        """Return ``(display_name, author)`` for a readable ZSPR file.

        Legacy ``.spr`` files and unreadable files carry no metadata.
        """

        try:
            sprite = self.read(path)
        except (SpriteFormatError, OSError):
            return None
        if not sprite.display_name and not sprite.author:
            return None
        return sprite.display_name, sprite.author

    def validate(self, path: Path) -> str | None:
        try:
            _ = self.read(path)
        except SpriteFormatError as exc:
            return str(exc)
        except OSError as exc:
            return f"cannot read sprite: {exc}"
        return None

    def apply(self, sprite_path: Path, rom_path: Path) -> str | None:
        try:
            sprite = self.read(sprite_path)
            rom = bytearray(rom_path.read_bytes())
        except SpriteFormatError as exc:
            return str(exc)
        except OSError as exc:
            return f"cannot read input: {exc}"

        header = _COPIER_HEADER if len(rom) % 0x400 == _COPIER_HEADER else 0
        required = header + ROM_GLOVES_OFFSET + 4
        if len(rom) < required:
            return f"ROM is too small for sprite data ({len(rom)} bytes, need {required})"

        gfx_at = header + ROM_SPRITE_OFFSET
        pal_at = header + ROM_PALETTE_OFFSET
        rom[gfx_at : gfx_at + len(sprite.graphics)] = sprite.graphics
        rom[pal_at : pal_at + len(sprite.palette)] = sprite.palette
        if sprite.gloves is not None:
            gloves_at = header + ROM_GLOVES_OFFSET
            rom[gloves_at : gloves_at + len(sprite.gloves)] = sprite.gloves

        try:
            _ = rom_path.write_bytes(bytes(rom))
        except OSError as exc:
            return f"cannot write ROM: {exc}"
        return None


__all__ = [
    "SpriteData",
    "SpriteFormatError",
    "ZsprSpriteApplier",
    "parse_sprite",
]
