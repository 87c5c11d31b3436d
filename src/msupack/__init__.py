"""msupack: assemble MSU-1 packs (ROM, marker, PCM tracks, optional sprite)."""

__version__ = "0.1.0"
