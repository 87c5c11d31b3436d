"""Public surface for the audio library feature."""

from .domain.models import LibraryEntry, SourceFormat
from .usecases.pcm_cache import PcmCache
from .usecases.scan import build_entry, read_display_name, scan_library

__all__ = [
    "LibraryEntry",
    "SourceFormat",
    "PcmCache",
    "build_entry",
    "read_display_name",
    "scan_library",
]
