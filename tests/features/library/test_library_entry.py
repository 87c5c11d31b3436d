"""Tests for ``LibraryEntry`` derived format and cache state."""

from pathlib import Path

from msupack.features.library import LibraryEntry, SourceFormat


def test_format_tracks_source_path_changes() -> None:
    entry = LibraryEntry(name="Song", source_path=Path("/music/song.wav"))
    assert entry.format_tag == "WAV"
    assert not entry.is_pcm

    entry.source_path = Path("/music/song.pcm")
    assert entry.format_tag == "PCM"
    assert entry.is_pcm

    entry.source_path = Path("/music/song.wav")
    assert entry.format_tag == "WAV"
    assert not entry.is_pcm


def test_extension_case_is_ignored() -> None:
    entry = LibraryEntry(name="Loud", source_path="/music/LOUD.PCM")
    assert entry.source_format == SourceFormat("pcm")
    assert entry.is_pcm
    assert not entry.needs_conversion


def test_file_without_extension_has_empty_tag() -> None:
    entry = LibraryEntry(name="raw", source_path="/music/raw")
    assert entry.format_tag == ""
    assert not entry.is_pcm


def test_cached_pcm_is_assignable() -> None:
    entry = LibraryEntry(
        name="Song",
        source_path="/music/song.flac",
        cached_pcm_path="/cache/song-abc.pcm",
    )
    assert entry.is_cached
    assert not entry.needs_conversion
    assert entry.assignable_path == Path("/cache/song-abc.pcm")


def test_uncached_non_pcm_needs_conversion() -> None:
    entry = LibraryEntry(name="Song", source_path="/music/song.mp3")
    assert entry.needs_conversion
    assert entry.assignable_path == Path("/music/song.mp3")


def test_equality_compares_all_fields() -> None:
    first = LibraryEntry(name="Song", source_path="/music/song.ogg")
    second = LibraryEntry(name="Song", source_path=Path("/music/song.ogg"))
    third = LibraryEntry(name="Other", source_path="/music/song.ogg")
    assert first == second
    assert first != third
    assert "song.ogg" in repr(first)
