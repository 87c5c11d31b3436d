"""Tests for the PCM cache and library folder scan."""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from mutagen import MutagenError
from pytest_mock import MockerFixture

from msupack.features.library import PcmCache, build_entry, read_display_name, scan_library


def _touch(path: Path, content: bytes = b"data", mtime: float | None = None) -> Path:
    _ = path.write_bytes(content)
    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return path


def test_cache_path_is_stable_and_distinguishes_sources(tmp_path: Path) -> None:
    cache = PcmCache(tmp_path / "cache")
    first = cache.cache_path_for(tmp_path / "a" / "song.flac")
    again = cache.cache_path_for(tmp_path / "a" / "song.flac")
    other = cache.cache_path_for(tmp_path / "b" / "song.flac")

    assert first == again
    assert first != other
    assert first.parent == tmp_path / "cache"
    assert first.name.startswith("song-")
    assert first.suffix == ".pcm"


def test_lookup_returns_fresh_cached_copy(tmp_path: Path) -> None:
    cache_dir = tmp_path / "cache"
    cache_dir.mkdir()
    cache = PcmCache(cache_dir)
    source = _touch(tmp_path / "song.flac", mtime=1_000_000)
    _ = _touch(cache.cache_path_for(source), mtime=2_000_000)

    assert cache.lookup(source) == cache.cache_path_for(source)


def test_lookup_ignores_stale_cached_copy(tmp_path: Path) -> None:
    cache_dir = tmp_path / "cache"
    cache_dir.mkdir()
    cache = PcmCache(cache_dir)
    source = _touch(tmp_path / "song.flac", mtime=2_000_000)
    _ = _touch(cache.cache_path_for(source), mtime=1_000_000)

    assert cache.lookup(source) is None


def test_lookup_without_cached_copy(tmp_path: Path) -> None:
    cache = PcmCache(tmp_path / "cache")
    source = _touch(tmp_path / "song.flac")
    assert cache.lookup(source) is None


def test_pcm_display_name_is_stem_without_reading_tags(tmp_path: Path, mocker: MockerFixture) -> None:
    reader = mocker.patch("msupack.features.library.usecases.scan.mutagen.File")
    track = _touch(tmp_path / "01 Overworld.pcm")

    assert read_display_name(track) == "01 Overworld"
    reader.assert_not_called()


def test_display_name_prefers_title_tag(tmp_path: Path, mocker: MockerFixture) -> None:
    audio = mocker.Mock()
    audio.tags = {"title": ["  Kakariko Village  "]}
    _ = mocker.patch("msupack.features.library.usecases.scan.mutagen.File", return_value=audio)

    assert read_display_name(_touch(tmp_path / "track.flac")) == "Kakariko Village"


def test_display_name_falls_back_to_stem(tmp_path: Path, mocker: MockerFixture) -> None:
    _ = mocker.patch(
        "msupack.features.library.usecases.scan.mutagen.File",
        side_effect=MutagenError("bad header"),
    )
    assert read_display_name(_touch(tmp_path / "broken.mp3")) == "broken"


def test_unrecognised_audio_uses_stem(tmp_path: Path, mocker: MockerFixture) -> None:
    _ = mocker.patch("msupack.features.library.usecases.scan.mutagen.File", return_value=None)
    assert read_display_name(_touch(tmp_path / "noise.wav", b"not audio")) == "noise"


def test_build_entry_attaches_cache(tmp_path: Path, mocker: MockerFixture) -> None:
    _ = mocker.patch("msupack.features.library.usecases.scan.mutagen.File", return_value=None)
    cache_dir = tmp_path / "cache"
    cache_dir.mkdir()
    cache = PcmCache(cache_dir)
    source = _touch(tmp_path / "theme.ogg", b"not audio", mtime=1_000_000)
    cached = _touch(cache.cache_path_for(source), mtime=2_000_000)

    entry = build_entry(source, cache)

    assert entry.cached_pcm_path == cached
    assert entry.assignable_path == cached


def test_scan_library_filters_and_sorts(tmp_path: Path) -> None:
    _ = _touch(tmp_path / "b.pcm")
    _ = _touch(tmp_path / "A.pcm")
    _ = _touch(tmp_path / "notes.txt")
    (tmp_path / "sub").mkdir()
    _ = _touch(tmp_path / "sub" / "nested.pcm")

    entries = scan_library(tmp_path)

    assert [entry.source_path.name for entry in entries] == ["A.pcm", "b.pcm"]
    assert all(entry.is_pcm for entry in entries)


def test_scan_library_rejects_files(tmp_path: Path) -> None:
    with pytest.raises(NotADirectoryError):
        _ = scan_library(_touch(tmp_path / "file.pcm"))
