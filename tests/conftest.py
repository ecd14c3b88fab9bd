"""Shared test fixtures."""

from __future__ import annotations

import os
import shutil
import subprocess
import tempfile

import pytest


@pytest.fixture
def tmp_dir():
    """Create a temporary directory that's cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield d


@pytest.fixture
def make_audio(tmp_dir):
    """Factory fixture that creates a short silent M4A file with chapters.

    Skips the test when ffmpeg/ffprobe are not installed.
    """
    if not (shutil.which("ffmpeg") and shutil.which("ffprobe")):
        pytest.skip("ffmpeg and ffprobe are required")

    def _make(filename: str, titles: list[str], chapter_s: float = 1.0) -> str:
        meta_path = os.path.join(tmp_dir, filename + ".ffmeta")
        lines = [";FFMETADATA1"]
        chapter_ms = int(chapter_s * 1000)
        for i, title in enumerate(titles):
            lines.extend([
                "[CHAPTER]",
                "TIMEBASE=1/1000",
                "START={}".format(i * chapter_ms),
                "END={}".format((i + 1) * chapter_ms),
                "title={}".format(title),
            ])
        with open(meta_path, "w") as f:
            f.write("\n".join(lines) + "\n")

        path = os.path.join(tmp_dir, filename)
        cmd = [
            "ffmpeg", "-y",
            "-f", "lavfi", "-i", "anullsrc=r=44100:cl=mono",
            "-i", meta_path,
            "-t", str(chapter_s * max(len(titles), 1)),
            "-map", "0:a",
            "-map_metadata", "1",
            "-map_chapters", "1",
            "-c:a", "aac",
            path,
        ]
        subprocess.run(cmd, capture_output=True, check=True)
        return path

    return _make


@pytest.fixture
def sample_audio(make_audio):
    """An M4A file with three chapters."""
    return make_audio("book.m4a", ["Introduction", "The Journey Begins", "Epilogue"])
