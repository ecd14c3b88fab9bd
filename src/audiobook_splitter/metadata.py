"""Chapter title cleanup and plan listing."""

from __future__ import annotations

from audiobook_splitter.models import AudioFile

# Replaced one at a time, in this order; each pass also trims the ends.
FORBIDDEN_CHARS = ["/", "\\", ":", "*", "?", '"', "<", ">", "|", "\r", "\n", "_"]


def sanitize_filename(name: str) -> str:
    """Make a chapter title safe to use as a single path segment.

    Examples:
        "chapter_1/intro" -> "chapter 1 intro"
        "Part 2: The End\\r" -> "Part 2  The End"

    Titles may collapse to an empty string; callers keep filenames unique
    by prefixing the chapter index.
    """
    for char in FORBIDDEN_CHARS:
        name = name.replace(char, " ").strip(" ")
    return name


def describe_chapters(audio_file: AudioFile) -> list[str]:
    """Format one listing line per chapter: number, time range, title."""
    lines = []
    for i, ch in enumerate(audio_file.chapters):
        lines.append(
            "  {:3d}. [{} - {}]  {}".format(i, ch.start, ch.end, ch.title or "(untitled)")
        )
    return lines
