from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Chapter:
    """A chapter as reported by ffprobe, with a filesystem-safe title."""

    title: str
    start: str  # ffprobe start_time, passed to ffmpeg verbatim
    end: str


@dataclass(frozen=True)
class AudioFile:
    """Chapters found in one input file."""

    chapters: list[Chapter] = field(default_factory=list)
    format: str = ""  # input extension including the dot, e.g. ".mp3"


@dataclass(frozen=True)
class ExtractionJob:
    """One ffmpeg invocation producing a single chapter file."""

    index: int
    title: str
    start: str
    end: str
    output_path: str
