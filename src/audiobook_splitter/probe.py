"""ffprobe wrapper for reading chapter markers."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess

from audiobook_splitter.exceptions import ExecutableNotFound, InspectionFailure
from audiobook_splitter.metadata import sanitize_filename
from audiobook_splitter.models import AudioFile, Chapter

logger = logging.getLogger(__name__)

# Column layout of `ffprobe -print_format csv -show_chapters`:
#   chapter,<id>,<time_base>,<start>,<start_time>,<end>,<end_time>,<title>
# Parsing is positional and breaks if ffprobe changes this layout.
MIN_FIELDS = 4
START_FIELD = 4
END_FIELD = 6
TITLE_FIELD = 7


def ensure_ffprobe(ffprobe: str | None = None) -> str:
    """Return the path to ffprobe, or raise if not found.

    An explicit path (or command name) takes priority over PATH lookup.
    """
    path = shutil.which(ffprobe or "ffprobe")
    if not path:
        raise ExecutableNotFound(
            "{} not found. Install ffmpeg or pass --ffprobe".format(ffprobe or "ffprobe")
        )
    return path


def read_chapter_report(input_file: str, ffprobe: str) -> str:
    """Run ffprobe on input_file and return its CSV chapter report."""
    cmd = [
        ffprobe,
        "-v", "quiet",
        "-print_format", "csv",
        "-show_chapters",
        input_file,
    ]
    logger.debug("Running: %s", cmd)
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=True,
        )
    except (subprocess.CalledProcessError, OSError) as exc:
        raise InspectionFailure(input_file, exc) from exc
    return result.stdout


def parse_chapter_report(report: str) -> list[Chapter]:
    """Parse ffprobe CSV chapter output into chapters, in report order.

    Fields are split on commas without any quoting support, so a title
    containing a comma is cut at its first comma. Malformed lines are
    skipped.
    """
    chapters = []
    for line in report.split("\n"):
        if not line:
            continue

        parts = line.split(",")
        if len(parts) < MIN_FIELDS:
            continue
        if len(parts) <= TITLE_FIELD:
            logger.warning("Skipping incomplete chapter line: %r", line)
            continue

        chapters.append(Chapter(
            title=sanitize_filename(parts[TITLE_FIELD]),
            start=parts[START_FIELD],
            end=parts[END_FIELD],
        ))
    return chapters


def read_audio_file(input_file: str, ffprobe: str | None = None) -> AudioFile:
    """Probe input_file and return its chapters and extension."""
    report = read_chapter_report(input_file, ensure_ffprobe(ffprobe))
    chapters = parse_chapter_report(report)
    logger.debug("Found %d chapters in %s", len(chapters), input_file)
    return AudioFile(
        chapters=chapters,
        format=os.path.splitext(input_file)[1],
    )
