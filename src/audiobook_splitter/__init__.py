"""Split an audio file into per-chapter files using ffprobe and ffmpeg."""

from audiobook_splitter.probe import parse_chapter_report, read_audio_file
from audiobook_splitter.splitter import plan_jobs, run_jobs, split_audio

__all__ = [
    "parse_chapter_report",
    "plan_jobs",
    "read_audio_file",
    "run_jobs",
    "split_audio",
]
__version__ = "0.1.0"
