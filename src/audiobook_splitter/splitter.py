"""Core split pipeline: chapter report -> jobs -> one file per chapter."""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
from concurrent.futures import ThreadPoolExecutor, as_completed

import click
from natsort import natsorted

from audiobook_splitter.exceptions import (
    ExecutableNotFound,
    ExtractionFailure,
    PlanningFailure,
)
from audiobook_splitter.metadata import describe_chapters
from audiobook_splitter.models import AudioFile, ExtractionJob
from audiobook_splitter.probe import ensure_ffprobe, read_audio_file

logger = logging.getLogger(__name__)

MAX_CONCURRENCY = 4
DEFAULT_OUTPUT_DIR = "chapters"


def ensure_ffmpeg(ffmpeg: str | None = None) -> str:
    """Return the path to ffmpeg, or raise if not found."""
    path = shutil.which(ffmpeg or "ffmpeg")
    if not path:
        raise ExecutableNotFound(
            "{} not found. Install ffmpeg or pass --ffmpeg".format(ffmpeg or "ffmpeg")
        )
    return path


def plan_jobs(audio_file: AudioFile, output_dir: str) -> list[ExtractionJob]:
    """Create output_dir and build one extraction job per chapter.

    Filenames are "<index>_<title><ext>". The index is not zero-padded, so
    plain string sorting only matches chapter order below ten chapters.
    """
    try:
        os.makedirs(output_dir, exist_ok=True)
    except OSError as exc:
        raise PlanningFailure(output_dir, exc) from exc

    return _build_jobs(audio_file, output_dir)


def _build_jobs(audio_file: AudioFile, output_dir: str) -> list[ExtractionJob]:
    jobs = []
    for i, ch in enumerate(audio_file.chapters):
        filename = "{}_{}{}".format(i, ch.title, audio_file.format)
        jobs.append(ExtractionJob(
            index=i,
            title=ch.title,
            start=ch.start,
            end=ch.end,
            output_path=os.path.join(output_dir, filename),
        ))
    return jobs


def build_split_cmd(ffmpeg: str, input_file: str, job: ExtractionJob) -> list[str]:
    """Build the ffmpeg command that stream-copies one chapter."""
    # -nostdin keeps concurrent ffmpeg processes from grabbing the terminal
    return [
        ffmpeg,
        "-nostdin",
        "-v", "error",
        "-i", input_file,
        "-ss", job.start,
        "-to", job.end,
        "-c", "copy",
        "-y",
        _safe_path(job.output_path),
    ]


def _safe_path(path: str) -> str:
    # a leading "-" would be read by ffmpeg as an option
    if path.startswith("-"):
        return os.path.join(os.curdir, path)
    return path


def extract_chapter(ffmpeg: str, input_file: str, job: ExtractionJob) -> ExtractionJob:
    """Run ffmpeg once for job. Blocks until the process exits."""
    cmd = build_split_cmd(ffmpeg, input_file, job)
    logger.debug("Running: %s", cmd)
    try:
        subprocess.run(
            cmd, capture_output=True, text=True, encoding="utf-8", errors="replace", check=True
        )
    except subprocess.CalledProcessError as exc:
        raise ExtractionFailure(job.title, exc, stderr=(exc.stderr or "").strip()) from exc
    except OSError as exc:
        raise ExtractionFailure(job.title, exc) from exc
    return job


def run_jobs(
    ffmpeg: str,
    input_file: str,
    jobs: list[ExtractionJob],
    max_workers: int = MAX_CONCURRENCY,
) -> list[ExtractionJob]:
    """Run every job with at most max_workers ffmpeg processes at a time.

    A failing job does not stop the others. Once all jobs have finished,
    the first failure collected is raised; with several concurrent
    failures which one comes first is not defined. There is no timeout,
    so a hung ffmpeg blocks here.
    """
    if not jobs:
        return []

    completed = []
    failures = []
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = {
            pool.submit(extract_chapter, ffmpeg, input_file, job): job
            for job in jobs
        }
        for future in as_completed(futures):
            try:
                job = future.result()
            except ExtractionFailure as exc:
                _record_failure(failures, exc)
                continue
            except Exception as exc:  # pylint: disable=broad-except
                failure = ExtractionFailure(futures[future].title, exc)
                failure.__cause__ = exc
                _record_failure(failures, failure)
                continue
            completed.append(job)
            click.echo("Created: {}".format(job.output_path))

    logger.debug(
        "Jobs: %d, succeeded: %d, failed: %d", len(jobs), len(completed), len(failures)
    )
    if failures:
        raise failures[0]
    return completed


def _record_failure(failures: list[ExtractionFailure], failure: ExtractionFailure) -> None:
    failures.append(failure)
    click.echo(failure.format_message(), err=True)
    if failure.stderr:
        click.echo(failure.stderr, err=True)


def split_audio(
    input_file: str,
    output_dir: str = DEFAULT_OUTPUT_DIR,
    ffmpeg: str | None = None,
    ffprobe: str | None = None,
    dry_run: bool = False,
) -> list[str]:
    """Split input_file into one file per chapter under output_dir.

    Returns the created paths in natural order ("2_x" before "10_x").
    """
    ffmpeg = ensure_ffmpeg(ffmpeg)
    ffprobe = ensure_ffprobe(ffprobe)

    audio_file = read_audio_file(input_file, ffprobe)
    click.echo("Found {} chapters in {}".format(len(audio_file.chapters), input_file))

    if dry_run:
        jobs = _build_jobs(audio_file, output_dir)
        _print_dry_run(ffmpeg, input_file, audio_file, jobs, output_dir)
        return []

    jobs = plan_jobs(audio_file, output_dir)
    completed = run_jobs(ffmpeg, input_file, jobs)
    return natsorted(job.output_path for job in completed)


def _print_dry_run(
    ffmpeg: str,
    input_file: str,
    audio_file: AudioFile,
    jobs: list[ExtractionJob],
    output_dir: str,
) -> None:
    """Print the split plan without executing."""
    click.echo("\n--- Dry Run ---\n")
    click.echo("Input:   {}".format(input_file))
    click.echo("Output:  {}".format(output_dir))

    click.echo("\nChapters ({}):\n".format(len(audio_file.chapters)))
    for line in describe_chapters(audio_file):
        click.echo(line)

    click.echo("\nCommands:\n")
    click.echo(shlex.join(["mkdir", "-p", output_dir]))
    for job in jobs:
        click.echo(shlex.join(build_split_cmd(ffmpeg, input_file, job)))
    click.echo("")


def remove_original(input_file: str) -> bool:
    """Delete the input file. Failure is reported, not raised."""
    try:
        os.remove(input_file)
    except OSError as exc:
        click.echo("Failed to remove original file: {}".format(exc), err=True)
        return False
    click.echo("Original file removed")
    return True
