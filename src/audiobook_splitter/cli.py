"""Click CLI entry point for the audiobook splitter."""

from __future__ import annotations

import logging

import click

from audiobook_splitter.splitter import DEFAULT_OUTPUT_DIR, remove_original, split_audio


def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity settings."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@click.command()
@click.version_option(package_name="audiobook-splitter")
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "-o", "--output",
    default=DEFAULT_OUTPUT_DIR,
    show_default=True,
    help="Output directory, created if missing",
)
@click.option("--remove", is_flag=True, help="Remove original file after a successful split")
@click.option("--dry-run", is_flag=True, help="Show plan without splitting")
@click.option("--verbose", is_flag=True, help="Show debug output")
@click.option(
    "--ffmpeg",
    default=None,
    envvar="AUDIOBOOK_SPLITTER_FFMPEG",
    help="Path to ffmpeg (default: search PATH)",
)
@click.option(
    "--ffprobe",
    default=None,
    envvar="AUDIOBOOK_SPLITTER_FFPROBE",
    help="Path to ffprobe (default: search PATH)",
)
def cli(
    input_file: str,
    output: str,
    remove: bool,
    dry_run: bool,
    verbose: bool,
    ffmpeg: str | None,
    ffprobe: str | None,
):
    """Split an audio file into one file per embedded chapter.

    INPUT_FILE must carry chapter markers. Chapters are cut with ffmpeg
    stream copy, without re-encoding.
    """
    setup_logging(verbose)

    split_audio(
        input_file=input_file,
        output_dir=output,
        ffmpeg=ffmpeg,
        ffprobe=ffprobe,
        dry_run=dry_run,
    )
    if dry_run:
        return

    click.echo("Audio split completed successfully")

    if remove:
        remove_original(input_file)
