"""Errors raised while splitting an audio file.

All of them derive from click.ClickException, so the CLI prints the message
and exits non-zero without any extra handling.
"""

from __future__ import annotations

import click


class SplitterError(click.ClickException):
    """Base class for every audiobook-splitter error."""


class ExecutableNotFound(SplitterError):
    """ffmpeg or ffprobe could not be located."""


class InspectionFailure(SplitterError):
    """ffprobe failed to produce a chapter report."""

    def __init__(self, input_file: str, cause: BaseException):
        self.input_file = input_file
        self.cause = cause
        super().__init__(
            "Failed to read chapters from {}: {}".format(input_file, cause)
        )


class PlanningFailure(SplitterError):
    """The output directory could not be created."""

    def __init__(self, output_dir: str, cause: BaseException):
        self.output_dir = output_dir
        self.cause = cause
        super().__init__(
            "Failed to create output directory {}: {}".format(output_dir, cause)
        )


class ExtractionFailure(SplitterError):
    """ffmpeg failed to extract a single chapter."""

    def __init__(self, title: str, cause: BaseException, stderr: str = ""):
        self.title = title
        self.cause = cause
        self.stderr = stderr
        super().__init__("Failed to split chapter {}: {}".format(title, cause))
