"""Tests for chapter title sanitizing and listings."""

import pytest

from audiobook_splitter.metadata import describe_chapters, sanitize_filename
from audiobook_splitter.models import AudioFile, Chapter


def test_sanitize_filename_replaces_underscore_and_slash():
    assert sanitize_filename("chapter_1/intro") == "chapter 1 intro"


def test_sanitize_filename_compounds_replacements():
    assert sanitize_filename("a/b_c") == "a b c"


@pytest.mark.parametrize("char", ["/", "\\", ":", "*", "?", '"', "<", ">", "|", "\r", "\n", "_"])
def test_sanitize_filename_removes_each_forbidden_char(char):
    assert sanitize_filename("x{}y".format(char)) == "x y"


def test_sanitize_filename_trims_edges():
    assert sanitize_filename("  Intro: ") == "Intro"
    assert sanitize_filename("Epilogue\r") == "Epilogue"
    assert sanitize_filename("_Prologue_") == "Prologue"


def test_sanitize_filename_keeps_inner_runs_of_spaces():
    assert sanitize_filename("Part 2: The End") == "Part 2  The End"


def test_sanitize_filename_can_return_empty():
    assert sanitize_filename("") == ""
    assert sanitize_filename("/?_") == ""


@pytest.mark.parametrize("title", ["Intro", "Chapter 1", "Ünïcode Tïtle", "a.b-c (d)", ""])
def test_sanitize_filename_leaves_clean_titles_alone(title):
    assert sanitize_filename(title) == title


@pytest.mark.parametrize("title", ["chapter_1/intro", " a:b ", "x\r\n", "1 | 2 | 3", "__"])
def test_sanitize_filename_is_a_fixed_point(title):
    once = sanitize_filename(title)
    assert sanitize_filename(once) == once


def test_describe_chapters():
    audio = AudioFile(
        chapters=[Chapter("Intro", "0.000000", "10.000000"), Chapter("", "10.000000", "20.000000")],
        format=".mp3",
    )
    lines = describe_chapters(audio)
    assert len(lines) == 2
    assert "Intro" in lines[0]
    assert "0.000000 - 10.000000" in lines[0]
    assert "(untitled)" in lines[1]
