"""Tests for the program script parser."""

from __future__ import annotations

import pytest

from imagepipe.environment import FilterKind, ResizeSamplingFilter
from imagepipe.errors import ScriptParseError
from imagepipe.operations import (
    Blur,
    Brighten,
    Contrast,
    Crop,
    Filter3x3,
    FlipHorizontal,
    FlipVertical,
    GrayScale,
    HueRotate,
    Invert,
    Resize,
    Rotate90,
    Rotate180,
    Rotate270,
    Unsharpen,
)
from imagepipe.script import parse_script
from imagepipe.statements import ApplyOperation, RegisterEnvironmentItem


def test_parse_every_operation():
    program = parse_script(
        "blur 1.5; brighten -10; contrast 2.5; crop 0 0 10 20; "
        "filter3x3 0 -1 0 -1 5 -1 0 -1 0; fliph; flipv; grayscale; huerotate -400; "
        "invert; resize 80 100; rotate90; rotate180; rotate270; unsharpen 1.0 3"
    )
    assert [stmt.operation for stmt in program] == [
        Blur(1.5),
        Brighten(-10),
        Contrast(2.5),
        Crop(0, 0, 10, 20),
        Filter3x3((0, -1, 0, -1, 5, -1, 0, -1, 0)),
        FlipHorizontal(),
        FlipVertical(),
        GrayScale(),
        HueRotate(-400),
        Invert(),
        Resize(80, 100),
        Rotate90(),
        Rotate180(),
        Rotate270(),
        Unsharpen(1.0, 3),
    ]


def test_environment_statements_keep_program_order():
    program = parse_script(
        """
        # pick a filter, then resize
        set resize sampling_filter triangle
        set resize sampling_filter Nearest; resize 10 10
        """
    )
    assert program == [
        RegisterEnvironmentItem(ResizeSamplingFilter(FilterKind.TRIANGLE)),
        RegisterEnvironmentItem(ResizeSamplingFilter(FilterKind.NEAREST)),
        ApplyOperation(Resize(10, 10)),
    ]


def test_blank_script_is_an_empty_program():
    assert parse_script("") == []
    assert parse_script(" ;; \n # only a comment\n") == []


def test_names_are_case_insensitive():
    assert parse_script("FlipH; ROTATE90") == [ApplyOperation(FlipHorizontal()), ApplyOperation(Rotate90())]


@pytest.mark.parametrize(
    "script, message",
    [
        ("sepia 3", "unknown operation 'sepia'"),
        ("blur", "'blur' expects 1 argument"),
        ("rotate90 1", "'rotate90' expects 0 argument"),
        ("brighten 1.5", "expected an integer"),
        ("blur fast", "expected a number"),
        ("crop 0 0 -1 2", "expected a non-negative integer"),
        ("filter3x3 1 2 3 4 5 6 7 8", "'filter3x3' expects 9 argument"),
        ("set resize sampling_filter bicubic", "Unknown sampling filter"),
        ("set resize quality high", "unknown environment option 'resize quality'"),
        ("set resize", "'set' expects an operation, an option and a value"),
    ],
)
def test_parse_errors(script, message):
    with pytest.raises(ScriptParseError, match=message):
        parse_script(script)


def test_parse_error_names_statement_index():
    with pytest.raises(ScriptParseError, match="statement 3:") as info:
        parse_script("invert; grayscale\nblur x")
    assert info.value.index == 3
