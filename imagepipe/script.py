"""Parser for the textual program format.

A script is a list of statements separated by ``;`` or new lines.  ``#``
starts a comment that runs to the end of the line.  Example::

    set resize sampling_filter nearest
    resize 80 100; blur 5.0
    filter3x3 0 -1 0 -1 5 -1 0 -1 0

Operation statements are an operation name followed by its arguments.
Environment statements have the form ``set <operation> <option> <value>``.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Sequence, Tuple

from .environment import EnvironmentItem, FilterKind, ResizeSamplingFilter
from .errors import ScriptParseError
from .operations import (
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
    Operation,
    Resize,
    Rotate90,
    Rotate180,
    Rotate270,
    Unsharpen,
)
from .statements import ApplyOperation, Program, RegisterEnvironmentItem, Statement

Converter = Callable[[str], object]


def _integer(token: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise ValueError(f"expected an integer, got '{token}'") from None


def _unsigned(token: str) -> int:
    value = _integer(token)
    if value < 0:
        raise ValueError(f"expected a non-negative integer, got '{token}'")
    return value


def _number(token: str) -> float:
    try:
        return float(token)
    except ValueError:
        raise ValueError(f"expected a number, got '{token}'") from None


_OPERATIONS: Dict[str, Tuple[Tuple[Converter, ...], Callable[..., Operation]]] = {
    Blur.name: ((_number,), Blur),
    Brighten.name: ((_integer,), Brighten),
    Contrast.name: ((_number,), Contrast),
    Crop.name: ((_unsigned,) * 4, Crop),
    Filter3x3.name: ((_number,) * 9, lambda *kernel: Filter3x3(kernel)),
    FlipHorizontal.name: ((), FlipHorizontal),
    FlipVertical.name: ((), FlipVertical),
    GrayScale.name: ((), GrayScale),
    HueRotate.name: ((_integer,), HueRotate),
    Invert.name: ((), Invert),
    Resize.name: ((_unsigned, _unsigned), Resize),
    Rotate90.name: ((), Rotate90),
    Rotate180.name: ((), Rotate180),
    Rotate270.name: ((), Rotate270),
    Unsharpen.name: ((_number, _integer), Unsharpen),
}

_ENVIRONMENT_OPTIONS: Dict[Tuple[str, str], Callable[[str], EnvironmentItem]] = {
    ("resize", "sampling_filter"): lambda value: ResizeSamplingFilter(FilterKind.from_name(value)),
}


def _split_statements(text: str) -> List[List[str]]:
    statements: List[List[str]] = []
    for line in text.splitlines():
        line = line.split("#", 1)[0]
        for chunk in line.split(";"):
            tokens = chunk.split()
            if tokens:
                statements.append(tokens)
    return statements


def _parse_environment(args: Sequence[str], index: int) -> Statement:
    if len(args) != 3:
        raise ScriptParseError(
            "'set' expects an operation, an option and a value, "
            f"e.g. 'set resize sampling_filter nearest', got {len(args)} argument(s)",
            index,
        )
    target, option, value = args
    factory = _ENVIRONMENT_OPTIONS.get((target.lower(), option.lower()))
    if factory is None:
        raise ScriptParseError(f"unknown environment option '{target} {option}'", index)
    try:
        return RegisterEnvironmentItem(factory(value))
    except ValueError as exc:
        raise ScriptParseError(str(exc), index) from exc


def _parse_operation(name: str, args: Sequence[str], index: int) -> Statement:
    try:
        converters, factory = _OPERATIONS[name.lower()]
    except KeyError:
        raise ScriptParseError(f"unknown operation '{name}'", index) from None
    if len(args) != len(converters):
        raise ScriptParseError(
            f"'{name}' expects {len(converters)} argument(s), got {len(args)}", index
        )
    try:
        values = [convert(token) for convert, token in zip(converters, args)]
        return ApplyOperation(factory(*values))
    except ValueError as exc:
        raise ScriptParseError(f"'{name}': {exc}", index) from exc


def parse_script(text: str) -> Program:
    """Parse ``text`` into a program, raising :class:`ScriptParseError` on bad input."""

    program: Program = []
    for index, (name, *args) in enumerate(_split_statements(text), start=1):
        if name.lower() == "set":
            program.append(_parse_environment(args, index))
        else:
            program.append(_parse_operation(name, args, index))
    return program


__all__ = ["parse_script"]
