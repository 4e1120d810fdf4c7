"""Program model consumed by :class:`~imagepipe.engine.ImageEngine`.

A program is an ordered list of statements; list order is execution order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Union

from .environment import EnvironmentItem
from .operations import Operation


@dataclass(frozen=True)
class ApplyOperation:
    """Apply ``operation`` to the current image."""

    operation: Operation


@dataclass(frozen=True)
class RegisterEnvironmentItem:
    """Insert or replace ``item`` in the engine environment."""

    item: EnvironmentItem


Statement = Union[ApplyOperation, RegisterEnvironmentItem]
Program = List[Statement]


def program_from_operations(operations: Iterable[Operation]) -> Program:
    """Wrap a plain sequence of operations into a program."""
    return [ApplyOperation(operation) for operation in operations]


__all__ = [
    "ApplyOperation",
    "Program",
    "RegisterEnvironmentItem",
    "Statement",
    "program_from_operations",
]
