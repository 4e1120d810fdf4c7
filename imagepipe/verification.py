"""Geometric precondition checks run before an operation touches the image."""

from __future__ import annotations

from .errors import InvalidSelectionError, OutOfBoundsError


def verify_crop_selection(lx: int, ly: int, rx: int, ry: int) -> None:
    """Ensure the selection box has a positive width and height.

    Reversed or degenerate boxes are rejected rather than clamped.
    """
    if rx <= lx or ry <= ly:
        raise InvalidSelectionError(
            "Operation: crop -- Top selection coordinates are not smaller than bottom "
            "selection coordinates. Required top selection < bottom selection but given "
            f"coordinates are: [top anchor: (x={lx}, y={ly}), bottom anchor: (x={rx}, y={ry})].",
            (lx, ly, rx, ry),
        )


def verify_crop_within_bounds(
    dimensions: tuple[int, int], lx: int, ly: int, rx: int, ry: int
) -> None:
    """Ensure every anchor lies within ``dimensions`` (inclusive of the far edge)."""
    width, height = dimensions
    if not (lx <= width and ly <= height and rx <= width and ry <= height):
        raise OutOfBoundsError(
            "Operation: crop -- Top or bottom selection coordinates out of bounds: selection "
            f"is [top anchor: (x={lx}, y={ly}), bottom anchor: (x={rx}, y={ry})] but max "
            f"selection range is: (x={width}, y={height}).",
            (lx, ly, rx, ry),
            (width, height),
        )


def verify_crop(dimensions: tuple[int, int], lx: int, ly: int, rx: int, ry: int) -> None:
    """Run the ordering check, then the bounds check."""
    verify_crop_selection(lx, ly, rx, ry)
    verify_crop_within_bounds(dimensions, lx, ly, rx, ry)


__all__ = ["verify_crop", "verify_crop_selection", "verify_crop_within_bounds"]
