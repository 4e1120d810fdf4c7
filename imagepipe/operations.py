"""Immutable descriptions of the image transformations a program can apply.

Every operation is a frozen dataclass.  Constructing one never touches an
image; the effect only depends on the buffer and environment an engine
applies it against.  Constructor-side preconditions (kernel length, unsigned
coordinates) are enforced here so the pixel layer never receives them.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, ClassVar, Dict, Sequence, Tuple

KERNEL_SIZE = 9


def _require_unsigned(owner: str, **values: int) -> None:
    for name, value in values.items():
        if value < 0:
            raise ValueError(f"{owner}: {name} must be a non-negative integer, got {value}")


class Operation:
    """Base class for all operations."""

    name: ClassVar[str] = ""

    def params(self) -> Dict[str, Any]:
        """Return the operation parameters keyed by field name."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class Blur(Operation):
    name: ClassVar[str] = "blur"

    sigma: float


@dataclass(frozen=True)
class Brighten(Operation):
    name: ClassVar[str] = "brighten"

    amount: int


@dataclass(frozen=True)
class Contrast(Operation):
    name: ClassVar[str] = "contrast"

    amount: float


@dataclass(frozen=True)
class Crop(Operation):
    """Select the box between the top-left and bottom-right anchors."""

    name: ClassVar[str] = "crop"

    lx: int
    ly: int
    rx: int
    ry: int

    def __post_init__(self) -> None:
        _require_unsigned("crop", lx=self.lx, ly=self.ly, rx=self.rx, ry=self.ry)

    @property
    def selection(self) -> Tuple[int, int, int, int]:
        return self.lx, self.ly, self.rx, self.ry


@dataclass(frozen=True)
class Filter3x3(Operation):
    """Convolve with a row-major 3x3 kernel."""

    name: ClassVar[str] = "filter3x3"

    kernel: Tuple[float, ...]

    def __post_init__(self) -> None:
        kernel: Sequence[float] = self.kernel
        if len(kernel) != KERNEL_SIZE:
            raise ValueError(
                f"filter3x3: kernel requires exactly {KERNEL_SIZE} values, got {len(kernel)}"
            )
        object.__setattr__(self, "kernel", tuple(float(value) for value in kernel))


@dataclass(frozen=True)
class FlipHorizontal(Operation):
    name: ClassVar[str] = "fliph"


@dataclass(frozen=True)
class FlipVertical(Operation):
    name: ClassVar[str] = "flipv"


@dataclass(frozen=True)
class GrayScale(Operation):
    name: ClassVar[str] = "grayscale"


@dataclass(frozen=True)
class HueRotate(Operation):
    """Rotate hue by ``degrees``; any integer is accepted and passed through as is."""

    name: ClassVar[str] = "huerotate"

    degrees: int


@dataclass(frozen=True)
class Invert(Operation):
    name: ClassVar[str] = "invert"


@dataclass(frozen=True)
class Resize(Operation):
    """Resize to exactly ``width`` x ``height``, ignoring the aspect ratio."""

    name: ClassVar[str] = "resize"

    width: int
    height: int

    def __post_init__(self) -> None:
        _require_unsigned("resize", width=self.width, height=self.height)


@dataclass(frozen=True)
class Rotate90(Operation):
    name: ClassVar[str] = "rotate90"


@dataclass(frozen=True)
class Rotate180(Operation):
    name: ClassVar[str] = "rotate180"


@dataclass(frozen=True)
class Rotate270(Operation):
    name: ClassVar[str] = "rotate270"


@dataclass(frozen=True)
class Unsharpen(Operation):
    name: ClassVar[str] = "unsharpen"

    sigma: float
    threshold: int


OPERATION_TYPES: Tuple[type, ...] = (
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

__all__ = [
    "Operation",
    "Blur",
    "Brighten",
    "Contrast",
    "Crop",
    "Filter3x3",
    "FlipHorizontal",
    "FlipVertical",
    "GrayScale",
    "HueRotate",
    "Invert",
    "Resize",
    "Rotate90",
    "Rotate180",
    "Rotate270",
    "Unsharpen",
    "OPERATION_TYPES",
    "KERNEL_SIZE",
]
