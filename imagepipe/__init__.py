"""Apply ordered image-transformation programs to in-memory images."""

from .engine import ImageEngine, apply_operations
from .environment import (
    Environment,
    EnvironmentFlag,
    EnvironmentItem,
    EnvironmentKey,
    EnvironmentOption,
    FilterKind,
    ResizeSamplingFilter,
)
from .errors import (
    CropSelectionError,
    EngineError,
    ImagePipeError,
    ImageProcessingError,
    InvalidSelectionError,
    OperationFailedError,
    OutOfBoundsError,
    ScriptParseError,
)
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
from .processor import ImageProcessor
from .script import parse_script
from .statements import ApplyOperation, Program, RegisterEnvironmentItem, Statement

__all__ = [
    "ApplyOperation",
    "Blur",
    "Brighten",
    "Contrast",
    "Crop",
    "CropSelectionError",
    "EngineError",
    "Environment",
    "EnvironmentFlag",
    "EnvironmentItem",
    "EnvironmentKey",
    "EnvironmentOption",
    "Filter3x3",
    "FilterKind",
    "FlipHorizontal",
    "FlipVertical",
    "GrayScale",
    "HueRotate",
    "ImageEngine",
    "ImagePipeError",
    "ImageProcessingError",
    "ImageProcessor",
    "InvalidSelectionError",
    "Invert",
    "Operation",
    "OperationFailedError",
    "OutOfBoundsError",
    "Program",
    "RegisterEnvironmentItem",
    "Resize",
    "Rotate90",
    "Rotate180",
    "Rotate270",
    "ScriptParseError",
    "Statement",
    "Unsharpen",
    "apply_operations",
    "parse_script",
]
