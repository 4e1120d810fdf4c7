"""Pixel-level image operations backed by Pillow.

One small pure function per operation: each takes the current image plus
the operation parameters and returns a new image.  Colour operations work
on the colour bands and carry an alpha band through untouched.  The engine
picks the function for an operation from :data:`_OPERATION_DISPATCH`.

Supported modes are ``L``, ``LA``, ``RGB`` and ``RGBA``; use
:func:`normalise_mode` on freshly decoded images first.
"""

from __future__ import annotations

import functools
import math
from typing import Any, Callable, Optional, Sequence

from PIL import Image, ImageFilter, ImageOps

from .environment import FilterKind
from .operations import (
    KERNEL_SIZE,
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

SUPPORTED_MODES = frozenset({"L", "LA", "RGB", "RGBA"})

_RESAMPLING = {
    FilterKind.NEAREST: Image.Resampling.NEAREST,
    FilterKind.TRIANGLE: Image.Resampling.BILINEAR,
    FilterKind.CATMULL_ROM: Image.Resampling.BICUBIC,
    FilterKind.GAUSSIAN: Image.Resampling.HAMMING,
    FilterKind.LANCZOS3: Image.Resampling.LANCZOS,
}

# Sigma used when a blur radius is zero, negative or not finite.
_FALLBACK_SIGMA = 1.0

# Pixel differences never exceed 255, so larger thresholds behave alike.
_THRESHOLD_LIMIT = 256


def normalise_mode(image: Image.Image) -> Image.Image:
    """Return ``image`` in one of :data:`SUPPORTED_MODES`."""

    if image.mode in SUPPORTED_MODES:
        return image
    if image.mode in {"1", "I", "F"} or image.mode.startswith("I;"):
        return image.convert("L")
    bands = image.getbands()
    if "A" in bands or "a" in bands or "transparency" in image.info:
        return image.convert("RGBA")
    return image.convert("RGB")


def resampling_for(kind: FilterKind) -> Image.Resampling:
    """Translate a :class:`FilterKind` into Pillow's resampling filter."""
    return _RESAMPLING[kind]


def _clamp(value: float) -> int:
    if isinstance(value, int):
        return min(max(value, 0), 255)
    if math.isnan(value):
        return 0
    return int(round(min(max(value, 0.0), 255.0)))


def _effective_sigma(image: Image.Image, sigma: float) -> float:
    """Bound ``sigma`` to a radius Pillow can handle; wider than the image adds nothing."""
    if not math.isfinite(sigma) or sigma <= 0:
        return _FALLBACK_SIGMA
    return min(sigma, float(max(image.size + (1,))))


def _split_alpha(image: Image.Image) -> tuple[Image.Image, Optional[Image.Image]]:
    if image.mode == "RGBA":
        return image.convert("RGB"), image.getchannel("A")
    if image.mode == "LA":
        return image.convert("L"), image.getchannel("A")
    return image, None


def _colour_bands_only(func: Callable[..., Image.Image]) -> Callable[..., Image.Image]:
    """Apply ``func`` to the colour bands and re-attach the original alpha band."""

    @functools.wraps(func)
    def wrapper(image: Image.Image, *args: Any, **kwargs: Any) -> Image.Image:
        colour, alpha = _split_alpha(image)
        result = func(colour, *args, **kwargs)
        if alpha is not None:
            result.putalpha(alpha)
        return result

    return wrapper


def _apply_lut(image: Image.Image, lut: list[int]) -> Image.Image:
    return image.point(lut * len(image.getbands()))


def blur(image: Image.Image, sigma: float) -> Image.Image:
    """Gaussian blur with standard deviation ``sigma``."""
    return image.filter(ImageFilter.GaussianBlur(_effective_sigma(image, sigma)))


@_colour_bands_only
def brighten(image: Image.Image, amount: int) -> Image.Image:
    """Add ``amount`` to every colour channel; negative values darken."""
    return _apply_lut(image, [_clamp(v + amount) for v in range(256)])


@_colour_bands_only
def contrast(image: Image.Image, amount: float) -> Image.Image:
    """Scale distance from mid-grey; positive ``amount`` increases contrast."""
    factor = (100.0 + amount) / 100.0
    percent = factor * factor
    lut = [_clamp(((v / 255.0 - 0.5) * percent + 0.5) * 255.0) for v in range(256)]
    return _apply_lut(image, lut)


def crop(image: Image.Image, lx: int, ly: int, rx: int, ry: int) -> Image.Image:
    """Crop to the box ``(lx, ly)``-``(rx, ry)``; bounds are checked by the caller."""
    return image.crop((lx, ly, rx, ry))


@_colour_bands_only
def filter3x3(image: Image.Image, kernel: Sequence[float]) -> Image.Image:
    """Convolve with a 3x3 kernel, normalised by the kernel sum."""
    if len(kernel) != KERNEL_SIZE:
        raise ValueError(f"filter3x3 requires {KERNEL_SIZE} kernel values, got {len(kernel)}")
    total = sum(kernel)
    scale = total if total != 0 else 1.0
    return image.filter(ImageFilter.Kernel((3, 3), list(kernel), scale=scale))


def flip_horizontal(image: Image.Image) -> Image.Image:
    return ImageOps.mirror(image)


def flip_vertical(image: Image.Image) -> Image.Image:
    return ImageOps.flip(image)


@_colour_bands_only
def grayscale(image: Image.Image) -> Image.Image:
    return image.convert("L")


@_colour_bands_only
def hue_rotate(image: Image.Image, degrees: int) -> Image.Image:
    """Rotate hue by ``degrees`` with a luminance-preserving colour matrix.

    The angle is not normalised, so results for ``degrees`` and
    ``degrees + 360`` may differ by rounding.  Greyscale input has no hue and
    is returned unchanged.
    """
    if image.mode == "L":
        return image.copy()
    angle = math.radians(degrees)
    cosv = math.cos(angle)
    sinv = math.sin(angle)
    matrix = (
        0.213 + cosv * 0.787 - sinv * 0.213,
        0.715 - cosv * 0.715 - sinv * 0.715,
        0.072 - cosv * 0.072 + sinv * 0.928,
        0.0,
        0.213 - cosv * 0.213 + sinv * 0.143,
        0.715 + cosv * 0.285 + sinv * 0.140,
        0.072 - cosv * 0.072 - sinv * 0.283,
        0.0,
        0.213 - cosv * 0.213 - sinv * 0.787,
        0.715 - cosv * 0.715 + sinv * 0.715,
        0.072 + cosv * 0.928 + sinv * 0.072,
        0.0,
    )
    return image.convert("RGB", matrix)


@_colour_bands_only
def invert(image: Image.Image) -> Image.Image:
    return ImageOps.invert(image)


def resize(
    image: Image.Image,
    width: int,
    height: int,
    sampling_filter: FilterKind = FilterKind.GAUSSIAN,
) -> Image.Image:
    """Resize to exactly ``width`` x ``height``."""
    if width == 0 or height == 0:
        return Image.new(image.mode, (width, height))
    return image.resize((width, height), resampling_for(sampling_filter))


def rotate90(image: Image.Image) -> Image.Image:
    """Rotate 90 degrees clockwise."""
    return image.transpose(Image.Transpose.ROTATE_270)


def rotate180(image: Image.Image) -> Image.Image:
    return image.transpose(Image.Transpose.ROTATE_180)


def rotate270(image: Image.Image) -> Image.Image:
    """Rotate 270 degrees clockwise."""
    return image.transpose(Image.Transpose.ROTATE_90)


@_colour_bands_only
def unsharpen(image: Image.Image, sigma: float, threshold: int) -> Image.Image:
    """Sharpen by adding back the difference to a blurred copy above ``threshold``."""
    threshold = min(max(threshold, -_THRESHOLD_LIMIT), _THRESHOLD_LIMIT)
    mask = ImageFilter.UnsharpMask(
        radius=_effective_sigma(image, sigma), percent=100, threshold=threshold
    )
    return image.filter(mask)


_OPERATION_DISPATCH: dict[type, Callable[..., Image.Image]] = {
    Blur: blur,
    Brighten: brighten,
    Contrast: contrast,
    Crop: crop,
    Filter3x3: filter3x3,
    FlipHorizontal: flip_horizontal,
    FlipVertical: flip_vertical,
    GrayScale: grayscale,
    HueRotate: hue_rotate,
    Invert: invert,
    Resize: resize,
    Rotate90: rotate90,
    Rotate180: rotate180,
    Rotate270: rotate270,
    Unsharpen: unsharpen,
}


def handler_for(operation: Operation) -> Callable[..., Image.Image]:
    """Return the function implementing ``operation``.

    Raises ``KeyError`` for operation types without an implementation.
    """
    return _OPERATION_DISPATCH[type(operation)]


__all__ = [
    "SUPPORTED_MODES",
    "blur",
    "brighten",
    "contrast",
    "crop",
    "filter3x3",
    "flip_horizontal",
    "flip_vertical",
    "grayscale",
    "handler_for",
    "hue_rotate",
    "invert",
    "normalise_mode",
    "resampling_for",
    "resize",
    "rotate90",
    "rotate180",
    "rotate270",
    "unsharpen",
]
