from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image, ImageDraw

BLACK = (0, 0, 0, 255)
WHITE = (255, 255, 255, 255)


def make_textured_image(size=(217, 447)) -> Image.Image:
    """RGB image with gradients and vertical stripes so every filter has an effect."""
    width, height = size
    red = Image.linear_gradient("L").resize(size)
    green = Image.radial_gradient("L").resize(size)
    blue = Image.new("L", size, 40)
    draw = ImageDraw.Draw(blue)
    for x in range(0, width, 8):
        draw.rectangle((x, 0, x + 3, height), fill=220)
    return Image.merge("RGB", (red, green, blue))


def make_checker_image() -> Image.Image:
    """2x2 RGBA image: black top-left and bottom-right, white elsewhere."""
    img = Image.new("RGBA", (2, 2), WHITE)
    img.putpixel((0, 0), BLACK)
    img.putpixel((1, 1), BLACK)
    return img


def save_temp_image(tmp_path: Path, name: str = "img.png", size=(10, 10), color="red") -> Path:
    path = tmp_path / name
    Image.new("RGB", size, color=color).save(path)
    return path


@pytest.fixture
def textured_image() -> Image.Image:
    return make_textured_image()


@pytest.fixture
def checker_image() -> Image.Image:
    return make_checker_image()
