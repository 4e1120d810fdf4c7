"""Path checks for images read from and written to disk."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Union
from urllib.parse import urlparse

PathLike = Union[str, Path]


def _reject_urls(path_str: str) -> None:
    """Raise if *path_str* carries a URL scheme.

    Single-letter schemes are Windows drive letters and pass.
    """
    scheme = urlparse(path_str).scheme
    if scheme and len(scheme) > 1:
        raise ValueError(f"URLs are not allowed: {path_str}")


def _check_extension(path: Path, allowed_exts: Iterable[str]) -> None:
    if path.suffix.lower() not in {ext.lower() for ext in allowed_exts}:
        raise ValueError(f"Unsupported file extension: {path.suffix or '<none>'}")


def validate_input_path(path: PathLike, allowed_exts: Iterable[str]) -> Path:
    """Return the resolved path of an existing image file with an allowed extension."""
    path_str = str(path)
    _reject_urls(path_str)

    try:
        resolved = Path(path_str).expanduser().resolve(strict=True)
    except FileNotFoundError as exc:
        raise ValueError(f"File does not exist: {path_str}") from exc
    if not resolved.is_file():
        raise ValueError(f"Not a file: {path_str}")

    _check_extension(resolved, allowed_exts)
    return resolved


def validate_output_path(path: PathLike, allowed_exts: Iterable[str]) -> Path:
    """Return the resolved output path; its directory must already exist."""
    path_str = str(path)
    _reject_urls(path_str)

    resolved = Path(path_str).expanduser().resolve()
    if not resolved.parent.is_dir():
        raise ValueError(f"Directory does not exist: {resolved.parent}")

    _check_extension(resolved, allowed_exts)
    return resolved


__all__ = ["validate_input_path", "validate_output_path"]
