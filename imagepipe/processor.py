"""File-level front end: decode an image, run a program on it, encode the result."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from PIL import Image, ImageOps, UnidentifiedImageError

from . import config
from .engine import ImageEngine
from .errors import EngineError, ImageProcessingError
from .statements import Statement
from .validation import validate_input_path, validate_output_path

LOGGER = logging.getLogger(__name__)

PathLike = Union[str, Path]


class ImageProcessor:
    """Runs programs against image files, one :class:`ImageEngine` per image."""

    def __init__(
        self,
        *,
        valid_extensions: Optional[Iterable[str]] = None,
        max_workers: int = config.MAX_BATCH_WORKERS,
    ) -> None:
        if max_workers <= 0:
            raise ValueError("max_workers must be greater than zero")
        self.valid_extensions = set(valid_extensions or config.VALID_EXTENSIONS)
        self.max_workers = max_workers

    def load_image(self, image_path: PathLike) -> Image.Image:
        """Decode ``image_path`` with its EXIF orientation applied.

        Raises:
            ImageProcessingError: If the path is invalid or the file cannot be decoded.
        """
        try:
            safe_path = validate_input_path(image_path, self.valid_extensions)
        except ValueError as exc:
            LOGGER.warning("Invalid input image %s: %s", image_path, exc)
            raise ImageProcessingError(str(exc)) from exc

        try:
            with Image.open(safe_path) as img:
                oriented = ImageOps.exif_transpose(img)
                oriented.load()
                return oriented
        except (UnidentifiedImageError, OSError) as exc:
            LOGGER.error("Error decoding image %s: %s", safe_path, exc)
            raise ImageProcessingError(f"Failed to decode image {safe_path}: {exc}") from exc

    def process_image(
        self,
        image_path: PathLike,
        program: Sequence[Statement],
        output_path: Optional[PathLike] = None,
    ) -> Image.Image:
        """Run ``program`` on the image at ``image_path``.

        When ``output_path`` is given the result is written there.  Engine
        errors propagate unchanged and leave nothing on disk.

        Raises:
            ImageProcessingError: On invalid paths, decode or encode failures.
            EngineError: When a statement of ``program`` fails.
        """
        safe_output: Optional[Path] = None
        if output_path is not None:
            try:
                safe_output = validate_output_path(output_path, self.valid_extensions)
            except ValueError as exc:
                LOGGER.warning("Invalid output path %s: %s", output_path, exc)
                raise ImageProcessingError(str(exc)) from exc

        image = self.load_image(image_path)
        result = ImageEngine(image).ignite(program)

        if safe_output is not None:
            self.save_image(result, safe_output)
        return result

    def save_image(self, image: Image.Image, output_path: PathLike) -> None:
        """Encode ``image`` using format options derived from the file extension."""
        path = Path(output_path)
        fmt = path.suffix[1:].upper()
        if fmt == 'JPG':
            fmt = 'JPEG'
        if fmt == 'TIF':
            fmt = 'TIFF'

        save_params: Dict[str, Any] = {'format': fmt}
        if fmt == 'JPEG':
            if image.mode in ('RGBA', 'LA'):
                image = image.convert(image.mode[:-1])
            save_params.update({
                'quality': config.QUALITY_DEFAULT,
                'optimize': True,
                'progressive': True,
            })
        elif fmt == 'WEBP':
            save_params.update({
                'quality': config.QUALITY_DEFAULT,
                'method': config.WEBP_METHOD,
            })
        elif fmt == 'PNG':
            save_params.update({
                'optimize': True,
                'compress_level': config.PNG_COMPRESS_LEVEL,
            })

        try:
            image.save(str(path), **save_params)
        except (OSError, ValueError, KeyError) as exc:
            LOGGER.error("Error saving image %s: %s", path, exc)
            raise ImageProcessingError(f"Failed to save image {path}: {exc}") from exc

    def process_batch(
        self,
        image_paths: List[PathLike],
        program: Sequence[Statement],
        output_dir: PathLike,
    ) -> Dict[str, bool]:
        """Run ``program`` on every image concurrently.

        Each image gets its own engine; results are written to ``output_dir``
        under the input file name.

        Returns:
            Dict[str, bool]: Input path mapped to success status.
        """
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        results: Dict[str, bool] = {}
        if not image_paths:
            return results

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            futures = [
                (path, pool.submit(self.process_image, path, program, output_dir / Path(path).name))
                for path in image_paths
            ]
            for path, future in futures:
                try:
                    future.result()
                    results[str(path)] = True
                except (EngineError, ImageProcessingError) as exc:
                    LOGGER.error("Failed to process %s: %s", path, exc)
                    results[str(path)] = False
                except Exception as exc:
                    LOGGER.error("Unexpected error processing %s: %s", path, exc, exc_info=True)
                    results[str(path)] = False

        return results


__all__ = ["ImageProcessor"]
