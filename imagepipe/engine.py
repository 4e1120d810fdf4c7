"""Sequential execution of programs against a single image buffer.

:class:`ImageEngine` owns one image and one :class:`Environment`.  A call to
:meth:`ImageEngine.ignite` runs a program statement by statement:

* ``RegisterEnvironmentItem`` statements update the environment and never
  touch the image.
* ``ApplyOperation`` statements are verified (crop bounds), dispatched to
  the Pillow-backed functions in :mod:`imagepipe.capability`, and replace
  the current image with the result.

Execution stops at the first error, which is raised to the caller.  Work
done by earlier statements is kept: :attr:`ImageEngine.image` holds the
image as of the last successful statement.
"""

from __future__ import annotations

import logging
from typing import Iterable, List

from PIL import Image

from . import capability
from .environment import (
    Environment,
    EnvironmentItem,
    EnvironmentKey,
    FilterKind,
    ResizeSamplingFilter,
)
from .errors import CropSelectionError, OperationFailedError
from .operations import Crop, Operation, Resize
from .statements import (
    ApplyOperation,
    RegisterEnvironmentItem,
    Statement,
    program_from_operations,
)
from .verification import verify_crop

LOGGER = logging.getLogger(__name__)


class ImageEngine:
    """Apply programs to an exclusively owned image buffer."""

    def __init__(self, image: Image.Image) -> None:
        normalised = capability.normalise_mode(image)
        if normalised is image:
            normalised = image.copy()
        else:
            LOGGER.debug("Converted input image from mode %s to %s", image.mode, normalised.mode)
        self._image: Image.Image = normalised
        self._environment = Environment()

    @property
    def image(self) -> Image.Image:
        """The current image buffer."""
        return self._image

    @property
    def environment(self) -> Environment:
        return self._environment

    def ignite(self, program: Iterable[Statement]) -> Image.Image:
        """Run ``program`` in order and return the resulting image.

        Raises the first :class:`EngineError` encountered; later statements
        are not processed and earlier effects are not rolled back.
        """
        for index, statement in enumerate(program, start=1):
            LOGGER.debug("statement %d: %r", index, statement)
            self.process_statement(statement)
        return self._image

    def process_statement(self, statement: Statement) -> None:
        if isinstance(statement, ApplyOperation):
            self.process_operation(statement.operation)
        elif isinstance(statement, RegisterEnvironmentItem):
            self.process_register_env(statement.item)
        else:
            raise TypeError(f"Unsupported statement: {statement!r}")

    def process_operation(self, operation: Operation) -> None:
        """Verify and apply ``operation``, replacing the current image."""
        try:
            handler = capability.handler_for(operation)
        except KeyError:
            raise TypeError(f"Unsupported operation: {operation!r}") from None

        params = operation.params()
        if isinstance(operation, Crop):
            try:
                verify_crop(self._image.size, *operation.selection)
            except CropSelectionError as exc:
                LOGGER.info("Rejected crop selection %s: %s", operation.selection, exc)
                raise
        elif isinstance(operation, Resize):
            params["sampling_filter"] = self._resize_sampling_filter()

        try:
            result = handler(self._image, **params)
        except Exception as exc:
            raise OperationFailedError(f"Operation: {operation.name} -- {exc}") from exc
        self._image = result

    def process_register_env(self, item: EnvironmentItem) -> None:
        self._environment.insert_or_update(item)

    def _resize_sampling_filter(self) -> FilterKind:
        """Resolve the resize filter, falling back to the default when unset or malformed."""
        item = self._environment.get(EnvironmentKey.RESIZE_SAMPLING_FILTER)
        if isinstance(item, ResizeSamplingFilter) and isinstance(item.kind, FilterKind):
            kind = item.kind
        else:
            if item is not None:
                LOGGER.warning("Ignoring unexpected resize sampling filter item %r", item)
            kind = FilterKind.default()
        LOGGER.debug("resize filter: %s", kind.value)
        return kind


def apply_operations(image: Image.Image, operations: List[Operation]) -> Image.Image:
    """Apply a sequence of ``operations`` to ``image`` with a fresh engine.

    No environment statements are involved, so ``Resize`` always uses the
    default sampling filter.  Raises the first :class:`EngineError`.
    """
    return ImageEngine(image).ignite(program_from_operations(operations))


__all__ = ["ImageEngine", "apply_operations"]
