"""Exception hierarchy shared by the engine, the script parser and the processor."""


class ImagePipeError(Exception):
    """Base error for imagepipe"""


class EngineError(ImagePipeError):
    """A statement could not be applied to the current image"""


class CropSelectionError(EngineError):
    """Crop selection rejected before touching the image"""

    def __init__(self, message: str, selection: tuple[int, int, int, int]) -> None:
        super().__init__(message)
        self.selection = selection


class InvalidSelectionError(CropSelectionError):
    """Top-left anchor is not strictly above and left of the bottom-right anchor"""


class OutOfBoundsError(CropSelectionError):
    """Selection reaches past the image dimensions"""

    def __init__(
        self,
        message: str,
        selection: tuple[int, int, int, int],
        dimensions: tuple[int, int],
    ) -> None:
        super().__init__(message, selection)
        self.dimensions = dimensions


class OperationFailedError(EngineError):
    """The pixel layer raised while applying an operation"""


class ScriptParseError(ImagePipeError):
    """Program script text could not be turned into statements"""

    def __init__(self, message: str, index: int | None = None) -> None:
        if index is not None:
            message = f"statement {index}: {message}"
        super().__init__(message)
        self.index = index


class ImageProcessingError(ImagePipeError):
    """Loading, validating or saving an image file failed"""
