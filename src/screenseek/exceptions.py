"""Exceptions raised by images, finders and observers.

Argument and bounds errors signal programmer mistakes and are raised
eagerly. A wait that runs out of time is not an error; it returns None.
"""

from typing import Any


class ScreenSeekException(Exception):
    """Base exception for all screenseek errors.

    Each subclass declares its ``error_code``; keyword arguments given on
    construction are kept in ``context`` for programmatic inspection.

    Attributes:
        message: Human-readable error message
        error_code: Stable code identifying the kind of error
        context: Details of the failed call
    """

    error_code: str | None = None

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message


class InvalidArgumentError(ScreenSeekException):
    """Raised when an argument is malformed (negative size, empty collection, ...)."""

    error_code = "INVALID_ARGUMENT"

    def __init__(self, reason: str, **kwargs: Any) -> None:
        super().__init__(reason, reason=reason, **kwargs)


class OutOfBoundsError(ScreenSeekException):
    """Raised when a coordinate or region lies outside an image."""

    error_code = "OUT_OF_BOUNDS"

    def __init__(self, what: str, width: int, height: int, **kwargs: Any) -> None:
        super().__init__(
            f"{what} is outside of image bounds {width}x{height}",
            access=what,
            width=width,
            height=height,
            **kwargs,
        )


class ConsistencyViolationError(ScreenSeekException):
    """Raised when cross-validated finder implementations disagree.

    ``context["results"]`` maps each finder name to the repr of its answer.
    """

    error_code = "CONSISTENCY_VIOLATION"

    def __init__(
        self,
        operation: str,
        results: dict[str, Any],
        export_file: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            f"The results of the {operation}() method from the ImagePositionFinders differ",
            operation=operation,
            results=results,
            export_file=export_file,
            **kwargs,
        )


class ImageProcessingError(ScreenSeekException):
    """Raised when an image processing library fails on valid input."""

    error_code = "IMAGE_PROCESSING_FAILED"

    def __init__(self, reason: str, **kwargs: Any) -> None:
        super().__init__(f"Image processing failed: {reason}", reason=reason, **kwargs)


class ImageExportError(ScreenSeekException):
    """Raised when an image cannot be written to disk."""

    error_code = "IMAGE_EXPORT_FAILED"

    def __init__(self, reason: str, image_path: str | None = None, **kwargs: Any) -> None:
        message = "Image export failed"
        if image_path:
            message += f" for '{image_path}'"
        super().__init__(f"{message}: {reason}", reason=reason, image_path=image_path, **kwargs)


__all__ = [
    "ScreenSeekException",
    "InvalidArgumentError",
    "OutOfBoundsError",
    "ConsistencyViolationError",
    "ImageProcessingError",
    "ImageExportError",
]
