"""Chart engine exceptions."""

from __future__ import annotations

GENERATION_FAILED_MESSAGE = "Failed to generate chart. Please try again."
IMAGE_FAILED_MESSAGE = "Failed to process image. Please try again."


class ChartError(Exception):
    """Base class for chart engine errors."""


class InvalidGridError(ChartError, ValueError):
    """Grid is malformed: ragged rows, empty where content is required, or a bad color."""


class EditOutOfRangeError(ChartError, IndexError):
    """Single-cell edit addressed a cell outside the chart."""


class ChartGenerationError(ChartError):
    """A pipeline stage failed; no chart was produced."""

    def __init__(self, message: str = GENERATION_FAILED_MESSAGE) -> None:
        super().__init__(message)


class ImageProcessingError(ChartError):
    """The source image could not be decoded or resampled."""

    def __init__(self, message: str = IMAGE_FAILED_MESSAGE) -> None:
        super().__init__(message)


class UploadRejectedError(ChartError, ValueError):
    """Uploaded file is not an image or is too large."""
