"""Exceptions raised by the foot measurement pipeline.

Every failure carries a short ``kind`` tag so callers (the CLI in particular)
can report it without matching on class names.
"""


class FootMeasureError(RuntimeError):
    """Base class for failures that end a measurement run."""

    kind = "error"


class InvalidImageError(FootMeasureError, ValueError):
    """Raised when the input is empty or not a 3-channel colour image."""

    kind = "invalid_image"


class ReferenceNotFoundError(FootMeasureError):
    """Raised when no circular reference token can be found."""

    kind = "reference_not_found"


class FootNotFoundError(FootMeasureError):
    """Raised when no foot contour can be found."""

    kind = "foot_not_found"


class CalibrationFailedError(FootMeasureError):
    """Raised when a usable scale factor cannot be computed."""

    kind = "calibration_failed"
