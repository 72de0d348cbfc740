"""Conversion of the reference token's pixel radius into a scale factor."""

import logging
from typing import Optional

from .config import DEFAULT_CONFIG, MeasureConfig
from .errors import CalibrationFailedError, ReferenceNotFoundError
from .models import Circle

logger = logging.getLogger(__name__)


def scale_factor(known_radius: float, pixel_radius: float) -> float:
    """Return physical units per pixel.

    A zero pixel radius is a failed detection, not an infinite scale, so it
    raises :class:`CalibrationFailedError`.
    """
    if pixel_radius <= 0:
        raise CalibrationFailedError(f"reference pixel radius must be positive, got {pixel_radius}")
    if known_radius <= 0:
        raise CalibrationFailedError(f"known reference radius must be positive, got {known_radius}")
    return known_radius / pixel_radius


def calibrate(circle: Optional[Circle], config: MeasureConfig = DEFAULT_CONFIG) -> float:
    """Return the scale factor derived from the detected reference ``circle``."""
    if circle is None:
        raise ReferenceNotFoundError("no circular reference object detected")
    scale = scale_factor(config.reference_radius, circle.radius)
    logger.debug(
        "reference radius %d px = %s %s, scale %.5f %s/px",
        circle.radius,
        config.reference_radius,
        config.unit,
        scale,
        config.unit,
    )
    return scale
