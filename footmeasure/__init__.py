"""Foot length and width estimation from a photo with a circular reference token."""

from .config import MeasureConfig, DEFAULT_CONFIG
from .errors import (
    FootMeasureError,
    InvalidImageError,
    ReferenceNotFoundError,
    FootNotFoundError,
    CalibrationFailedError,
)
from .models import BoundingRect, Circle, MeasurementResult
from .io import load_image
from .preprocess import preprocess
from .contour import detect_foot
from .circles import detect_reference
from .calibration import calibrate, scale_factor
from .measure import physical_size
from .pipeline import measure_foot, measure_views
from .viz import draw_measurements_on_image

__all__ = [
    "MeasureConfig",
    "DEFAULT_CONFIG",
    "FootMeasureError",
    "InvalidImageError",
    "ReferenceNotFoundError",
    "FootNotFoundError",
    "CalibrationFailedError",
    "BoundingRect",
    "Circle",
    "MeasurementResult",
    "load_image",
    "preprocess",
    "detect_foot",
    "detect_reference",
    "calibrate",
    "scale_factor",
    "physical_size",
    "measure_foot",
    "measure_views",
    "draw_measurements_on_image",
]
