"""Tuning parameters for the detection pipeline.

All thresholds were determined empirically on photos of a foot sole next to a
Canadian two-dollar coin.  They are grouped in :class:`MeasureConfig` so tests
and callers can probe them without touching the algorithms.
"""

from __future__ import annotations

import dataclasses
import json
import math
from dataclasses import dataclass
from typing import Any, Dict

# Radius of a Canadian two-dollar coin in centimetres.
TOONIE_RADIUS_CM = 1.325

_INT_FIELDS = ("blur_kernel", "saturation_floor", "min_radius", "max_radius")
_FLOAT_FIELDS = (
    "canny_low",
    "canny_high",
    "poly_epsilon",
    "hough_dp",
    "hough_min_dist",
    "hough_param1",
    "hough_param2",
    "reference_radius",
)


def _as_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"{name} must be an integer, got {value!r}")
    return int(value)


def _as_float(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite, got {value!r}")
    return float(value)


@dataclass(frozen=True)
class MeasureConfig:
    """Parameters for every stage of the pipeline.

    Attributes
    ----------
    blur_kernel:
        Side of the square Gaussian kernel applied before thresholding and
        again on the grayscale view.  Must be odd.
    saturation_floor:
        Saturation values at or below this are zeroed in the skin mask
        (0-255 scale).
    canny_low, canny_high:
        Hysteresis thresholds for edge detection on the skin mask.
    poly_epsilon:
        Maximum deviation in pixels allowed when simplifying contours.
    hough_dp:
        Inverse ratio of accumulator resolution to image resolution.
    hough_min_dist:
        Minimum distance between centres of distinct circles.
    hough_param1, hough_param2:
        Upper Canny threshold and accumulator threshold of the circle
        transform.
    min_radius, max_radius:
        Radius search band in pixels.  The band must exclude round features
        on the foot itself, so it depends on the expected image scale.
    reference_radius:
        Known physical radius of the reference token.
    unit:
        Label of the physical unit ``reference_radius`` is expressed in.
    """

    blur_kernel: int = 3
    saturation_floor: int = 45
    canny_low: float = 150.0
    canny_high: float = 225.0
    poly_epsilon: float = 3.0
    hough_dp: float = 1.5
    hough_min_dist: float = 50.0
    hough_param1: float = 150.0
    hough_param2: float = 40.0
    min_radius: int = 0
    max_radius: int = 30
    reference_radius: float = TOONIE_RADIUS_CM
    unit: str = "cm"

    def __post_init__(self):
        # OpenCV rejects floats for kernel sizes and radii, and JSON cannot
        # tell 30 from 30.0, so integral floats are narrowed here.
        for name in _INT_FIELDS:
            object.__setattr__(self, name, _as_int(name, getattr(self, name)))
        for name in _FLOAT_FIELDS:
            object.__setattr__(self, name, _as_float(name, getattr(self, name)))
        if not isinstance(self.unit, str):
            raise ValueError(f"unit must be a string, got {self.unit!r}")
        self.validate()

    def validate(self) -> None:
        """Raise ``ValueError`` if any parameter is out of range."""

        if self.blur_kernel < 1 or self.blur_kernel % 2 == 0:
            raise ValueError(f"blur_kernel must be a positive odd integer, got {self.blur_kernel}")
        if not 0 <= self.saturation_floor <= 255:
            raise ValueError(f"saturation_floor must be within 0-255, got {self.saturation_floor}")
        if self.canny_low < 0 or self.canny_high < 0:
            raise ValueError("Canny thresholds must be non-negative")
        if self.poly_epsilon < 0:
            raise ValueError(f"poly_epsilon must be non-negative, got {self.poly_epsilon}")
        if self.hough_dp <= 0 or self.hough_min_dist <= 0:
            raise ValueError("hough_dp and hough_min_dist must be positive")
        if self.hough_param1 <= 0 or self.hough_param2 <= 0:
            raise ValueError("hough_param1 and hough_param2 must be positive")
        if self.min_radius < 0:
            raise ValueError(f"min_radius must be non-negative, got {self.min_radius}")
        # OpenCV treats max_radius == 0 as "no upper bound"
        if self.max_radius != 0 and self.max_radius < self.min_radius:
            raise ValueError(
                f"max_radius ({self.max_radius}) must not be below min_radius ({self.min_radius})"
            )
        if self.reference_radius <= 0:
            raise ValueError(f"reference_radius must be positive, got {self.reference_radius}")

    def replace(self, **overrides: Any) -> "MeasureConfig":
        """Return a copy with ``overrides`` applied, skipping ``None`` values."""

        changes = {k: v for k, v in overrides.items() if v is not None}
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MeasureConfig":
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")
        return cls(**data)

    @classmethod
    def from_file(cls, path: str) -> "MeasureConfig":
        """Load a configuration from a JSON file."""

        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{path} must contain a JSON object")
        return cls.from_dict(data)


DEFAULT_CONFIG = MeasureConfig()
