"""Value types passed between pipeline stages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class BoundingRect:
    """Axis-aligned rectangle in pixel units."""

    x: int
    y: int
    width: int
    height: int

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(f"negative rectangle size: {self.width}x{self.height}")

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def top_left(self) -> Tuple[int, int]:
        return self.x, self.y

    @property
    def bottom_right(self) -> Tuple[int, int]:
        return self.x + self.width, self.y + self.height


@dataclass(frozen=True)
class Circle:
    """Circle with integer centre and radius in pixels."""

    x: int
    y: int
    radius: int

    @property
    def center(self) -> Tuple[int, int]:
        return self.x, self.y


@dataclass(frozen=True)
class MeasurementResult:
    """Outcome of one successful pipeline run.

    ``width`` and ``height`` are expressed in ``unit``, the same unit as
    ``reference_radius``.  Pixel values and the scale are kept for auditing.
    """

    foot: BoundingRect
    reference: Circle
    circles: Tuple[Circle, ...]
    reference_radius: float
    scale: float
    width: float
    height: float
    unit: str = "cm"

    def to_dict(self) -> Dict[str, object]:
        return {
            "reference_radius_px": self.reference.radius,
            "reference_radius": self.reference_radius,
            "scale": self.scale,
            "foot_width_px": self.foot.width,
            "foot_height_px": self.foot.height,
            "foot_width": self.width,
            "foot_height": self.height,
            "unit": self.unit,
        }
