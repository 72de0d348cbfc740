"""Conversion of the foot rectangle into physical dimensions."""

import math
from typing import Optional, Tuple

from .errors import CalibrationFailedError, FootNotFoundError
from .models import BoundingRect


def physical_size(rect: Optional[BoundingRect], scale: float) -> Tuple[float, float]:
    """Return ``(width, height)`` of ``rect`` in physical units."""

    if rect is None:
        raise FootNotFoundError("no foot contour detected")
    if rect.area == 0:
        raise FootNotFoundError(f"foot contour has zero area: {rect.width}x{rect.height} px")
    if not math.isfinite(scale) or scale <= 0:
        raise CalibrationFailedError(f"scale factor must be a positive finite number, got {scale}")
    return rect.width * scale, rect.height * scale
