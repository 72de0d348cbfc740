"""Reference token detection with the Hough circle transform."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

import cv2
import numpy as np

from .config import DEFAULT_CONFIG, MeasureConfig
from .models import Circle

logger = logging.getLogger(__name__)


def find_circle_candidates(gray: np.ndarray, config: MeasureConfig = DEFAULT_CONFIG) -> List[Circle]:
    """Return every circle the transform reports, in the order reported."""

    circles = cv2.HoughCircles(
        gray,
        cv2.HOUGH_GRADIENT,
        config.hough_dp,
        config.hough_min_dist,
        param1=config.hough_param1,
        param2=config.hough_param2,
        minRadius=config.min_radius,
        maxRadius=config.max_radius,
    )
    if circles is None:
        logger.debug("no circle candidates")
        return []
    rounded = np.around(circles[0]).astype(int)
    found = [Circle(int(x), int(y), int(r)) for x, y, r in rounded]
    logger.debug("found %d circle candidates", len(found))
    return found


def select_largest_circle(circles: Iterable[Circle]) -> Optional[Circle]:
    """Return the circle with the greatest radius; the first one wins ties."""

    best = None
    for circle in circles:
        if best is None or circle.radius > best.radius:
            best = circle
    return best


def detect_reference(gray: np.ndarray, config: MeasureConfig = DEFAULT_CONFIG) -> Optional[Circle]:
    """Return the largest circle in ``gray``, or ``None`` if there is none."""

    return select_largest_circle(find_circle_candidates(gray, config))
