"""End-to-end foot measurement.

The foot and reference detectors only read the preprocessed views, so they
can run on separate workers; calibration and measurement wait for both.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Tuple

import numpy as np

from .calibration import calibrate
from .circles import find_circle_candidates, select_largest_circle
from .config import DEFAULT_CONFIG, MeasureConfig
from .contour import detect_foot
from .measure import physical_size
from .models import BoundingRect, Circle, MeasurementResult
from .preprocess import Preprocessed, preprocess

logger = logging.getLogger(__name__)


def run_detectors(
    views: Preprocessed,
    config: MeasureConfig = DEFAULT_CONFIG,
    parallel: bool = False,
) -> Tuple[Optional[BoundingRect], List[Circle]]:
    """Return the foot rectangle and all reference circle candidates."""

    if not parallel:
        return detect_foot(views.mask, config), find_circle_candidates(views.gray, config)

    with ThreadPoolExecutor(max_workers=2) as executor:
        foot_future = executor.submit(detect_foot, views.mask, config)
        circles_future = executor.submit(find_circle_candidates, views.gray, config)
        foot = foot_future.result()
        circles = circles_future.result()
    return foot, circles


def measure_foot(
    image: np.ndarray,
    config: Optional[MeasureConfig] = None,
    mask_source: Optional[np.ndarray] = None,
    parallel: bool = False,
) -> MeasurementResult:
    """Measure the foot in ``image`` using the circular reference token.

    Raises
    ------
    InvalidImageError
        If ``image`` (or ``mask_source``) is empty or not a colour image.
    ReferenceNotFoundError
        If no circle lies within the configured radius band.
    FootNotFoundError
        If the skin mask yields no contour, or only a degenerate one.
    CalibrationFailedError
        If the detected reference has a zero radius.
    """

    config = config or DEFAULT_CONFIG
    views = preprocess(image, config, mask_source=mask_source)
    return measure_views(views, config, parallel=parallel)


def measure_views(
    views: Preprocessed,
    config: Optional[MeasureConfig] = None,
    parallel: bool = False,
) -> MeasurementResult:
    """Run detection, calibration and measurement on already preprocessed views."""

    config = config or DEFAULT_CONFIG
    foot, circles = run_detectors(views, config, parallel=parallel)

    reference = select_largest_circle(circles)
    scale = calibrate(reference, config)
    width, height = physical_size(foot, scale)
    logger.info(
        "foot %dx%d px -> %.2f x %.2f %s (scale %.5f %s/px)",
        foot.width,
        foot.height,
        width,
        height,
        config.unit,
        scale,
        config.unit,
    )
    return MeasurementResult(
        foot=foot,
        reference=reference,
        circles=tuple(circles),
        reference_radius=config.reference_radius,
        scale=scale,
        width=width,
        height=height,
        unit=config.unit,
    )
