"""Foot region extraction from the skin mask."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

import cv2
import numpy as np

from .config import DEFAULT_CONFIG, MeasureConfig
from .models import BoundingRect

logger = logging.getLogger(__name__)


def edge_map(mask: np.ndarray, config: MeasureConfig = DEFAULT_CONFIG) -> np.ndarray:
    """Return the binary Canny edge map of ``mask``."""

    return cv2.Canny(mask, config.canny_low, config.canny_high)


def find_foot_candidates(mask: np.ndarray, config: MeasureConfig = DEFAULT_CONFIG) -> List[BoundingRect]:
    """Return the bounding rectangle of every simplified contour in ``mask``.

    All contours are retrieved regardless of nesting depth and returned in
    OpenCV's enumeration order so that selection stays deterministic.
    """

    edges = edge_map(mask, config)
    contours, _ = cv2.findContours(edges, cv2.RETR_TREE, cv2.CHAIN_APPROX_SIMPLE)
    rects = []
    for cnt in contours:
        poly = cv2.approxPolyDP(cnt, config.poly_epsilon, True)
        x, y, w, h = cv2.boundingRect(poly)
        rects.append(BoundingRect(int(x), int(y), int(w), int(h)))
    logger.debug("found %d contour candidates", len(rects))
    return rects


def select_largest_rect(rects: Iterable[BoundingRect]) -> Optional[BoundingRect]:
    """Return the rectangle with the greatest area; the first one wins ties."""

    best = None
    for rect in rects:
        if best is None or rect.area > best.area:
            best = rect
    return best


def detect_foot(mask: np.ndarray, config: MeasureConfig = DEFAULT_CONFIG) -> Optional[BoundingRect]:
    """Return the rectangle most likely to enclose the foot, or ``None``."""

    foot = select_largest_rect(find_foot_candidates(mask, config))
    if foot is None:
        logger.debug("no foot contour found")
    else:
        logger.debug("selected foot rect %s", foot)
    return foot
