"""Smoothing and the two filtered views used by the detectors.

Skin tends to sit in a saturation band that typical floors and backgrounds do
not reach, so the foot is segmented from the HSV saturation channel alone.
The reference token is found on a plain grayscale view instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import cv2
import numpy as np

from .config import DEFAULT_CONFIG, MeasureConfig
from .errors import InvalidImageError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Preprocessed:
    """Views derived from one input frame."""

    smoothed: np.ndarray
    mask: np.ndarray
    gray: np.ndarray


def validate_image(image) -> None:
    """Raise :class:`InvalidImageError` unless ``image`` is a BGR ``uint8`` array."""

    if image is None:
        raise InvalidImageError("image is required")
    if not isinstance(image, np.ndarray):
        raise InvalidImageError(f"expected numpy.ndarray, got {type(image).__name__}")
    if image.size == 0 or image.ndim < 2 or 0 in image.shape[:2]:
        raise InvalidImageError(f"image is empty: shape {image.shape}")
    if image.ndim != 3 or image.shape[2] != 3:
        raise InvalidImageError(f"expected a 3-channel colour image, got shape {image.shape}")
    if image.dtype != np.uint8:
        raise InvalidImageError(f"expected uint8 pixels, got {image.dtype}")


def _blur(image: np.ndarray, config: MeasureConfig) -> np.ndarray:
    k = config.blur_kernel
    return cv2.GaussianBlur(image, (k, k), 0, 0)


def smooth(image: np.ndarray, config: MeasureConfig = DEFAULT_CONFIG) -> np.ndarray:
    """Return a low-pass filtered copy of ``image`` to suppress sensor noise."""

    return _blur(image, config)


def skin_mask(smoothed: np.ndarray, config: MeasureConfig = DEFAULT_CONFIG) -> np.ndarray:
    """Return the saturation channel with values up to ``saturation_floor`` zeroed."""

    hsv = cv2.cvtColor(smoothed, cv2.COLOR_BGR2HSV)
    saturation = np.ascontiguousarray(hsv[:, :, 1])
    _, mask = cv2.threshold(saturation, config.saturation_floor, 255, cv2.THRESH_TOZERO)
    return mask


def grayscale(smoothed: np.ndarray, config: MeasureConfig = DEFAULT_CONFIG) -> np.ndarray:
    """Return a blurred luminance view for the circle transform."""

    gray = cv2.cvtColor(smoothed, cv2.COLOR_BGR2GRAY)
    return _blur(gray, config)


def preprocess(
    image: np.ndarray,
    config: MeasureConfig = DEFAULT_CONFIG,
    mask_source: Optional[np.ndarray] = None,
) -> Preprocessed:
    """Smooth ``image`` and derive the skin mask and grayscale views.

    Parameters
    ----------
    image:
        Input frame in BGR colour space.  It is never modified.
    config:
        Pipeline parameters.
    mask_source:
        Optional copy of the same frame with the background removed.  When
        given, the skin mask is computed from it while the grayscale view is
        still derived from ``image``.
    """

    validate_image(image)
    smoothed = smooth(image, config)
    if mask_source is None:
        mask = skin_mask(smoothed, config)
    else:
        validate_image(mask_source)
        if mask_source.shape != image.shape:
            raise InvalidImageError(
                f"mask source shape {mask_source.shape} does not match image shape {image.shape}"
            )
        mask = skin_mask(smooth(mask_source, config), config)
    gray = grayscale(smoothed, config)
    logger.debug(
        "preprocessed %dx%d image, %d mask pixels above floor",
        image.shape[1],
        image.shape[0],
        int(np.count_nonzero(mask)),
    )
    return Preprocessed(smoothed=smoothed, mask=mask, gray=gray)
