"""Image I/O utilities with optional HEIC support."""

import logging
import os

import cv2
import numpy as np
from PIL import Image

try:  # pragma: no cover - optional dependency
    import pillow_heif
except ImportError:  # pragma: no cover
    pillow_heif = None

logger = logging.getLogger(__name__)


def load_image(path: str) -> np.ndarray:
    """Load a BGR image from ``path``.

    Supports regular formats via OpenCV and HEIC images via ``pillow_heif``.
    Raises ``FileNotFoundError`` when the file cannot be read.
    """
    ext = os.path.splitext(path)[-1].lower()
    if ext in (".heic", ".heif"):
        if pillow_heif is None:
            raise ImportError("pillow_heif is required to load HEIC images")
        heif_file = pillow_heif.read_heif(path)
        img = Image.frombytes(heif_file.mode, heif_file.size, heif_file.data, "raw")
        return cv2.cvtColor(np.array(img.convert("RGB")), cv2.COLOR_RGB2BGR)
    img = cv2.imread(path, cv2.IMREAD_COLOR)
    if img is None:
        raise FileNotFoundError(f"Failed to read image: {path}")
    logger.debug("loaded %s with shape %s", path, img.shape)
    return img


def save_image(path: str, image: np.ndarray) -> None:
    """Write ``image`` to ``path``, creating parent directories."""
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    if not cv2.imwrite(path, image):
        raise OSError(f"Failed to write image: {path}")
    logger.debug("wrote %s", path)
