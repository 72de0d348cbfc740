"""Optional background removal applied before skin segmentation.

The reference token is usually removed together with the background, so the
result is only used to derive the skin mask; circle detection keeps working on
the original frame.
"""

import cv2
import numpy as np

try:  # pragma: no cover - optional dependency
    from rembg import remove
except ImportError:  # pragma: no cover
    remove = None


def remove_background(image: np.ndarray) -> np.ndarray:
    """Return ``image`` with its background replaced by black.

    Raises ``ImportError`` if ``rembg`` is not available.
    """
    if remove is None:
        raise ImportError("rembg is required for background removal")
    rgba = np.array(remove(cv2.cvtColor(image, cv2.COLOR_BGR2RGB)))
    alpha = rgba[:, :, 3:4].astype(np.float32) / 255.0
    rgb = (rgba[:, :, :3].astype(np.float32) * alpha).round().astype(np.uint8)
    return cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR)
