"""Visualization helpers for annotation of measurements."""

import os
from typing import Optional

import cv2
import numpy as np
from PIL import Image, ImageDraw, ImageFont

from .models import MeasurementResult

OUTLINE_COLOR = (0, 128, 0)


def _load_font(font_path, font_size):
    """Return a Pillow font object and the size it was loaded at."""
    candidates = []
    if font_path:
        candidates.append(font_path)
    else:
        env_font = os.getenv("FOOTMEASURE_FONT_PATH")
        if env_font:
            candidates.append(env_font)
        candidates.extend([
            "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
            "/System/Library/Fonts/Helvetica.ttc",
            "C:/Windows/Fonts/arial.ttf",
        ])
    for path in candidates:
        if path and os.path.exists(path):
            try:
                return ImageFont.truetype(path, size=font_size), font_size
            except OSError:
                continue
    return ImageFont.load_default(), 10


def caption(image: np.ndarray, text: str, color=(255, 255, 255)) -> np.ndarray:
    """Return a copy of ``image`` with ``text`` written near the top left."""
    out = image.copy()
    origin = (10, max(out.shape[0] // 10, 15))
    cv2.putText(out, text, origin, cv2.FONT_HERSHEY_COMPLEX_SMALL, 1, color, 2)
    return out


def draw_detections(image: np.ndarray, result: MeasurementResult) -> np.ndarray:
    """Outline the foot rectangle and every candidate circle on a copy of ``image``."""
    out = image.copy()
    for circle in result.circles:
        cv2.circle(out, circle.center, circle.radius, OUTLINE_COLOR, 2, cv2.LINE_AA)
    cv2.rectangle(out, result.foot.top_left, result.foot.bottom_right, OUTLINE_COLOR, 2)
    return out


def draw_measurements_on_image(image: np.ndarray, result: MeasurementResult,
                               font_path: Optional[str] = None, font_size: int = 20) -> np.ndarray:
    """Draw detections, a caption and the numeric report on a copy of ``image``."""
    annotated = caption(draw_detections(image, result), "Detected Foot + Reference Contours", (0, 0, 0))

    font, font_size = _load_font(font_path, font_size)
    pil_img = Image.fromarray(cv2.cvtColor(annotated, cv2.COLOR_BGR2RGB))
    draw = ImageDraw.Draw(pil_img)
    unit = result.unit
    lines = [
        f"Reference radius: {result.reference.radius} px",
        f"Scale: {result.scale:.4f} {unit}/px",
        f"Length: {result.height:.1f} {unit} ({result.foot.height} px)",
        f"Width: {result.width:.1f} {unit} ({result.foot.width} px)",
    ]
    x = 10
    y_offset = max(annotated.shape[0] // 10, 15) + 10
    line_height = font_size + 6
    for text in lines:
        draw.text((x, y_offset), text, font=font, fill=OUTLINE_COLOR[::-1])
        y_offset += line_height
    return cv2.cvtColor(np.array(pil_img), cv2.COLOR_RGB2BGR)
