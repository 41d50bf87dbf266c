"""Synthetic photos built and encoded in memory."""

import cv2
import numpy as np


def encode_png(image: np.ndarray) -> bytes:
    ok, buf = cv2.imencode(".png", image)
    assert ok
    return buf.tobytes()


def solid_image(rgb: tuple[int, int, int], width: int = 400, height: int = 300) -> np.ndarray:
    """A BGR image filled with one colour."""
    image = np.zeros((height, width, 3), dtype=np.uint8)
    image[:] = rgb[::-1]
    return image
