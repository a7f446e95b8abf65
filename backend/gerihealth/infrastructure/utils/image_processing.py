"""
Label photo preprocessing with OpenCV.

Pill bottles photograph badly: the label is curved, glossy and usually
shot at full phone resolution. Tesseract does better on a smaller,
flattened-contrast grayscale copy.
"""

from typing import Tuple
import logging

import cv2
import numpy as np


logger = logging.getLogger(__name__)

# Longest side handed to Tesseract
DEFAULT_MAX_DIMENSION = 1800


def bytes_to_cv2(image_bytes: bytes) -> np.ndarray:
    """Decode JPEG/PNG/... bytes to a BGR array. ValueError if undecodable."""
    img = cv2.imdecode(np.frombuffer(image_bytes, dtype=np.uint8), cv2.IMREAD_COLOR)
    if img is None:
        raise ValueError("Failed to decode image from bytes")
    return img


def cv2_to_grayscale(img: np.ndarray) -> np.ndarray:
    return img if img.ndim == 2 else cv2.cvtColor(img, cv2.COLOR_BGR2GRAY)


def resize_image(
    img: np.ndarray,
    max_dimension: int = DEFAULT_MAX_DIMENSION,
    interpolation: int = cv2.INTER_AREA
) -> Tuple[np.ndarray, float]:
    """
    Downscale so the longest side fits max_dimension.

    Returns (image, scale); images already small enough come back as-is
    with scale 1.0. Never upscales.
    """
    height, width = img.shape[:2]
    longest = max(height, width)
    if longest <= max_dimension:
        return img, 1.0

    scale = max_dimension / longest
    size = (int(width * scale), int(height * scale))
    logger.debug(f"Label photo {width}x{height} -> {size[0]}x{size[1]}")
    return cv2.resize(img, size, interpolation=interpolation), scale


def enhance_for_ocr(img: np.ndarray) -> np.ndarray:
    """
    Grayscale, then CLAHE against glare, an edge-preserving bilateral
    blur and an unsharp mask. Returns a new grayscale array.
    """
    gray = cv2_to_grayscale(img)
    if gray is img:
        gray = img.copy()

    equalized = cv2.createCLAHE(clipLimit=3.0, tileGridSize=(8, 8)).apply(gray)
    smooth = cv2.bilateralFilter(equalized, 9, 75, 75)
    blurred = cv2.GaussianBlur(smooth, (0, 0), 3)
    return cv2.addWeighted(smooth, 1.5, blurred, -0.5, 0)


def prepare_label_image(image_bytes: bytes, max_dimension: int = DEFAULT_MAX_DIMENSION) -> np.ndarray:
    img, _ = resize_image(bytes_to_cv2(image_bytes), max_dimension=max_dimension)
    return enhance_for_ocr(img)
