"""
Utility modules for the infrastructure layer.
"""

from .image_processing import (
    bytes_to_cv2,
    cv2_to_grayscale,
    resize_image,
    enhance_for_ocr,
    prepare_label_image,
)

__all__ = [
    "bytes_to_cv2",
    "cv2_to_grayscale",
    "resize_image",
    "enhance_for_ocr",
    "prepare_label_image",
]
