"""
Value Objects

Immutable values passed between pipeline stages.
"""

from .image_data import ImageData
from .confidence_score import ConfidenceScore

__all__ = [
    "ImageData",
    "ConfidenceScore",
]
