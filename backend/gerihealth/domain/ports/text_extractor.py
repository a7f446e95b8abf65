"""
Text Extractor Port

What the scan needs from an OCR engine.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..value_objects.image_data import ImageData
from ..entities.text_extraction import TextExtractionResult


class TextExtractorPort(ABC):
    """
    Reads the printed text of a medication label, one entry per line.

    Implementations raise InvalidImageError for photos they cannot decode
    and OCREngineError when the engine itself fails. A photo with no text
    is not an error here; the pipeline decides what that means.
    """

    engine_name: str = "unknown"

    @abstractmethod
    def extract(
        self,
        image: ImageData,
        options: Optional[Dict[str, Any]] = None
    ) -> TextExtractionResult:
        """options may carry "lang" to override the engine language."""

    @property
    def supported_languages(self) -> List[str]:
        return ["en"]

    def is_available(self) -> bool:
        return True
