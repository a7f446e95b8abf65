"""
Preset-text OCR for tests and offline demos.
"""

from typing import Any, Dict, Optional

from ...domain.ports.text_extractor import TextExtractorPort
from ...domain.value_objects.image_data import ImageData
from ...domain.value_objects.confidence_score import ConfidenceScore
from ...domain.entities.text_extraction import TextExtractionResult, TextLine


DEFAULT_TEXT = "IBUPROFEN 200 MG TABLET\nTake 1 tablet by mouth every 8 hours"


class DummyOCRExtractor(TextExtractorPort):
    """Ignores the photo; every non-blank line of preset_text is read at 95%."""

    engine_name = "DummyOCR"

    def __init__(self, preset_text: str = DEFAULT_TEXT):
        self._preset_text = preset_text

    def extract(
        self,
        image: ImageData,
        options: Optional[Dict[str, Any]] = None
    ) -> TextExtractionResult:
        confidence = ConfidenceScore(0.95, source="dummy")
        lines = [
            TextLine(text=line, confidence=confidence)
            for line in self._preset_text.splitlines()
            if line.strip()
        ]
        return TextExtractionResult(lines=lines, language="eng", processing_time_ms=1.0)
