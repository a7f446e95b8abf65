"""
Text Extraction Entities

Result of reading a medication label with OCR.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any

from ..value_objects.confidence_score import ConfidenceScore


@dataclass
class TextLine:
    """
    One recognized line of label text.

    Only the top candidate per line is kept.

    Attributes:
        text: The recognized text
        confidence: Average OCR confidence of the words in the line
    """

    text: str
    confidence: ConfidenceScore = field(default_factory=ConfidenceScore.zero)

    @property
    def is_empty(self) -> bool:
        """Check if line is empty or whitespace only."""
        return not self.text.strip()

    def __str__(self) -> str:
        preview = self.text[:50] + "..." if len(self.text) > 50 else self.text
        return f"TextLine('{preview}', confidence={self.confidence})"


@dataclass
class TextExtractionResult:
    """
    Result from the OCR stage.

    Attributes:
        lines: Recognized lines in reading order
        full_text: Lines joined with newlines
        language: Language hint passed to the engine
        processing_time_ms: Time taken for extraction
        raw_output: Engine metadata for debugging
    """

    lines: List[TextLine] = field(default_factory=list)
    full_text: str = ""
    language: Optional[str] = None
    processing_time_ms: float = 0.0
    raw_output: Optional[Dict[str, Any]] = None

    def __post_init__(self) -> None:
        """Build full text from lines if not provided."""
        if not self.full_text and self.lines:
            self.full_text = "\n".join(
                line.text for line in self.lines if not line.is_empty
            )

    @property
    def has_text(self) -> bool:
        """Check if any text was extracted."""
        return bool(self.full_text.strip())

    @property
    def overall_confidence(self) -> ConfidenceScore:
        """Average line confidence."""
        return ConfidenceScore.average(
            (line.confidence for line in self.lines), source="ocr"
        )
