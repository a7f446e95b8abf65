"""
OCR confidence, stored as a 0..1 fraction.
"""

from dataclasses import dataclass
from typing import Iterable, Optional


# Below this the name model is still asked, but the scan carries a warning
LOW_CONFIDENCE = 0.5


@dataclass(frozen=True)
class ConfidenceScore:
    value: float
    source: Optional[str] = None

    def __post_init__(self) -> None:
        if not 0.0 <= self.value <= 1.0:
            raise ValueError(f"confidence out of range: {self.value}")

    @property
    def is_low(self) -> bool:
        return self.value < LOW_CONFIDENCE

    def __str__(self) -> str:
        return f"{self.value:.0%}"

    @classmethod
    def zero(cls) -> "ConfidenceScore":
        return cls(0.0)

    @classmethod
    def from_percent(cls, percent: float, source: Optional[str] = None) -> "ConfidenceScore":
        """Tesseract reports 0-100 and -1 for non-words; clamp into range."""
        clamped = min(max(float(percent), 0.0), 100.0)
        return cls(clamped / 100.0, source)

    @classmethod
    def average(cls, scores: Iterable["ConfidenceScore"], source: Optional[str] = None) -> "ConfidenceScore":
        values = [s.value for s in scores]
        return cls(sum(values) / len(values), source) if values else cls.zero()
