"""
Medication Name Extraction

Pulls the primary drug name out of raw label text with a language model.
"""

import logging
import re

from ...domain.ports.language_model import LanguageModelPort
from ...domain.messages import GEMINI_ERROR, is_sentinel
from ...cross_cutting.validation import require_text
from ..prompts import NAME_EXTRACTION_INSTRUCTIONS


logger = logging.getLogger(__name__)

_WRAPPING_CHARS = "\"'`*"
_LABEL_PREFIX = re.compile(r"^(medication|drug)(\s+name)?\s*:\s*", re.IGNORECASE)


def clean_medication_name(raw: str) -> str:
    """
    Tidy a model answer down to the bare name.

    Keeps the first non-empty line, drops a "Medication:" prefix,
    surrounding quotes, backticks or bold markers, and a trailing period.
    """
    lines = [line.strip() for line in (raw or "").splitlines() if line.strip()]
    if not lines:
        return ""

    name = lines[0].strip(_WRAPPING_CHARS).strip()
    name = _LABEL_PREFIX.sub("", name)
    name = name.strip(_WRAPPING_CHARS).strip()
    name = name.rstrip(".").strip()
    return re.sub(r"\s+", " ", name)


class MedicationNameExtractor:
    """
    Extracts a medication name from OCR text.

    The model is expected to be a FallbackLanguageModel, which already
    turns backend failures into the GEMINI ERROR sentinel.
    """

    def __init__(self, model: LanguageModelPort, temperature: float = 0.1):
        self._model = model
        self._temperature = temperature
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    def model(self) -> LanguageModelPort:
        return self._model

    def extract_medication_name(self, ocr_text: str) -> str:
        """
        Returns:
            The cleaned name, or GEMINI ERROR

        Raises:
            InvalidInputError: If the text is blank
        """
        text = require_text("text", ocr_text)
        raw = self._model.generate(
            text,
            instructions=NAME_EXTRACTION_INSTRUCTIONS,
            temperature=self._temperature
        )

        if is_sentinel(raw):
            return raw.strip()

        name = clean_medication_name(raw)
        if not name:
            self.logger.warning("Model returned no usable medication name")
            return GEMINI_ERROR

        self.logger.info(f"Extracted medication name: {name}")
        return name
