"""
Label Summarization

Turns an openFDA label paragraph into two plain sentences for an
elderly reader.
"""

import logging

from ...domain.ports.language_model import LanguageModelPort
from ...domain.messages import GEMINI_ERROR, is_sentinel
from ...cross_cutting.validation import require_text
from ..prompts import SUMMARY_INSTRUCTIONS


logger = logging.getLogger(__name__)


class LabelSummarizer:

    def __init__(self, model: LanguageModelPort, temperature: float = 0.1):
        self._model = model
        self._temperature = temperature
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def summarize(self, label_text: str) -> str:
        """
        Summarize label text.

        A sentinel passed in is returned unchanged. Returns GEMINI ERROR
        when the model fails or answers with nothing.
        """
        if is_sentinel(label_text):
            return label_text.strip()

        text = require_text("label_text", label_text)
        summary = self._model.generate(
            text,
            instructions=SUMMARY_INSTRUCTIONS,
            temperature=self._temperature
        )

        summary = (summary or "").strip()
        if not summary:
            return GEMINI_ERROR
        return summary
