"""
Tesseract OCR Text Extractor

Label photos go through OpenCV cleanup, then pytesseract.image_to_data;
words are stitched back into the lines Tesseract found them on.
"""

from typing import Any, Dict, List, Optional
import logging
import time

import pytesseract

from ...domain.ports.text_extractor import TextExtractorPort
from ...domain.value_objects.image_data import ImageData
from ...domain.value_objects.confidence_score import ConfidenceScore
from ...domain.entities.text_extraction import TextExtractionResult, TextLine
from ...domain.exceptions import InvalidImageError, OCREngineError
from ..utils.image_processing import DEFAULT_MAX_DIMENSION, prepare_label_image


logger = logging.getLogger(__name__)

# Two-letter codes accepted in config and request options
LANGUAGE_CODES = {
    "en": "eng",
    "es": "spa",
    "fr": "fra",
    "de": "deu",
}


def tesseract_lang(code: str) -> str:
    return LANGUAGE_CODES.get(code, code)


def _confidence(raw: Any) -> float:
    try:
        return float(raw)
    except (TypeError, ValueError):
        return -1.0


class TesseractOCRExtractor(TextExtractorPort):
    """
    Attributes:
        lang: Tesseract language ("eng", or "en" which maps to it)
        oem: OCR engine mode
        psm: Page segmentation mode; 3 (auto) suits most bottle labels
    """

    engine_name = "Tesseract"

    def __init__(
        self,
        lang: str = "eng",
        config: str = "",
        oem: int = 3,
        psm: int = 3,
        max_dimension: int = DEFAULT_MAX_DIMENSION
    ):
        self._lang = tesseract_lang(lang)
        self._extra_config = config
        self._oem = oem
        self._psm = psm
        self._max_dimension = max_dimension

        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    def tesseract_config(self) -> str:
        return f"--oem {self._oem} --psm {self._psm} {self._extra_config}".strip()

    @property
    def supported_languages(self) -> List[str]:
        return list(LANGUAGE_CODES)

    @staticmethod
    def _group_lines(data: Dict[str, List[Any]]) -> List[TextLine]:
        """
        Rebuild lines from image_to_data output.

        Words with no text or a non-positive confidence (Tesseract's -1
        for layout boxes) are dropped. Lines keep Tesseract's
        (block, paragraph, line) order.
        """
        words_by_line: Dict[tuple, list] = {}
        rows = zip(data["text"], data["conf"], data["block_num"], data["par_num"], data["line_num"])

        for text, conf, block, par, line in rows:
            text = (text or "").strip()
            conf = _confidence(conf)
            if text and conf > 0:
                words_by_line.setdefault((block, par, line), []).append((text, conf))

        result = []
        for key in sorted(words_by_line):
            words = words_by_line[key]
            mean = sum(c for _, c in words) / len(words)
            result.append(TextLine(
                text=" ".join(w for w, _ in words),
                confidence=ConfidenceScore.from_percent(mean, source="tesseract"),
            ))
        return result

    def extract(
        self,
        image: ImageData,
        options: Optional[Dict[str, Any]] = None
    ) -> TextExtractionResult:
        started = time.perf_counter()
        lang = tesseract_lang((options or {}).get("lang", self._lang))

        try:
            prepared = prepare_label_image(image.bytes, max_dimension=self._max_dimension)
        except ValueError as e:
            raise InvalidImageError(details={"reason": str(e), "source": image.source})

        try:
            data = pytesseract.image_to_data(
                prepared,
                lang=lang,
                config=self.tesseract_config,
                output_type=pytesseract.Output.DICT
            )
        except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError, OSError) as e:
            raise OCREngineError(f"Tesseract OCR failed: {e}", engine_name=self.engine_name)

        lines = self._group_lines(data)
        elapsed_ms = (time.perf_counter() - started) * 1000
        self.logger.debug(f"{len(lines)} label lines in {elapsed_ms:.0f}ms")

        return TextExtractionResult(
            lines=lines,
            language=lang,
            processing_time_ms=elapsed_ms,
            raw_output={"engine": self.engine_name, "num_lines": len(lines)}
        )

    def is_available(self) -> bool:
        try:
            pytesseract.get_tesseract_version()
        except (pytesseract.TesseractNotFoundError, OSError):
            return False
        return True
