"""
OCR Factory
"""

from enum import Enum
from typing import Any, Dict

from ...domain.ports.text_extractor import TextExtractorPort
from .dummy_ocr import DummyOCRExtractor
from .tesseract_ocr import TesseractOCRExtractor


class OCRType(Enum):
    TESSERACT = "tesseract"
    DUMMY = "dummy"


# Constructor arguments each engine understands; others are ignored
_ACCEPTED = {
    OCRType.TESSERACT: ("lang", "config", "oem", "psm", "max_dimension"),
    OCRType.DUMMY: ("preset_text",),
}

_CLASSES = {
    OCRType.TESSERACT: TesseractOCRExtractor,
    OCRType.DUMMY: DummyOCRExtractor,
}


class OCRFactory:
    """
    Builds the text extractor named in configuration.

        ocr = OCRFactory.create(OCRType.TESSERACT, lang="eng", psm=6)
        ocr = OCRFactory.create_from_config({"type": "dummy", "preset_text": "LISINOPRIL 20 MG"})
    """

    @staticmethod
    def create(ocr_type: OCRType, **kwargs) -> TextExtractorPort:
        if ocr_type not in _CLASSES:
            raise ValueError(f"Unknown OCR type: {ocr_type}")
        accepted = {k: v for k, v in kwargs.items() if k in _ACCEPTED[ocr_type] and v is not None}
        return _CLASSES[ocr_type](**accepted)

    @staticmethod
    def create_from_config(config: Dict[str, Any]) -> TextExtractorPort:
        """config uses OCRConfig keys: type, language, psm, max_dimension."""
        options = dict(config)
        try:
            ocr_type = OCRType(options.pop("type", OCRType.TESSERACT.value))
        except ValueError:
            raise ValueError(f"Unknown OCR type: {config.get('type')}")
        if "language" in options:
            options["lang"] = options.pop("language")
        return OCRFactory.create(ocr_type, **options)
