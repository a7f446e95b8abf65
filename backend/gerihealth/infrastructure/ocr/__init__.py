"""
OCR (Text Extraction) Adapters

Implementations of TextExtractorPort.
"""

from .tesseract_ocr import TesseractOCRExtractor
from .dummy_ocr import DummyOCRExtractor
from .factory import OCRFactory, OCRType

__all__ = [
    "TesseractOCRExtractor",
    "DummyOCRExtractor",
    "OCRFactory",
    "OCRType",
]
