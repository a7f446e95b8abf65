"""
Infrastructure Layer

Concrete implementations of domain ports (adapters).
Contains integrations with external services and libraries.
"""

from .ocr import TesseractOCRExtractor, DummyOCRExtractor, OCRFactory
from .llm import FallbackLanguageModel, LLMFactory
from .fda import OpenFDAClient
from .speech import SilentSpeaker, SpeechFactory
from .geocoding import GoogleMapsGeocoder
from .storage import Database

__all__ = [
    # OCR
    "TesseractOCRExtractor",
    "DummyOCRExtractor",
    "OCRFactory",
    # Language models
    "FallbackLanguageModel",
    "LLMFactory",
    # openFDA
    "OpenFDAClient",
    # Speech
    "SilentSpeaker",
    "SpeechFactory",
    # Address lookup
    "GoogleMapsGeocoder",
    # Storage
    "Database",
]
