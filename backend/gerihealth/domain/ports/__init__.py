"""
Domain Ports

Interfaces implemented by the infrastructure adapters.
"""

from .text_extractor import TextExtractorPort
from .language_model import LanguageModelPort
from .label_source import LabelSourcePort
from .speech_synthesizer import SpeechSynthesizerPort
from .geocoder import GeocoderPort

__all__ = [
    "TextExtractorPort",
    "LanguageModelPort",
    "LabelSourcePort",
    "SpeechSynthesizerPort",
    "GeocoderPort",
]
