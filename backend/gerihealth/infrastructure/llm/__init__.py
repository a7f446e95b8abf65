"""
Language Model Adapters

Implementations of LanguageModelPort.
"""

from .dummy_llm import DummyLanguageModel
from .fallback import FallbackLanguageModel
from .factory import LLMFactory, LLMType

__all__ = [
    "DummyLanguageModel",
    "FallbackLanguageModel",
    "LLMFactory",
    "LLMType",
]
