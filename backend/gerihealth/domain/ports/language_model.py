"""
Language Model Port

Abstract interface for text generation backends.
"""

from abc import ABC, abstractmethod
from typing import Optional


class LanguageModelPort(ABC):
    """
    Port (interface) for language model backends.

    Used twice in a scan: to pull the medication name out of raw OCR
    text, and to summarize the FDA label for an elderly reader.

    Implementations:
    - Ollama (local model, stands in for the on-device model)
    - Google Gemini (cloud)
    - Groq (cloud)
    - Fallback chain of two of the above
    """

    @abstractmethod
    def generate(
        self,
        prompt: str,
        instructions: Optional[str] = None,
        temperature: Optional[float] = None
    ) -> str:
        """
        Generate text for a prompt.

        Args:
            prompt: User content (OCR text, label text)
            instructions: System-style instructions for the model
            temperature: Sampling temperature override

        Returns:
            Generated text

        Raises:
            LanguageModelError: If the backend fails or returns nothing
        """
        pass

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Get the name of the model."""
        pass

    def is_available(self) -> bool:
        """Whether the backend is reachable and configured."""
        return True
