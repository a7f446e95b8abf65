"""
Gemini Language Model

Cloud backend using the Google Gen AI SDK. Used when the local model is
not available or fails.
"""

from typing import Optional
import logging

from google import genai
from google.genai import types

from ...domain.ports.language_model import LanguageModelPort
from ...domain.exceptions import LLMConnectionError, EmptyModelResponseError


logger = logging.getLogger(__name__)


class GeminiLanguageModel(LanguageModelPort):
    """
    Language model backed by Google Gemini.

    Instructions and content are sent as a single prompt,
    "{instructions}: {text}".
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gemini-2.5-flash",
        temperature: float = 0.1
    ):
        self._api_key = api_key
        self._model = model
        self._temperature = temperature
        self._client = None

        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def _get_client(self) -> "genai.Client":
        if self._client is None:
            if not self._api_key:
                raise LLMConnectionError("GEMINI_API_KEY is not set", provider="gemini")
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    def is_available(self) -> bool:
        return bool(self._api_key)

    def generate(
        self,
        prompt: str,
        instructions: Optional[str] = None,
        temperature: Optional[float] = None
    ) -> str:
        client = self._get_client()
        contents = f"{instructions}: {prompt}" if instructions else prompt

        try:
            self.logger.info(f"Calling Gemini with model {self._model}...")
            response = client.models.generate_content(
                model=self._model,
                contents=contents,
                config=types.GenerateContentConfig(
                    temperature=self._temperature if temperature is None else temperature
                ),
            )
        except Exception as e:
            self.logger.error(f"Gemini API call failed: {e}")
            raise LLMConnectionError(f"Gemini API error: {e}", provider="gemini") from e

        text = getattr(response, "text", None)
        if not text or not text.strip():
            raise EmptyModelResponseError(provider="gemini")

        return text.strip()

    @property
    def model_name(self) -> str:
        return self._model
