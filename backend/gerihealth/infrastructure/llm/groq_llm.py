"""
Groq Language Model

Alternative cloud backend using Groq's chat completions API.
"""

from typing import Optional
import logging

from groq import Groq, GroqError

from ...domain.ports.language_model import LanguageModelPort
from ...domain.exceptions import LLMConnectionError, EmptyModelResponseError


logger = logging.getLogger(__name__)


class GroqLanguageModel(LanguageModelPort):
    """Language model backed by Groq. Instructions go in the system message."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "llama-3.3-70b-versatile",
        temperature: float = 0.1,
        max_tokens: int = 400
    ):
        self._api_key = api_key
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._client: Optional[Groq] = None

        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def _get_client(self) -> Groq:
        if self._client is None:
            if not self._api_key:
                raise LLMConnectionError("GROQ_API_KEY is not set", provider="groq")
            self._client = Groq(api_key=self._api_key)
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

        messages = []
        if instructions:
            messages.append({"role": "system", "content": instructions})
        messages.append({"role": "user", "content": prompt})

        try:
            self.logger.info(f"Calling Groq with model {self._model}...")
            response = client.chat.completions.create(
                model=self._model,
                messages=messages,
                temperature=self._temperature if temperature is None else temperature,
                max_tokens=self._max_tokens,
            )
        except GroqError as e:
            self.logger.error(f"Groq API call failed: {e}")
            raise LLMConnectionError(f"Groq API error: {e}", provider="groq") from e

        text = response.choices[0].message.content if response.choices else None
        if not text or not text.strip():
            raise EmptyModelResponseError(provider="groq")

        return text.strip()

    @property
    def model_name(self) -> str:
        return self._model
