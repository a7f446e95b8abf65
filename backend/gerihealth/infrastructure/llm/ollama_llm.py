"""
Ollama Language Model

The local model, tried before any cloud backend. Small instruction
models such as gemma3:4b or qwen3:4b are enough for name extraction.
"""

from typing import List, Optional
import logging
import time

import requests

from ...domain.ports.language_model import LanguageModelPort
from ...domain.exceptions import LLMConnectionError, EmptyModelResponseError


logger = logging.getLogger(__name__)


class OllamaLanguageModel(LanguageModelPort):
    """
    Talks to Ollama's /api/generate with streaming off.

    Attributes:
        base_url: Ollama server, default http://localhost:11434
        model: Model tag; an untagged name matches any pulled tag
        temperature: Default sampling temperature
        max_tokens: Sent as num_predict
    """

    def __init__(
        self,
        base_url: str = "http://localhost:11434",
        model: str = "gemma3:4b",
        temperature: float = 0.1,
        max_tokens: int = 400,
        timeout: int = 120
    ):
        self._base_url = base_url.rstrip("/")
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._timeout = timeout
        self._session: Optional[requests.Session] = None

        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    def session(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
            self._session.headers["Content-Type"] = "application/json"
        return self._session

    @property
    def model_name(self) -> str:
        return self._model

    def _pulled_models(self) -> List[str]:
        response = self.session.get(f"{self._base_url}/api/tags", timeout=5)
        response.raise_for_status()
        return [m.get("name", "") for m in response.json().get("models", [])]

    def is_available(self) -> bool:
        """True when the server answers and the model (any tag of it) is pulled."""
        try:
            pulled = self._pulled_models()
        except (requests.RequestException, ValueError) as e:
            self.logger.info(f"Ollama not reachable at {self._base_url}: {e}")
            return False

        if self._model in pulled:
            return True

        # "gemma3" resolves to "gemma3:latest"
        base = self._model.split(":")[0]
        match = next((name for name in pulled if name.split(":")[0] == base), None)
        if match is None:
            self.logger.warning(f"Model '{self._model}' is not pulled; have {pulled}")
            return False
        self._model = match
        return True

    def generate(
        self,
        prompt: str,
        instructions: Optional[str] = None,
        temperature: Optional[float] = None
    ) -> str:
        payload = {
            "model": self._model,
            "prompt": prompt,
            "stream": False,
            "options": {
                "temperature": self._temperature if temperature is None else temperature,
                "num_predict": self._max_tokens,
            },
        }
        if instructions:
            payload["system"] = instructions

        started = time.perf_counter()
        try:
            response = self.session.post(f"{self._base_url}/api/generate", json=payload, timeout=self._timeout)
            response.raise_for_status()
            body = response.json()
            if not isinstance(body, dict):
                raise ValueError(f"unexpected response body: {body!r:.80}")
            text = (body.get("response") or "").strip()
        except (requests.RequestException, ValueError) as e:
            self.logger.error(f"Ollama call to {self._model} failed: {e}")
            raise LLMConnectionError(f"Ollama API error: {e}", provider="ollama")

        if not text:
            raise EmptyModelResponseError(provider="ollama")

        self.logger.info(f"{self._model} answered in {(time.perf_counter() - started) * 1000:.0f}ms")
        return text
