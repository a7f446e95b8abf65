"""
Dummy Language Model

Scripted responses for tests and offline demos.
"""

from typing import Optional, List, Tuple
import logging

from ...domain.ports.language_model import LanguageModelPort
from ...domain.exceptions import LLMConnectionError


logger = logging.getLogger(__name__)


class DummyLanguageModel(LanguageModelPort):
    """
    Returns queued responses in order, then the default response.

    Every call is recorded in `calls` as (prompt, instructions).
    With fail=True every call raises LLMConnectionError.
    """

    def __init__(
        self,
        responses: Optional[List[str]] = None,
        default_response: str = "Ibuprofen",
        fail: bool = False,
        available: bool = True
    ):
        self._responses = list(responses or [])
        self._default_response = default_response
        self._fail = fail
        self._available = available
        self.calls: List[Tuple[str, Optional[str]]] = []

    def generate(
        self,
        prompt: str,
        instructions: Optional[str] = None,
        temperature: Optional[float] = None
    ) -> str:
        self.calls.append((prompt, instructions))
        if self._fail:
            raise LLMConnectionError("Dummy model configured to fail", provider="dummy")
        if self._responses:
            return self._responses.pop(0)
        return self._default_response

    @property
    def model_name(self) -> str:
        return "dummy"

    def is_available(self) -> bool:
        return self._available
