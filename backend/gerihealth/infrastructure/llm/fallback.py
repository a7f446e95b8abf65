"""
Fallback Language Model

Tries the local model first and the cloud model second. When both fail
the caller gets the "GEMINI ERROR" sentinel instead of an exception,
which is what the user sees in place of a name or summary.
"""

from typing import Optional
import logging

from ...domain.ports.language_model import LanguageModelPort
from ...domain.exceptions import LanguageModelError
from ...domain.messages import GEMINI_ERROR


logger = logging.getLogger(__name__)


class FallbackLanguageModel(LanguageModelPort):
    """
    Chain of a primary and a fallback model.

    The primary is skipped when it reports itself unavailable. Either side
    may be None. There are no retries.
    """

    def __init__(
        self,
        primary: Optional[LanguageModelPort],
        fallback: Optional[LanguageModelPort]
    ):
        self._primary = primary
        self._fallback = fallback
        self.last_backend: Optional[str] = None

        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    def primary(self) -> Optional[LanguageModelPort]:
        return self._primary

    @property
    def fallback(self) -> Optional[LanguageModelPort]:
        return self._fallback

    def generate(
        self,
        prompt: str,
        instructions: Optional[str] = None,
        temperature: Optional[float] = None
    ) -> str:
        self.last_backend = None

        if self._primary is not None and self._primary.is_available():
            try:
                text = self._primary.generate(prompt, instructions, temperature)
                self.last_backend = self._primary.model_name
                return text
            except LanguageModelError as e:
                self.logger.warning(
                    f"Primary model {self._primary.model_name} failed, falling back: {e.message}"
                )
            except Exception as e:
                self.logger.warning(
                    f"Primary model {self._primary.model_name} raised {e.__class__.__name__}, falling back: {e}",
                    exc_info=True
                )
        elif self._primary is not None:
            self.logger.info(f"Primary model {self._primary.model_name} unavailable, using fallback")

        if self._fallback is None:
            self.logger.error("No fallback model configured")
            return GEMINI_ERROR

        try:
            text = self._fallback.generate(prompt, instructions, temperature)
        except LanguageModelError as e:
            self.logger.error(f"Fallback model {self._fallback.model_name} failed: {e.message}")
            return GEMINI_ERROR
        except Exception as e:
            self.logger.error(
                f"Fallback model {self._fallback.model_name} raised {e.__class__.__name__}: {e}",
                exc_info=True
            )
            return GEMINI_ERROR

        if not text or not text.strip():
            return GEMINI_ERROR

        self.last_backend = self._fallback.model_name
        return text

    @property
    def model_name(self) -> str:
        names = [m.model_name for m in (self._primary, self._fallback) if m is not None]
        return " -> ".join(names) or "none"

    def is_available(self) -> bool:
        return any(
            m is not None and m.is_available()
            for m in (self._primary, self._fallback)
        )
