"""
Silent Speaker

Keeps what would have been spoken. Used on headless servers and in tests.
"""

from typing import List
import logging

from ...domain.ports.speech_synthesizer import SpeechSynthesizerPort
from ...domain.exceptions import SpeechError


logger = logging.getLogger(__name__)


class SilentSpeaker(SpeechSynthesizerPort):

    def __init__(self):
        self.spoken: List[str] = []
        self.stopped = 0

    def speak(self, text: str) -> None:
        if not text or not text.strip():
            raise SpeechError("Nothing to say")
        logger.info(f"(silent) {text[:80]}")
        self.spoken.append(text)

    def stop(self) -> None:
        self.stopped += 1

    @property
    def is_speaking(self) -> bool:
        return False
