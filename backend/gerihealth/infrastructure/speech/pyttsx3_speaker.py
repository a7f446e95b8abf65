"""
pyttsx3 Speaker

Offline text-to-speech through the platform voice (SAPI5, NSSpeech,
eSpeak). Read-only: nothing is recorded.
"""

from typing import Optional
import logging
import threading

import pyttsx3

from ...domain.ports.speech_synthesizer import SpeechSynthesizerPort
from ...domain.exceptions import SpeechError


logger = logging.getLogger(__name__)


class Pyttsx3Speaker(SpeechSynthesizerPort):
    """
    Speaker backed by a pyttsx3 engine.

    The engine is created on first use so servers without an audio
    driver can still start. pyttsx3 engines are not thread-safe and API
    requests run in a thread pool, so one lock serializes every call into
    the engine.

    Attributes:
        rate: Words per minute (150 is a normal pace)
        volume: 0.0 to 1.0
        voice: Optional voice id
    """

    def __init__(
        self,
        rate: int = 150,
        volume: float = 1.0,
        voice: Optional[str] = None
    ):
        self._rate = rate
        self._volume = volume
        self._voice = voice
        self._engine = None
        self._speaking = False
        self._lock = threading.Lock()

        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def _get_engine(self):
        # Caller holds self._lock
        if self._engine is None:
            try:
                engine = pyttsx3.init()
                engine.setProperty('rate', self._rate)
                engine.setProperty('volume', self._volume)
                if self._voice:
                    engine.setProperty('voice', self._voice)
            except Exception as e:
                raise SpeechError(f"Speech engine unavailable: {e}") from e
            self._engine = engine
        return self._engine

    def speak(self, text: str) -> None:
        if not text or not text.strip():
            raise SpeechError("Nothing to say")

        with self._lock:
            engine = self._get_engine()
            self._speaking = True
            try:
                engine.say(text)
                engine.runAndWait()
            except Exception as e:
                self.logger.error(f"Speech failed: {e}", exc_info=True)
                raise SpeechError(f"Speech failed: {e}") from e
            finally:
                self._speaking = False

        self.logger.debug(f"Spoke {len(text)} characters")

    def stop(self) -> None:
        # Waits for an utterance in progress to finish
        with self._lock:
            if self._engine is not None:
                try:
                    self._engine.stop()
                except Exception as e:
                    raise SpeechError(f"Could not stop speech: {e}") from e
            self._speaking = False

    @property
    def is_speaking(self) -> bool:
        return self._speaking
