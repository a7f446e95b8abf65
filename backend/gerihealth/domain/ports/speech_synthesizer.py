"""
Speech Synthesizer Port

Abstract interface for reading text aloud.
"""

from abc import ABC, abstractmethod


class SpeechSynthesizerPort(ABC):
    """
    Port (interface) for text-to-speech engines.

    Output only: nothing is recorded or recognized.
    """

    @abstractmethod
    def speak(self, text: str) -> None:
        """
        Read text aloud, blocking until finished.

        Raises:
            SpeechError: If text is empty or the engine fails
        """
        pass

    @abstractmethod
    def stop(self) -> None:
        """Interrupt any speech in progress."""
        pass

    @property
    @abstractmethod
    def is_speaking(self) -> bool:
        pass
