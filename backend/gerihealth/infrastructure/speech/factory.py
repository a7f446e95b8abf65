"""
Speech Factory
"""

from typing import Dict, Any
from enum import Enum

from ...domain.ports.speech_synthesizer import SpeechSynthesizerPort
from .silent_speaker import SilentSpeaker


class SpeechType(Enum):
    """Available speech implementations."""

    PYTTSX3 = "pyttsx3"
    SILENT = "silent"


class SpeechFactory:

    @staticmethod
    def create(speech_type: SpeechType, **kwargs) -> SpeechSynthesizerPort:
        if speech_type == SpeechType.PYTTSX3:
            from .pyttsx3_speaker import Pyttsx3Speaker

            return Pyttsx3Speaker(
                rate=kwargs.get("rate", 150),
                volume=kwargs.get("volume", 1.0),
                voice=kwargs.get("voice")
            )

        elif speech_type == SpeechType.SILENT:
            return SilentSpeaker()

        else:
            raise ValueError(f"Unknown speech type: {speech_type}")

    @staticmethod
    def create_from_config(config: Dict[str, Any]) -> SpeechSynthesizerPort:
        options = dict(config)
        speech_type = SpeechType(options.pop("type", "pyttsx3"))
        return SpeechFactory.create(speech_type, **options)
