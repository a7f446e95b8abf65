"""
Text-to-Speech Adapters
"""

from .silent_speaker import SilentSpeaker
from .factory import SpeechFactory, SpeechType

__all__ = [
    "SilentSpeaker",
    "SpeechFactory",
    "SpeechType",
]
