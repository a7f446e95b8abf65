"""
Configuration Module

Application settings and configuration management.
"""

from .settings import (
    AppConfig,
    OCRConfig,
    LLMConfig,
    FDAConfig,
    SpeechConfig,
    GeocodingConfig,
    StorageConfig,
    PipelineConfig,
    LoggingConfig,
)

__all__ = [
    "AppConfig",
    "OCRConfig",
    "LLMConfig",
    "FDAConfig",
    "SpeechConfig",
    "GeocodingConfig",
    "StorageConfig",
    "PipelineConfig",
    "LoggingConfig",
]
