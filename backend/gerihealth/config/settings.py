"""
Application Configuration

Settings and configuration management for the medication assistant.
"""

from dataclasses import dataclass, field, asdict
from typing import Optional, Dict, Any
import os


@dataclass
class OCRConfig:
    """OCR configuration."""

    type: str = "tesseract"  # tesseract, dummy
    language: str = "eng"  # Tesseract language codes
    psm: int = 3
    max_dimension: int = 1800


@dataclass
class LLMConfig:
    """
    Language model configuration.

    The local model plays the role of the on-device model; the cloud
    model is used when the local one is unavailable or fails.
    """

    primary_type: str = "ollama"  # ollama, gemini, groq, dummy
    fallback_type: str = "gemini"

    # Local (on-device) model
    ollama_base_url: str = "http://localhost:11434"
    ollama_model: str = "gemma3:4b"

    # Cloud models
    gemini_model: str = "gemini-2.5-flash"
    gemini_api_key: Optional[str] = None
    groq_model: str = "llama-3.3-70b-versatile"
    groq_api_key: Optional[str] = None

    temperature: float = 0.1
    timeout: int = 120


@dataclass
class FDAConfig:
    """openFDA drug label API configuration."""

    base_url: str = "https://api.fda.gov/drug/label.json"
    search_field: str = "openfda.generic_name"
    timeout: int = 20


@dataclass
class SpeechConfig:
    """Text-to-speech configuration."""

    type: str = "pyttsx3"  # pyttsx3, silent
    rate: int = 150
    volume: float = 1.0
    voice: Optional[str] = None


@dataclass
class GeocodingConfig:
    """Address lookup configuration."""

    api_key: Optional[str] = None
    base_url: str = "https://maps.googleapis.com/maps/api/geocode/json"
    timeout: int = 10


@dataclass
class StorageConfig:
    """Record storage configuration."""

    url: str = "sqlite:///:memory:"
    seed_sample_data: bool = False
    echo: bool = False


@dataclass
class PipelineConfig:
    """Scan pipeline orchestration configuration."""

    timeout_seconds: float = 120.0
    fail_fast: bool = False


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    log_file: Optional[str] = None
    format: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class AppConfig:
    """
    Main application configuration.

    Aggregates all component configurations.
    """

    ocr: OCRConfig = field(default_factory=OCRConfig)
    llm: LLMConfig = field(default_factory=LLMConfig)
    fda: FDAConfig = field(default_factory=FDAConfig)
    speech: SpeechConfig = field(default_factory=SpeechConfig)
    geocoding: GeocodingConfig = field(default_factory=GeocodingConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    pipeline: PipelineConfig = field(default_factory=PipelineConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Sections that from_dict/to_dict walk over
    SECTIONS = ("ocr", "llm", "fda", "speech", "geocoding", "storage", "pipeline", "logging")

    @classmethod
    def from_env(cls) -> "AppConfig":
        """
        Create configuration from environment variables.

        Environment variables:
            GERIHEALTH_OCR_TYPE: OCR type (tesseract/dummy)
            GERIHEALTH_OCR_LANGUAGE: Tesseract language
            GERIHEALTH_LLM_PRIMARY: Primary model backend (ollama/gemini/groq)
            GERIHEALTH_LLM_FALLBACK: Fallback model backend
            GERIHEALTH_OLLAMA_URL: Ollama API URL
            GERIHEALTH_OLLAMA_MODEL: Local model name
            GERIHEALTH_GEMINI_MODEL: Gemini model name
            GEMINI_API_KEY: Gemini API key
            GROQ_API_KEY: Groq API key
            GOOGLE_MAPS_API_KEY: Geocoding API key
            GERIHEALTH_FDA_URL: openFDA label endpoint
            GERIHEALTH_SPEECH_TYPE: Speech backend (pyttsx3/silent)
            GERIHEALTH_SPEECH_RATE: Speaking rate (words per minute)
            GERIHEALTH_DATABASE_URL: SQLAlchemy database URL
            GERIHEALTH_SEED_SAMPLE_DATA: Load the sample schedule on start
            GERIHEALTH_LOG_LEVEL: Logging level
            GERIHEALTH_LOG_FILE: Optional log file
        """
        config = cls()

        # OCR
        if ocr_type := os.getenv("GERIHEALTH_OCR_TYPE"):
            config.ocr.type = ocr_type
        if ocr_lang := os.getenv("GERIHEALTH_OCR_LANGUAGE"):
            config.ocr.language = ocr_lang

        # LLM
        if primary := os.getenv("GERIHEALTH_LLM_PRIMARY"):
            config.llm.primary_type = primary
        if fallback := os.getenv("GERIHEALTH_LLM_FALLBACK"):
            config.llm.fallback_type = fallback
        if ollama_url := os.getenv("GERIHEALTH_OLLAMA_URL"):
            config.llm.ollama_base_url = ollama_url
        if ollama_model := os.getenv("GERIHEALTH_OLLAMA_MODEL"):
            config.llm.ollama_model = ollama_model
        if gemini_model := os.getenv("GERIHEALTH_GEMINI_MODEL"):
            config.llm.gemini_model = gemini_model
        if gemini_key := os.getenv("GEMINI_API_KEY"):
            config.llm.gemini_api_key = gemini_key
        elif gemini_key := os.getenv("GOOGLE_API_KEY"):
            config.llm.gemini_api_key = gemini_key
        if groq_key := os.getenv("GROQ_API_KEY"):
            config.llm.groq_api_key = groq_key
        if groq_model := os.getenv("GROQ_MODEL"):
            config.llm.groq_model = groq_model

        # openFDA
        if fda_url := os.getenv("GERIHEALTH_FDA_URL"):
            config.fda.base_url = fda_url

        # Speech
        if speech_type := os.getenv("GERIHEALTH_SPEECH_TYPE"):
            config.speech.type = speech_type
        if speech_rate := os.getenv("GERIHEALTH_SPEECH_RATE"):
            config.speech.rate = int(speech_rate)

        # Geocoding
        if maps_key := os.getenv("GOOGLE_MAPS_API_KEY"):
            config.geocoding.api_key = maps_key

        # Storage
        if db_url := os.getenv("GERIHEALTH_DATABASE_URL"):
            config.storage.url = db_url
        if seed := os.getenv("GERIHEALTH_SEED_SAMPLE_DATA"):
            config.storage.seed_sample_data = _as_bool(seed)

        # Logging
        if log_level := os.getenv("GERIHEALTH_LOG_LEVEL"):
            config.logging.level = log_level
        if log_file := os.getenv("GERIHEALTH_LOG_FILE"):
            config.logging.log_file = log_file

        return config

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppConfig":
        """Create configuration from dictionary. Unknown keys are ignored."""
        config = cls()

        for section_name in cls.SECTIONS:
            if section_name not in data:
                continue
            section = getattr(config, section_name)
            for key, value in data[section_name].items():
                if hasattr(section, key):
                    setattr(section, key, value)

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary, without secrets."""
        result = {}
        for section_name in self.SECTIONS:
            section = asdict(getattr(self, section_name))
            result[section_name] = {
                key: value for key, value in section.items()
                if not key.endswith("api_key")
            }
        return result
