"""
LLM Factory

Factory for creating language model instances.
Supports local (Ollama) and cloud (Gemini, Groq) models.
"""

from typing import Dict, Any, Optional
from enum import Enum

from ...config.settings import LLMConfig
from ...domain.ports.language_model import LanguageModelPort
from .dummy_llm import DummyLanguageModel
from .fallback import FallbackLanguageModel


class LLMType(Enum):
    """Available language model implementations."""

    OLLAMA = "ollama"
    GEMINI = "gemini"
    GROQ = "groq"
    DUMMY = "dummy"


class LLMFactory:
    """
    Factory for creating language model instances.

    Usage:
        # Local model
        model = LLMFactory.create(LLMType.OLLAMA, model="gemma3:4b")

        # Cloud model
        model = LLMFactory.create(LLMType.GEMINI, api_key="your-api-key")

        # Local first, cloud second
        model = LLMFactory.create_chain(config.llm)
    """

    @staticmethod
    def create(
        llm_type: LLMType,
        **kwargs
    ) -> LanguageModelPort:
        """
        Create a language model instance.

        Args:
            llm_type: Type of model to create
            **kwargs: Configuration options
                For OLLAMA:
                - base_url: Ollama API URL (default: http://localhost:11434)
                - model: Model name (default: "gemma3:4b")
                - timeout: Request timeout in seconds
                For GEMINI / GROQ:
                - api_key: API key for the service
                - model: Model name
                Common:
                - temperature: Sampling temperature
        """
        if llm_type == LLMType.OLLAMA:
            from .ollama_llm import OllamaLanguageModel

            return OllamaLanguageModel(
                base_url=kwargs.get("base_url", "http://localhost:11434"),
                model=kwargs.get("model", "gemma3:4b"),
                temperature=kwargs.get("temperature", 0.1),
                timeout=kwargs.get("timeout", 120)
            )

        elif llm_type == LLMType.GEMINI:
            from .gemini_llm import GeminiLanguageModel

            return GeminiLanguageModel(
                api_key=kwargs.get("api_key"),
                model=kwargs.get("model", "gemini-2.5-flash"),
                temperature=kwargs.get("temperature", 0.1)
            )

        elif llm_type == LLMType.GROQ:
            from .groq_llm import GroqLanguageModel

            return GroqLanguageModel(
                api_key=kwargs.get("api_key"),
                model=kwargs.get("model", "llama-3.3-70b-versatile"),
                temperature=kwargs.get("temperature", 0.1)
            )

        elif llm_type == LLMType.DUMMY:
            return DummyLanguageModel(
                responses=kwargs.get("responses"),
                default_response=kwargs.get("default_response", "Ibuprofen")
            )

        else:
            raise ValueError(f"Unknown LLM type: {llm_type}")

    @staticmethod
    def create_from_config(config: Dict[str, Any]) -> LanguageModelPort:
        """Create a model from a dictionary with a 'type' key."""
        options = dict(config)
        llm_type = LLMType(options.pop("type", "ollama"))
        return LLMFactory.create(llm_type, **options)

    @staticmethod
    def _options_for(llm_type: LLMType, config: LLMConfig) -> Dict[str, Any]:
        if llm_type == LLMType.OLLAMA:
            return {
                "base_url": config.ollama_base_url,
                "model": config.ollama_model,
                "temperature": config.temperature,
                "timeout": config.timeout,
            }
        if llm_type == LLMType.GEMINI:
            return {
                "api_key": config.gemini_api_key,
                "model": config.gemini_model,
                "temperature": config.temperature,
            }
        if llm_type == LLMType.GROQ:
            return {
                "api_key": config.groq_api_key,
                "model": config.groq_model,
                "temperature": config.temperature,
            }
        return {}

    @staticmethod
    def create_chain(config: Optional[LLMConfig] = None) -> FallbackLanguageModel:
        """
        Create the local-first, cloud-second model chain.

        An empty or "none" type leaves that side of the chain out.
        """
        config = config or LLMConfig()

        def build(type_name: Optional[str]) -> Optional[LanguageModelPort]:
            if not type_name or type_name == "none":
                return None
            llm_type = LLMType(type_name)
            return LLMFactory.create(llm_type, **LLMFactory._options_for(llm_type, config))

        return FallbackLanguageModel(
            primary=build(config.primary_type),
            fallback=build(config.fallback_type)
        )
