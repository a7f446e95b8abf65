"""
Scan Service

High-level entry point for label scans and the single-step operations
behind them.
"""

from typing import Optional, Dict, Any
from pathlib import Path
import logging

from ..pipeline.orchestrator import PipelineOrchestrator, OrchestratorConfig
from .name_extraction import MedicationNameExtractor
from .summarization import LabelSummarizer
from ...config.settings import AppConfig
from ...domain.value_objects.image_data import ImageData, FORMAT_MAP
from ...domain.entities.scan_result import ScanResult
from ...domain.exceptions import InvalidImageError, SpeechError
from ...domain.messages import NO_LABEL_DATA, STATUS_DONE, is_sentinel
from ...domain.ports.label_source import LabelSourcePort
from ...domain.ports.speech_synthesizer import SpeechSynthesizerPort
from ...domain.ports.text_extractor import TextExtractorPort
from ...cross_cutting.error_handling import handle_exception
from ...cross_cutting.validation import ensure_valid_image, validate_image_file, require_text
from ...infrastructure.fda.openfda_client import OpenFDAClient
from ...infrastructure.llm.factory import LLMFactory
from ...infrastructure.llm.fallback import FallbackLanguageModel
from ...infrastructure.ocr.factory import OCRFactory
from ...infrastructure.speech.factory import SpeechFactory


logger = logging.getLogger(__name__)


@handle_exception(default_return=False, log_level=logging.WARNING)
def component_available(component) -> bool:
    """is_available() that reports False instead of raising."""
    return component is not None and bool(component.is_available())


class ScanService:
    """
    Application service for scanning medication labels.

    Usage:
        service = ScanService.from_config(AppConfig.from_env())

        result = service.scan_file("path/to/label.jpg", speak=True)
        result = service.scan_bytes(image_bytes)
        result = service.lookup("Lisinopril")
        name = service.extract_name("Take one tablet of Lisinopril 20mg daily")
    """

    def __init__(
        self,
        text_extractor: TextExtractorPort,
        name_extractor: MedicationNameExtractor,
        label_source: LabelSourcePort,
        summarizer: LabelSummarizer,
        speaker: Optional[SpeechSynthesizerPort] = None,
        config: Optional[OrchestratorConfig] = None
    ):
        self.text_extractor = text_extractor
        self.name_extractor = name_extractor
        self.label_source = label_source
        self.summarizer = summarizer
        self.speaker = speaker

        self.pipeline = PipelineOrchestrator(
            text_extractor=text_extractor,
            name_extractor=name_extractor,
            label_source=label_source,
            summarizer=summarizer,
            speaker=speaker,
            config=config
        )
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        speaker: Optional[SpeechSynthesizerPort] = None
    ) -> "ScanService":
        """
        Wire the service from configuration.

        Name extraction uses the local-first chain. Summaries go to the
        cloud model only, as the label text is long.
        """
        ocr = OCRFactory.create_from_config({
            "type": config.ocr.type,
            "language": config.ocr.language,
            "psm": config.ocr.psm,
            "max_dimension": config.ocr.max_dimension,
        })

        chain = LLMFactory.create_chain(config.llm)
        if chain.fallback is not None:
            summary_model = FallbackLanguageModel(primary=None, fallback=chain.fallback)
        else:
            summary_model = chain

        label_source = OpenFDAClient(
            base_url=config.fda.base_url,
            search_field=config.fda.search_field,
            timeout=config.fda.timeout
        )

        if speaker is None:
            speaker = SpeechFactory.create_from_config({
                "type": config.speech.type,
                "rate": config.speech.rate,
                "volume": config.speech.volume,
                "voice": config.speech.voice,
            })

        return cls(
            text_extractor=ocr,
            name_extractor=MedicationNameExtractor(chain, temperature=config.llm.temperature),
            label_source=label_source,
            summarizer=LabelSummarizer(summary_model, temperature=config.llm.temperature),
            speaker=speaker,
            config=OrchestratorConfig.from_settings(config.pipeline)
        )

    def scan(
        self,
        image: ImageData,
        speak: bool = False,
        options: Optional[Dict[str, Any]] = None
    ) -> ScanResult:
        """
        Run the full scan on a label photo.

        Raises:
            InvalidImageError: If the upload is not a readable image
        """
        ensure_valid_image(image)

        options = dict(options or {})
        options["speak"] = speak

        self.logger.info(f"Scanning label from {image.source or 'bytes'}")
        result = self.pipeline.run(image, options)

        if result.is_successful:
            self.logger.info(f"Scan successful: {result.medication_name}")
        else:
            self.logger.warning(f"Scan incomplete: {result.status} ({len(result.errors)} errors)")

        return result

    def scan_file(self, file_path: str, speak: bool = False) -> ScanResult:
        is_valid, error = validate_image_file(file_path)
        if not is_valid:
            raise InvalidImageError(details={"reason": error, "path": file_path})
        return self.scan(ImageData.from_file(file_path), speak=speak)

    def scan_bytes(
        self,
        image_bytes: bytes,
        format: Optional[str] = None,
        source: Optional[str] = None,
        speak: bool = False
    ) -> ScanResult:
        if not image_bytes:
            raise InvalidImageError(details={"reason": "Image bytes cannot be empty"})
        if format is None and source:
            format = FORMAT_MAP.get(Path(source).suffix.lower())
        image = ImageData.from_bytes(image_bytes, format=format, source=source)
        return self.scan(image, speak=speak)

    def scan_base64(
        self,
        base64_string: str,
        format: Optional[str] = None,
        speak: bool = False
    ) -> ScanResult:
        if not base64_string:
            raise InvalidImageError(details={"reason": "Base64 string cannot be empty"})
        image = ImageData.from_base64(base64_string, format=format)
        return self.scan(image, speak=speak)

    def extract_name(self, text: str) -> str:
        """Medication name from label text, or GEMINI ERROR."""
        return self.name_extractor.extract_medication_name(text)

    def lookup(self, name: str, speak: bool = False) -> ScanResult:
        """
        Fetch and summarize a label for a known medication name, no photo.

        Returns:
            ScanResult without OCR fields; sentinels as in a full scan
        """
        name = require_text("name", name, max_length=200)

        label_text, label = self.label_source.fetch_label(name)
        if is_sentinel(label_text) or label_text == NO_LABEL_DATA:
            summary = label_text
        else:
            summary = self.summarizer.summarize(label_text)

        result = ScanResult(
            medication_name=name,
            label_text=label_text,
            label=label,
            summary=summary,
            status=STATUS_DONE if not is_sentinel(summary) else summary,
        )

        if speak and not is_sentinel(summary):
            try:
                self.speak(summary)
                result.spoken = True
            except SpeechError as e:
                result.warnings.append("Could not read the summary aloud.")
                self.logger.warning(f"Speech failed: {e.message}")

        return result

    def speak(self, text: str) -> None:
        """
        Raises:
            SpeechError: If no speaker is configured or speaking fails
        """
        if self.speaker is None:
            raise SpeechError("Speech is not configured")
        self.speaker.speak(text)

    def stop_speaking(self) -> None:
        if self.speaker is not None:
            self.speaker.stop()

    def health(self) -> Dict[str, Any]:
        """Availability of each backend, without raising."""
        chain = self.name_extractor.model
        return {
            "ocr": {
                "engine": self.text_extractor.engine_name,
                "available": component_available(self.text_extractor),
            },
            "language_model": {
                "model": chain.model_name,
                "available": component_available(chain),
            },
            "speech": {
                "available": self.speaker is not None,
            },
            "stages": self.pipeline.stage_names,
        }
