"""
Pipeline Stages

One class per step of a scan. Each stage makes a single backend call with
no retries. When a backend fails, its sentinel ("GEMINI ERROR" or
"Error fetching data. Check the URL.") is written to the summary and the
stage raises a non-recoverable error, so the stages after it are skipped.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Type
import logging

from .context import PipelineContext
from ...domain.entities.scan_result import PipelineStage
from ...domain.exceptions import (
    DomainException,
    LanguageModelError,
    LabelFetchError,
    NoTextFoundError,
    SpeechError,
)
from ...domain.messages import (
    FETCH_ERROR,
    NO_LABEL_DATA,
    STATUS_RECOGNIZING,
    STATUS_EXTRACTING_NAME,
    STATUS_FETCHING_LABEL,
    STATUS_SUMMARIZING,
    STATUS_SPEAKING,
    is_sentinel,
)
from ...domain.ports.text_extractor import TextExtractorPort
from ...domain.ports.label_source import LabelSourcePort
from ...domain.ports.speech_synthesizer import SpeechSynthesizerPort
from ...cross_cutting.error_handling import ErrorHandler


logger = logging.getLogger(__name__)


@dataclass
class StageConfig:
    """
    Attributes:
        enabled: A disabled stage is recorded as skipped
        fail_soft: Whether an unexpected (non-domain) exception lets the
            scan continue
        options: Stage-specific options
    """

    enabled: bool = True
    fail_soft: bool = True
    options: Dict[str, Any] = field(default_factory=dict)


def _usable(text: str) -> bool:
    return bool(text) and not is_sentinel(text)


class PipelineStageExecutor(ABC):
    """
    Base stage. Subclasses set stage, name and status_message and
    implement execute(); run() takes care of skipping, status updates,
    timing and turning exceptions into scan errors.
    """

    stage: PipelineStage
    name: str = ""
    # Progress line shown to the user while the stage runs
    status_message: str = ""

    def __init__(self, config: Optional[StageConfig] = None):
        self.config = config or StageConfig()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @abstractmethod
    def execute(self, context: PipelineContext) -> None:
        ...

    def can_execute(self, context: PipelineContext) -> bool:
        return not context.should_abort

    def stop_with(
        self,
        context: PipelineContext,
        sentinel: str,
        error_cls: Type[DomainException],
        **details
    ) -> None:
        """Show the sentinel to the user and end the scan."""
        context.summary = sentinel
        raise error_cls(sentinel, details=details, is_recoverable=False)

    def run(self, context: PipelineContext) -> bool:
        """False when the stage failed; a skipped stage counts as success."""
        if not (self.config.enabled and self.can_execute(context)):
            self.logger.debug(f"{self.name} skipped")
            context.skip_stage(self.stage)
            return True

        context.start_stage(self.stage)
        if self.status_message:
            context.set_status(self.status_message)

        try:
            self.execute(context)
            return True
        except DomainException as e:
            self.logger.warning(f"{self.name} failed: {e}")
            context.add_error(self.stage, e.__class__.__name__, e.message, e.is_recoverable, e.details)
        except Exception as e:
            self.logger.error(f"Unexpected error in {self.name}: {e}", exc_info=True)
            context.add_error(self.stage, e.__class__.__name__, str(e), self.config.fail_soft)
        finally:
            context.finish_stage(self.stage)
        return False


class TextExtractionStage(PipelineStageExecutor):
    stage = PipelineStage.TEXT_EXTRACTION
    name = "Text Extraction"
    status_message = STATUS_RECOGNIZING

    def __init__(self, extractor: TextExtractorPort, config: Optional[StageConfig] = None):
        super().__init__(config)
        self.extractor = extractor

    def can_execute(self, context: PipelineContext) -> bool:
        return super().can_execute(context) and context.image is not None

    def execute(self, context: PipelineContext) -> None:
        result = self.extractor.extract(context.image, context.options.get("ocr", {}))
        context.text_result = result

        if not result.has_text:
            raise NoTextFoundError()
        if result.lines and result.overall_confidence.is_low:
            context.add_warning("Text recognition confidence is low, results may be inaccurate.")


class NameExtractionStage(PipelineStageExecutor):
    stage = PipelineStage.NAME_EXTRACTION
    name = "Name Extraction"
    status_message = STATUS_EXTRACTING_NAME

    def __init__(self, extractor, config: Optional[StageConfig] = None):
        # extractor: MedicationNameExtractor
        super().__init__(config)
        self.extractor = extractor

    def can_execute(self, context: PipelineContext) -> bool:
        return super().can_execute(context) and bool(context.extracted_text.strip())

    def execute(self, context: PipelineContext) -> None:
        context.medication_name = self.extractor.extract_medication_name(context.extracted_text)
        if is_sentinel(context.medication_name):
            self.stop_with(context, context.medication_name, LanguageModelError, step="name_extraction")


class LabelFetchStage(PipelineStageExecutor):
    stage = PipelineStage.LABEL_FETCH
    name = "Label Fetch"
    status_message = STATUS_FETCHING_LABEL

    def __init__(self, label_source: LabelSourcePort, config: Optional[StageConfig] = None):
        super().__init__(config)
        self.label_source = label_source

    def can_execute(self, context: PipelineContext) -> bool:
        return super().can_execute(context) and _usable(context.medication_name)

    def execute(self, context: PipelineContext) -> None:
        context.label_text, context.label = self.label_source.fetch_label(context.medication_name)

        if context.label_text == FETCH_ERROR:
            self.stop_with(context, FETCH_ERROR, LabelFetchError, medication_name=context.medication_name)

        if context.label_text == NO_LABEL_DATA:
            # Nothing to summarize; the placeholder is what the user sees
            context.summary = NO_LABEL_DATA
            context.add_warning(f"The FDA label for {context.medication_name} has no summary section.")


class SummarizationStage(PipelineStageExecutor):
    stage = PipelineStage.SUMMARIZATION
    name = "Summarization"
    status_message = STATUS_SUMMARIZING

    def __init__(self, summarizer, config: Optional[StageConfig] = None):
        # summarizer: LabelSummarizer
        super().__init__(config)
        self.summarizer = summarizer

    def can_execute(self, context: PipelineContext) -> bool:
        return (
            super().can_execute(context)
            and _usable(context.label_text)
            and context.label_text != NO_LABEL_DATA
        )

    def execute(self, context: PipelineContext) -> None:
        context.summary = self.summarizer.summarize(context.label_text)
        if is_sentinel(context.summary):
            self.stop_with(context, context.summary, LanguageModelError, step="summarization")


class SpeechStage(PipelineStageExecutor):
    """Optional last step. A speech failure only adds a warning."""

    stage = PipelineStage.SPEECH
    name = "Speech"
    status_message = STATUS_SPEAKING

    def __init__(self, speaker: SpeechSynthesizerPort, config: Optional[StageConfig] = None):
        super().__init__(config)
        self.speaker = speaker

    def can_execute(self, context: PipelineContext) -> bool:
        return (
            super().can_execute(context)
            and bool(context.options.get("speak"))
            and _usable(context.summary)
        )

    def execute(self, context: PipelineContext) -> None:
        with ErrorHandler(self.logger, context="speech", suppress=(SpeechError,)) as handler:
            self.speaker.speak(context.summary)

        if handler.has_error:
            context.add_warning("Could not read the summary aloud.")
        else:
            context.spoken = True
