"""
Pipeline Orchestrator

Runs the stages of a label scan in order:

    OCR -> medication name -> openFDA label -> summary -> (speech)

Failures never escape run(); they end up in the ScanResult.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import logging
import time

from .context import PipelineContext
from .stages import (
    PipelineStageExecutor,
    StageConfig,
    TextExtractionStage,
    NameExtractionStage,
    LabelFetchStage,
    SummarizationStage,
    SpeechStage,
)
from ...config.settings import PipelineConfig
from ...domain.value_objects.image_data import ImageData
from ...domain.entities.scan_result import ScanResult, PipelineStage
from ...domain.ports.text_extractor import TextExtractorPort
from ...domain.ports.label_source import LabelSourcePort
from ...domain.ports.speech_synthesizer import SpeechSynthesizerPort
from ...domain.exceptions import PipelineConfigurationError
from ...cross_cutting.logging import PipelineLogger


logger = logging.getLogger(__name__)

REQUIRED_COMPONENTS = ("text_extractor", "name_extractor", "label_source", "summarizer")


@dataclass
class OrchestratorConfig:
    """
    Attributes:
        timeout_seconds: Budget for a whole scan, checked before each stage
        fail_fast: Stop after the first failed stage, even a recoverable one
        stages: Per-stage overrides; stages not listed use StageConfig()
    """

    timeout_seconds: float = 120.0
    fail_fast: bool = False
    stages: Dict[PipelineStage, StageConfig] = field(default_factory=dict)

    def get_stage_config(self, stage: PipelineStage) -> StageConfig:
        return self.stages.get(stage) or StageConfig()

    @classmethod
    def from_settings(cls, settings: PipelineConfig) -> "OrchestratorConfig":
        return cls(timeout_seconds=settings.timeout_seconds, fail_fast=settings.fail_fast)


class PipelineOrchestrator:
    """
    Owns the stage list for one set of backends.

    The speech stage is only added when a speaker is given, and even then
    only runs for scans started with {"speak": True}.

        orchestrator = PipelineOrchestrator(
            text_extractor=TesseractOCRExtractor(),
            name_extractor=MedicationNameExtractor(model_chain),
            label_source=OpenFDAClient(),
            summarizer=LabelSummarizer(cloud_model),
            speaker=Pyttsx3Speaker(),
        )
        result = orchestrator.run(image, {"speak": True})
    """

    def __init__(
        self,
        text_extractor: TextExtractorPort,
        name_extractor,  # MedicationNameExtractor
        label_source: LabelSourcePort,
        summarizer,  # LabelSummarizer
        speaker: Optional[SpeechSynthesizerPort] = None,
        config: Optional[OrchestratorConfig] = None
    ):
        self.config = config or OrchestratorConfig()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

        self._components = {
            "text_extractor": text_extractor,
            "name_extractor": name_extractor,
            "label_source": label_source,
            "summarizer": summarizer,
        }
        self._speaker = speaker

        self.validate_configuration()
        self._stages = self._build_stages()
        self.logger.info(f"Pipeline ready: {' -> '.join(self.stage_names)}")

    def _build_stages(self) -> List[PipelineStageExecutor]:
        c = self._components
        plan = [
            (TextExtractionStage, c["text_extractor"]),
            (NameExtractionStage, c["name_extractor"]),
            (LabelFetchStage, c["label_source"]),
            (SummarizationStage, c["summarizer"]),
        ]
        if self._speaker is not None:
            plan.append((SpeechStage, self._speaker))

        return [
            stage_cls(component, self.config.get_stage_config(stage_cls.stage))
            for stage_cls, component in plan
        ]

    def validate_configuration(self) -> bool:
        """Raises PipelineConfigurationError naming every missing component."""
        missing = [name for name in REQUIRED_COMPONENTS if self._components.get(name) is None]
        if missing:
            raise PipelineConfigurationError(
                message=f"Pipeline is missing required components: {', '.join(missing)}",
                missing_components=missing
            )
        return True

    @property
    def stage_count(self) -> int:
        return len(self._stages)

    @property
    def stage_names(self) -> List[str]:
        return [s.name for s in self._stages]

    def _skip_rest(self, context: PipelineContext, plog: PipelineLogger, index: int, reason: str) -> None:
        for stage in self._stages[index:]:
            context.skip_stage(stage.stage)
            plog.stage_skipped(stage.name, reason)

    def run(self, image: ImageData, options: Optional[Dict[str, Any]] = None) -> ScanResult:
        """
        Scan one label photo.

        Options:
            speak: Read the summary aloud (needs a speaker)
            ocr: Passed to the text extractor, e.g. {"lang": "eng"}
        """
        deadline = time.monotonic() + self.config.timeout_seconds
        context = PipelineContext.create(image=image, options=options)
        plog = PipelineLogger(context.request_id)
        failed = 0

        for index, executor in enumerate(self._stages):
            if time.monotonic() > deadline:
                context.add_error(
                    stage=executor.stage,
                    error_type="PipelineTimeout",
                    message=f"Scan timed out after {self.config.timeout_seconds} seconds",
                    is_recoverable=False
                )

            if context.should_abort:
                self._skip_rest(context, plog, index, context.abort_reason or "aborted")
                break

            plog.stage_start(executor.name)
            ok = executor.run(context)
            plog.stage_end(executor.name, ok)

            if not ok:
                failed += 1
                if self.config.fail_fast:
                    self._skip_rest(context, plog, index + 1, "fail-fast")
                    break

        result = context.to_scan_result()
        self.logger.info(
            f"Scan {context.request_id[:8]} finished with {failed} failed stage(s) "
            f"in {result.total_processing_time_ms:.0f}ms: {result}"
        )
        return result

    def run_partial(
        self,
        image: ImageData,
        until_stage: PipelineStage,
        options: Optional[Dict[str, Any]] = None
    ) -> PipelineContext:
        """Run up to and including until_stage and return the live context."""
        context = PipelineContext.create(image=image, options=options)
        for executor in self._stages:
            if context.should_abort:
                break
            executor.run(context)
            if executor.stage == until_stage:
                break
        return context


class PipelineBuilder:
    """
    Fluent alternative to calling PipelineOrchestrator directly.

        pipeline = (
            PipelineBuilder()
            .with_text_extractor(ocr)
            .with_name_extractor(names)
            .with_label_source(openfda)
            .with_summarizer(summarizer)
            .build()
        )
    """

    def __init__(self):
        self._parts: Dict[str, Any] = dict.fromkeys(REQUIRED_COMPONENTS)
        self._parts.update(speaker=None, config=None)

    def _set(self, key: str, value: Any) -> "PipelineBuilder":
        self._parts[key] = value
        return self

    def with_text_extractor(self, extractor: TextExtractorPort) -> "PipelineBuilder":
        return self._set("text_extractor", extractor)

    def with_name_extractor(self, extractor) -> "PipelineBuilder":
        return self._set("name_extractor", extractor)

    def with_label_source(self, source: LabelSourcePort) -> "PipelineBuilder":
        return self._set("label_source", source)

    def with_summarizer(self, summarizer) -> "PipelineBuilder":
        return self._set("summarizer", summarizer)

    def with_speaker(self, speaker: SpeechSynthesizerPort) -> "PipelineBuilder":
        return self._set("speaker", speaker)

    def with_config(self, config: OrchestratorConfig) -> "PipelineBuilder":
        return self._set("config", config)

    def build(self) -> PipelineOrchestrator:
        return PipelineOrchestrator(**self._parts)
