"""
Pipeline Context

Mutable state of one label scan, handed from stage to stage.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional
import logging
import time
import uuid

from ...domain.entities.drug_label import DrugLabel
from ...domain.entities.scan_result import (
    PipelineError,
    PipelineStage,
    ScanResult,
    StageStatus,
)
from ...domain.entities.text_extraction import TextExtractionResult
from ...domain.messages import STATUS_DONE, STATUS_READY
from ...domain.value_objects.image_data import ImageData


logger = logging.getLogger(__name__)


@dataclass
class StageTiming:
    """Wall-clock timing of one stage, measured with perf_counter."""

    stage: PipelineStage
    started: float = 0.0
    elapsed_ms: float = 0.0

    def begin(self) -> None:
        self.started = time.perf_counter()

    def end(self) -> None:
        if self.started:
            self.elapsed_ms = (time.perf_counter() - self.started) * 1000


@dataclass
class PipelineContext:
    """
    What a scan knows so far.

    The text fields fill in order: recognized text, medication name, label
    paragraph, summary. When a backend fails its sentinel lands in the
    field it was meant to fill and also in summary, which is what the user
    is shown.

    A non-recoverable error sets should_abort; the orchestrator then skips
    every stage that has not run yet.
    """

    request_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    image: Optional[ImageData] = None
    options: Dict[str, Any] = field(default_factory=dict)

    text_result: Optional[TextExtractionResult] = None
    medication_name: str = ""
    label_text: str = ""
    label: Optional[DrugLabel] = None
    summary: str = ""
    spoken: bool = False

    status: str = STATUS_READY
    status_history: List[str] = field(default_factory=list)
    errors: List[PipelineError] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    started_at: datetime = field(default_factory=datetime.now)
    timings: Dict[PipelineStage, StageTiming] = field(default_factory=dict)
    skipped_stages: List[PipelineStage] = field(default_factory=list)

    should_abort: bool = False
    abort_reason: Optional[str] = None

    @classmethod
    def create(
        cls,
        image: Optional[ImageData],
        options: Optional[Dict[str, Any]] = None
    ) -> "PipelineContext":
        return cls(image=image, options=dict(options or {}))

    @property
    def extracted_text(self) -> str:
        return self.text_result.full_text if self.text_result else ""

    @property
    def has_critical_errors(self) -> bool:
        return any(not e.is_recoverable for e in self.errors)

    @property
    def elapsed_ms(self) -> float:
        return sum(t.elapsed_ms for t in self.timings.values())

    def add_error(
        self,
        stage: PipelineStage,
        error_type: str,
        message: str,
        is_recoverable: bool = True,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        self.errors.append(PipelineError(
            stage=stage,
            error_type=error_type,
            message=message,
            is_recoverable=is_recoverable,
            details=details,
        ))
        if not is_recoverable and not self.should_abort:
            self.should_abort = True
            self.abort_reason = message

    def add_warning(self, warning: str) -> None:
        if warning not in self.warnings:
            self.warnings.append(warning)

    def set_status(self, message: str) -> None:
        self.status = message
        self.status_history.append(message)
        logger.debug(f"[{self.request_id[:8]}] {message}")

    def start_stage(self, stage: PipelineStage) -> None:
        timing = StageTiming(stage)
        timing.begin()
        self.timings[stage] = timing

    def finish_stage(self, stage: PipelineStage) -> None:
        timing = self.timings.get(stage)
        if timing is not None:
            timing.end()

    def skip_stage(self, stage: PipelineStage) -> None:
        if stage not in self.skipped_stages and stage not in self.timings:
            self.skipped_stages.append(stage)

    def _stage_status(self, stage: PipelineStage) -> StageStatus:
        failed = any(e.stage == stage for e in self.errors)
        return StageStatus.FAILED if failed else StageStatus.COMPLETED

    def to_scan_result(self) -> ScanResult:
        """
        Freeze the context into a ScanResult.

        The status is "Done." only when no stage recorded an error. A
        critical error puts its own message there; a recoverable one shows
        as "Error: <message>".
        """
        if self.has_critical_errors:
            status = self.abort_reason or self.status
        elif self.errors:
            status = f"Error: {self.errors[0].message}"
        else:
            status = STATUS_DONE

        result = ScanResult(
            recognized_text=self.extracted_text,
            medication_name=self.medication_name,
            label_text=self.label_text,
            label=self.label,
            summary=self.summary,
            spoken=self.spoken,
            status=status,
            text_result=self.text_result,
            warnings=list(self.warnings),
            errors=list(self.errors),
            request_id=self.request_id,
            created_at=self.started_at,
            total_processing_time_ms=self.elapsed_ms,
        )

        for stage, timing in self.timings.items():
            result.set_stage_status(stage, self._stage_status(stage), timing.elapsed_ms)
        for stage in self.skipped_stages:
            result.set_stage_status(stage, StageStatus.SKIPPED)

        return result
