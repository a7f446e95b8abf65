"""
Scan Result Entity

What a label scan hands back to the caller.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from .drug_label import DrugLabel
from .text_extraction import TextExtractionResult
from ..messages import DISCLAIMER, is_sentinel


class PipelineStage(Enum):
    TEXT_EXTRACTION = "text_extraction"
    NAME_EXTRACTION = "name_extraction"
    LABEL_FETCH = "label_fetch"
    SUMMARIZATION = "summarization"
    SPEECH = "speech"


class StageStatus(Enum):
    COMPLETED = "completed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class StageResult:
    stage: PipelineStage
    status: StageStatus
    duration_ms: float = 0.0


@dataclass
class PipelineError:
    """
    One failure recorded during a scan.

    A non-recoverable error is what stops the remaining stages.
    """

    stage: PipelineStage
    error_type: str
    message: str
    details: Optional[Dict[str, Any]] = None
    is_recoverable: bool = True
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"[{self.stage.value}] {self.error_type}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stage": self.stage.value,
            "error_type": self.error_type,
            "message": self.message,
            "details": self.details or {},
            "is_recoverable": self.is_recoverable,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class ScanResult:
    """
    Everything produced by one label scan (or name lookup).

    Attributes:
        recognized_text: Raw OCR text, lines joined with newlines
        medication_name: Extracted name, or the model error sentinel
        label_text: Label paragraph from openFDA, or the fetch sentinel
        label: The first matching label, when one was found
        summary: Elderly-friendly summary, or the sentinel of the failing step
        spoken: Whether the summary was read aloud
        status: "Done.", or the message of the first error the scan recorded
    """

    recognized_text: str = ""
    medication_name: str = ""
    label_text: str = ""
    label: Optional[DrugLabel] = None
    summary: str = ""
    spoken: bool = False
    status: str = ""
    disclaimer: str = DISCLAIMER

    text_result: Optional[TextExtractionResult] = None
    warnings: List[str] = field(default_factory=list)
    errors: List[PipelineError] = field(default_factory=list)
    stage_statuses: Dict[PipelineStage, StageResult] = field(default_factory=dict)

    request_id: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.now)
    total_processing_time_ms: float = 0.0

    @property
    def has_critical_errors(self) -> bool:
        return any(not e.is_recoverable for e in self.errors)

    @property
    def is_successful(self) -> bool:
        """A real summary was produced and nothing stopped the scan."""
        return bool(self.summary) and not is_sentinel(self.summary) and not self.has_critical_errors

    def set_stage_status(
        self,
        stage: PipelineStage,
        status: StageStatus,
        duration_ms: float = 0.0
    ) -> None:
        self.stage_statuses[stage] = StageResult(stage, status, duration_ms)

    def stage_report(self) -> Dict[str, str]:
        """Stage name to status, in pipeline order."""
        return {
            stage.value: self.stage_statuses[stage].status.value
            for stage in PipelineStage
            if stage in self.stage_statuses
        }

    def to_response(self) -> Dict[str, Any]:
        """Response body for API clients."""
        label = self.label
        return {
            "success": self.is_successful,
            "request_id": self.request_id,
            "recognized_text": self.recognized_text,
            "medication_name": self.medication_name,
            "label_text": self.label_text,
            "brand_name": label.brand_name if label else None,
            "generic_name": label.generic_name if label else None,
            "manufacturer": label.manufacturer if label else None,
            "summary": self.summary,
            "spoken": self.spoken,
            "status": self.status,
            "warnings": list(self.warnings),
            "errors": [e.to_dict() for e in self.errors],
            "stages": self.stage_report(),
            "disclaimer": self.disclaimer,
            "processing_time_ms": round(self.total_processing_time_ms, 2),
        }

    def __str__(self) -> str:
        outcome = "ok" if self.is_successful else (self.summary or self.status or "incomplete")
        return f"ScanResult({self.medication_name or 'unknown'}: {outcome})"
