"""
Domain Entities

Results and records produced by the medication assistant.
"""

from .text_extraction import TextLine, TextExtractionResult
from .drug_label import APIResponse, Meta, MetaResults, DrugLabel, OpenFDA
from .scan_result import (
    ScanResult,
    PipelineStage,
    PipelineError,
    StageStatus,
    StageResult,
)
from .schedule import DaySchedule, Place

__all__ = [
    "TextLine",
    "TextExtractionResult",
    "APIResponse",
    "Meta",
    "MetaResults",
    "DrugLabel",
    "OpenFDA",
    "ScanResult",
    "PipelineStage",
    "PipelineError",
    "StageStatus",
    "StageResult",
    "DaySchedule",
    "Place",
]
