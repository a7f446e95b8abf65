"""
Pipeline Module

Contains pipeline orchestration, context management, and stage definitions.
"""

from .orchestrator import PipelineOrchestrator, PipelineBuilder, OrchestratorConfig
from .context import PipelineContext
from .stages import PipelineStageExecutor, StageConfig

__all__ = [
    "PipelineOrchestrator",
    "PipelineBuilder",
    "OrchestratorConfig",
    "PipelineContext",
    "PipelineStageExecutor",
    "StageConfig",
]
