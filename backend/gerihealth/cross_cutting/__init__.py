"""
Cross-Cutting Concerns

Utilities that span across multiple layers.
"""

from .logging import setup_logging, get_logger, PipelineLogger
from .validation import (
    validate_image,
    validate_image_file,
    validate_text,
    ensure_valid_image,
    require_text,
)
from .error_handling import error_payload, handle_exception, ErrorHandler, safe_call

__all__ = [
    "setup_logging",
    "get_logger",
    "PipelineLogger",
    "validate_image",
    "validate_image_file",
    "validate_text",
    "ensure_valid_image",
    "require_text",
    "error_payload",
    "handle_exception",
    "ErrorHandler",
    "safe_call",
]
