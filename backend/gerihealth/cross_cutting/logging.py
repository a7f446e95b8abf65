"""
Logging Configuration

Everything logs under the "gerihealth" logger; setup_logging attaches the
handlers once at startup.
"""

from typing import Dict, Optional, Union
import logging
import sys
import time


ROOT_LOGGER_NAME = "gerihealth"

DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def _level(value: Union[int, str]) -> int:
    if isinstance(value, int):
        return value
    resolved = logging.getLevelName(str(value).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None,
    format_string: Optional[str] = None
) -> logging.Logger:
    """
    Send package logs to stdout, and to log_file when given.

    Calling it again replaces the handlers, so tests and reloads do not
    duplicate output. Unknown level names fall back to INFO.
    """
    level = _level(level)
    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    root = logging.getLogger(ROOT_LOGGER_NAME)
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)
    return root


def get_logger(name: str) -> logging.Logger:
    """get_logger("api") -> the "gerihealth.api" logger."""
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


class PipelineLogger(logging.LoggerAdapter):
    """
    Stage-by-stage log lines for one scan, prefixed with its request id.

        plog = PipelineLogger(context.request_id)
        plog.stage_start("OCR")
        ...
        plog.stage_end("OCR", success=True)
    """

    def __init__(self, request_id: str):
        super().__init__(get_logger("pipeline"), {"request_id": request_id})
        self.request_id = request_id
        self._started: Dict[str, float] = {}

    def process(self, msg, kwargs):
        return f"[{self.request_id[:8]}] {msg}", kwargs

    def stage_start(self, stage_name: str) -> None:
        self._started[stage_name] = time.perf_counter()
        self.debug(f"{stage_name} started")

    def stage_end(self, stage_name: str, success: bool = True) -> float:
        """Log the outcome and return the stage time in ms (0 if never started)."""
        started = self._started.pop(stage_name, None)
        elapsed_ms = (time.perf_counter() - started) * 1000 if started is not None else 0.0
        self.info(f"{stage_name} {'ok' if success else 'failed'} ({elapsed_ms:.1f}ms)")
        return elapsed_ms

    def stage_skipped(self, stage_name: str, reason: str) -> None:
        self.info(f"{stage_name} skipped: {reason}")
