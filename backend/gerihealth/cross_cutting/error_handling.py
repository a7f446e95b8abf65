"""
Error Handling

Helpers for the few places where a failure is reported instead of raised:
backend health checks, the read-aloud step and shutdown cleanup.
"""

from typing import Any, Callable, Dict, Optional, Tuple, Type, TypeVar
from functools import wraps
import logging

from ..domain.exceptions import DomainException


logger = logging.getLogger(__name__)

T = TypeVar("T")

ExceptionTypes = Tuple[Type[BaseException], ...]


def error_payload(exc: BaseException) -> Dict[str, Any]:
    """
    JSON-ready description of an exception.

    Domain exceptions keep their message and details; anything else is
    reported by class name and str() and counts as not recoverable.
    """
    if isinstance(exc, DomainException):
        return exc.to_dict()
    return {
        "error": exc.__class__.__name__,
        "message": str(exc),
        "details": {},
        "is_recoverable": False,
    }


def _log_failure(log: logging.Logger, level: int, where: str, exc: BaseException) -> None:
    payload = error_payload(exc)
    log.log(level, f"{where}: {payload['error']}: {payload['message']}")
    if payload["details"]:
        log.debug(f"{where} details: {payload['details']}")
    if not isinstance(exc, DomainException):
        log.debug(f"{where} traceback", exc_info=exc)


def handle_exception(
    default_return: T,
    log_level: int = logging.ERROR,
    reraise: bool = False,
    catch: ExceptionTypes = (Exception,)
) -> Callable:
    """
    Decorator returning default_return when the call raises one of catch.

    Usage:
        @handle_exception(default_return=False, log_level=logging.WARNING)
        def ollama_is_up() -> bool:
            ...
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except catch as e:
                _log_failure(logger, log_level, func.__name__, e)
                if reraise:
                    raise
                return default_return
        return wrapper
    return decorator


class ErrorHandler:
    """
    Context manager that records a failure and swallows the listed types.

    Anything not listed in suppress is logged and re-raised.

    Usage:
        with ErrorHandler(logger, context="speech", suppress=(SpeechError,)) as handler:
            speaker.speak(summary)
        if handler.has_error:
            context.add_warning("Could not read the summary aloud.")
    """

    def __init__(
        self,
        logger: logging.Logger,
        context: str = "",
        suppress: ExceptionTypes = (),
        log_level: int = logging.WARNING
    ):
        self.logger = logger
        self.context = context
        self.suppress = suppress
        self.log_level = log_level
        self.error: Optional[BaseException] = None

    def __enter__(self) -> "ErrorHandler":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if exc_val is None:
            return False

        self.error = exc_val
        _log_failure(self.logger, self.log_level, self.context or "error", exc_val)
        return isinstance(exc_val, self.suppress)

    @property
    def has_error(self) -> bool:
        return self.error is not None


def safe_call(
    func: Callable,
    *args,
    default: Any = None,
    logger: Optional[logging.Logger] = None,
    **kwargs
) -> Any:
    """Call func and return default, with a warning, if it raises."""
    try:
        return func(*args, **kwargs)
    except Exception as e:
        where = getattr(func, "__name__", repr(func))
        _log_failure(logger or logging.getLogger(__name__), logging.WARNING, where, e)
        return default
