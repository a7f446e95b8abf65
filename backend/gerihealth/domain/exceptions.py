"""
Domain Exceptions

One family per step of a scan, plus the record and input errors raised
by the profile and drug services.

is_recoverable decides whether a scan goes on after the error. Anything
that leaves a later step with nothing to work on is not recoverable.
"""

from typing import Any, Dict, Optional


class DomainException(Exception):
    """
    Base of every error the assistant raises on purpose.

    Attributes:
        message: Text shown to the user or returned by the API
        details: Extra fields for logs and API error bodies
        is_recoverable: Whether a scan may continue after this error
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        is_recoverable: bool = True
    ):
        super().__init__(message)
        self.message = message
        self.details = dict(details or {})
        self.is_recoverable = is_recoverable

    def __str__(self) -> str:
        return f"{self.__class__.__name__}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": dict(self.details),
            "is_recoverable": self.is_recoverable,
        }

    def _note(self, key: str, value: Any) -> None:
        if value is not None:
            self.details[key] = value


# OCR

class TextExtractionError(DomainException):
    pass


class OCREngineError(TextExtractionError):
    """The OCR engine itself failed; there is no label text to go on."""

    def __init__(self, message: str = "OCR engine error", engine_name: Optional[str] = None, **kwargs):
        kwargs.setdefault("is_recoverable", False)
        super().__init__(message, **kwargs)
        self._note("engine", engine_name)


class NoTextFoundError(TextExtractionError):
    """The photo held nothing OCR could read; the scan stops here."""

    def __init__(self, message: str = "No text found in the image.", **kwargs):
        kwargs.setdefault("is_recoverable", False)
        super().__init__(message, **kwargs)


# Language models

class LanguageModelError(DomainException):
    pass


class LLMConnectionError(LanguageModelError):
    """A model backend could not be reached or refused the request."""

    def __init__(
        self,
        message: str = "Failed to connect to language model",
        provider: Optional[str] = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        self._note("provider", provider)


class EmptyModelResponseError(LanguageModelError):
    def __init__(self, provider: str, message: Optional[str] = None, **kwargs):
        super().__init__(message or f"{provider} returned empty content", **kwargs)
        self._note("provider", provider)


# openFDA

class LabelFetchError(DomainException):
    pass


class LabelResponseError(LabelFetchError):
    """Transport failure, non-200 status or a body that does not decode."""

    def __init__(
        self,
        message: str = "Invalid response from openFDA",
        status_code: Optional[int] = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        self._note("status_code", status_code)


class LabelNotFoundError(LabelFetchError):
    def __init__(self, drug_name: str, message: Optional[str] = None, **kwargs):
        super().__init__(message or f"No drug label found for: {drug_name}", **kwargs)
        self._note("drug_name", drug_name)


# Outer services

class SpeechError(DomainException):
    """Text-to-speech engine failed or was given nothing to say."""


class GeocodingError(DomainException):
    def __init__(self, message: str = "Address lookup failed", status: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self._note("status", status)


class PipelineConfigurationError(DomainException):
    def __init__(
        self,
        message: str = "Pipeline is not properly configured",
        missing_components: Optional[list] = None,
        **kwargs
    ):
        super().__init__(message, is_recoverable=False, **kwargs)
        self._note("missing_components", missing_components or None)


# Records and input

class RecordNotFoundError(DomainException):
    """A stored profile, photo or drug does not exist."""

    def __init__(self, record_type: str, record_id: Any, **kwargs):
        super().__init__(f"{record_type} {record_id} not found", is_recoverable=False, **kwargs)
        self.details.update(record_type=record_type, record_id=record_id)


class ValidationError(DomainException):
    pass


class InvalidImageError(ValidationError):
    def __init__(self, message: str = "Could not process the image.", **kwargs):
        super().__init__(message, is_recoverable=False, **kwargs)


class InvalidInputError(ValidationError):
    """
    A field failed validation.

    details carries the field name and the reason, which the API returns
    as-is in its 422 body.
    """

    def __init__(self, field: str, reason: str, **kwargs):
        super().__init__(f"Invalid input for '{field}': {reason}", is_recoverable=False, **kwargs)
        self.details.update(field=field, reason=reason)


class InvalidProfileError(InvalidInputError):
    pass


class InvalidScheduleError(InvalidInputError):
    """A weekday or dose time in a schedule could not be understood."""
