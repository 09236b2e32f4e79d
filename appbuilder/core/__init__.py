"""
Core module - configuration, logging, exceptions and shared result types.
"""
from .config import settings, Settings, LLMSettings, JobSettings, DatabaseSettings
from .exceptions import (
    AppBuilderError,
    InvalidInputError,
    LLMError,
    ParseError,
    SpecValidationError,
    PersistenceError,
    JobNotFoundError,
    DuplicateJobError,
    InvalidTransitionError,
    PollTimeoutError,
)
from .extraction_result import (
    ExtractionStatus,
    ExtractionResult,
    ExtractionReport,
    SpecSource,
    extraction_ok,
    extraction_err,
)

__all__ = [
    "settings",
    "Settings",
    "LLMSettings",
    "JobSettings",
    "DatabaseSettings",
    "AppBuilderError",
    "InvalidInputError",
    "LLMError",
    "ParseError",
    "SpecValidationError",
    "PersistenceError",
    "JobNotFoundError",
    "DuplicateJobError",
    "InvalidTransitionError",
    "PollTimeoutError",
    "ExtractionStatus",
    "ExtractionResult",
    "ExtractionReport",
    "SpecSource",
    "extraction_ok",
    "extraction_err",
]
