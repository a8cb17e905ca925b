"""Core infrastructure shared by the corrector, configuration and app layers."""
from __future__ import annotations

from .exceptions import (
    CorrectionException,
    CorrectionError,
    NormalizationError,
    VocabularyError,
    ValidationError,
    ConfigurationError,
)
from .result import Result, Success, Failure

__all__ = [
    "CorrectionException",
    "CorrectionError",
    "NormalizationError",
    "VocabularyError",
    "ValidationError",
    "ConfigurationError",
    "Result",
    "Success",
    "Failure",
]
