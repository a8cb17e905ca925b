"""Custom exception hierarchy for the application."""
from __future__ import annotations


class CorrectionException(Exception):
    """Base exception for all transcript correction errors."""
    pass


class CorrectionError(CorrectionException):
    """Raised when vocabulary correction of a transcript fails."""
    pass


class NormalizationError(CorrectionException):
    """Raised when spoken-number normalization of a transcript fails."""
    pass


class VocabularyError(CorrectionException):
    """Raised when a vocabulary source cannot be read."""
    pass


class ValidationError(CorrectionException):
    """Raised when vocabulary entries fail validation."""
    pass


class ConfigurationError(CorrectionException):
    """Raised when configuration is invalid or missing."""
    pass
