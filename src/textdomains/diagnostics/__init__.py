"""Diagnostic system for textdomains errors.

Provides structured error diagnostics with codes, hints, file locations and
the offending chain for cycle errors.

Python 3.13+.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    CircularAliasError,
    CircularExtensionError,
    CircularFallbackError,
    CircularReferenceError,
    DepthLimitExceededError,
    NoTranslationFoundError,
    TranslationError,
    TranslationFileNotFoundError,
    TranslationParseError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "CircularAliasError",
    "CircularExtensionError",
    "CircularFallbackError",
    "CircularReferenceError",
    "DepthLimitExceededError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "NoTranslationFoundError",
    "OutputFormat",
    "TranslationError",
    "TranslationFileNotFoundError",
    "TranslationParseError",
]
