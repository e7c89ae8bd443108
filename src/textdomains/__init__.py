"""textdomains - hierarchical translation resolution for language directories.

Resolves per-locale, per-text-domain translation tables from ini and YAML
language files spread over several directories, with file inheritance,
locale fallback, aliases, and wildcard matching of hierarchical facet keys.

Public API:
    TextDomainResolver - Resolve (locale, text domain) to a merged TextDomain
    Translator - Request-scoped translation facade for one locale
    ResolverConfig / SearchDirectory / CacheConfig - Configuration
    TextDomain - Immutable translation mapping
    translate_hierarchical - Wildcard matching for hierarchical facet keys

Exceptions:
    TranslationError - Base exception class
    TranslationFileNotFoundError - Missing or unreadable source file
    TranslationParseError - Malformed source file
    CircularExtensionError / CircularFallbackError / CircularAliasError - Cycles
    NoTranslationFoundError - Nothing matched (strict mode only)

Submodules:
    textdomains.loading - File loaders and the TextDomain data model
    textdomains.resolution - Inheritance, locale fallback, probing, aliases
    textdomains.translation - Translator facade and key utilities
    textdomains.analysis - Up-front audit of inheritance graphs
    textdomains.diagnostics - Error types, codes and formatting
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

from .config import CacheConfig, ResolverConfig, SearchDirectory
from .diagnostics import (
    CircularAliasError,
    CircularExtensionError,
    CircularFallbackError,
    DepthLimitExceededError,
    NoTranslationFoundError,
    TranslationError,
    TranslationFileNotFoundError,
    TranslationParseError,
)
from .enums import ResolutionStatus, SourceFormat
from .loading import TextDomain
from .resolution import FallbackInfo, ResolutionResult, TextDomainResolver
from .translation import TranslatableString, Translator, translate_hierarchical

# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
try:
    __version__ = _get_version("textdomains")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Resolution
    "TextDomainResolver",
    "ResolutionResult",
    "ResolutionStatus",
    "FallbackInfo",
    "TextDomain",
    "SourceFormat",
    # Translation
    "Translator",
    "TranslatableString",
    "translate_hierarchical",
    # Configuration
    "CacheConfig",
    "ResolverConfig",
    "SearchDirectory",
    # Errors
    "TranslationError",
    "TranslationFileNotFoundError",
    "TranslationParseError",
    "CircularExtensionError",
    "CircularFallbackError",
    "CircularAliasError",
    "DepthLimitExceededError",
    "NoTranslationFoundError",
    # Metadata
    "__version__",
]
