"""Text domain resolution package.

Submodules:
    extension    - ExtensionResolver: @extends / @parent_ini inheritance
    locales      - base locales, fallback-map chains, negotiation
    prober       - exact-locale file discovery per search directory
    aliases      - alias files and alias-to-alias resolution
    cache        - thread-safe LRU cache with mtime validation
    orchestrator - TextDomainResolver composing all of the above

Python 3.13+.
"""

from .aliases import AliasedDomain, AliasResolver, AliasTarget, load_alias_files
from .cache import ResolutionCache, fingerprint
from .extension import ExtensionResolver, ExtensionResult
from .locales import (
    base_locales_of,
    fallback_chain_of,
    negotiate_locale,
    parse_accept_language,
    validate_locale,
)
from .orchestrator import FallbackInfo, ResolutionResult, TextDomainResolver
from .prober import (
    available_locales,
    domain_directory,
    probe,
    probe_directory,
    validate_text_domain,
)

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Orchestration
    "TextDomainResolver",
    "ResolutionResult",
    "FallbackInfo",
    # Inheritance
    "ExtensionResolver",
    "ExtensionResult",
    # Locales
    "base_locales_of",
    "fallback_chain_of",
    "negotiate_locale",
    "parse_accept_language",
    "validate_locale",
    # Probing
    "available_locales",
    "domain_directory",
    "probe",
    "probe_directory",
    "validate_text_domain",
    # Aliases
    "AliasResolver",
    "AliasTarget",
    "AliasedDomain",
    "load_alias_files",
    # Cache
    "ResolutionCache",
    "fingerprint",
]
