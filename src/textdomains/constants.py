"""Shared constants for textdomains.

Centralized values used across the loading, resolution and translation
packages. Placing them here avoids circular imports and gives one place to
look up reserved keys and limits.

Constants are grouped by domain:
- Text domains: default domain name, reserved locales
- File directives: keys that declare inheritance and never reach output
- Markers: distinguished values produced by the loaders
- Depth limits: recursion protection for extends chains

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Text domains
    "DEFAULT_DOMAIN",
    "DEBUG_LOCALE",
    "DOMAIN_SEPARATOR",
    "FALLBACK_WILDCARD",
    # File directives
    "INI_EXTENDS_KEYS",
    "YAML_EXTENDS_KEYS",
    "DEFAULT_ALIAS_FILE",
    # Markers
    "NON_JOINING_BLANK",
    # Depth limits
    "MAX_EXTENDS_DEPTH",
    "MAX_ALIAS_DEPTH",
    # Cache limits
    "DEFAULT_CACHE_SIZE",
]

# ============================================================================
# TEXT DOMAINS
# ============================================================================

# Name of the text domain whose files live directly under a search directory.
DEFAULT_DOMAIN: str = "default"

# Pseudo-locale that renders keys instead of translations. Never touches disk.
DEBUG_LOCALE: str = "debug"

# Separator between text domain and key in "domain::key" targets.
DOMAIN_SEPARATOR: str = "::"

# Fallback map entry applied to any locale without an explicit entry.
FALLBACK_WILDCARD: str = "*"

# ============================================================================
# FILE DIRECTIVES
# ============================================================================

# Directive keys naming a parent file. Stripped from the loaded data.
INI_EXTENDS_KEYS: tuple[str, ...] = ("@parent_ini", "@extends")
YAML_EXTENDS_KEYS: tuple[str, ...] = ("@extends", "@parent_yaml")

# Alias definitions looked up beside each probed translation file.
DEFAULT_ALIAS_FILE: str = "aliases.ini"

# ============================================================================
# MARKERS
# ============================================================================

# Zero width non-joiner. Stands in for an explicitly blank translation so that
# comparison tools can tell "translated as blank" apart from "missing".
NON_JOINING_BLANK: str = "\u200c"

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Maximum length of an extends chain. Real installations use 2-4 levels
# (core -> theme -> local override); anything near this is malformed.
MAX_EXTENDS_DEPTH: int = 64

# Maximum number of alias-to-alias hops before giving up.
MAX_ALIAS_DEPTH: int = 32

# ============================================================================
# CACHE LIMITS
# ============================================================================

# Default number of memoized (locale, text domain) resolutions.
DEFAULT_CACHE_SIZE: int = 128
