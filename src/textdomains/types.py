"""Type aliases for the translation domain.

Provides semantic type aliases used throughout the package and by user code
when annotating resolver and translator call sites.

Python 3.13+.
"""

from collections.abc import Callable
from pathlib import Path

__all__ = [
    "LocaleCode",
    "LookupFunction",
    "ResolutionChain",
    "TextDomainName",
    "TranslationKey",
]

type LocaleCode = str
"""Hyphen-delimited locale code (e.g., 'en', 'en-gb', 'zh-Hant-TW')."""

type TextDomainName = str
"""Name of a text domain (e.g., 'default', 'CallNumberFirst')."""

type TranslationKey = str
"""Key inside a text domain (e.g., 'Search', '0/Book/Fiction/')."""

type ResolutionChain = tuple[Path, ...]
"""Resolved source files entered so far during one resolution (outermost first)."""

type LookupFunction = Callable[[str], str | None]
"""Callback returning the stored translation for a key, or None if absent."""
