"""Translation facade and key utilities.

Submodules:
    hierarchy  - wildcard matching for hierarchical facet keys
    keys       - text domain extraction and key sanitizing
    translator - Translator, the request-scoped facade

Python 3.13+.
"""

from .hierarchy import hierarchical_candidates, is_hierarchical_key, translate_hierarchical
from .keys import TranslatableString, extract_text_domain, sanitize_translation_key
from .translator import Translator

__all__ = [
    "TranslatableString",
    "Translator",
    "extract_text_domain",
    "hierarchical_candidates",
    "is_hierarchical_key",
    "sanitize_translation_key",
    "translate_hierarchical",
]
