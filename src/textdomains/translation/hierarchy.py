"""Wildcard matching for hierarchical facet keys.

Hierarchical facet values are slash-delimited paths prefixed with their
depth, e.g. ``"1/Book/Fiction/"``. Language files usually translate only a
few of the thousands of possible paths, using ``*`` for the levels in
between:

    0/*/Mystery/ = "Mystery (any format)"
    0/Book/*/Mystery/ = "Mystery books"

The matcher never edits the lookup source; it only builds candidate keys
and asks the lookup for them.

Python 3.13+.
"""

from __future__ import annotations

from textdomains.types import LookupFunction

__all__ = ["hierarchical_candidates", "is_hierarchical_key", "translate_hierarchical"]

_SEPARATOR = "/"
_WILDCARD = "*"


def is_hierarchical_key(key: str) -> bool:
    """Check if ``key`` is a depth-prefixed path ending in a slash.

    Requires more than three parts after splitting on ``/``, a numeric
    first part, and an empty last part.

    Example:
        >>> is_hierarchical_key("0/Book/Fiction/")
        True
        >>> is_hierarchical_key("a/b/c")
        False
    """
    parts = key.split(_SEPARATOR)
    return len(parts) > 3 and parts[0].isdecimal() and parts[-1] == ""


def hierarchical_candidates(key: str) -> list[str]:
    """Wildcard forms of ``key`` to try, most specific first.

    Returns an empty list for keys that are not hierarchical.

    Example:
        >>> hierarchical_candidates("0/Book/Fiction/Mystery/")
        ['0/Book/*/Mystery/', '0/*/Mystery/']
        >>> hierarchical_candidates("0/Book/Fiction/")
        ['0/*/Fiction/']
    """
    if not is_hierarchical_key(key):
        return []

    parts = key.split(_SEPARATOR)
    leaf = parts[-2]
    candidates: list[str] = []
    if len(parts) > 4:
        candidates.append(f"{parts[0]}/{parts[1]}/{_WILDCARD}/{leaf}/")
    candidates.append(f"{parts[0]}/{_WILDCARD}/{leaf}/")
    return candidates


def translate_hierarchical(key: str, lookup: LookupFunction) -> str | None:
    """Translate ``key`` through its wildcard forms.

    A candidate counts only when the lookup returns something other than
    None and other than the candidate itself (lookups that echo missing
    keys back are treated as misses).

    Args:
        key: Hierarchical key, e.g. "0/Book/Fiction/Mystery/"
        lookup: Returns the translation for a key, or None

    Returns:
        First real translation, or None. Non-hierarchical keys return None
        without calling lookup.

    Example:
        >>> translate_hierarchical("0/Book/Fiction/", {"0/*/Fiction/": "Fiction"}.get)
        'Fiction'
    """
    for candidate in hierarchical_candidates(key):
        translation = lookup(candidate)
        if translation is not None and translation != candidate:
            return translation
    return None
