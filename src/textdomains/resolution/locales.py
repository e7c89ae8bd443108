"""Locale fallback chains and negotiation.

Locale codes here are hyphen-delimited (``zh-Hant-TW``), the form used for
language file names. Two independent sources of fallback exist:

    base_locales_of     - structural: strip one trailing segment at a time
    fallback_chain_of   - configured: follow an explicit locale -> locale map

Both are lazy generators; the orchestrator decides how to combine them.

Python 3.13+.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Generator, Iterable, Mapping, Sequence

from textdomains.constants import FALLBACK_WILDCARD
from textdomains.diagnostics import CircularFallbackError, ErrorTemplate
from textdomains.types import LocaleCode

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Validation
    "validate_locale",
    # Fallback
    "base_locales_of",
    "fallback_chain_of",
    # Negotiation
    "negotiate_locale",
    "parse_accept_language",
]

logger = logging.getLogger(__name__)

_SEGMENT = re.compile(r"^[A-Za-z0-9_]+$")
_QUALITY = re.compile(r"^\s*q\s*=\s*([0-9.]+)\s*$", re.IGNORECASE)


def validate_locale(locale: str) -> LocaleCode:
    """Check that ``locale`` is well formed and safe to use in a file name.

    Args:
        locale: Candidate locale code

    Returns:
        The locale, unchanged

    Raises:
        ValueError: If the code is empty, has empty segments, or contains
            path separators or other characters outside [A-Za-z0-9_-]

    Example:
        >>> validate_locale("pt-br")
        'pt-br'
        >>> validate_locale("../etc/passwd")
        Traceback (most recent call last):
        ValueError: Invalid locale code: '../etc/passwd'
    """
    if not isinstance(locale, str) or not locale:
        msg = f"Invalid locale code: {locale!r}"
        raise ValueError(msg)
    if not all(_SEGMENT.match(segment) for segment in locale.split("-")):
        msg = f"Invalid locale code: {locale!r}"
        raise ValueError(msg)
    return locale


def base_locales_of(locale: LocaleCode) -> Generator[LocaleCode]:
    """Yield less specific forms of ``locale``, most specific first.

    The locale itself is not yielded.

    Example:
        >>> list(base_locales_of("zh-Hant-TW"))
        ['zh-Hant', 'zh']
        >>> list(base_locales_of("en"))
        []
    """
    parts = locale.split("-")
    for end in range(len(parts) - 1, 0, -1):
        yield "-".join(parts[:end])


def fallback_chain_of(
    locale: LocaleCode,
    fallback_map: Mapping[str, str],
    wildcard_key: str = FALLBACK_WILDCARD,
) -> Generator[LocaleCode]:
    """Yield the configured fallback locales of ``locale``, in order.

    An explicit entry for the current locale wins; otherwise the wildcard
    entry applies. The chain ends when there is no next locale or the
    wildcard points back at the current one.

    Args:
        locale: Starting locale (not yielded)
        fallback_map: Locale -> next locale
        wildcard_key: Key of the catch-all entry

    Raises:
        CircularFallbackError: If the chain revisits a locale

    Example:
        >>> list(fallback_chain_of("se", {"se": "fi", "*": "en"}))
        ['fi', 'en']
    """
    seen: list[LocaleCode] = [locale]
    current = locale
    while True:
        following = fallback_map.get(current)
        if following is None:
            following = fallback_map.get(wildcard_key)
            if following is None or following == current:
                return
        if following in seen:
            cycle = (*seen, following)
            raise CircularFallbackError(ErrorTemplate.circular_fallback(cycle), chain=cycle)
        seen.append(following)
        yield following
        current = following


def parse_accept_language(header: str) -> list[LocaleCode]:
    """Turn an Accept-Language header into locale codes, best first.

    Entries with ``q=0``, the ``*`` range, and malformed tags are dropped.
    Equal qualities keep header order.

    Example:
        >>> parse_accept_language("fi-FI,fi;q=0.9,en;q=0.8,*;q=0.1")
        ['fi-FI', 'fi', 'en']
    """
    weighted: list[tuple[float, int, str]] = []
    for position, entry in enumerate(header.split(",")):
        tag, *params = (piece.strip() for piece in entry.split(";"))
        if not tag or tag == "*":
            continue
        quality = 1.0
        for param in params:
            match = _QUALITY.match(param)
            if match is None:
                continue
            try:
                quality = float(match.group(1))
            except ValueError:
                quality = 0.0
        if quality <= 0:
            continue
        try:
            validate_locale(tag)
        except ValueError:
            logger.debug("Ignoring malformed Accept-Language tag %r", tag)
            continue
        weighted.append((-quality, position, tag))
    return [tag for _, _, tag in sorted(weighted)]


def negotiate_locale(
    preferred: Iterable[LocaleCode], available: Sequence[LocaleCode]
) -> LocaleCode | None:
    """Pick the best available locale for a user's preference list.

    Uses Babel's negotiation (case-insensitive, CLDR alias aware, one level of
    region stripping), then falls back to full base-locale matching so
    ``zh-Hant-TW`` can still land on ``zh-Hant``.

    Args:
        preferred: Locales in preference order
        available: Locales the installation ships

    Returns:
        The matching entry of ``available`` (its spelling), or None

    Example:
        >>> negotiate_locale(["de-AT", "en"], ["en", "de"])
        'de'
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel.core import LOCALE_ALIASES  # noqa: PLC0415
    from babel.core import negotiate_locale as babel_negotiate  # noqa: PLC0415

    preferred = [locale for locale in preferred if locale]
    by_lower = {locale.lower(): locale for locale in available if locale}
    if not preferred or not by_lower:
        return None

    match = babel_negotiate(preferred, list(by_lower.values()), sep="-", aliases=LOCALE_ALIASES)
    if match is not None and match.lower() in by_lower:
        return by_lower[match.lower()]

    for locale in preferred:
        for base in base_locales_of(locale):
            if base.lower() in by_lower:
                return by_lower[base.lower()]
    return None
