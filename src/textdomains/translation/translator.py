"""Request-scoped translation facade.

Translator binds a TextDomainResolver to one locale and turns translation
targets (``"key"``, ``"domain::key"``, TranslatableString) into display
strings. It is passed explicitly to whatever renders a page; there is no
process-wide "current translator".

Lookup order for one target:
    1. the sanitized key in the target's text domain
    2. for hierarchical facet keys, their wildcard forms
    3. the caller's default, else the raw key
    4. the same in each fallback domain while the result is still the default

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from textdomains.constants import DEBUG_LOCALE, DEFAULT_DOMAIN, DOMAIN_SEPARATOR
from textdomains.loading import TextDomain
from textdomains.resolution.orchestrator import TextDomainResolver
from textdomains.translation.hierarchy import is_hierarchical_key, translate_hierarchical
from textdomains.translation.keys import (
    TranslatableString,
    TranslationTarget,
    extract_text_domain,
    sanitize_translation_key,
)
from textdomains.types import LocaleCode, TextDomainName

__all__ = ["Translator"]

logger = logging.getLogger(__name__)

type Tokens = Mapping[str, object]


class Translator:
    """Translate keys for one locale.

    Text domains are resolved on first use and kept for the translator's
    lifetime, so create one translator per request.

    Example:
        >>> translator = Translator(resolver, "fi")
        >>> translator.translate("Search")
        'Hae'
        >>> translator.translate("results_found", {"%%count%%": 12})
        '12 tulosta'
        >>> translator.translate("CreatorRoles::aut")
        'Tekijä'
    """

    __slots__ = ("_domains", "_locale", "_resolver")

    def __init__(self, resolver: TextDomainResolver, locale: LocaleCode) -> None:
        """Initialize translator.

        Args:
            resolver: Resolver supplying text domains
            locale: Locale to translate into ("debug" renders keys instead)
        """
        self._resolver = resolver
        self._locale = locale
        self._domains: dict[TextDomainName, TextDomain] = {}

    @property
    def locale(self) -> LocaleCode:
        """Locale this translator renders (read-only)."""
        return self._locale

    def text_domain(self, domain: TextDomainName = DEFAULT_DOMAIN) -> TextDomain:
        """Resolved TextDomain for ``domain``, loading it on first use."""
        if domain not in self._domains:
            name = None if domain == DEFAULT_DOMAIN else domain
            self._domains[domain] = self._resolver.resolve_text_domain(self._locale, name)
        return self._domains[domain]

    def lookup(self, key: str, domain: TextDomainName = DEFAULT_DOMAIN) -> str | None:
        """Raw translation of ``key`` in ``domain``, or None when missing."""
        if self._locale == DEBUG_LOCALE:
            return None
        return self.text_domain(domain).get(key)

    def translate(
        self,
        target: TranslationTarget,
        tokens: Tokens | None = None,
        default: str | None = None,
        fallback_domains: Iterable[TextDomainName] = (),
    ) -> str:
        """Translate ``target``.

        Args:
            target: "key", "domain::key", a TranslatableString, or a
                [domain, key] sequence
            tokens: Literal substitutions applied to the result, in order
            default: Returned when no translation exists (default: the key)
            fallback_domains: Domains tried, in order, while the result is
                still the default

        Returns:
            Translated string

        Raises:
            ValueError: If target is a sequence of the wrong length
        """
        domain, key = extract_text_domain(target)

        if self._locale == DEBUG_LOCALE:
            return self._debug_translation(domain, str(key), tokens)

        if isinstance(key, TranslatableString):
            if not key.translatable:
                return str(key.display_string)
            translated = self._translate_string(key.text, tokens, None, domain)
            if translated != key.text:
                return translated
            display = key.display_string
            if isinstance(display, TranslatableString):
                return self.translate(display, tokens, default)
            domain, key = extract_text_domain(display)

        text = str(key)
        translation = self._translate_string(text, tokens, default, domain)
        unchanged = default if default is not None else text
        remaining = list(fallback_domains)
        while translation == unchanged and remaining:
            translation = self._translate_string(text, tokens, default, remaining.pop(0))
        return translation

    def translate_with_prefix(
        self,
        prefix: str,
        target: TranslationTarget,
        tokens: Tokens | None = None,
        default: str | None = None,
        fallback_domains: Iterable[TextDomainName] = (),
    ) -> str:
        """Translate ``prefix + target``, falling back to the unprefixed key.

        Only plain string targets are prefixed; other targets are translated
        as given.

        Example:
            >>> translator.translate_with_prefix("status_", "Available")
            'Saatavilla'
        """
        if isinstance(target, str):
            if default is None:
                default = target
            target = f"{prefix}{target}"
        return self.translate(target, tokens, default, fallback_domains)

    def _translate_string(
        self,
        raw: str,
        tokens: Tokens | None,
        default: str | None,
        domain: TextDomainName,
    ) -> str:
        key = sanitize_translation_key(raw)
        message = self.lookup(key, domain)
        if message is None and is_hierarchical_key(key):
            message = translate_hierarchical(key, lambda candidate: self.lookup(candidate, domain))
        if message is None:
            logger.debug("No translation for %s%s%s in %s", domain, DOMAIN_SEPARATOR, key, self._locale)
            message = default if default is not None else raw

        if tokens:
            for token, value in tokens.items():
                message = message.replace(token, str(value))
        return message

    @staticmethod
    def _debug_translation(domain: TextDomainName, key: str, tokens: Tokens | None) -> str:
        target = key if domain == DEFAULT_DOMAIN else f"{domain}{DOMAIN_SEPARATOR}{key}"
        details = ""
        if tokens:
            pairs = ", ".join(f"{token} = {value}" for token, value in tokens.items())
            details = f" | [{pairs}]"
        return f"*{target}{details}*"

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"Translator(locale={self._locale!r}, domains_loaded={len(self._domains)})"
