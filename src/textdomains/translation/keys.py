"""Translation key helpers.

Pure string utilities used by the Translator facade and available to
callers that build keys themselves.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from textdomains.constants import DEFAULT_DOMAIN, DOMAIN_SEPARATOR
from textdomains.types import TextDomainName, TranslationKey

__all__ = ["TranslatableString", "extract_text_domain", "sanitize_translation_key"]

# Characters some translation platforms reject in keys, with their
# replacement codes.
_KEY_REPLACEMENTS: tuple[tuple[str, str], ...] = (
    ("(", "_28"),
    (")", "_29"),
    ("!", "_21"),
    ("?", "_3F"),
    ("|", "_7C"),
)


@dataclass(frozen=True, slots=True)
class TranslatableString:
    """A translation key with its own display fallback.

    Hierarchical facet values use this: the key is the raw value
    (``"0/Book/"``) while the display string is what to show when no
    translation exists (``"Book"``). The display string may itself be a
    TranslatableString.

    Attributes:
        text: Translation key
        display: Shown when the key has no translation (default: text)
        translatable: False to always show the display string
    """

    text: str
    display: str | TranslatableString | None = None
    translatable: bool = True

    @property
    def display_string(self) -> str | TranslatableString:
        """Display fallback; the key itself when none was given."""
        return self.text if self.display is None else self.display

    def __str__(self) -> str:
        return self.text


type TranslationTarget = str | TranslatableString | Sequence[str]


def extract_text_domain(
    target: TranslationTarget,
) -> tuple[TextDomainName, TranslationKey | TranslatableString]:
    """Split a translation target into (text domain, key).

    Accepts ``"key"``, ``"domain::key"``, a TranslatableString in either
    form, or a one- or two-element sequence. An empty domain means the
    default domain.

    Raises:
        ValueError: For sequences with no or more than two elements

    Example:
        >>> extract_text_domain("CreatorRoles::aut")
        ('CreatorRoles', 'aut')
        >>> extract_text_domain("::Search")
        ('default', 'Search')
        >>> extract_text_domain(["Search"])
        ('default', 'Search')
    """
    match target:
        case TranslatableString():
            text = target.text
            if DOMAIN_SEPARATOR not in text:
                return DEFAULT_DOMAIN, target
            domain, key = text.split(DOMAIN_SEPARATOR, 1)
            rebuilt = TranslatableString(key, target.display_string, target.translatable)
            return domain or DEFAULT_DOMAIN, rebuilt
        case str():
            if DOMAIN_SEPARATOR not in target:
                return DEFAULT_DOMAIN, target
            domain, key = target.split(DOMAIN_SEPARATOR, 1)
            return domain or DEFAULT_DOMAIN, key
        case [key]:
            return DEFAULT_DOMAIN, key
        case [domain, key]:
            return domain or DEFAULT_DOMAIN, key
        case _:
            msg = "Unexpected value sent to translator!"
            raise ValueError(msg)


def sanitize_translation_key(key: str) -> TranslationKey:
    """Replace characters that are not allowed in translation keys.

    ``( ) ! ? |`` become ``_28 _29 _21 _3F _7C`` so that a translation can
    still be supplied for text arriving from third-party systems.

    Example:
        >>> sanitize_translation_key("Available?")
        'Available_3F'
    """
    for character, replacement in _KEY_REPLACEMENTS:
        key = key.replace(character, replacement)
    return key
