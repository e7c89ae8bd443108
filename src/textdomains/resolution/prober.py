"""Directory probing for language files.

Maps (locale, text domain) to the concrete files present on disk, in
directory precedence order. Probing does no locale fallback: the
orchestrator calls it once per candidate locale.

Layout:
    <directory>/<locale>.<ext>                 default text domain
    <directory>/<text_domain>/<locale>.<ext>   named text domain

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Generator, Iterable, Sequence
from pathlib import Path, PurePosixPath, PureWindowsPath

from textdomains.config import SearchDirectory
from textdomains.constants import DEFAULT_ALIAS_FILE, DEFAULT_DOMAIN
from textdomains.resolution.locales import validate_locale
from textdomains.types import LocaleCode, TextDomainName

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Validation
    "validate_text_domain",
    # Probing
    "domain_directory",
    "probe_directory",
    "probe",
    # Discovery
    "available_locales",
]

logger = logging.getLogger(__name__)


def validate_text_domain(text_domain: str) -> TextDomainName:
    """Check that ``text_domain`` names a single directory entry.

    Raises:
        ValueError: For empty names, ``.``/``..``, separators, absolute
            paths, or NUL bytes

    Example:
        >>> validate_text_domain("CreatorRoles")
        'CreatorRoles'
    """
    if (
        not isinstance(text_domain, str)
        or text_domain in ("", ".", "..")
        or "/" in text_domain
        or "\\" in text_domain
        or "\x00" in text_domain
        or PurePosixPath(text_domain).is_absolute()
        or PureWindowsPath(text_domain).is_absolute()
    ):
        msg = f"Invalid text domain: {text_domain!r}"
        raise ValueError(msg)
    return text_domain


def domain_directory(
    directory: Path, text_domain: TextDomainName, default_domain: TextDomainName = DEFAULT_DOMAIN
) -> Path:
    """Directory holding ``text_domain`` files under ``directory``."""
    if text_domain == default_domain:
        return directory
    return directory / text_domain


def probe_directory(base: Path, locale: LocaleCode, pattern: str) -> list[Path]:
    """Files in ``base`` matching ``pattern`` whose stem is exactly ``locale``.

    Returns an empty list when ``base`` does not exist. Results are sorted by
    name so ``en.ini`` precedes ``en.yaml`` regardless of filesystem order.
    """
    if not base.is_dir():
        logger.debug("Skipping missing directory %s", base)
        return []
    return sorted(
        (candidate for candidate in base.glob(pattern) if candidate.stem == locale and candidate.is_file()),
        key=lambda candidate: candidate.name,
    )


def probe(
    locale: LocaleCode,
    text_domain: TextDomainName | None,
    directories: Sequence[SearchDirectory],
    default_domain: TextDomainName = DEFAULT_DOMAIN,
) -> Generator[Path]:
    """Yield the files for one exact locale, in directory precedence order.

    Args:
        locale: Exact locale (no fallback applied)
        text_domain: Text domain, or None for the default domain
        directories: Search directories, highest precedence first
        default_domain: Name of the domain stored directly in each directory

    Raises:
        ValueError: If locale or text domain could escape the directory

    Example:
        >>> dirs = [SearchDirectory(Path("local/languages")), SearchDirectory(Path("languages"))]
        >>> list(probe("fi", None, dirs))
        [PosixPath('local/languages/fi.ini'), PosixPath('languages/fi.ini')]
    """
    validate_locale(locale)
    domain = validate_text_domain(text_domain or default_domain)

    for directory in directories:
        base = domain_directory(directory.path, domain, default_domain)
        yield from probe_directory(base, locale, directory.pattern)


def available_locales(
    directories: Iterable[SearchDirectory],
    text_domain: TextDomainName | None = None,
    default_domain: TextDomainName = DEFAULT_DOMAIN,
    *,
    exclude: Iterable[str] = (DEFAULT_ALIAS_FILE,),
) -> list[LocaleCode]:
    """List locale codes that have at least one file on disk.

    Locales are returned in first-seen order: directory precedence, then file
    name. File names in ``exclude`` and stems that are not valid locale codes
    are skipped.

    Example:
        >>> available_locales([SearchDirectory(Path("languages"))])
        ['de', 'en', 'fi', 'sv']
    """
    domain = validate_text_domain(text_domain or default_domain)
    excluded = set(exclude)
    seen: dict[LocaleCode, None] = {}

    for directory in directories:
        base = domain_directory(directory.path, domain, default_domain)
        if not base.is_dir():
            continue
        for candidate in sorted(base.glob(directory.pattern), key=lambda p: p.name):
            if candidate.name in excluded or not candidate.is_file():
                continue
            try:
                validate_locale(candidate.stem)
            except ValueError:
                continue
            seen.setdefault(candidate.stem, None)
    return list(seen)
