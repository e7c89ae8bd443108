"""Translation aliases.

An alias file (``aliases.ini`` beside the language files) declares keys that
borrow their value from another key, optionally in another text domain:

    ; alias = [domain::]key
    Holdings = "Copies"
    author = "CreatorRoles::aut"

Aliases only fill gaps: a key the language file translates itself keeps its
own value, and an alias whose target has no value is left out. Aliases may
point at other aliases; a loop raises CircularAliasError.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from textdomains.constants import DOMAIN_SEPARATOR, MAX_ALIAS_DEPTH
from textdomains.core import DepthGuard
from textdomains.diagnostics import CircularAliasError, ErrorTemplate, TranslationParseError
from textdomains.loading import FileLoader, IniFileLoader, TextDomain
from textdomains.resolution.prober import validate_text_domain
from textdomains.types import TextDomainName, TranslationKey

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Data
    "AliasTarget",
    "AliasedDomain",
    # Loading
    "load_alias_files",
    # Resolution
    "AliasResolver",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AliasTarget:
    """Where an alias takes its value from.

    Attributes:
        key: Target key
        domain: Target text domain, or None for the alias's own domain
    """

    key: TranslationKey
    domain: TextDomainName | None = None

    @classmethod
    def parse(cls, raw: str) -> AliasTarget:
        """Parse ``"key"`` or ``"domain::key"``.

        Example:
            >>> AliasTarget.parse("CreatorRoles::aut")
            AliasTarget(key='aut', domain='CreatorRoles')
        """
        if DOMAIN_SEPARATOR in raw:
            domain, key = raw.split(DOMAIN_SEPARATOR, 1)
            return cls(key=key, domain=domain or None)
        return cls(key=raw)

    def qualified(self, current_domain: TextDomainName) -> str:
        """Render as ``domain::key``, filling in ``current_domain``."""
        return f"{self.domain or current_domain}{DOMAIN_SEPARATOR}{self.key}"


@dataclass(frozen=True, slots=True)
class AliasedDomain:
    """One locale's data for a text domain plus that domain's aliases."""

    data: TextDomain = field(default_factory=TextDomain.empty)
    aliases: Mapping[TranslationKey, AliasTarget] = field(
        default_factory=lambda: MappingProxyType({})
    )


def load_alias_files(
    paths: Iterable[Path], loader: FileLoader | None = None
) -> Mapping[TranslationKey, AliasTarget]:
    """Read alias definitions from every existing file in ``paths``.

    Files are given highest precedence first; the first definition of an
    alias wins. Missing files are skipped.

    Raises:
        TranslationParseError: If an alias file is malformed or names a
            target text domain that is not a single directory name
    """
    reader = loader if loader is not None else IniFileLoader(convert_blanks=False)
    aliases: dict[TranslationKey, AliasTarget] = {}
    for path in paths:
        if not path.is_file():
            continue
        source = reader.load(path)
        for alias, raw_target in source.data.items():
            if raw_target and alias not in aliases:
                aliases[alias] = _checked_target(path, alias, AliasTarget.parse(raw_target))
        logger.debug("Loaded %d aliases from %s", len(source.data), path)
    return MappingProxyType(aliases)


def _checked_target(path: Path, alias: TranslationKey, target: AliasTarget) -> AliasTarget:
    if target.domain is None:
        return target
    try:
        validate_text_domain(target.domain)
    except ValueError as e:
        detail = f"alias {alias!r} targets invalid text domain {target.domain!r}"
        raise TranslationParseError(
            ErrorTemplate.parse_failed(path, detail), path=str(path), detail=detail
        ) from e
    return target


class AliasResolver:
    """Apply aliases for one locale, loading other text domains on demand.

    ``load_domain`` returns the same-locale data and aliases of a named text
    domain; each domain is requested at most once per resolver.

    Example:
        >>> resolver = AliasResolver(lambda name: load_exact_layer("fi", name))
        >>> data = resolver.apply("default", AliasedDomain(data, aliases))
    """

    __slots__ = ("_domains", "_load_domain", "_max_depth")

    def __init__(
        self,
        load_domain: Callable[[TextDomainName], AliasedDomain],
        *,
        max_depth: int = MAX_ALIAS_DEPTH,
    ) -> None:
        """Initialize resolver.

        Args:
            load_domain: Loader for same-locale text domains
            max_depth: Longest allowed alias-to-alias chain
        """
        self._load_domain = load_domain
        self._domains: dict[TextDomainName, AliasedDomain] = {}
        self._max_depth = max_depth

    def apply(self, name: TextDomainName, domain: AliasedDomain) -> TextDomain:
        """Return ``domain.data`` with every resolvable alias filled in.

        Raises:
            CircularAliasError: If aliases refer to each other in a loop
            DepthLimitExceededError: If an alias chain is longer than max_depth
        """
        self._domains[name] = domain
        added: dict[TranslationKey, str] = {}
        for alias, target in domain.aliases.items():
            if alias in domain.data:
                continue
            value = self.resolve(target, name)
            if value:
                added[alias] = value
            else:
                logger.warning(
                    "Alias %s%s%s -> %s has no value, skipped",
                    name,
                    DOMAIN_SEPARATOR,
                    alias,
                    target.qualified(name),
                )
        return domain.data.fill_missing(added)

    def resolve(self, target: AliasTarget, current_domain: TextDomainName) -> str | None:
        """Value of ``target``, following alias chains; None if it has none.

        Raises:
            CircularAliasError: If the chain revisits an alias
            DepthLimitExceededError: If the chain is longer than max_depth
        """
        return self._resolve(target, current_domain, DepthGuard(max_depth=self._max_depth))

    def _domain(self, name: TextDomainName) -> AliasedDomain:
        if name not in self._domains:
            self._domains[name] = self._load_domain(name)
        return self._domains[name]

    def _resolve(
        self,
        target: AliasTarget,
        current_domain: TextDomainName,
        guard: DepthGuard,
    ) -> str | None:
        domain_name = target.domain or current_domain
        domain = self._domain(domain_name)
        if target.key in domain.data:
            return domain.data[target.key]

        following = domain.aliases.get(target.key)
        if following is None:
            return None

        crumb = target.qualified(current_domain)
        if crumb in guard:
            cycle = guard.chain_to(crumb)
            raise CircularAliasError(ErrorTemplate.circular_alias(cycle), chain=cycle)

        with guard.descend(crumb):
            return self._resolve(following, domain_name, guard)
