"""Text domain resolution across locales and directories.

TextDomainResolver turns a (locale, text domain) request into one merged
TextDomain by composing the lower layers:

    1. candidate_locales(): the exact locale, its base locales, the
       configured fallback-map chain, then the fallback_locales list
    2. per candidate: probe every search directory, resolve each hit's
       inheritance chain, merge hits in directory order
    3. aliases: fill alias keys in the exact-locale layer
    4. merge candidates beneath each other, first writer wins

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator, Iterable
from dataclasses import dataclass, field
from itertools import chain
from pathlib import Path

from textdomains.config import CacheConfig, ResolverConfig
from textdomains.constants import DEBUG_LOCALE
from textdomains.diagnostics import ErrorTemplate, NoTranslationFoundError
from textdomains.enums import ResolutionStatus
from textdomains.loading import FileLoader, SourceFileLoader, TextDomain
from textdomains.resolution.aliases import AliasedDomain, AliasResolver, load_alias_files
from textdomains.resolution.cache import ResolutionCache, fingerprint
from textdomains.resolution.extension import ExtensionResolver
from textdomains.resolution.locales import (
    base_locales_of,
    fallback_chain_of,
    negotiate_locale,
    validate_locale,
)
from textdomains.resolution.prober import (
    available_locales,
    domain_directory,
    probe_directory,
    validate_text_domain,
)
from textdomains.types import LocaleCode, TextDomainName

__all__ = ["FallbackInfo", "ResolutionResult", "TextDomainResolver"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FallbackInfo:
    """Information about a locale fallback event.

    Provided to the on_fallback callback for every fallback locale that
    contributed keys missing from the requested locale.

    Attributes:
        requested_locale: The locale passed to resolve()
        resolved_locale: The fallback locale that supplied keys
        text_domain: Text domain being resolved
        keys: Keys supplied by resolved_locale, in file order

    Example:
        >>> def log_fallback(info: FallbackInfo) -> None:
        ...     print(f"{len(info.keys)} keys from {info.resolved_locale} "
        ...           f"(requested {info.requested_locale})")
        >>> resolver = TextDomainResolver(config, on_fallback=log_fallback)
    """

    requested_locale: LocaleCode
    resolved_locale: LocaleCode
    text_domain: TextDomainName
    keys: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """Outcome of resolving one (locale, text domain) pair.

    Attributes:
        locale: Requested locale
        text_domain_name: Resolved text domain name
        status: RESOLVED, or NO_TRANSLATION_FOUND when no file matched
        text_domain: Merged translations (empty when nothing matched)
        sources: Every merged file, highest precedence first
        locales_tried: Candidate locales in the order they were probed
    """

    locale: LocaleCode
    text_domain_name: TextDomainName
    status: ResolutionStatus
    text_domain: TextDomain
    sources: tuple[Path, ...] = ()
    locales_tried: tuple[LocaleCode, ...] = ()

    @property
    def is_resolved(self) -> bool:
        """Check if at least one translation file was found."""
        return self.status is ResolutionStatus.RESOLVED


@dataclass(slots=True)
class _Traversal:
    """Mutable bookkeeping for a single resolve() call."""

    probed: set[tuple[Path, str, LocaleCode, TextDomainName]] = field(default_factory=set)
    merged: set[Path] = field(default_factory=set)
    sources: list[Path] = field(default_factory=list)
    watched: list[Path] = field(default_factory=list)

    def watch(self, paths: Iterable[Path]) -> None:
        for path in paths:
            if path not in self.watched:
                self.watched.append(path)


class TextDomainResolver:
    """Resolve text domains for a locale with fallback, inheritance and aliases.

    Instances are cheap and hold no per-request state; share one per
    configuration. With a CacheConfig, results are memoized and revalidated
    against file modification times on every hit.

    Example:
        >>> config = ResolverConfig(
        ...     directories=["local/languages", "languages"],
        ...     fallback_locales=("en",),
        ... )
        >>> resolver = TextDomainResolver(config, cache=CacheConfig())
        >>> result = resolver.resolve("fi-FI")
        >>> result.text_domain["Search"]
        'Hae'
        >>> result.locales_tried
        ('fi-FI', 'fi', 'en')
    """

    __slots__ = ("_cache", "_config", "_extensions", "_loader", "_on_fallback", "_strict")

    def __init__(
        self,
        config: ResolverConfig,
        *,
        loader: FileLoader | None = None,
        cache: CacheConfig | None = None,
        on_fallback: Callable[[FallbackInfo], None] | None = None,
        strict: bool = False,
    ) -> None:
        """Initialize resolver.

        Args:
            config: Directories and fallback policy
            loader: Loader for individual files
                (default: SourceFileLoader honoring config.convert_blanks)
            cache: Cache configuration. ``None`` disables caching (default).
            on_fallback: Callback invoked for each fallback locale that
                supplied keys
            strict: Raise NoTranslationFoundError instead of returning a
                NO_TRANSLATION_FOUND result (default: False)

        Raises:
            ValueError: If a configured fallback locale is malformed
        """
        for source, target in config.fallback_map.items():
            if source != config.wildcard_key:
                validate_locale(source)
            validate_locale(target)
        for locale in config.fallback_locales:
            validate_locale(locale)

        self._config = config
        self._loader: FileLoader = (
            loader if loader is not None else SourceFileLoader(convert_blanks=config.convert_blanks)
        )
        self._extensions = ExtensionResolver(self._loader, config.search_paths)
        self._cache = (
            ResolutionCache(cache.size, validate_mtimes=cache.validate_mtimes) if cache else None
        )
        self._on_fallback = on_fallback
        self._strict = strict

    @property
    def config(self) -> ResolverConfig:
        """Configuration this resolver was built with (read-only)."""
        return self._config

    @property
    def strict(self) -> bool:
        """Get whether strict mode is enabled (read-only)."""
        return self._strict

    @property
    def cache_enabled(self) -> bool:
        """Get whether result caching is enabled (read-only)."""
        return self._cache is not None

    def candidate_locales(self, locale: LocaleCode) -> Generator[LocaleCode]:
        """Yield every locale resolve() probes for ``locale``, in order.

        Order: the locale itself, its base locales, the fallback map chain
        starting at the requested locale (base locales do not start chains
        of their own), then fallback_locales. Each locale is yielded once
        even when several fallback sources name it.

        Raises:
            CircularFallbackError: If the fallback map loops
        """
        yield locale
        if not self._config.fallback_enabled:
            return

        seen = {locale}
        config = self._config
        for candidate in chain(
            base_locales_of(locale),
            fallback_chain_of(locale, config.fallback_map, config.wildcard_key),
            config.fallback_locales,
        ):
            if candidate not in seen:
                seen.add(candidate)
                yield candidate

    def resolve(self, locale: LocaleCode, text_domain: TextDomainName | None = None) -> ResolutionResult:
        """Resolve the merged TextDomain for ``locale`` and ``text_domain``.

        Args:
            locale: Requested locale, e.g. "fi" or "pt-br"
            text_domain: Text domain name; None or the default domain name
                selects the default domain

        Returns:
            ResolutionResult; status is NO_TRANSLATION_FOUND when no file
            matched any candidate locale

        Raises:
            ValueError: If locale or text domain is malformed
            NoTranslationFoundError: In strict mode, when no file matched
            CircularExtensionError: If language files extend each other in a loop
            CircularFallbackError: If the fallback map loops
            CircularAliasError: If aliases refer to each other in a loop
            TranslationFileNotFoundError: If a declared parent file is missing
            TranslationParseError: If any consulted file is malformed
        """
        validate_locale(locale)
        domain_name = validate_text_domain(text_domain or self._config.default_domain)

        if locale == DEBUG_LOCALE:
            return ResolutionResult(
                locale=locale,
                text_domain_name=domain_name,
                status=ResolutionStatus.RESOLVED,
                text_domain=TextDomain.empty(),
            )

        if self._cache is not None:
            cached = self._cache.get(locale, domain_name)
            if cached is not None:
                logger.debug("Cache hit for %s/%s", locale, domain_name)
                return cached

        traversal = _Traversal()
        result = self._resolve_uncached(locale, domain_name, traversal)

        if not result.is_resolved:
            logger.warning(
                "No translation files for %s/%s (tried %s)",
                locale,
                domain_name,
                ", ".join(result.locales_tried),
            )
            if self._strict:
                raise NoTranslationFoundError(
                    ErrorTemplate.no_translation_found(locale, domain_name, result.locales_tried),
                    locale=locale,
                    text_domain=domain_name,
                    locales_tried=result.locales_tried,
                )
            return result

        logger.info(
            "Resolved %s/%s: %d keys from %d files",
            locale,
            domain_name,
            len(result.text_domain),
            len(result.sources),
        )
        if self._cache is not None:
            self._cache.put(
                locale,
                domain_name,
                fingerprint(chain(traversal.watched, traversal.sources)),
                result,
            )
        return result

    def resolve_text_domain(
        self, locale: LocaleCode, text_domain: TextDomainName | None = None
    ) -> TextDomain:
        """Convenience wrapper returning only the merged TextDomain.

        Raises:
            Same as resolve()
        """
        return self.resolve(locale, text_domain).text_domain

    def available_locales(self, text_domain: TextDomainName | None = None) -> list[LocaleCode]:
        """Locales with at least one file for ``text_domain`` on disk."""
        return available_locales(
            self._config.directories,
            text_domain,
            self._config.default_domain,
            exclude=(self._config.alias_file,),
        )

    def negotiate(self, preferred: Iterable[LocaleCode]) -> LocaleCode | None:
        """Best locale on disk for a preference list (see negotiate_locale)."""
        return negotiate_locale(preferred, self.available_locales())

    def clear_cache(self) -> None:
        """Drop every memoized result. No-op when caching is disabled."""
        if self._cache is not None:
            self._cache.clear()

    def get_cache_stats(self) -> dict[str, int | float] | None:
        """Cache metrics, or None if caching is disabled."""
        if self._cache is None:
            return None
        return self._cache.get_stats()

    def _resolve_uncached(
        self, locale: LocaleCode, domain_name: TextDomainName, traversal: _Traversal
    ) -> ResolutionResult:
        merged = TextDomain.empty()
        tried: list[LocaleCode] = []

        for candidate in self.candidate_locales(locale):
            validate_locale(candidate)
            tried.append(candidate)
            layer = self._load_layer(candidate, domain_name, traversal)

            if candidate == locale:
                if self._config.use_aliases:
                    layer = self._apply_aliases(candidate, domain_name, layer, traversal)
                merged = layer
                continue

            contributed = merged.missing_from(layer)
            if not contributed:
                continue
            merged = merged.fill_missing(layer)
            logger.debug("%d keys for %s/%s from %s", len(contributed), locale, domain_name, candidate)
            if self._on_fallback is not None:
                self._on_fallback(
                    FallbackInfo(
                        requested_locale=locale,
                        resolved_locale=candidate,
                        text_domain=domain_name,
                        keys=contributed,
                    )
                )

        status = ResolutionStatus.RESOLVED if traversal.sources else ResolutionStatus.NO_TRANSLATION_FOUND
        return ResolutionResult(
            locale=locale,
            text_domain_name=domain_name,
            status=status,
            text_domain=merged,
            sources=tuple(traversal.sources),
            locales_tried=tuple(tried),
        )

    def _load_layer(
        self, locale: LocaleCode, domain_name: TextDomainName, traversal: _Traversal
    ) -> TextDomain:
        """Merge every file for one exact locale, in directory order."""
        parts: list[TextDomain] = []
        for directory in self._config.directories:
            probe_key = (directory.path, directory.pattern, locale, domain_name)
            if probe_key in traversal.probed:
                continue
            traversal.probed.add(probe_key)

            base = domain_directory(directory.path, domain_name, self._config.default_domain)
            traversal.watch((base,))
            for path in probe_directory(base, locale, directory.pattern):
                identity = path.resolve()
                if identity in traversal.merged:
                    continue
                traversal.merged.add(identity)

                extension = self._extensions.resolve_source(path)
                parts.append(extension.text_domain)
                traversal.sources.extend(p for p in extension.sources if p not in traversal.sources)
        return TextDomain.merge_layers(parts)

    def _alias_files(self, domain_name: TextDomainName) -> list[Path]:
        return [
            domain_directory(directory.path, domain_name, self._config.default_domain)
            / self._config.alias_file
            for directory in self._config.directories
        ]

    def _apply_aliases(
        self,
        locale: LocaleCode,
        domain_name: TextDomainName,
        layer: TextDomain,
        traversal: _Traversal,
    ) -> TextDomain:
        """Fill alias keys in the exact-locale layer."""

        def load_domain(name: TextDomainName) -> AliasedDomain:
            side = _Traversal(watched=traversal.watched)
            data = self._load_layer(locale, name, side)
            alias_paths = self._alias_files(name)
            traversal.watch(chain(alias_paths, side.sources))
            return AliasedDomain(data, load_alias_files(alias_paths))

        alias_paths = self._alias_files(domain_name)
        traversal.watch(alias_paths)
        aliases = load_alias_files(alias_paths)
        if not aliases:
            return layer
        return AliasResolver(load_domain).apply(domain_name, AliasedDomain(layer, aliases))

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"TextDomainResolver(directories={len(self._config.directories)}, "
            f"fallback_enabled={self._config.fallback_enabled}, strict={self._strict})"
        )
