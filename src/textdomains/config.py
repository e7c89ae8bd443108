"""Configuration objects for text domain resolution.

Frozen dataclasses validated at construction time, so a broken configuration
fails when the application boots rather than on the first translated page.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from textdomains.constants import (
    DEFAULT_ALIAS_FILE,
    DEFAULT_CACHE_SIZE,
    DEFAULT_DOMAIN,
    FALLBACK_WILDCARD,
)

__all__ = ["CacheConfig", "ResolverConfig", "SearchDirectory"]


@dataclass(frozen=True, slots=True)
class SearchDirectory:
    """One language directory plus the glob selecting its files.

    Attributes:
        path: Directory holding ``<locale>.<ext>`` files and one
            subdirectory per named text domain
        pattern: Glob matched against file names (default: "*.ini")

    Example:
        >>> SearchDirectory("themes/finna/languages", "*.yaml")
        SearchDirectory(path=PosixPath('themes/finna/languages'), pattern='*.yaml')
    """

    path: Path
    pattern: str = "*.ini"

    def __post_init__(self) -> None:
        """Normalize path and validate pattern.

        Raises:
            ValueError: If pattern is empty or contains a path separator
        """
        object.__setattr__(self, "path", Path(self.path))
        if not self.pattern:
            msg = "pattern must not be empty"
            raise ValueError(msg)
        if "/" in self.pattern or "\\" in self.pattern:
            msg = f"pattern must match file names only, got: '{self.pattern}'"
            raise ValueError(msg)


def _coerce_directory(entry: SearchDirectory | str | Path | Mapping[str, str]) -> SearchDirectory:
    match entry:
        case SearchDirectory():
            return entry
        case str() | Path():
            return SearchDirectory(Path(entry))
        case Mapping():
            if "path" not in entry:
                msg = f"directory entry needs a 'path': {dict(entry)!r}"
                raise ValueError(msg)
            return SearchDirectory(Path(entry["path"]), entry.get("pattern", "*.ini"))
        case _:
            msg = f"Unsupported directory entry: {entry!r}"
            raise TypeError(msg)


@dataclass(frozen=True, slots=True)
class ResolverConfig:
    """Immutable configuration for TextDomainResolver.

    Attributes:
        directories: Search directories, highest precedence first. Accepts
            SearchDirectory objects, plain paths, or {"path", "pattern"} mappings.
        fallback_enabled: Probe less specific and mapped locales (default: True)
        fallback_map: Explicit locale -> next-locale overrides. The
            ``wildcard_key`` entry applies to every locale not listed. The
            chain starts from the requested locale only; an entry for
            "se" is not consulted for a "se-FI" request
        wildcard_key: Key of the catch-all entry in fallback_map (default: "*")
        fallback_locales: Locales consulted after every other fallback, in
            order (typically the site language, then "en")
        convert_blanks: Map explicitly blank values to NON_JOINING_BLANK
        default_domain: Name of the domain stored directly under a directory
        use_aliases: Apply alias files found beside the language files
        alias_file: File name of alias definitions (default: "aliases.ini")

    Example:
        >>> config = ResolverConfig(
        ...     directories=["languages", "local/languages"],
        ...     fallback_map={"se": "fi", "*": "en"},
        ... )
        >>> config.directories[0].pattern
        '*.ini'
    """

    directories: tuple[SearchDirectory, ...] = ()
    fallback_enabled: bool = True
    fallback_map: Mapping[str, str] = field(default_factory=dict, hash=False)
    wildcard_key: str = FALLBACK_WILDCARD
    fallback_locales: tuple[str, ...] = ()
    convert_blanks: bool = True
    default_domain: str = DEFAULT_DOMAIN
    use_aliases: bool = True
    alias_file: str = DEFAULT_ALIAS_FILE

    def __post_init__(self) -> None:
        """Normalize collections and validate values.

        Raises:
            ValueError: If default_domain, wildcard_key or alias_file is empty,
                or a fallback_map entry is not a non-empty string pair
        """
        directories = tuple(_coerce_directory(entry) for entry in self.directories)
        object.__setattr__(self, "directories", directories)
        object.__setattr__(self, "fallback_locales", tuple(self.fallback_locales))

        for name in ("default_domain", "wildcard_key", "alias_file"):
            if not getattr(self, name):
                msg = f"{name} must not be empty"
                raise ValueError(msg)

        for source, target in self.fallback_map.items():
            if not isinstance(source, str) or not isinstance(target, str) or not source or not target:
                msg = f"fallback_map entries must be non-empty strings, got {source!r}: {target!r}"
                raise ValueError(msg)
        object.__setattr__(self, "fallback_map", MappingProxyType(dict(self.fallback_map)))

    @property
    def search_paths(self) -> tuple[Path, ...]:
        """Directory paths in precedence order."""
        return tuple(directory.path for directory in self.directories)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, object]) -> ResolverConfig:
        """Build a configuration from a plain mapping (parsed YAML or JSON).

        Unknown keys raise, so typos in deployment configuration surface
        immediately.

        Example:
            >>> ResolverConfig.from_mapping({
            ...     "directories": [{"path": "languages", "pattern": "*.yaml"}],
            ...     "fallback_locales": ["fi", "en"],
            ... })

        Raises:
            ValueError: On unknown keys or invalid values
        """
        allowed = set(cls.__dataclass_fields__)
        unknown = sorted(set(mapping) - allowed)
        if unknown:
            msg = f"Unknown resolver configuration keys: {', '.join(unknown)}"
            raise ValueError(msg)

        kwargs = dict(mapping)
        if "directories" in kwargs:
            kwargs["directories"] = tuple(_as_iterable(kwargs["directories"]))
        if "fallback_locales" in kwargs:
            kwargs["fallback_locales"] = tuple(_as_iterable(kwargs["fallback_locales"]))
        return cls(**kwargs)  # type: ignore[arg-type]


def _as_iterable(value: object) -> Iterable[object]:
    if isinstance(value, (str, Path, Mapping)):
        return (value,)
    if isinstance(value, Iterable):
        return value
    msg = f"Expected a list, got {type(value).__name__}"
    raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class CacheConfig:
    """Immutable configuration for the resolution cache.

    Attributes:
        size: Maximum memoized (locale, text domain) resolutions (default: 128)
        validate_mtimes: Re-stat consulted files on every hit and treat any
            change as a miss (default: True)

    Example:
        >>> resolver = TextDomainResolver(config, cache=CacheConfig(size=32))
    """

    size: int = DEFAULT_CACHE_SIZE
    validate_mtimes: bool = True

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If size is not positive
        """
        if self.size <= 0:
            msg = "size must be positive"
            raise ValueError(msg)
