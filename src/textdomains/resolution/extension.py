"""File inheritance resolution.

A language file may declare parents (``@parent_ini``, ``@extends``,
``@parent_yaml``). ExtensionResolver loads a file, resolves every parent
depth-first, and merges the parents beneath the file's own keys.

Precedence, highest first:
    1. The file itself
    2. Its first declared parent (with that parent's own ancestry beneath it)
    3. Its second declared parent, and so on

Cycles are detected against the full transitive chain, so A -> B -> C -> A
fails just like A -> A. Chain depth is bounded independently by DepthGuard.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from textdomains.constants import MAX_EXTENDS_DEPTH
from textdomains.core import DepthGuard
from textdomains.diagnostics import CircularExtensionError, ErrorTemplate
from textdomains.loading import FileLoader, SourceFileLoader, TextDomain
from textdomains.types import ResolutionChain

__all__ = ["ExtensionResolver", "ExtensionResult"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ExtensionResult:
    """Merged output of one file and its ancestry.

    Attributes:
        text_domain: Merged translations
        sources: Every file that took part, highest precedence first,
            each listed once
    """

    text_domain: TextDomain
    sources: tuple[Path, ...]


class ExtensionResolver:
    """Resolve ``@extends`` style inheritance between translation files.

    Relative parent names are looked up next to the declaring file first,
    then in each of ``search_paths`` in order. That lets a theme file extend
    ``en.ini`` from the core language directory without spelling out the
    path.

    Example:
        >>> resolver = ExtensionResolver(SourceFileLoader(), [Path("languages")])
        >>> domain = resolver.resolve(Path("themes/local/languages/en.ini"))
    """

    __slots__ = ("_loader", "_max_depth", "_search_paths")

    def __init__(
        self,
        loader: FileLoader | None = None,
        search_paths: Sequence[Path] = (),
        *,
        max_depth: int = MAX_EXTENDS_DEPTH,
    ) -> None:
        """Initialize resolver.

        Args:
            loader: Loader for individual files (default: SourceFileLoader())
            search_paths: Extra directories for relative parent names
            max_depth: Longest allowed inheritance chain
        """
        self._loader: FileLoader = loader if loader is not None else SourceFileLoader()
        self._search_paths = tuple(Path(p) for p in search_paths)
        self._max_depth = max_depth

    def resolve(self, path: Path, chain: ResolutionChain = ()) -> TextDomain:
        """Load ``path`` and merge its ancestry beneath it.

        Args:
            path: File to resolve
            chain: Identities already being resolved by the caller

        Returns:
            Merged TextDomain

        Raises:
            CircularExtensionError: If the file reaches itself through its parents
            DepthLimitExceededError: If the chain is deeper than max_depth
            TranslationFileNotFoundError: If the file or a declared parent is missing
            TranslationParseError: If any file in the chain is malformed
        """
        return self.resolve_source(path, chain).text_domain

    def resolve_source(self, path: Path, chain: ResolutionChain = ()) -> ExtensionResult:
        """Like resolve(), also reporting which files were merged.

        Raises:
            Same as resolve()
        """
        guard = DepthGuard.seeded(chain, max_depth=self._max_depth)
        result = self._resolve(Path(path), guard)
        logger.debug(
            "Resolved %s: %d keys from %d files", path, len(result.text_domain), len(result.sources)
        )
        return result

    def locate(self, target: str, declaring_dir: Path) -> Path:
        """Map a declared parent name to a path.

        Absolute names are used as written. Relative names are tried against
        ``declaring_dir`` and then each search path; the first existing file
        wins. When none exists the ``declaring_dir`` candidate is returned so
        the eventual error names a concrete path.
        """
        candidate = Path(target)
        if candidate.is_absolute():
            return candidate

        local = declaring_dir / candidate
        if local.is_file():
            return local
        for directory in self._search_paths:
            alternative = directory / candidate
            if alternative.is_file():
                return alternative
        return local

    def _resolve(self, path: Path, guard: DepthGuard) -> ExtensionResult:
        identity = path.resolve()
        if identity in guard:
            cycle = guard.chain_to(identity)
            raise CircularExtensionError(ErrorTemplate.circular_extension(cycle), chain=cycle)

        with guard.descend(identity):
            source = self._loader.load(identity)
            layers: list[TextDomain] = [source.data]
            sources: list[Path] = [identity]

            for target in source.extends:
                parent_path = self.locate(target, identity.parent)
                logger.debug("%s extends %s", identity, parent_path)
                parent = self._resolve(parent_path, guard)
                layers.append(parent.text_domain)
                sources.extend(p for p in parent.sources if p not in sources)

        return ExtensionResult(TextDomain.merge_layers(layers), tuple(sources))
