"""Thread-safe LRU cache for resolution results.

Memoizes TextDomainResolver.resolve() per (locale, text domain) and
invalidates entries when anything they were built from changes on disk.

Entries are kept in least-recently-used order and guarded by one RLock.
Each entry carries a fingerprint: (path, mtime_ns) for every merged file
and every probed directory. Adding or removing a file changes its
directory's mtime, so new language files are picked up as well as edits.

Python 3.13+.
"""

from __future__ import annotations

import logging
import os
from collections import OrderedDict
from collections.abc import Iterable
from pathlib import Path
from threading import RLock
from typing import TYPE_CHECKING

from textdomains.constants import DEFAULT_CACHE_SIZE
from textdomains.types import LocaleCode, TextDomainName

if TYPE_CHECKING:
    from textdomains.resolution.orchestrator import ResolutionResult

__all__ = ["Fingerprint", "ResolutionCache", "fingerprint"]

logger = logging.getLogger(__name__)

# (path, mtime_ns); mtime_ns is -1 for paths that did not exist.
type Fingerprint = tuple[tuple[str, int], ...]

type _CacheKey = tuple[LocaleCode, TextDomainName]

type _CacheValue = tuple[Fingerprint, ResolutionResult]


def fingerprint(paths: Iterable[Path]) -> Fingerprint:
    """Snapshot modification times of ``paths``, in the given order.

    Missing paths are recorded with mtime -1 so that their later creation
    changes the fingerprint.
    """
    snapshot: list[tuple[str, int]] = []
    for path in paths:
        try:
            mtime = os.stat(path).st_mtime_ns
        except OSError:
            mtime = -1
        snapshot.append((str(path), mtime))
    return tuple(snapshot)


class ResolutionCache:
    """Bounded store of resolve() results keyed by (locale, text domain).

    A stale or absent entry reads as None, so callers simply resolve again.

    Attributes:
        maxsize: Entry limit; the least recently used entry goes first
        hits: Lookups answered from the cache
        misses: Lookups that found nothing usable
        invalidations: Entries dropped because their files changed
    """

    __slots__ = ("_cache", "_hits", "_invalidations", "_lock", "_maxsize", "_misses", "_validate")

    def __init__(self, maxsize: int = DEFAULT_CACHE_SIZE, *, validate_mtimes: bool = True) -> None:
        """Create an empty cache.

        Args:
            maxsize: Maximum number of entries (default: 128)
            validate_mtimes: Re-stat fingerprinted paths on every hit
        """
        if maxsize <= 0:
            msg = "maxsize must be positive"
            raise ValueError(msg)

        self._cache: OrderedDict[_CacheKey, _CacheValue] = OrderedDict()
        self._maxsize = maxsize
        self._validate = validate_mtimes
        self._lock = RLock()
        self._hits = 0
        self._misses = 0
        self._invalidations = 0

    def get(self, locale: LocaleCode, text_domain: TextDomainName) -> ResolutionResult | None:
        """Cached result for the pair, or None when absent or stale."""
        key = (locale, text_domain)
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                self._misses += 1
                return None

            stored, result = entry
            if self._validate and fingerprint(Path(path) for path, _ in stored) != stored:
                logger.debug("Cache entry for %s/%s is stale", locale, text_domain)
                del self._cache[key]
                self._invalidations += 1
                self._misses += 1
                return None

            self._cache.move_to_end(key)
            self._hits += 1
            return result

    def put(
        self,
        locale: LocaleCode,
        text_domain: TextDomainName,
        snapshot: Fingerprint,
        result: ResolutionResult,
    ) -> None:
        """Store ``result`` with the fingerprint it was built from."""
        key = (locale, text_domain)
        with self._lock:
            if key in self._cache:
                self._cache.move_to_end(key)
            elif len(self._cache) >= self._maxsize:
                self._cache.popitem(last=False)
            self._cache[key] = (snapshot, result)

    def clear(self) -> None:
        """Drop every entry and zero the counters."""
        with self._lock:
            self._cache.clear()
            self._hits = 0
            self._misses = 0
            self._invalidations = 0

    def get_stats(self) -> dict[str, int | float]:
        """Counters for monitoring.

        Returns:
            Dict with size, maxsize, hits, misses, invalidations and
            hit_rate (percentage of lookups served, 0.0-100.0)
        """
        with self._lock:
            lookups = self._hits + self._misses
            hit_rate = 100 * self._hits / lookups if lookups else 0.0

            return {
                "size": len(self._cache),
                "maxsize": self._maxsize,
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(hit_rate, 2),
                "invalidations": self._invalidations,
            }

    def __len__(self) -> int:
        """Number of stored entries."""
        with self._lock:
            return len(self._cache)

    @property
    def maxsize(self) -> int:
        """Maximum cache size."""
        return self._maxsize

    @property
    def hits(self) -> int:
        """Number of cache hits."""
        with self._lock:
            return self._hits

    @property
    def misses(self) -> int:
        """Number of cache misses."""
        with self._lock:
            return self._misses

    @property
    def invalidations(self) -> int:
        """Number of entries dropped because their files changed."""
        with self._lock:
            return self._invalidations
