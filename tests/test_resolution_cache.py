"""Tests for resolution.cache: LRU behavior and fingerprint validation."""

import os
from pathlib import Path

import pytest

from textdomains.enums import ResolutionStatus
from textdomains.loading import TextDomain
from textdomains.resolution import ResolutionCache, ResolutionResult, fingerprint


def _result(locale: str) -> ResolutionResult:
    return ResolutionResult(
        locale=locale,
        text_domain_name="default",
        status=ResolutionStatus.RESOLVED,
        text_domain=TextDomain({"k": locale}),
    )


class TestFingerprint:
    """Modification time snapshots."""

    def test_missing_path_recorded(self, tmp_path: Path) -> None:
        """Absent paths get mtime -1."""
        assert fingerprint([tmp_path / "absent"]) == ((str(tmp_path / "absent"), -1),)

    def test_changes_with_mtime(self, tmp_path: Path) -> None:
        """Touching a file changes its fingerprint."""
        path = tmp_path / "fi.ini"
        path.write_text("k = v\n", encoding="utf-8")
        before = fingerprint([path])

        stat = path.stat()
        os.utime(path, ns=(stat.st_atime_ns, stat.st_mtime_ns + 1_000_000_000))

        assert fingerprint([path]) != before


class TestResolutionCache:
    """LRU storage."""

    def test_miss_then_hit(self) -> None:
        """Stored results are returned; unknown keys miss."""
        cache = ResolutionCache(maxsize=4)
        result = _result("fi")

        assert cache.get("fi", "default") is None
        cache.put("fi", "default", (), result)

        assert cache.get("fi", "default") is result
        assert cache.hits == 1
        assert cache.misses == 1

    def test_lru_eviction(self) -> None:
        """The least recently used entry is evicted first."""
        cache = ResolutionCache(maxsize=2)
        cache.put("fi", "default", (), _result("fi"))
        cache.put("sv", "default", (), _result("sv"))
        cache.get("fi", "default")
        cache.put("en", "default", (), _result("en"))

        assert cache.get("sv", "default") is None
        assert cache.get("fi", "default") is not None
        assert len(cache) == 2

    def test_stale_entry_invalidated(self, tmp_path: Path) -> None:
        """An entry whose files changed is dropped."""
        path = tmp_path / "fi.ini"
        path.write_text("k = v\n", encoding="utf-8")
        cache = ResolutionCache()
        cache.put("fi", "default", fingerprint([path]), _result("fi"))

        path.unlink()

        assert cache.get("fi", "default") is None
        assert cache.invalidations == 1
        assert len(cache) == 0

    def test_validation_can_be_disabled(self, tmp_path: Path) -> None:
        """With validate_mtimes off, stale fingerprints are not checked."""
        path = tmp_path / "fi.ini"
        path.write_text("k = v\n", encoding="utf-8")
        cache = ResolutionCache(validate_mtimes=False)
        cache.put("fi", "default", fingerprint([path]), _result("fi"))

        path.unlink()

        assert cache.get("fi", "default") is not None

    def test_stats_and_clear(self) -> None:
        """get_stats reports metrics; clear resets them."""
        cache = ResolutionCache(maxsize=3)
        cache.put("fi", "default", (), _result("fi"))
        cache.get("fi", "default")
        cache.get("sv", "default")

        stats = cache.get_stats()
        assert stats["size"] == 1
        assert stats["maxsize"] == 3
        assert stats["hit_rate"] == 50.0

        cache.clear()
        assert cache.get_stats()["hits"] == 0
        assert len(cache) == 0

    def test_invalid_size(self) -> None:
        """maxsize must be positive."""
        with pytest.raises(ValueError, match="maxsize must be positive"):
            ResolutionCache(maxsize=0)
