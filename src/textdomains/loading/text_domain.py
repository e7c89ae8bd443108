"""Immutable ordered key/value mapping produced by every resolution step.

A TextDomain is what template renderers ultimately consult: one flat
``str -> str`` mapping per (locale, text domain). Merging follows
"first writer wins": once a higher-priority layer has set a key, lower
layers can only fill keys that are still missing.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

__all__ = ["TextDomain"]


class TextDomain(Mapping[str, str]):
    """Read-only, insertion-ordered translation mapping.

    Equality is content equality (order-insensitive, like dict); use
    ``list(domain.items())`` where order matters.

    Example:
        >>> child = TextDomain({"Search": "Hae"})
        >>> parent = TextDomain({"Search": "Search", "Home": "Home"})
        >>> merged = TextDomain.merge_layers([child, parent])
        >>> dict(merged)
        {'Search': 'Hae', 'Home': 'Home'}
    """

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, str] | Iterable[tuple[str, str]] = ()) -> None:
        """Initialize from a mapping or key/value pairs.

        Later duplicates in ``data`` replace earlier ones, as dict() does.
        """
        self._data: dict[str, str] = dict(data)

    @classmethod
    def empty(cls) -> TextDomain:
        """Return a domain with no entries."""
        return cls()

    @classmethod
    def merge_layers(cls, layers: Iterable[Mapping[str, str]]) -> TextDomain:
        """Merge layers given in priority order (highest first).

        A key keeps the value of the first layer that defines it. Key order
        follows first appearance across the layers.

        Args:
            layers: Mappings, most specific first

        Returns:
            New merged TextDomain
        """
        merged: dict[str, str] = {}
        for layer in layers:
            for key, value in layer.items():
                if key not in merged:
                    merged[key] = value
        return cls(merged)

    def fill_missing(self, lower: Mapping[str, str]) -> TextDomain:
        """Return a copy with keys from ``lower`` added where absent here.

        Args:
            lower: Lower-priority mapping

        Returns:
            New TextDomain; self is unchanged
        """
        return TextDomain.merge_layers((self, lower))

    def missing_from(self, lower: Mapping[str, str]) -> tuple[str, ...]:
        """Keys that ``lower`` would contribute if merged beneath this domain."""
        return tuple(key for key in lower if key not in self._data)

    def as_dict(self) -> dict[str, str]:
        """Return a mutable shallow copy."""
        return dict(self._data)

    def view(self) -> Mapping[str, str]:
        """Return a read-only live view of the underlying data."""
        return MappingProxyType(self._data)

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TextDomain):
            return self._data == other._data
        if isinstance(other, Mapping):
            return self._data == dict(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self._data.items()))

    def __repr__(self) -> str:
        return f"TextDomain({self._data!r})"
