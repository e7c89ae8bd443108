"""Enumerations for textdomains type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from __future__ import annotations

from enum import StrEnum


class SourceFormat(StrEnum):
    """On-disk format of a translation source file.

    StrEnum provides automatic string conversion: str(SourceFormat.INI) == "ini"
    """

    INI = "ini"
    """Extended ini dialect: key = "value" per line"""

    YAML = "yaml"
    """YAML mapping, nested keys flattened with dots"""

    @classmethod
    def from_suffix(cls, suffix: str) -> SourceFormat | None:
        """Map a file suffix (with or without the dot) to a format.

        Returns:
            The matching format, or None for unknown suffixes
        """
        match suffix.lower().lstrip("."):
            case "ini":
                return cls.INI
            case "yaml" | "yml":
                return cls.YAML
            case _:
                return None


class ResolutionStatus(StrEnum):
    """Outcome of resolving one (locale, text domain) pair.

    StrEnum provides automatic string conversion:
    str(ResolutionStatus.RESOLVED) == "resolved"
    """

    RESOLVED = "resolved"
    """At least one source file contributed"""

    NO_TRANSLATION_FOUND = "no_translation_found"
    """Every probed locale/directory combination was empty"""


__all__ = [
    "ResolutionStatus",
    "SourceFormat",
]
