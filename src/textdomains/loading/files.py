"""Translation source file loading.

Provides the protocol for file loaders, the two concrete on-disk formats,
and a suffix-dispatching loader used by the resolution layer.

Components:
    SourceFile - Immutable parsed file: data plus declared extends targets
    FileLoader - Protocol for loading one file (structural typing)
    IniFileLoader - Extended ini dialect ("key = value" lines)
    YamlFileLoader - YAML mappings, nested keys flattened with dots
    SourceFileLoader - Picks IniFileLoader or YamlFileLoader by suffix

Loaders do parsing only: no inheritance, no locale policy. A directive that
names a parent file is reported through SourceFile.extends and stripped from
SourceFile.data so it never shows up as a translatable string.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

import yaml

from textdomains.constants import INI_EXTENDS_KEYS, NON_JOINING_BLANK, YAML_EXTENDS_KEYS
from textdomains.diagnostics import (
    ErrorTemplate,
    TranslationFileNotFoundError,
    TranslationParseError,
)
from textdomains.enums import SourceFormat
from textdomains.loading.text_domain import TextDomain

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Data
    "SourceFile",
    # Protocol
    "FileLoader",
    # Concrete loaders
    "IniFileLoader",
    "YamlFileLoader",
    "SourceFileLoader",
]

logger = logging.getLogger(__name__)

_INI_COMMENT_PREFIXES = (";", "#")

_YAML_NULL_TAG = "tag:yaml.org,2002:null"


class _TextScalarLoader(yaml.SafeLoader):
    """SafeLoader that leaves plain scalars as text.

    YAML 1.1 reads `No`, `On` and `10:30` as bool and int. In a language file
    those are words, so only the null resolver is kept.
    """


_TextScalarLoader.yaml_implicit_resolvers = {
    first: [(tag, pattern) for tag, pattern in resolvers if tag == _YAML_NULL_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


@dataclass(frozen=True, slots=True)
class SourceFile:
    """A parsed translation file.

    Attributes:
        path: Absolute path of the file
        format: On-disk format
        data: Translations with directive keys removed
        extends: Declared parent files, in declaration order, exactly as written
    """

    path: Path
    format: SourceFormat
    data: TextDomain = field(default_factory=TextDomain.empty)
    extends: tuple[str, ...] = ()

    @property
    def has_parents(self) -> bool:
        """Check if the file declares at least one parent."""
        return len(self.extends) > 0


class FileLoader(Protocol):
    """Protocol for loading a single translation file.

    This is a Protocol (structural typing) rather than ABC so applications
    can plug in loaders for other formats without inheriting from us.

    Example:
        >>> class JsonLoader:
        ...     def load(self, path: Path) -> SourceFile:
        ...         data = json.loads(path.read_text(encoding="utf-8"))
        ...         return SourceFile(path, SourceFormat.YAML, TextDomain(data))
    """

    def load(self, path: Path) -> SourceFile:
        """Parse the file at ``path``.

        Args:
            path: File to load

        Returns:
            Parsed SourceFile

        Raises:
            TranslationFileNotFoundError: If the file is absent or unreadable
            TranslationParseError: If the file is malformed
        """
        ...


def _read_text(path: Path) -> str:
    """Read a UTF-8 file, ignoring a leading BOM, mapping failures to our errors."""
    try:
        with path.open(encoding="utf-8-sig") as handle:
            return handle.read()
    except (FileNotFoundError, NotADirectoryError, IsADirectoryError) as e:
        raise TranslationFileNotFoundError(
            ErrorTemplate.file_not_found(path), path=str(path)
        ) from e
    except UnicodeDecodeError as e:
        raise TranslationParseError(
            ErrorTemplate.parse_failed(path, str(e)), path=str(path), detail=str(e)
        ) from e
    except OSError as e:
        reason = e.strerror or str(e)
        raise TranslationFileNotFoundError(
            ErrorTemplate.file_unreadable(path, reason), path=str(path)
        ) from e


def _blank(convert_blanks: bool) -> str:
    return NON_JOINING_BLANK if convert_blanks else ""


@dataclass(frozen=True, slots=True)
class IniFileLoader:
    """Loader for the extended ini dialect used by language files.

    Format:
        ; comment
        # comment
        Search = "Search"
        Home = Home
        blank_on_purpose = ""
        @parent_ini = "en.ini"

    Values wrapped in double quotes are unquoted. An explicitly quoted empty
    value becomes NON_JOINING_BLANK when ``convert_blanks`` is set, so a
    deliberately blank translation stays distinguishable from a missing key.
    Within one file the last occurrence of a key wins.

    Attributes:
        convert_blanks: Map ``key = ""`` to NON_JOINING_BLANK (default: True)
    """

    convert_blanks: bool = True

    def load(self, path: Path) -> SourceFile:
        """Parse an ini language file.

        Raises:
            TranslationFileNotFoundError: If the file is absent or unreadable
            TranslationParseError: If a line is neither comment nor assignment
        """
        text = _read_text(path)
        data: dict[str, str] = {}
        extends: list[str] = []

        for line_number, raw_line in enumerate(text.splitlines(), start=1):
            line = raw_line.strip()
            if not line or line.startswith(_INI_COMMENT_PREFIXES):
                continue
            if "=" not in line:
                detail = f"expected 'key = value', got {line!r}"
                raise TranslationParseError(
                    ErrorTemplate.parse_failed(path, detail, line_number),
                    path=str(path),
                    detail=detail,
                    line=line_number,
                )

            raw_key, raw_value = line.split("=", 1)
            key, _ = self._unquote(raw_key.strip())
            if not key:
                detail = "empty key"
                raise TranslationParseError(
                    ErrorTemplate.parse_failed(path, detail, line_number),
                    path=str(path),
                    detail=detail,
                    line=line_number,
                )

            value, quoted = self._unquote(raw_value.strip())

            if key in INI_EXTENDS_KEYS:
                if not value:
                    detail = "empty file name"
                    raise TranslationParseError(
                        ErrorTemplate.invalid_directive(path, key, detail),
                        path=str(path),
                        detail=detail,
                        line=line_number,
                    )
                extends.append(value)
                continue

            if quoted and value == "":
                value = _blank(self.convert_blanks)
            data[key] = value

        logger.debug("Loaded %d keys from %s", len(data), path)
        return SourceFile(
            path=path,
            format=SourceFormat.INI,
            data=TextDomain(data),
            extends=tuple(extends),
        )

    @staticmethod
    def _unquote(token: str) -> tuple[str, bool]:
        """Strip one pair of surrounding double quotes.

        Returns:
            Tuple of (text, was_quoted)
        """
        if len(token) >= 2 and token[0] == '"' and token[-1] == '"':
            return token[1:-1], True
        return token, False


@dataclass(frozen=True, slots=True)
class YamlFileLoader:
    """Loader for YAML language files.

    Format:
        "@extends": [base.yaml, theme.yaml]
        Search: Hae
        facets:
          format: Aineistotyyppi   # flattened to "facets.format"

    The top level must be a mapping. ``@extends`` / ``@parent_yaml`` accept a
    single file name or a list and are removed from the output. ``null`` and
    ``""`` values follow the same blank rule as IniFileLoader.
    Plain scalars are read as text, so ``No: Ei`` keeps its key and
    ``time: 10:30`` its value.

    Attributes:
        convert_blanks: Map null / "" values to NON_JOINING_BLANK (default: True)
    """

    convert_blanks: bool = True

    def load(self, path: Path) -> SourceFile:
        """Parse a YAML language file.

        Raises:
            TranslationFileNotFoundError: If the file is absent or unreadable
            TranslationParseError: On YAML syntax errors, a non-mapping root,
                sequence values, or malformed directives
        """
        text = _read_text(path)
        try:
            document = yaml.load(text, Loader=_TextScalarLoader)  # noqa: S506
        except yaml.YAMLError as e:
            mark = getattr(e, "problem_mark", None)
            line = mark.line + 1 if mark is not None else None
            detail = str(e)
            raise TranslationParseError(
                ErrorTemplate.parse_failed(path, detail, line),
                path=str(path),
                detail=detail,
                line=line,
            ) from e

        if document is None:
            document = {}
        if not isinstance(document, Mapping):
            detail = f"top level must be a mapping, got {type(document).__name__}"
            raise TranslationParseError(
                ErrorTemplate.parse_failed(path, detail), path=str(path), detail=detail
            )

        body = dict(document)
        extends: list[str] = []
        for directive in YAML_EXTENDS_KEYS:
            if directive in body:
                extends.extend(self._directive_targets(path, directive, body.pop(directive)))

        data: dict[str, str] = {}
        self._flatten(path, body, "", data)

        logger.debug("Loaded %d keys from %s", len(data), path)
        return SourceFile(
            path=path,
            format=SourceFormat.YAML,
            data=TextDomain(data),
            extends=tuple(extends),
        )

    @staticmethod
    def _directive_targets(path: Path, directive: str, value: object) -> list[str]:
        match value:
            case str() if value:
                return [value]
            case list() if value and all(isinstance(item, str) and item for item in value):
                return list(value)
            case _:
                detail = f"expected a file name or list of file names, got {value!r}"
                raise TranslationParseError(
                    ErrorTemplate.invalid_directive(path, directive, detail),
                    path=str(path),
                    detail=detail,
                )

    def _flatten(
        self, path: Path, node: Mapping[object, object], prefix: str, out: dict[str, str]
    ) -> None:
        for raw_key, value in node.items():
            key = f"{prefix}{raw_key}"
            match value:
                case Mapping():
                    self._flatten(path, value, f"{key}.", out)
                case None | "":
                    out[key] = _blank(self.convert_blanks)
                case list() | tuple():
                    detail = f"sequence value for key {key!r} is not translatable"
                    raise TranslationParseError(
                        ErrorTemplate.parse_failed(path, detail),
                        path=str(path),
                        detail=detail,
                    )
                case _:
                    out[key] = str(value)


class SourceFileLoader:
    """Suffix-dispatching loader for every supported format.

    ``.ini`` goes to IniFileLoader, ``.yaml`` / ``.yml`` to YamlFileLoader.

    Example:
        >>> loader = SourceFileLoader(convert_blanks=False)
        >>> source = loader.load(Path("languages/en.ini"))
        >>> source.format
        <SourceFormat.INI: 'ini'>
    """

    __slots__ = ("_loaders",)

    def __init__(self, *, convert_blanks: bool = True) -> None:
        """Initialize both format loaders with the same blank policy.

        Args:
            convert_blanks: Map explicit blanks to NON_JOINING_BLANK
        """
        self._loaders: dict[SourceFormat, FileLoader] = {
            SourceFormat.INI: IniFileLoader(convert_blanks=convert_blanks),
            SourceFormat.YAML: YamlFileLoader(convert_blanks=convert_blanks),
        }

    def load(self, path: Path) -> SourceFile:
        """Load ``path`` with the loader matching its suffix.

        Raises:
            TranslationParseError: For unknown suffixes or malformed content
            TranslationFileNotFoundError: If the file is absent or unreadable
        """
        source_format = SourceFormat.from_suffix(path.suffix)
        if source_format is None:
            raise TranslationParseError(
                ErrorTemplate.unsupported_format(path),
                path=str(path),
                detail="unsupported format",
            )
        return self._loaders[source_format].load(path)
