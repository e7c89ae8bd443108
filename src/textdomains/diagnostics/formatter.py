"""Rendering of diagnostics for logs, terminals and deployment tooling.

Python 3.13+.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING

from .codes import Diagnostic

if TYPE_CHECKING:
    from textdomains.analysis import ExtendsAudit

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]


class OutputFormat(StrEnum):
    """Output format options for diagnostic formatting."""

    RUST = "rust"  # Multi-line, compiler style (default)
    SIMPLE = "simple"  # One line per diagnostic
    JSON = "json"  # One JSON object per diagnostic


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Turn Diagnostic objects into text.

    Attributes:
        output_format: Output style (rust, simple, json)
        relative_to: Show paths relative to this directory when they lie
            inside it (language packs are usually checked from their root)
        sanitize: Truncate messages and hints to keep log lines bounded
        max_content_length: Maximum message length when sanitizing

    Example:
        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        >>> print(formatter.format(ErrorTemplate.file_not_found("/srv/en.ini")))
        FILE_NOT_FOUND: Translation file not found: /srv/en.ini
    """

    output_format: OutputFormat = OutputFormat.RUST
    relative_to: Path | None = None
    sanitize: bool = False
    max_content_length: int = 200

    def format(self, diagnostic: Diagnostic) -> str:
        """Render one diagnostic in the configured style."""
        match self.output_format:
            case OutputFormat.RUST:
                return self._format_rust(diagnostic)
            case OutputFormat.SIMPLE:
                return self._format_simple(diagnostic)
            case OutputFormat.JSON:
                return self._format_json(diagnostic)

    def format_all(self, diagnostics: Iterable[Diagnostic]) -> str:
        """Render several diagnostics.

        JSON output is one object per line; other styles separate entries
        with a blank line.
        """
        separator = "\n" if self.output_format is OutputFormat.JSON else "\n\n"
        return separator.join(self.format(d) for d in diagnostics)

    def format_audit(self, audit: ExtendsAudit) -> str:
        """Render an extends audit: a summary line, then one entry per problem.

        Example output (simple style):
            Extends audit failed: 1 cycle(s), 0 missing parent(s) in 4 files
            CIRCULAR_EXTENSION: Circular extension: a.ini -> b.ini -> a.ini
        """
        if audit.is_valid:
            return f"Extends audit passed: {audit.files_checked} files"
        summary = (
            f"Extends audit failed: {len(audit.cycles)} cycle(s), "
            f"{len(audit.missing_parents)} missing parent(s) in {audit.files_checked} files"
        )
        return f"{summary}\n{self.format_all(audit.diagnostics())}"

    def _format_rust(self, diagnostic: Diagnostic) -> str:
        lines = [f"{diagnostic.severity}[{diagnostic.code.name}]: {self._text(diagnostic.message)}"]

        location = self._location(diagnostic)
        if location:
            lines.append(f"  --> {location}")
        if diagnostic.chain:
            # One hop per line keeps long absolute paths readable
            first, *rest = (self._display(item) for item in diagnostic.chain)
            lines.append(f"  = chain: {first}")
            lines.extend(f"           -> {item}" for item in rest)
        if diagnostic.hint:
            lines.append(f"  = help: {self._text(diagnostic.hint)}")
        return "\n".join(lines)

    def _format_simple(self, diagnostic: Diagnostic) -> str:
        location = self._location(diagnostic)
        prefix = f"{location}: " if location and location not in diagnostic.message else ""
        return f"{diagnostic.code.name}: {prefix}{self._text(diagnostic.message)}"

    def _format_json(self, diagnostic: Diagnostic) -> str:
        record: dict[str, object] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "message": self._text(diagnostic.message),
            "severity": diagnostic.severity,
        }
        optional = {
            "path": self._display(diagnostic.path) if diagnostic.path else None,
            "line": diagnostic.line,
            "chain": [self._display(item) for item in diagnostic.chain] if diagnostic.chain else None,
            "hint": self._text(diagnostic.hint) if diagnostic.hint else None,
        }
        record.update((key, value) for key, value in optional.items() if value is not None)
        return json.dumps(record, ensure_ascii=False)

    def _location(self, diagnostic: Diagnostic) -> str | None:
        if not diagnostic.path:
            return None
        path = self._display(diagnostic.path)
        return path if diagnostic.line is None else f"{path}:{diagnostic.line}"

    def _display(self, path: str) -> str:
        if self.relative_to is None:
            return path
        candidate = Path(path)
        if candidate.is_relative_to(self.relative_to):
            return str(candidate.relative_to(self.relative_to))
        return path

    def _text(self, text: str) -> str:
        if self.sanitize and len(text) > self.max_content_length:
            return text[: self.max_content_length] + "..."
        return text
