"""Inheritance graph analysis for language directories.

Resolution only discovers an extends cycle when somebody requests a locale
on the cycle. These helpers scan whole directories up front so a broken
language pack can be rejected at deploy time.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path

from textdomains.config import ResolverConfig
from textdomains.diagnostics import Diagnostic, ErrorTemplate, TranslationFileNotFoundError
from textdomains.loading import FileLoader, SourceFileLoader
from textdomains.resolution.extension import ExtensionResolver

__all__ = ["ExtendsAudit", "audit_extends", "build_extends_graph", "detect_cycles"]

logger = logging.getLogger(__name__)


class _NodeState(Enum):
    """DFS visitation state for iterative cycle detection."""

    ENTER = auto()
    EXIT = auto()


def detect_cycles(dependencies: Mapping[str, Iterable[str]]) -> list[list[str]]:
    """Find every distinct cycle in a dependency graph.

    Iterative DFS with an explicit stack, so a long linear extends chain
    cannot raise RecursionError. Neighbors are visited in sorted order and
    each cycle is reported once, starting and ending at the same node.

    Args:
        dependencies: Node -> nodes it depends on.
            Example: {"fi.ini": {"en.ini"}, "en.ini": {"fi.ini"}}

    Returns:
        List of cycles (node lists); empty when the graph is acyclic

    Example:
        >>> detect_cycles({"a": {"b"}, "b": {"c"}, "c": {"a"}})
        [['a', 'b', 'c', 'a']]

    Complexity:
        Time: O(V + E), Space: O(V)
    """
    visited: set[str] = set()
    cycles: list[list[str]] = []
    seen_cycle_keys: set[frozenset[str]] = set()

    for start_node in sorted(dependencies):
        if start_node in visited:
            continue

        path: list[str] = []
        on_path: set[str] = set()
        stack: list[tuple[str, _NodeState]] = [(start_node, _NodeState.ENTER)]

        while stack:
            node, state = stack.pop()

            if state is _NodeState.EXIT:
                path.pop()
                on_path.discard(node)
                continue

            if node in visited:
                continue
            visited.add(node)
            on_path.add(node)
            path.append(node)
            stack.append((node, _NodeState.EXIT))

            # Reversed so the smallest neighbor is explored first
            for neighbor in sorted(dependencies.get(node, ()), reverse=True):
                if neighbor in on_path:
                    cycle = [*path[path.index(neighbor) :], neighbor]
                    key = frozenset(cycle)
                    if key not in seen_cycle_keys:
                        seen_cycle_keys.add(key)
                        cycles.append(cycle)
                elif neighbor not in visited:
                    stack.append((neighbor, _NodeState.ENTER))

    return cycles


def _language_files(config: ResolverConfig) -> list[Path]:
    files: list[Path] = []
    for directory in config.directories:
        if not directory.path.is_dir():
            continue
        # Default domain files, then one level of named text domain directories
        files.extend(sorted(p for p in directory.path.glob(directory.pattern) if p.is_file()))
        for domain_dir in sorted(p for p in directory.path.iterdir() if p.is_dir()):
            files.extend(sorted(p for p in domain_dir.glob(directory.pattern) if p.is_file()))
    return [path for path in files if path.name != config.alias_file]


def build_extends_graph(
    files: Iterable[Path],
    loader: FileLoader | None = None,
    search_paths: Iterable[Path] = (),
) -> tuple[dict[str, set[str]], list[tuple[str, str]]]:
    """Map each file (and every parent it reaches) to the files it extends.

    Args:
        files: Starting files
        loader: Loader used to read directives (default: SourceFileLoader())
        search_paths: Extra directories for relative parent names

    Returns:
        Tuple of (graph, missing) where graph maps resolved file paths to the
        resolved paths of their parents, and missing lists
        (declaring file, parent path) pairs whose parent does not exist

    Raises:
        TranslationParseError: If a reachable file is malformed
    """
    reader: FileLoader = loader if loader is not None else SourceFileLoader()
    locator = ExtensionResolver(reader, tuple(search_paths))
    graph: dict[str, set[str]] = {}
    missing: list[tuple[str, str]] = []
    pending = [path.resolve() for path in files]

    while pending:
        path = pending.pop()
        node = str(path)
        if node in graph:
            continue
        try:
            source = reader.load(path)
        except TranslationFileNotFoundError:
            graph[node] = set()
            continue

        parents: set[str] = set()
        for target in source.extends:
            parent = locator.locate(target, path.parent).resolve()
            if not parent.is_file():
                missing.append((node, str(parent)))
                continue
            parents.add(str(parent))
            pending.append(parent)
        graph[node] = parents

    return graph, missing


@dataclass(frozen=True, slots=True)
class ExtendsAudit:
    """Result of auditing the inheritance graph of a configuration.

    Attributes:
        files_checked: Number of files in the graph
        cycles: Each extends cycle found, as file path lists
        missing_parents: (declaring file, missing parent) pairs
    """

    files_checked: int
    cycles: tuple[tuple[str, ...], ...]
    missing_parents: tuple[tuple[str, str], ...]

    @property
    def is_valid(self) -> bool:
        """Check if no cycle and no missing parent was found."""
        return not self.cycles and not self.missing_parents

    def diagnostics(self) -> tuple[Diagnostic, ...]:
        """One diagnostic per cycle, then one per missing parent."""
        return (
            *(ErrorTemplate.circular_extension(cycle) for cycle in self.cycles),
            *(ErrorTemplate.missing_parent(node, parent) for node, parent in self.missing_parents),
        )


def audit_extends(config: ResolverConfig, loader: FileLoader | None = None) -> ExtendsAudit:
    """Check every language file of ``config`` for extends cycles and missing parents.

    Example:
        >>> audit = audit_extends(ResolverConfig(directories=["languages"]))
        >>> audit.is_valid
        True

    Raises:
        TranslationParseError: If a language file is malformed
    """
    reader = loader if loader is not None else SourceFileLoader(convert_blanks=config.convert_blanks)
    graph, missing = build_extends_graph(_language_files(config), reader, config.search_paths)
    cycles = detect_cycles(graph)
    for cycle in cycles:
        logger.warning("Extends cycle: %s", " -> ".join(cycle))
    for node, parent in missing:
        logger.warning("%s extends missing file %s", node, parent)
    return ExtendsAudit(
        files_checked=len(graph),
        cycles=tuple(tuple(cycle) for cycle in cycles),
        missing_parents=tuple(missing),
    )
