"""Tests for analysis.graph: cycle detection and extends audits."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from hypothesis import given
from hypothesis import strategies as st

from textdomains import ResolverConfig
from textdomains.analysis import audit_extends, build_extends_graph, detect_cycles
from textdomains.diagnostics import DiagnosticCode

# ============================================================================
# detect_cycles
# ============================================================================


class TestDetectCycles:
    """Cycle detection on plain dependency mappings."""

    def test_acyclic(self) -> None:
        """A chain without back edges has no cycles."""
        assert detect_cycles({"a": {"b"}, "b": {"c"}, "c": set()}) == []

    def test_three_node_cycle(self) -> None:
        """The cycle starts and ends at the same node."""
        assert detect_cycles({"a": {"b"}, "b": {"c"}, "c": {"a"}}) == [["a", "b", "c", "a"]]

    def test_self_loop(self) -> None:
        """A node depending on itself is a cycle of one."""
        assert detect_cycles({"a": {"a"}}) == [["a", "a"]]

    def test_cycle_reported_once(self) -> None:
        """Entering a cycle from several nodes reports it once."""
        graph = {"a": {"b"}, "b": {"a"}, "c": {"a"}, "d": {"b"}}

        assert detect_cycles(graph) == [["a", "b", "a"]]

    def test_unlisted_neighbors(self) -> None:
        """Neighbors without their own entry are leaves."""
        assert detect_cycles({"a": {"missing"}}) == []

    def test_long_chain_no_recursion_error(self) -> None:
        """Deep linear chains are handled iteratively."""
        graph = {f"n{i:05d}": {f"n{i + 1:05d}"} for i in range(5000)}

        assert detect_cycles(graph) == []

    @given(st.integers(min_value=1, max_value=40))
    def test_ring_detected(self, size: int) -> None:
        """Any ring of n nodes yields exactly one cycle of n + 1 entries."""
        nodes = [f"n{i:02d}" for i in range(size)]
        graph = {node: {nodes[(i + 1) % size]} for i, node in enumerate(nodes)}

        cycles = detect_cycles(graph)

        assert len(cycles) == 1
        assert len(cycles[0]) == size + 1
        assert cycles[0][0] == cycles[0][-1]


# ============================================================================
# build_extends_graph / audit_extends
# ============================================================================


class TestBuildExtendsGraph:
    """Graphs built from language files."""

    def test_parents_followed(self, write_tree) -> None:
        """Parents reached through directives are part of the graph."""
        root = write_tree({
            "languages/fi.ini": "@parent_ini = en.ini\nk = v\n",
            "languages/en.ini": "k = v\n",
        })
        fi = (root / "languages" / "fi.ini").resolve()
        en = (root / "languages" / "en.ini").resolve()

        graph, missing = build_extends_graph([fi])

        assert graph == {str(fi): {str(en)}, str(en): set()}
        assert missing == []

    def test_missing_parent(self, write_tree) -> None:
        """Unreachable parents are reported, not raised."""
        root = write_tree({"languages/fi.ini": "@parent_ini = nope.ini\n"})
        fi = (root / "languages" / "fi.ini").resolve()

        graph, missing = build_extends_graph([fi])

        assert graph[str(fi)] == set()
        assert missing == [(str(fi), str((root / "languages" / "nope.ini").resolve()))]


class TestAuditExtends:
    """Whole-configuration audits."""

    def test_valid_tree(self, write_tree) -> None:
        """Acyclic trees with present parents are valid."""
        root = write_tree({
            "languages/fi.ini": "@parent_ini = en.ini\n",
            "languages/en.ini": "k = v\n",
            "languages/CreatorRoles/fi.ini": "aut = Tekijä\n",
            "languages/aliases.ini": 'x = "y"\n',
        })

        audit = audit_extends(ResolverConfig(directories=[root / "languages"]))

        assert audit.is_valid
        assert audit.files_checked == 3

    def test_cycle_found(self, write_tree, caplog: pytest.LogCaptureFixture) -> None:
        """Cycles are collected and logged."""
        root = write_tree({
            "languages/a.ini": "@parent_ini = b.ini\n",
            "languages/b.ini": "@parent_ini = a.ini\n",
        })

        with caplog.at_level(logging.WARNING, logger="textdomains.analysis.graph"):
            audit = audit_extends(ResolverConfig(directories=[root / "languages"]))

        assert not audit.is_valid
        assert len(audit.cycles) == 1
        assert Path(audit.cycles[0][0]).name == "a.ini"
        assert "Extends cycle" in caplog.text

    def test_missing_directory_ignored(self, tmp_path: Path) -> None:
        """Absent search directories contribute nothing."""
        audit = audit_extends(ResolverConfig(directories=[tmp_path / "absent"]))

        assert audit.is_valid
        assert audit.files_checked == 0

    def test_diagnostics_for_problems(self, write_tree) -> None:
        """Cycles and missing parents become diagnostics, cycles first."""
        root = write_tree({
            "languages/a.ini": "@parent_ini = b.ini\n",
            "languages/b.ini": "@parent_ini = a.ini\n",
            "languages/c.ini": "@parent_ini = gone.ini\n",
        })

        audit = audit_extends(ResolverConfig(directories=[root / "languages"]))
        codes = [diagnostic.code for diagnostic in audit.diagnostics()]

        assert codes == [DiagnosticCode.CIRCULAR_EXTENSION, DiagnosticCode.FILE_NOT_FOUND]
        assert audit.diagnostics()[1].path == str((root / "languages" / "c.ini").resolve())
