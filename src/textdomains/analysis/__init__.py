"""Graph analysis utilities for language directory validation.

Provides cycle detection and an up-front audit of @extends / @parent_ini
inheritance across every file of a configuration.

Python 3.13+.
"""

from .graph import ExtendsAudit, audit_extends, build_extends_graph, detect_cycles

__all__ = [
    "ExtendsAudit",
    "audit_extends",
    "build_extends_graph",
    "detect_cycles",
]
