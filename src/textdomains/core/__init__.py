"""Core utilities shared across loading and resolution layers.

Exports:
    DepthGuard: Identity trail with a length limit, for cycle and depth checks
    depth_clamp: Clamp a depth limit against the interpreter recursion limit

Python 3.13+.
"""

from .depth_guard import DepthGuard, depth_clamp

__all__ = ["DepthGuard", "depth_clamp"]
