"""Chain tracking for recursive resolution.

Inheritance and alias resolution both walk a chain of identities (resolved
file paths, ``domain::key`` names). DepthGuard records that chain so callers
can detect a revisit, and refuses to grow it past a fixed length so long
non-cyclic chains cannot exhaust the interpreter stack.

Python 3.13+.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from textdomains.constants import MAX_EXTENDS_DEPTH
from textdomains.diagnostics import DepthLimitExceededError, ErrorTemplate

__all__ = ["DepthGuard", "depth_clamp"]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DepthGuard:
    """Trail of identities entered by one traversal, with a length limit.

    Usage in extension resolution:
        guard = DepthGuard(max_depth=64)
        if identity in guard:
            raise CircularExtensionError(..., chain=guard.chain_to(identity))
        with guard.descend(identity):
            ...  # load identity, recurse into its parents

    One guard belongs to one traversal; it is not shared between threads.

    Attributes:
        max_depth: Longest allowed trail (default: MAX_EXTENDS_DEPTH)
        trail: Identities entered so far, outermost first. Passing a trail
            seeds the guard with identities the caller is already resolving.
    """

    max_depth: int = MAX_EXTENDS_DEPTH
    trail: list[object] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.max_depth = depth_clamp(self.max_depth)
        self.trail = list(self.trail)

    @classmethod
    def seeded(cls, identities: Iterable[object], max_depth: int = MAX_EXTENDS_DEPTH) -> DepthGuard:
        """Guard whose trail already holds ``identities``."""
        return cls(max_depth=max_depth, trail=list(identities))

    @property
    def depth(self) -> int:
        """Number of identities currently entered."""
        return len(self.trail)

    def __contains__(self, identity: object) -> bool:
        return identity in self.trail

    def chain_to(self, identity: object) -> tuple[object, ...]:
        """The current trail followed by ``identity``."""
        return (*self.trail, identity)

    @contextmanager
    def descend(self, identity: object) -> Iterator[None]:
        """Enter ``identity`` for the duration of the block.

        The limit is checked before the trail grows, so a refused entry
        leaves the guard untouched.

        Raises:
            DepthLimitExceededError: If the trail is already max_depth long
        """
        if len(self.trail) >= self.max_depth:
            raise DepthLimitExceededError(
                ErrorTemplate.depth_exceeded(self.max_depth, self.chain_to(identity))
            )
        self.trail.append(identity)
        try:
            yield
        finally:
            self.trail.pop()


def depth_clamp(requested_depth: int, reserve_frames: int = 50) -> int:
    """Clamp a depth limit against the Python recursion limit.

    Every level of an extends or alias chain costs a few interpreter frames.
    A warning is logged when clamping occurs.

    Example:
        >>> import sys
        >>> sys.setrecursionlimit(200)
        >>> depth_clamp(64)
        64
        >>> depth_clamp(500)
        150
    """
    ceiling = sys.getrecursionlimit() - reserve_frames
    if requested_depth <= ceiling:
        return requested_depth
    logger.warning(
        "Depth limit %d exceeds the recursion limit (%d); clamping to %d",
        requested_depth,
        sys.getrecursionlimit(),
        ceiling,
    )
    return ceiling
