# pathfinder/core/errors.py
#!/usr/bin/env python3
from typing import Optional

from pathfinder.core.types import Cell


class PathfinderError(Exception):
    """Base class for errors raised by the pathfinding core."""


class RunInProgressError(PathfinderError):
    def __init__(self, action: str = "run"):
        super().__init__(f"cannot {action} while a run is in progress")
        self.action = action


class UnknownAlgorithmError(PathfinderError, ValueError):
    def __init__(self, kind: str):
        super().__init__(f"unknown algorithm: {kind!r}")
        self.kind = kind


class BrokenPredecessorChain(PathfinderError):
    """Predecessor links loop or run longer than any real path on the grid."""

    def __init__(self, end: Cell, hops: int, at: Optional[Cell] = None):
        msg = f"predecessor chain from {end} broken after {hops} hops"
        if at is not None:
            msg += f" (revisited {at})"
        super().__init__(msg)
        self.end = end
        self.hops = hops
        self.at = at
