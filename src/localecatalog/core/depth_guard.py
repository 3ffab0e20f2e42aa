"""Nesting depth limiting for recursive decoders.

Thread-safe: uses explicit state, no thread-local storage.
Python 3.13+.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

from localecatalog.constants import MAX_DECODE_DEPTH

__all__ = ["DepthGuard", "DepthLimitExceededError", "depth_clamp"]

logger = logging.getLogger(__name__)


class DepthLimitExceededError(ValueError):
    """Raised when input nests deeper than the guard allows."""


@dataclass(slots=True)
class DepthGuard:
    """Context manager tracking recursion depth.

    Usage:
        guard = DepthGuard(max_depth=16)
        with guard:
            value = read_nested(...)

    Attributes:
        max_depth: Maximum allowed depth (default: MAX_DECODE_DEPTH)
        current_depth: Current recursion depth
    """

    max_depth: int = MAX_DECODE_DEPTH
    current_depth: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.max_depth = depth_clamp(self.max_depth)

    def __enter__(self) -> DepthGuard:
        # Check before incrementing: __exit__ does not run when __enter__ raises.
        if self.current_depth >= self.max_depth:
            msg = f"Maximum nesting depth exceeded ({self.max_depth})"
            raise DepthLimitExceededError(msg)
        self.current_depth += 1
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.current_depth -= 1


def depth_clamp(requested_depth: int, reserve_frames: int = 50) -> int:
    """Clamp requested depth against the Python recursion limit.

    Args:
        requested_depth: Desired maximum depth
        reserve_frames: Stack frames to reserve for call overhead (default: 50)

    Returns:
        Safe depth value, clamped if necessary
    """
    max_safe_depth = sys.getrecursionlimit() - reserve_frames
    if requested_depth > max_safe_depth:
        logger.warning(
            "Requested depth %d exceeds Python recursion limit (%d). Clamping to %d.",
            requested_depth,
            sys.getrecursionlimit(),
            max_safe_depth,
        )
        return max_safe_depth
    return requested_depth
