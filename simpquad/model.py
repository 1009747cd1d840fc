"""
Quadrature Model Definitions

This module provides the evaluable function wrapper and the validated
parameter set used by the command line and the experiments.

Core definitions:
- Function: immutable wrapper owning a float -> float callable
- QuadratureParameters: integration range, subdivision count, midpoint rule
"""

from dataclasses import dataclass
import math
from typing import Callable

from .bounds import Range, RangeLike
from .integrate import MidpointRule, simpson


@dataclass(frozen=True)
class Function:
    """A real function of one real variable that can be integrated.

    The wrapped callable is not validated. Integration results are only
    meaningful for pure, deterministic callables.

    Attributes:
        action: The wrapped callable
    """
    action: Callable[[float], float]

    def evaluate(self, x: float) -> float:
        """Evaluate the wrapped callable at ``x``; its errors propagate."""
        return self.action(x)

    def __call__(self, x: float) -> float:
        return self.evaluate(x)

    def integrate(self, bounds: RangeLike, n: int,
                  midpoint: MidpointRule = MidpointRule.STANDARD) -> float:
        """Composite Simpson's rule estimate over ``bounds`` with ``n`` subintervals.

        Raises:
            UnboundedRangeError: If either end of ``bounds`` is unbounded
        """
        return simpson(self.evaluate, bounds, n, midpoint)


def check_segment_count(n: int, field: str = "n_segments") -> None:
    """Raise ValueError unless ``n`` is an even subdivision count >= 2."""
    if n < 2:
        raise ValueError(f"{field} must be >= 2, got {n}")
    if n % 2 != 0:
        raise ValueError(f"{field} must be even, got {n}")


@dataclass
class QuadratureParameters:
    """Parameters for a single integration run.

    Attributes:
        lower: Lower limit of integration (finite)
        upper: Upper limit of integration (finite)
        n_segments: Number of subintervals (positive and even)
        midpoint: Midpoint sampling formula
    """
    lower: float = 0.0
    upper: float = 1.0
    n_segments: int = 100
    midpoint: MidpointRule = MidpointRule.STANDARD

    def __post_init__(self) -> None:
        """Validate parameters after initialization."""
        if not math.isfinite(self.lower):
            raise ValueError(f"lower must be finite, got {self.lower}")
        if not math.isfinite(self.upper):
            raise ValueError(f"upper must be finite, got {self.upper}")
        check_segment_count(self.n_segments)
        if not isinstance(self.midpoint, MidpointRule):
            self.midpoint = MidpointRule(self.midpoint)

    @property
    def bounds(self) -> Range:
        return Range.closed(self.lower, self.upper)
