"""
Integration Range Bounds

Each end of an integration range is one of three variants:
- Included(value): the endpoint belongs to the range
- Excluded(value): the endpoint does not belong to the range
- Unbounded(): no concrete endpoint

Simpson's rule samples both endpoints regardless of inclusivity, so only
the presence of a finite value matters to the integrator.
"""
from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Optional, Union


class UnboundedRangeError(ValueError):
    """Raised when an integration range lacks a finite value on either end."""

    def __init__(self, message: str = "Unbounded ranges are not supported") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class Included:
    value: float


@dataclass(frozen=True)
class Excluded:
    value: float


@dataclass(frozen=True)
class Unbounded:
    pass


Bound = Union[Included, Excluded, Unbounded]


def _finite_value(bound: Bound) -> Optional[float]:
    """Return the endpoint of ``bound`` as a float, or None if it has none."""
    if isinstance(bound, (Included, Excluded)):
        value = float(bound.value)
        if math.isinf(value):
            return None
        return value
    return None


def _bound_from(value: Optional[float], inclusive: bool) -> Bound:
    if value is None:
        return Unbounded()
    return Included(value) if inclusive else Excluded(value)


@dataclass(frozen=True)
class Range:
    """A pair of bounds supplied to a single integration call.

    Attributes:
        start: Lower bound
        end: Upper bound
    """
    start: Bound
    end: Bound

    @classmethod
    def closed(cls, a: float, b: float) -> "Range":
        """Range ``[a, b]``."""
        return cls(Included(a), Included(b))

    @classmethod
    def half_open(cls, a: float, b: float) -> "Range":
        """Range ``[a, b)``."""
        return cls(Included(a), Excluded(b))

    @classmethod
    def open(cls, a: float, b: float) -> "Range":
        """Range ``(a, b)``."""
        return cls(Excluded(a), Excluded(b))

    @classmethod
    def at_least(cls, a: float) -> "Range":
        return cls(Included(a), Unbounded())

    @classmethod
    def below(cls, b: float) -> "Range":
        return cls(Unbounded(), Excluded(b))

    @classmethod
    def at_most(cls, b: float) -> "Range":
        return cls(Unbounded(), Included(b))

    @classmethod
    def unbounded(cls) -> "Range":
        return cls(Unbounded(), Unbounded())

    @property
    def is_bounded(self) -> bool:
        """True if both ends carry a finite value."""
        return _finite_value(self.start) is not None and _finite_value(self.end) is not None

    def endpoints(self) -> tuple[float, float]:
        """Return ``(a, b)`` for a bounded range.

        Raises:
            UnboundedRangeError: If either end has no finite value
        """
        a = _finite_value(self.start)
        b = _finite_value(self.end)
        if a is None or b is None:
            raise UnboundedRangeError()
        return a, b


RangeLike = Union[Range, tuple, list, slice]


def as_range(bounds: RangeLike) -> Range:
    """Coerce ``bounds`` into a Range.

    Accepted forms:
        Range: returned unchanged
        (a, b) or [a, b]: closed range; ``None`` at either end is unbounded
        slice(a, b): half-open range like Python slicing; ``None`` is unbounded

    Raises:
        TypeError: If ``bounds`` has none of the accepted forms
    """
    if isinstance(bounds, Range):
        return bounds

    if isinstance(bounds, slice):
        if bounds.step is not None:
            raise TypeError("slice ranges must not have a step")
        return Range(_bound_from(bounds.start, True), _bound_from(bounds.stop, False))

    if isinstance(bounds, (tuple, list)):
        if len(bounds) != 2:
            raise TypeError(f"range must have exactly 2 endpoints, got {len(bounds)}")
        lower, upper = bounds
        return Range(_bound_from(lower, True), _bound_from(upper, True))

    raise TypeError(f"Unsupported range type: {type(bounds).__name__}")
