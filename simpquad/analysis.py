"""
Numerical helpers for convergence-order diagnostics.
"""
from __future__ import annotations

from dataclasses import dataclass
import numpy as np
from numpy.typing import NDArray


@dataclass
class OrderResult:
    order: float
    n_used: int
    valid: bool


def fit_convergence_order(n_values: NDArray[np.float64],
                          errors: NDArray[np.float64],
                          min_points: int = 3) -> OrderResult:
    """Fit the observed order of convergence.

    Fits ``log10 |err| = c + b log10 n`` over finite, positive errors and
    returns ``order = -b``. Composite Simpson's rule should give about 4 for
    smooth integrands. Errors that hit exact zero (polynomials up to degree
    3) are dropped, which usually leaves the fit invalid.
    """

    n_arr = np.asarray(n_values, dtype=float)
    err_arr = np.abs(np.asarray(errors, dtype=float))

    mask = np.isfinite(n_arr) & np.isfinite(err_arr) & (n_arr > 0) & (err_arr > 0)
    n_valid = n_arr[mask]
    err_valid = err_arr[mask]

    if n_valid.size < min_points:
        return OrderResult(order=float("nan"), n_used=int(n_valid.size), valid=False)

    x = np.log10(n_valid)
    y = np.log10(err_valid)

    b, _ = np.polyfit(x, y, 1)
    return OrderResult(order=float(-b), n_used=int(n_valid.size), valid=True)


def floor_limited(errors: NDArray[np.float64], floor: float = 1e-13) -> NDArray[np.float64]:
    """Mask errors at or below the round-off ``floor`` as NaN.

    Once the truncation error reaches double-precision round-off, further
    refinement only adds noise and would bias the order fit.
    """

    err_arr = np.abs(np.asarray(errors, dtype=float))
    return np.where(err_arr > floor, err_arr, np.nan)
