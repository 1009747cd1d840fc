"""
Quadrature Experiments

This module provides convergence experiments for the composite Simpson
rule against integrands with known exact integrals.

Experiments include:
- Error vs number of subintervals for a single integrand
- The same study across every benchmark family
- Standard vs legacy midpoint sampling on the same integrand
"""

from dataclasses import dataclass
import logging
from typing import Optional
import numpy as np
from numpy.typing import NDArray

from .analysis import OrderResult, fit_convergence_order, floor_limited
from .families import FAMILY_NAMES, exact_integral, make_integrand
from .integrate import MidpointRule, convergence_study
from .model import Function, QuadratureParameters

logger = logging.getLogger(__name__)

DEFAULT_N_VALUES = [2, 4, 8, 16, 32, 64, 128, 256, 512]
CONVERGED_TOLERANCE = 1e-8


@dataclass
class ConvergenceResult:
    """Result of an error vs n experiment."""
    name: str
    midpoint: MidpointRule
    lower: float
    upper: float
    n_values: NDArray[np.int64]
    estimates: NDArray[np.float64]
    errors: NDArray[np.float64]
    exact: float
    order: OrderResult
    converged: bool
    final_estimate: float


def run_convergence(name: str,
                    function: Function,
                    params: Optional[QuadratureParameters] = None,
                    n_values: Optional[list[int]] = None,
                    exact: float = float("nan")) -> ConvergenceResult:
    """Run an error vs n study for one integrand.

    Args:
        name: Label for the integrand
        function: Integrand
        params: Range and midpoint rule (n_segments is ignored)
        n_values: Subdivision counts to test
        exact: Exact integral, NaN if unknown

    Returns:
        ConvergenceResult with data
    """
    if params is None:
        params = QuadratureParameters()
    if n_values is None:
        n_values = DEFAULT_N_VALUES

    logger.debug("convergence run %s over [%g, %g] with %d n values",
                 name, params.lower, params.upper, len(n_values))

    n_arr, estimates = convergence_study(function.evaluate, params.bounds, n_values, params.midpoint)
    errors = np.abs(estimates - exact)

    floor = 1e-13 * max(1.0, abs(exact)) if np.isfinite(exact) else 0.0
    order = fit_convergence_order(n_arr, floor_limited(errors, floor))

    final_error = float(errors[-1]) if len(errors) else float("nan")
    converged = bool(np.isfinite(final_error) and final_error < CONVERGED_TOLERANCE)

    return ConvergenceResult(
        name=name,
        midpoint=params.midpoint,
        lower=params.lower,
        upper=params.upper,
        n_values=n_arr,
        estimates=estimates,
        errors=errors,
        exact=exact,
        order=order,
        converged=converged,
        final_estimate=float(estimates[-1]) if len(estimates) else float("nan"),
    )


def run_family_convergence(family: str,
                           params: Optional[QuadratureParameters] = None,
                           n_values: Optional[list[int]] = None,
                           family_params: Optional[dict] = None) -> ConvergenceResult:
    """Run a convergence study for a benchmark family."""
    if params is None:
        params = QuadratureParameters()

    function = make_integrand(family, family_params)
    exact = exact_integral(family, params.lower, params.upper, family_params)
    return run_convergence(family, function, params, n_values, exact)


def run_all_families(params: Optional[QuadratureParameters] = None,
                     n_values: Optional[list[int]] = None) -> dict[str, ConvergenceResult]:
    """Run convergence for all benchmark families.

    Args:
        params: Range and midpoint rule
        n_values: Subdivision counts

    Returns:
        Dictionary mapping family name to result
    """
    results = {}
    for family in FAMILY_NAMES:
        results[family] = run_family_convergence(family, params, n_values)
    return results


def compare_midpoint_rules(family: str,
                           params: Optional[QuadratureParameters] = None,
                           n_values: Optional[list[int]] = None,
                           family_params: Optional[dict] = None) -> dict[str, ConvergenceResult]:
    """Run the same family with standard and legacy midpoint sampling."""
    if params is None:
        params = QuadratureParameters()

    results = {}
    for rule in MidpointRule:
        rule_params = QuadratureParameters(
            lower=params.lower,
            upper=params.upper,
            n_segments=params.n_segments,
            midpoint=rule,
        )
        result = run_family_convergence(family, rule_params, n_values, family_params)
        result.name = f"{family}_{rule.value}"
        results[result.name] = result
    return results
