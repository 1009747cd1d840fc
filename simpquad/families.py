"""
Benchmark integrand families with closed-form integrals.

Each family provides f(x) together with its exact definite integral so
that Simpson estimates can be checked against the true value. Polynomials
up to degree 3 are integrated exactly by Simpson's rule; the quartic and
transcendental families show the h^4 error decay.
"""
from __future__ import annotations

import math
from typing import Dict, List

import numpy as np

from .model import Function

FAMILY_NAMES = [
    "constant",
    "linear",
    "cubic",
    "quartic",
    "sine",
    "exponential",
    "gaussian",
    "reciprocal",
]


def get_family_names() -> List[str]:
    """Return the list of supported family names."""

    return FAMILY_NAMES.copy()


def default_family_params(family: str) -> Dict:
    """Return default parameters for a family."""

    if family == "constant":
        return {"c": 1.0}
    if family == "linear":
        return {"m": 2.0, "c": 0.0}
    if family == "cubic":
        return {"A": 1.0}
    if family == "quartic":
        return {"A": 1.0}
    if family == "sine":
        return {"A": 1.0, "omega": 1.0}
    if family == "exponential":
        return {"A": 1.0, "k": 1.0}
    if family == "gaussian":
        return {"A": 1.0, "mu": 0.0, "sigma": 1.0}
    if family == "reciprocal":
        return {"A": 1.0, "x0": 1.0}
    raise ValueError(f"Unknown family: {family}")


def _get_params(family: str, params: Dict | None) -> Dict:
    base = default_family_params(family)
    if params:
        base.update(params)
    return base


def make_integrand(family: str, params: Dict | None = None) -> Function:
    """Build the integrand of a family.

    Args:
        family: Name of the family
        params: Optional parameter overrides

    Returns:
        Function wrapping f(x)
    """

    if family not in FAMILY_NAMES:
        raise ValueError(f"Unsupported family: {family}")

    p = _get_params(family, params)

    if family == "constant":
        c = p["c"]
        return Function(lambda x: c)

    if family == "linear":
        m, c = p["m"], p["c"]
        return Function(lambda x: m * x + c)

    if family == "cubic":
        A = p["A"]
        return Function(lambda x: A * x ** 3)

    if family == "quartic":
        A = p["A"]
        return Function(lambda x: A * x ** 4)

    if family == "sine":
        A, omega = p["A"], p["omega"]
        return Function(lambda x: A * np.sin(omega * x))

    if family == "exponential":
        A, k = p["A"], p["k"]
        return Function(lambda x: A * np.exp(k * x))

    if family == "gaussian":
        A, mu, sigma = p["A"], p["mu"], p["sigma"]
        return Function(lambda x: A * np.exp(-0.5 * ((x - mu) / sigma) ** 2))

    if family == "reciprocal":
        A, x0 = p["A"], p["x0"]
        return Function(lambda x: A / (x + x0))

    raise ValueError(f"Unsupported family: {family}")


def exact_integral(family: str, a: float, b: float, params: Dict | None = None) -> float:
    """Closed-form integral of a family over ``[a, b]``.

    Args:
        family: Name of the family
        a: Lower limit
        b: Upper limit
        params: Optional parameter overrides (same as make_integrand)

    Returns:
        Exact value of the integral
    """

    if family not in FAMILY_NAMES:
        raise ValueError(f"Unsupported family: {family}")

    p = _get_params(family, params)

    if family == "constant":
        return p["c"] * (b - a)

    if family == "linear":
        return 0.5 * p["m"] * (b ** 2 - a ** 2) + p["c"] * (b - a)

    if family == "cubic":
        return p["A"] * (b ** 4 - a ** 4) / 4.0

    if family == "quartic":
        return p["A"] * (b ** 5 - a ** 5) / 5.0

    if family == "sine":
        A, omega = p["A"], p["omega"]
        if omega == 0:
            return 0.0
        return A * (math.cos(omega * a) - math.cos(omega * b)) / omega

    if family == "exponential":
        A, k = p["A"], p["k"]
        if k == 0:
            return A * (b - a)
        return A * (math.exp(k * b) - math.exp(k * a)) / k

    if family == "gaussian":
        A, mu, sigma = p["A"], p["mu"], p["sigma"]
        scale = sigma * math.sqrt(2.0)
        return A * sigma * math.sqrt(math.pi / 2.0) * (
            math.erf((b - mu) / scale) - math.erf((a - mu) / scale)
        )

    if family == "reciprocal":
        A, x0 = p["A"], p["x0"]
        if a + x0 <= 0 or b + x0 <= 0:
            raise ValueError(f"reciprocal family requires x + x0 > 0 on [{a}, {b}]")
        return A * math.log((b + x0) / (a + x0))

    raise ValueError(f"Unsupported family: {family}")
