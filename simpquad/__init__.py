"""
simpquad - Composite Simpson's Rule Quadrature

Numerical approximation of definite integrals of a real function of one
real variable over a bounded range, using composite Simpson's rule.

Usage:
    python -m simpquad --help
    python -m simpquad --formula "2 * x" --lower 0 --upper 1 --segments 100
    python -m simpquad --all-families --outdir outputs

Main components:
    - bounds: Range bounds (Included, Excluded, Unbounded) and UnboundedRangeError
    - integrate: Composite Simpson's rule
    - model: Function wrapper and QuadratureParameters
    - expressions: Formulas from text
    - families: Benchmark integrands with exact integrals
    - experiments: Convergence studies
    - plot: Visualization utilities
    - report: Report generation
"""

__version__ = "0.1.0"

from .bounds import (
    Included,
    Excluded,
    Unbounded,
    Range,
    UnboundedRangeError,
    as_range,
)

from .integrate import (
    MidpointRule,
    simpson,
    sample_points,
    convergence_study,
)

from .model import (
    Function,
    QuadratureParameters,
)

from .expressions import compile_formula

__all__ = [
    "Included",
    "Excluded",
    "Unbounded",
    "Range",
    "UnboundedRangeError",
    "as_range",
    "MidpointRule",
    "simpson",
    "sample_points",
    "convergence_study",
    "Function",
    "QuadratureParameters",
    "compile_formula",
]
