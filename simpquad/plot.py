"""
Quadrature Plotting Utilities

This module provides plotting functions for convergence results and for
the points sampled by the Simpson rule. Uses matplotlib only.
"""

from pathlib import Path
from typing import Optional
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from .experiments import ConvergenceResult
from .integrate import sample_points
from .model import Function, QuadratureParameters


def setup_style() -> None:
    """Set up matplotlib style for publication-quality plots."""
    plt.rcParams.update({
        'font.size': 10,
        'axes.labelsize': 11,
        'axes.titlesize': 12,
        'xtick.labelsize': 9,
        'ytick.labelsize': 9,
        'legend.fontsize': 9,
        'figure.figsize': (8, 6),
        'figure.dpi': 150,
        'savefig.dpi': 150,
        'axes.grid': True,
        'grid.alpha': 0.3,
    })


def _positive(values: np.ndarray) -> np.ndarray:
    # log axes cannot show exact zeros
    values = np.abs(np.asarray(values, dtype=float))
    return np.where(values > 0, values, np.nan)


def plot_convergence(result: ConvergenceResult,
                     outdir: Optional[Path] = None,
                     show: bool = False) -> Figure:
    """Plot absolute error vs n for one integrand.

    Args:
        result: ConvergenceResult from experiment
        outdir: Directory to save plot (if provided)
        show: Whether to display the plot

    Returns:
        matplotlib Figure object
    """
    setup_style()

    fig, ax = plt.subplots(figsize=(8, 6))

    ax.loglog(result.n_values, _positive(result.errors), 'o-', linewidth=2,
              markersize=8, color='#2E86AB', label='|estimate - exact|')

    # h^4 reference slope anchored at the first point
    errors = _positive(result.errors)
    if np.isfinite(errors[0]):
        ref = errors[0] * (result.n_values[0] / result.n_values.astype(float)) ** 4
        ax.loglog(result.n_values, ref, '--', color='gray', alpha=0.7, label=r'$\propto n^{-4}$')

    ax.set_xlabel(r'Subintervals $n$')
    ax.set_ylabel('Absolute error')
    ax.set_title(f'Simpson Convergence: {result.name.replace("_", " ").title()}')

    order = f"{result.order.order:.2f}" if result.order.valid else "n/a"
    ax.text(0.95, 0.95, f"Observed order: {order}\nFinal estimate = {result.final_estimate:.10g}",
            transform=ax.transAxes, ha='right', va='top',
            bbox=dict(boxstyle='round', facecolor='wheat', alpha=0.5))

    ax.legend(loc='lower left')
    ax.grid(True, which='both', alpha=0.3)

    plt.tight_layout()

    if outdir is not None:
        filename = f"error_vs_n_{result.name}.png"
        fig.savefig(outdir / filename, bbox_inches='tight')

    if show:
        plt.show()

    return fig


def plot_all_convergence(results: dict[str, ConvergenceResult],
                         outdir: Optional[Path] = None,
                         show: bool = False) -> Figure:
    """Plot error vs n for all integrands on one figure.

    Args:
        results: Dictionary of integrand name -> ConvergenceResult
        outdir: Directory to save plot
        show: Whether to display

    Returns:
        matplotlib Figure
    """
    setup_style()

    fig, ax = plt.subplots(figsize=(10, 7))

    colors = plt.cm.tab10.colors
    markers = ['o', 's', '^', 'D', 'v', 'P', 'X', '*']

    for i, (name, result) in enumerate(results.items()):
        label = name.replace('_', ' ').title()
        ax.loglog(result.n_values, _positive(result.errors),
                  f'{markers[i % len(markers)]}-',
                  linewidth=2, markersize=7,
                  color=colors[i % len(colors)],
                  label=label)

    ax.set_xlabel(r'Subintervals $n$')
    ax.set_ylabel('Absolute error')
    ax.set_title('Simpson Convergence Across Integrands')
    ax.legend(loc='best')
    ax.grid(True, which='both', alpha=0.3)

    plt.tight_layout()

    if outdir is not None:
        fig.savefig(outdir / "error_vs_n_all.png", bbox_inches='tight')

    if show:
        plt.show()

    return fig


def plot_integrand(function: Function,
                   params: QuadratureParameters,
                   name: str = "integrand",
                   outdir: Optional[Path] = None,
                   show: bool = False) -> Figure:
    """Plot the integrand with the points Simpson's rule samples.

    Args:
        function: Integrand
        params: Range, n_segments and midpoint rule
        name: Label used in the title and filename
        outdir: Directory to save plot
        show: Whether to display

    Returns:
        matplotlib Figure
    """
    setup_style()

    nodes, mids = sample_points(params.bounds, params.n_segments, params.midpoint)

    lo, hi = min(nodes.min(), mids.min()), max(nodes.max(), mids.max())
    x_fine = np.linspace(lo, hi, 1000)
    y_fine = np.array([function.evaluate(x) for x in x_fine])

    fig, ax = plt.subplots(figsize=(8, 6))

    ax.plot(x_fine, y_fine, '-', linewidth=2, color='#2E86AB', label=r'$f(x)$')
    ax.plot(nodes, [function.evaluate(x) for x in nodes], 'o', markersize=4,
            color='#C73E1D', label='partition nodes')
    ax.plot(mids, [function.evaluate(x) for x in mids], 's', markersize=3,
            color='#F18F01', label=f'midpoints ({params.midpoint.value})')
    ax.axvspan(params.lower, params.upper, color='gray', alpha=0.1)

    ax.set_xlabel(r'$x$')
    ax.set_ylabel(r'$f(x)$')
    ax.set_title(f'Integrand and Simpson Samples: {name} (n = {params.n_segments})')
    ax.legend(loc='best')

    plt.tight_layout()

    if outdir is not None:
        fig.savefig(outdir / f"integrand_{name}.png", bbox_inches='tight')

    if show:
        plt.show()

    return fig
