"""
Quadrature Report Generation

This module generates markdown and JSON summaries of convergence results.
"""

from datetime import datetime
from pathlib import Path
import json
import math

from .experiments import ConvergenceResult
from .model import QuadratureParameters


def _finite_or_none(value: float):
    value = float(value)
    return value if math.isfinite(value) else None


def generate_report(results: dict[str, ConvergenceResult],
                    params: QuadratureParameters,
                    outdir: Path) -> str:
    """Generate the markdown report.

    Args:
        results: Convergence results by integrand name
        params: Base parameters used
        outdir: Output directory for report

    Returns:
        Report content as string
    """
    report = []

    # Header
    report.append("# Composite Simpson's Rule Convergence Report")
    report.append("")
    report.append(f"*Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}*")
    report.append("")

    # Rule
    report.append("## Quadrature Rule")
    report.append("")
    report.append("$$\\int_a^b f(x)\\,dx \\approx \\frac{h}{6}\\left(f(a) + f(b) + 4\\sum_{i=0}^{n-1} f(m_i) + 2\\sum_{i=1}^{n-1} f(a + ih)\\right)$$")
    report.append("")
    report.append("with $h = (b - a)/n$ and $m_i$ the midpoint sample of subinterval $i$.")
    report.append("")

    # Parameters
    report.append("## Parameters Used")
    report.append("")
    report.append("| Parameter | Value |")
    report.append("|-----------|-------|")
    report.append(f"| $a$ | {params.lower} |")
    report.append(f"| $b$ | {params.upper} |")
    report.append(f"| midpoint rule | {params.midpoint.value} |")
    report.append("")

    # Results table
    report.append("## Results Summary")
    report.append("")
    report.append("| Integrand | Midpoint | Final $n$ | Estimate | Exact | Abs. error | Order | Converged |")
    report.append("|-----------|----------|-----------|----------|-------|------------|-------|-----------|")

    for name, result in results.items():
        final_n = int(result.n_values[-1]) if len(result.n_values) else 0
        final_err = float(result.errors[-1]) if len(result.errors) else float("nan")
        order = f"{result.order.order:.2f}" if result.order.valid else "n/a"
        report.append(
            f"| {name} | {result.midpoint.value} | {final_n} | "
            f"{result.final_estimate:.12g} | {result.exact:.12g} | "
            f"{final_err:.3e} | {order} | {'yes' if result.converged else 'no'} |")
    report.append("")

    report.append("Polynomials up to degree 3 are integrated exactly, so their error sits at round-off and no order is fitted.")
    report.append("")
    report.append("Plots: `error_vs_n_<integrand>.png`, `error_vs_n_all.png`.")

    report_content = "\n".join(report)

    report_path = outdir / "report.md"
    report_path.write_text(report_content)

    return report_content


def save_results_json(results: dict[str, ConvergenceResult],
                      params: QuadratureParameters,
                      outdir: Path) -> dict:
    """Save results to JSON file.

    Args:
        results: Convergence results by integrand name
        params: Base parameters used
        outdir: Output directory

    Returns:
        Dictionary that was written
    """
    data = {
        "parameters": {
            "lower": params.lower,
            "upper": params.upper,
            "n_segments": params.n_segments,
            "midpoint": params.midpoint.value,
        },
        "integrands": {},
        "timestamp": datetime.now().isoformat(),
    }

    for name, result in results.items():
        data["integrands"][name] = {
            "midpoint": result.midpoint.value,
            "n_values": result.n_values.tolist(),
            "estimates": [_finite_or_none(v) for v in result.estimates],
            "errors": [_finite_or_none(v) for v in result.errors],
            "exact": _finite_or_none(result.exact),
            "order": _finite_or_none(result.order.order),
            "order_valid": result.order.valid,
            "final_estimate": _finite_or_none(result.final_estimate),
            "converged": bool(result.converged),
        }

    json_path = outdir / "results.json"
    with open(json_path, 'w') as f:
        json.dump(data, f, indent=2)

    return data
