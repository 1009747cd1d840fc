"""
simpquad CLI Entry Point

Run with: python -m simpquad [options]
"""

import argparse
import json
import logging
import sys
from pathlib import Path
import time
from typing import Optional

from .bounds import UnboundedRangeError
from .integrate import MidpointRule
from .model import Function, QuadratureParameters, check_segment_count
from .expressions import compile_formula
from .families import get_family_names, make_integrand, exact_integral
from .experiments import (
    DEFAULT_N_VALUES,
    run_convergence,
    run_family_convergence,
    run_all_families,
    compare_midpoint_rules,
)
from .report import generate_report, save_results_json

DEFAULT_FORMULA = "2 * x"


def get_logging_level(level: str) -> int:
    """Map a level name to a logging level, defaulting to WARNING."""
    switcher = {
        'DEBUG': logging.DEBUG,
        'INFO': logging.INFO,
        'WARNING': logging.WARNING,
        'ERROR': logging.ERROR,
        'CRITICAL': logging.CRITICAL,
    }
    return switcher.get(level.upper(), logging.WARNING)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="simpquad",
        description="Composite Simpson's rule integration of a real function",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    # Integrand
    parser.add_argument("--formula", type=str, default=None,
                        help=f"Integrand as a formula in x (default: {DEFAULT_FORMULA!r})")
    parser.add_argument("--family", type=str, default=None,
                        choices=get_family_names(),
                        help="Use a benchmark integrand with a known exact integral")
    parser.add_argument("--family-params", type=str, default=None,
                        help="JSON string of parameter overrides for the selected family")

    # Quadrature parameters
    parser.add_argument("--lower", type=float, default=0.0,
                        help="Lower limit of integration")
    parser.add_argument("--upper", type=float, default=1.0,
                        help="Upper limit of integration")
    parser.add_argument("--segments", type=int, default=100,
                        help="Number of subintervals (even)")
    parser.add_argument("--legacy-midpoint", action="store_true",
                        help="Sample midpoints at a + h*(i + h/2) for parity with old results")

    # Experiment modes
    parser.add_argument("--convergence", action="store_true",
                        help="Run an error vs n study for the integrand")
    parser.add_argument("--all-families", action="store_true",
                        help="Run the error vs n study for every benchmark family")
    parser.add_argument("--compare-midpoints", action="store_true",
                        help="Run the family study with both midpoint rules")
    parser.add_argument("--n-values", type=int, nargs="+", default=DEFAULT_N_VALUES,
                        help="Subdivision counts for convergence studies")

    # Output
    parser.add_argument("--outdir", type=str, default="outputs",
                        help="Output directory for plots and results")
    parser.add_argument("--plot", action="store_true",
                        help="In single mode, also plot the integrand and its samples")
    parser.add_argument("--show", action="store_true",
                        help="Display plots interactively")
    parser.add_argument("--quiet", action="store_true",
                        help="Suppress progress output")
    parser.add_argument("--log-level", type=str, default="WARNING",
                        help="Logging level (DEBUG, INFO, WARNING, ERROR)")

    return parser.parse_args(argv)


def build_params(args: argparse.Namespace) -> QuadratureParameters:
    return QuadratureParameters(
        lower=args.lower,
        upper=args.upper,
        n_segments=args.segments,
        midpoint=MidpointRule.LEGACY if args.legacy_midpoint else MidpointRule.STANDARD,
    )


def build_integrand(args: argparse.Namespace) -> tuple[str, Function, Optional[dict]]:
    """Return (name, function, family params) for the selected integrand."""
    if args.family and args.formula:
        raise ValueError("--formula and --family are mutually exclusive")

    if args.family:
        family_params = json.loads(args.family_params) if args.family_params else None
        return args.family, make_integrand(args.family, family_params), family_params

    formula = args.formula or DEFAULT_FORMULA
    return "formula", compile_formula(formula), None


def run_single(args: argparse.Namespace) -> None:
    """Integrate a single integrand once."""
    params = build_params(args)
    name, function, family_params = build_integrand(args)

    if not args.quiet:
        print(f"Integrating {args.formula or name} over [{params.lower}, {params.upper}]")
        print(f"  n={params.n_segments}, midpoint={params.midpoint.value}")

    estimate = function.integrate(params.bounds, params.n_segments, params.midpoint)

    print(f"\nResult:")
    print(f"  Integral = {estimate:.15g}")

    if args.family:
        exact = exact_integral(args.family, params.lower, params.upper, family_params)
        print(f"  Exact    = {exact:.15g}")
        print(f"  Error    = {abs(estimate - exact):.3e}")

    if args.plot:
        import matplotlib.pyplot as plt
        from .plot import plot_integrand

        outdir = Path(args.outdir)
        outdir.mkdir(parents=True, exist_ok=True)
        fig = plot_integrand(function, params, name=name, outdir=outdir, show=args.show)
        plt.close(fig)
        if not args.quiet:
            print(f"Outputs written to {outdir}")


def run_study(args: argparse.Namespace) -> None:
    """Run convergence studies and write plots and reports."""
    import matplotlib.pyplot as plt
    from .plot import plot_convergence, plot_all_convergence

    params = build_params(args)
    for n in args.n_values:
        check_segment_count(n, field="n_values")

    outdir = Path(args.outdir)
    outdir.mkdir(parents=True, exist_ok=True)

    start_time = time.time()

    if not args.quiet:
        print("=" * 60)
        print("Running convergence studies...")
        print("=" * 60)

    if args.all_families:
        results = run_all_families(params, args.n_values)
    elif args.compare_midpoints:
        if not args.family:
            raise ValueError("--compare-midpoints requires --family")
        family_params = json.loads(args.family_params) if args.family_params else None
        results = compare_midpoint_rules(args.family, params, args.n_values, family_params)
    else:
        name, function, family_params = build_integrand(args)
        if args.family:
            results = {name: run_family_convergence(args.family, params, args.n_values, family_params)}
        else:
            results = {name: run_convergence(name, function, params, args.n_values)}

    print("\nIntegrand Results:")
    print("-" * 50)
    for name, result in results.items():
        order = f"{result.order.order:.2f}" if result.order.valid else "n/a"
        print(f"  {name:24s}: I = {result.final_estimate:.12g}  [order {order}]")

    for result in results.values():
        plt.close(plot_convergence(result, outdir=outdir, show=False))
    summary_fig = plot_all_convergence(results, outdir=outdir, show=False)
    if not args.show:
        plt.close(summary_fig)

    generate_report(results, params, outdir)
    save_results_json(results, params, outdir)

    elapsed = time.time() - start_time

    if not args.quiet:
        print(f"\nCompleted in {elapsed:.1f} seconds")
        print(f"Results saved to: {outdir.absolute()}")
        print(f"  - report.md")
        print(f"  - results.json")
        print(f"  - *.png plots")

    if args.show:
        plt.show()


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=get_logging_level(args.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    try:
        if args.convergence or args.all_families or args.compare_midpoints:
            run_study(args)
        else:
            run_single(args)
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        sys.exit(1)
    except (UnboundedRangeError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
