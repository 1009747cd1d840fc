import json

import matplotlib

matplotlib.use("Agg")

import pytest

from simpquad.__main__ import get_logging_level, main, parse_args


def _integral_line(out: str) -> float:
    for line in out.splitlines():
        if "Integral =" in line:
            return float(line.split("=")[1])
    raise AssertionError(f"no result in output:\n{out}")


def test_defaults():
    args = parse_args([])
    assert args.lower == 0.0
    assert args.upper == 1.0
    assert args.segments == 100
    assert not args.legacy_midpoint


def test_logging_levels():
    import logging
    assert get_logging_level("debug") == logging.DEBUG
    assert get_logging_level("nonsense") == logging.WARNING


def test_single_formula(capsys):
    main(["--formula", "2 * x", "--quiet"])
    assert _integral_line(capsys.readouterr().out) == pytest.approx(1.0, abs=1e-9)


def test_single_legacy(capsys):
    main(["--formula", "2 * x", "--legacy-midpoint", "--quiet"])
    assert _integral_line(capsys.readouterr().out) == pytest.approx(0.993466, rel=1e-9)


def test_single_family_prints_error(capsys):
    main(["--family", "sine", "--upper", "3.141592653589793", "--segments", "50"])
    out = capsys.readouterr().out
    assert _integral_line(out) == pytest.approx(2.0, abs=1e-7)
    assert "Exact" in out
    assert "Error" in out


def test_invalid_formula_exits(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--formula", "__import__('os')"])
    assert exc.value.code == 2
    assert "Invalid formula" in capsys.readouterr().err


def test_odd_segments_exit(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--segments", "7"])
    assert exc.value.code == 2
    assert "n_segments must be even" in capsys.readouterr().err


def test_convergence_outputs(tmp_path):
    main(["--family", "quartic", "--convergence", "--n-values", "2", "4", "8", "16",
          "--outdir", str(tmp_path), "--quiet"])
    assert (tmp_path / "report.md").exists()
    assert (tmp_path / "error_vs_n_quartic.png").exists()
    assert (tmp_path / "error_vs_n_all.png").exists()

    data = json.loads((tmp_path / "results.json").read_text())
    quartic = data["integrands"]["quartic"]
    assert quartic["n_values"] == [2, 4, 8, 16]
    assert quartic["exact"] == pytest.approx(0.2)
    assert quartic["order_valid"]


def test_compare_midpoints_outputs(tmp_path):
    main(["--family", "linear", "--compare-midpoints", "--n-values", "4", "8", "16",
          "--outdir", str(tmp_path), "--quiet"])
    data = json.loads((tmp_path / "results.json").read_text())
    assert set(data["integrands"]) == {"linear_standard", "linear_legacy"}
    assert "linear_legacy" in (tmp_path / "report.md").read_text()


def test_compare_midpoints_requires_family(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--compare-midpoints", "--outdir", str(tmp_path)])
    assert exc.value.code == 2


def test_single_plot(tmp_path):
    main(["--formula", "sin(x)", "--segments", "8", "--plot", "--outdir", str(tmp_path), "--quiet"])
    assert (tmp_path / "integrand_formula.png").exists()


@pytest.mark.parametrize("n_values, message", [
    (["0", "2", "4"], "n_values must be >= 2, got 0"),
    (["-4", "2", "4"], "n_values must be >= 2, got -4"),
    (["2", "3", "4"], "n_values must be even, got 3"),
])
def test_invalid_n_values_exit(tmp_path, capsys, n_values, message):
    outdir = tmp_path / "out"
    with pytest.raises(SystemExit) as exc:
        main(["--family", "quartic", "--convergence", "--n-values", *n_values,
              "--outdir", str(outdir), "--quiet"])
    assert exc.value.code == 2
    assert message in capsys.readouterr().err
    assert not (outdir / "results.json").exists()


def test_study_closes_figures(tmp_path):
    import matplotlib.pyplot as plt

    before = len(plt.get_fignums())
    main(["--all-families", "--n-values", "2", "4", "8", "--outdir", str(tmp_path), "--quiet"])
    main(["--formula", "x", "--segments", "4", "--plot", "--outdir", str(tmp_path), "--quiet"])
    assert len(plt.get_fignums()) == before


def test_all_families_get_distinct_styles():
    import matplotlib.pyplot as plt
    from matplotlib.colors import to_hex

    from simpquad.experiments import run_all_families
    from simpquad.families import FAMILY_NAMES
    from simpquad.plot import plot_all_convergence

    results = run_all_families(n_values=[2, 4, 8])
    fig = plot_all_convergence(results)
    lines = fig.axes[0].get_lines()
    styles = {(to_hex(line.get_color()), line.get_marker()) for line in lines}
    plt.close(fig)

    assert len(lines) == len(FAMILY_NAMES)
    assert len(styles) == len(FAMILY_NAMES)
