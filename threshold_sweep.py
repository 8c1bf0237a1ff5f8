"""
Finite-size study of the percolation threshold.

Runs PercolationStats for a range of grid sizes L, plots the estimated
threshold p_c(L) with error bars and extrapolates p_c(infinity) by fitting
p_c(L) against L**(-3/4).
"""

import argparse
import logging
import math
import random
from dataclasses import dataclass

import matplotlib.pyplot as plt
import numpy as np
from scipy.stats import linregress

from percolation_stats import PercolationStats, report

logger = logging.getLogger(__name__)

# finite-size scaling exponent -1/nu for 2D percolation
DEFAULT_EXPONENT = -3 / 4


@dataclass(frozen=True)
class SweepResult:
    sizes: np.ndarray
    thresholds: np.ndarray
    spreads: np.ndarray


def run_sweep(l_min: int, l_max: int, l_step: int, trials: int, rng=None) -> SweepResult:
    """
    One PercolationStats run per size in range(l_min, l_max + 1, l_step).

    The driver's samples are draws / L, so the open fraction is mean / L
    and its spread is sqrt(variance) / L.
    """
    if l_min <= 0 or l_step <= 0:
        raise ValueError("Lmin and Lstep must be positive integers")
    if l_max < l_min:
        raise ValueError(f"Lmax ({l_max}) must not be smaller than Lmin ({l_min})")

    rng = rng if rng is not None else random.Random()

    sizes = []
    thresholds = []
    spreads = []

    for n_value in range(l_min, l_max + 1, l_step):
        logger.info("simulate n = %d", n_value)

        stats = PercolationStats(n_value, trials, rng=rng)
        summary = stats.summary()
        report(summary, n_value)

        sizes.append(n_value)
        thresholds.append(summary.mean / n_value)
        if math.isnan(summary.stddev):
            spreads.append(0.0)
        else:
            spreads.append(math.sqrt(summary.stddev) / n_value)

    return SweepResult(
        sizes=np.asarray(sizes, dtype=float),
        thresholds=np.asarray(thresholds, dtype=float),
        spreads=np.asarray(spreads, dtype=float),
    )


def plot_threshold_stats(result: SweepResult, confidence_level=1.96, show=True):
    """
    Error bar plot of the mean threshold against L. Bars are
    ``confidence_level`` standard deviations wide on each side.
    """
    fig = plt.figure(figsize=(10, 6))

    plt.errorbar(
        result.sizes,
        result.thresholds,
        yerr=confidence_level * result.spreads,
        fmt='o-',               # Circle markers, connected line
        color='blue',
        ecolor='blue',
        capsize=5,
        label='Mean $p_c \\pm %.2f\\sigma$' % confidence_level
    )

    plt.xlabel('Linear System Size ($L$)', fontsize=14)
    plt.ylabel('Mean Critical Probability ($\\bar{p}_c$)', fontsize=14)
    plt.title('Mean $p_c$ vs. System Size ($L$)', fontsize=16)

    plt.grid(True, linestyle='--', alpha=0.6)
    plt.legend(loc='best')

    if show:
        plt.show()
    return fig


def plot_extrapolation(result: SweepResult, exponent=DEFAULT_EXPONENT, show=True):
    """
    Plots p_c(L) against L**exponent, fits a line and reads p_c(infinity)
    off the intercept at L**exponent = 0.

    Returns (figure, pc_inf, r_squared).
    """
    if len(result.sizes) < 2:
        raise ValueError("extrapolation needs at least two grid sizes")

    X_scaling = result.sizes ** exponent
    y = result.thresholds

    slope, intercept, r_value, p_value, std_err = linregress(X_scaling, y)
    pc_inf = float(intercept)
    r_squared = float(r_value ** 2)

    fig = plt.figure(figsize=(10, 6))

    X_plot_max = float(np.max(X_scaling) * 1.05)
    X_line = np.linspace(0.0, X_plot_max, 100)

    plt.plot(X_line, slope * X_line + intercept, color='blue', linestyle='--',
             label=f"Fit: $p_c(\\infty)$ = {pc_inf:.5f}")
    plt.plot(X_scaling, y, 'o', color='blue', markersize=8,
             label="Data $\\bar{p}_c(L)$")
    plt.plot(0, pc_inf, 'x', color='blue', markersize=10)

    plt.xlabel(f'$L^{{{exponent:.2f}}}$', fontsize=14)
    plt.ylabel('Mean Critical Probability ($\\bar{p}_c$)', fontsize=14)
    plt.title('Finite-Size Scaling Extrapolation', fontsize=16)
    plt.xlim(-0.05 * X_plot_max, X_plot_max)

    plt.grid(True, linestyle='--', alpha=0.6)
    plt.legend(loc='best')

    print(f"\n--- Extrapolation Results (exponent {exponent:.2f}) ---")
    print(f"pc(infinity) = {pc_inf:.6f}, R^2 = {r_squared:.4f}")
    print("-------------------------------------------------------")

    if show:
        plt.show()
    return fig, pc_inf, r_squared


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run a Monte Carlo simulation for 2D percolation over a range of grid sizes."
    )

    parser.add_argument(
        '--Lmin',
        type=int,
        default=50,
        help="Minimum size of the square grid (N_min x N_min)."
    )

    parser.add_argument(
        '--Lmax',
        type=int,
        default=200,
        help="Maximum size of the square grid (N_max x N_max)."
    )

    parser.add_argument(
        '--Lstep',
        type=int,
        default=50,
        help="Step size for increasing the grid size N."
    )

    parser.add_argument(
        '--t',
        type=int,
        default=100,
        help="The number of Monte Carlo trials to perform per size."
    )

    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help="Seed for the random site selection (default: unseeded)."
    )

    parser.add_argument(
        '--no-show',
        action='store_true',
        help="Build the plots without opening a window."
    )

    parser.add_argument(
        '--log-level',
        default="INFO",
        help="Logging level (default: INFO)."
    )
    return parser


def run(argv=None) -> SweepResult:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(levelname)s %(name)s: %(message)s",
    )

    print("Starting Monte Carlo Percolation Analysis...")
    print(f"System sizes (N): {args.Lmin} to {args.Lmax}, step {args.Lstep}")
    print(f"Trials per size: {args.t}")

    try:
        result = run_sweep(args.Lmin, args.Lmax, args.Lstep, args.t,
                           rng=random.Random(args.seed))
    except ValueError as exc:
        parser.error(str(exc))

    print("\n--- Simulation Complete ---")

    print("=" * 60)
    print("plotting...")
    plot_threshold_stats(result, show=not args.no_show)
    if len(result.sizes) >= 2:
        plot_extrapolation(result, show=not args.no_show)
    else:
        logger.warning("only one grid size simulated, skipping extrapolation")
    return result


def main(argv=None):
    # console entry point; a non-None return would become the exit status
    run(argv)


if __name__ == "__main__":
    main()
