"""
Monte Carlo estimate of the site percolation threshold on an n-by-n grid.

    percolation-stats N T [--seed S]

runs T independent trials. Each trial opens uniformly random sites until the
grid percolates (or n*n draws have been spent) and records ``draws / n``.
Repeated draws of an already open site still count. The sample is scaled by
n, not n*n; the report's "mean %" line divides by n*n to give the open
fraction as a percentage.
"""

import argparse
import logging
import math
import random
from dataclasses import dataclass

import numpy as np

from percolation import Percolation

logger = logging.getLogger(__name__)

CONFIDENCE_Z = 1.96
# fewer trials than this and the confidence interval is reported as nan
MIN_TRIALS_FOR_INTERVAL = 10


@dataclass(frozen=True)
class StatsSummary:
    trials: int
    mean: float
    stddev: float
    confidence_lo: float
    confidence_hi: float


def summarize(samples) -> StatsSummary:
    """
    Aggregates per-trial samples.

    ``stddev`` is the sample variance (divided by T - 1) and the interval
    half-width is ``1.96 * sqrt(stddev) / sqrt(T)``. Undefined statistics
    come back as nan: stddev for a single trial, the interval for fewer
    than MIN_TRIALS_FOR_INTERVAL trials.
    """
    samples = np.asarray(samples, dtype=float)
    trials = len(samples)
    if trials == 0:
        raise ValueError("cannot summarize an empty set of trials")

    mean = float(np.mean(samples))

    if trials == 1:
        stddev = math.nan
    else:
        stddev = float(np.var(samples, ddof=1))

    if trials < MIN_TRIALS_FOR_INTERVAL:
        lo = hi = math.nan
    else:
        half_width = CONFIDENCE_Z * math.sqrt(stddev) / math.sqrt(trials)
        lo = mean - half_width
        hi = mean + half_width

    return StatsSummary(trials, mean, stddev, lo, hi)


def solve_percolation_problem(perc: Percolation, n: int, rng) -> float:
    # keeps opening random sites until the system percolates
    attempts = 0
    limit = n * n

    while not perc.percolates() and attempts < limit:
        row = rng.randint(1, n)
        col = rng.randint(1, n)
        perc.open(row, col)
        attempts += 1

    if not perc.percolates():
        logger.info("trial stopped after %d draws without percolating (n=%d)", attempts, n)

    return attempts / n


class PercolationStats:
    def __init__(self, n: int, trials: int, rng=None):
        if n <= 0 or trials <= 0:
            raise ValueError("grid size n and trials count must be positive integers")

        self.gridSize = n
        self.trialCount = trials
        self.rng = rng if rng is not None else random.Random()
        self.trialResults = []

        for t in range(self.trialCount):
            perc = Percolation(self.gridSize)
            result = solve_percolation_problem(perc, self.gridSize, self.rng)
            logger.debug("trial %d/%d: %d open sites, sample %.6f",
                         t + 1, self.trialCount, perc.numberOfOpenSites(), result)
            self.trialResults.append(result)

        self._summary = None

    def summary(self) -> StatsSummary:
        if self._summary is None:
            self._summary = summarize(self.trialResults)
        return self._summary

    # sample mean of percolation threshold
    def mean(self) -> float:
        return self.summary().mean

    # sample variance of percolation threshold, nan when T == 1
    def stddev(self) -> float:
        return self.summary().stddev

    # low endpoint of the 95% confidence interval, nan when T < 10
    def confidenceLo(self) -> float:
        return self.summary().confidence_lo

    # high endpoint of the 95% confidence interval, nan when T < 10
    def confidenceHi(self) -> float:
        return self.summary().confidence_hi


def format_report(summary: StatsSummary, n: int) -> list:
    return [
        f"mean                    = {summary.mean}",
        f"mean %                  = {summary.mean * 100 / (n * n)}",
        f"stddev                  = {summary.stddev}",
        f"95% confidence interval = {summary.confidence_lo}, {summary.confidence_hi}",
    ]


def report(summary: StatsSummary, n: int):
    print("=" * 60)
    print(f"STATS REPORT  n = {n}, trials = {summary.trials}")
    print("=" * 60)
    for line in format_report(summary, n):
        print(line)
    print("=" * 60)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run T Monte Carlo percolation trials on an N-by-N grid."
    )
    parser.add_argument('N', type=int, help="Size of the square grid (N x N).")
    parser.add_argument('T', type=int, help="The number of Monte Carlo trials to perform.")
    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help="Seed for the random site selection (default: unseeded)."
    )
    parser.add_argument(
        '--log-level',
        default="WARNING",
        help="Logging level, e.g. DEBUG to print every trial."
    )
    return parser


def run(argv=None) -> StatsSummary:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        stats = PercolationStats(args.N, args.T, rng=random.Random(args.seed))
    except ValueError as exc:
        parser.error(str(exc))

    report(stats.summary(), args.N)
    return stats.summary()


def main(argv=None):
    # console entry point; a non-None return would become the exit status
    run(argv)


if __name__ == "__main__":
    main()
