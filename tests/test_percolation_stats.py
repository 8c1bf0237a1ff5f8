import dataclasses
import math
import random
import subprocess
import sys
from pathlib import Path

import pytest

from percolation import Percolation
from percolation_stats import (
    PercolationStats,
    StatsSummary,
    format_report,
    main,
    run,
    solve_percolation_problem,
    summarize,
)


class StuckRandom:
    """Always draws the top-left site."""

    def randint(self, a, b):
        return a


@pytest.mark.parametrize("n, trials", [(0, 5), (5, 0), (-2, 3), (3, -1)])
def test_invalid_arguments(n, trials):
    with pytest.raises(ValueError):
        PercolationStats(n, trials)


def test_sample_is_draws_divided_by_n():
    n = 4
    rng = random.Random(7)
    perc = Percolation(n)
    draws = 0
    while not perc.percolates() and draws < n * n:
        perc.open(rng.randint(1, n), rng.randint(1, n))
        draws += 1

    sample = solve_percolation_problem(Percolation(n), n, random.Random(7))
    assert sample == draws / n

    stats = PercolationStats(n, 1, rng=random.Random(7))
    assert stats.trialResults == [draws / n]


def test_same_seed_gives_same_samples():
    first = PercolationStats(6, 15, rng=random.Random(2024))
    second = PercolationStats(6, 15, rng=random.Random(2024))
    assert first.trialResults == second.trialResults
    assert first.summary() == second.summary()


def test_trial_stops_at_n_squared_draws():
    perc = Percolation(3)
    sample = solve_percolation_problem(perc, 3, StuckRandom())
    assert not perc.percolates()
    assert perc.numberOfOpenSites() == 1
    assert sample == 9 / 3


def test_single_trial_has_no_stddev():
    stats = PercolationStats(1, 1)
    assert stats.mean() == 1.0
    assert math.isnan(stats.stddev())
    assert math.isnan(stats.confidenceLo())
    assert math.isnan(stats.confidenceHi())


def test_few_trials_have_no_confidence_interval():
    stats = PercolationStats(1, 5)
    assert stats.stddev() == 0
    assert math.isnan(stats.confidenceLo())
    assert math.isnan(stats.confidenceHi())


def test_identical_samples_collapse_the_interval():
    stats = PercolationStats(1, 20)
    assert stats.trialResults == [1.0] * 20
    assert stats.mean() == 1.0
    assert stats.stddev() == 0
    assert stats.confidenceLo() == stats.mean()
    assert stats.confidenceHi() == stats.mean()


def test_summarize_known_samples():
    summary = summarize([float(x) for x in range(10)])
    variance = 82.5 / 9
    half_width = 1.96 * math.sqrt(variance) / math.sqrt(10)

    assert summary.trials == 10
    assert summary.mean == pytest.approx(4.5)
    assert summary.stddev == pytest.approx(variance)
    assert summary.confidence_lo == pytest.approx(4.5 - half_width)
    assert summary.confidence_hi == pytest.approx(4.5 + half_width)


def test_summarize_rejects_empty_samples():
    with pytest.raises(ValueError):
        summarize([])


def test_summary_is_immutable():
    summary = summarize([1.0, 2.0])
    with pytest.raises(dataclasses.FrozenInstanceError):
        summary.mean = 0.0


def test_statistics_are_cached():
    stats = PercolationStats(3, 12, rng=random.Random(1))
    assert stats.summary() is stats.summary()
    assert stats.mean() == stats.summary().mean


def test_format_report():
    summary = StatsSummary(trials=3, mean=2.0, stddev=0.25,
                           confidence_lo=math.nan, confidence_hi=math.nan)
    assert format_report(summary, 2) == [
        "mean                    = 2.0",
        "mean %                  = 50.0",
        "stddev                  = 0.25",
        "95% confidence interval = nan, nan",
    ]


def test_run_prints_report(capsys):
    summary = run(["1", "20", "--seed", "3"])
    out = capsys.readouterr().out

    assert summary.mean == 1.0
    assert "mean                    = 1.0" in out
    assert "mean %                  = 100.0" in out
    assert "stddev                  = 0.0" in out
    assert "95% confidence interval = 1.0, 1.0" in out


@pytest.mark.parametrize("argv", [["0", "5"], ["5", "-1"], ["x", "5"], ["5"]])
def test_main_rejects_bad_arguments(argv):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    assert excinfo.value.code == 2


def test_main_returns_nothing(capsys):
    assert main(["1", "12", "--seed", "3"]) is None
    assert "STATS REPORT" in capsys.readouterr().out


def test_console_script_exits_cleanly():
    # same call shape as the generated percolation-stats wrapper
    proc = subprocess.run(
        [sys.executable, "-c",
         "import sys; from percolation_stats import main; sys.exit(main())",
         "1", "20", "--seed", "3"],
        cwd=Path(__file__).resolve().parent.parent,
        capture_output=True,
        text=True,
    )
    assert proc.returncode == 0
    assert proc.stderr == ""
    assert "95% confidence interval = 1.0, 1.0" in proc.stdout
