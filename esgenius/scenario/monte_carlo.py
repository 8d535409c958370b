"""Monte Carlo perturbation analysis for scenario uncertainty.

Normal Sampling Rationale
-------------------------
Each uncertain metric is perturbed multiplicatively by a normal draw:
``value = baseline * (1 + N(mean, std_dev))``. Draws come from the
Box-Muller transform over a numpy Generator so that a seed reproduces a
run exactly. Uniform inputs are taken from (0, 1] rather than [0, 1) so
the logarithm is always finite.

Summary statistics use nearest-rank percentiles on the sorted trials
(index ``floor(n * p)``), not interpolation, so every reported value is
an actual trial outcome.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any

import numpy as np
from pydantic import ValidationError

from esgenius.scenario.models import Uncertainty
from esgenius.utils import (
    InvalidIterationCountError,
    InvalidScenarioError,
    InvalidUncertaintyError,
    is_number,
)

logger = logging.getLogger(__name__)

_STAT_DECIMALS = 2


def normal_sample(
    mean: float = 0.0,
    std_dev: float = 1.0,
    size: int | None = None,
    rng: np.random.Generator | None = None,
) -> float | np.ndarray:
    """Draw from N(mean, std_dev) via the Box-Muller transform.

    Returns a float when *size* is None, else an array of *size* draws.
    """
    rng = rng if rng is not None else np.random.default_rng()
    u = 1.0 - rng.random(size)
    v = 1.0 - rng.random(size)
    z = np.sqrt(-2.0 * np.log(u)) * np.cos(2.0 * np.pi * v)
    draws = mean + std_dev * z
    return float(draws) if size is None else draws


def nearest_rank(sorted_values: np.ndarray, p: float) -> float:
    """Value at index ``floor(n * p)`` of an ascending array."""
    n = len(sorted_values)
    index = min(int(math.floor(n * p)), n - 1)
    return float(sorted_values[index])


def summarize_trials(values: np.ndarray) -> dict[str, float]:
    """Mean, median, p5, p95, min and max, rounded to 2 decimals."""
    ordered = np.sort(np.asarray(values, dtype=float))
    stats = {
        "mean": float(np.mean(ordered)),
        "median": nearest_rank(ordered, 0.5),
        "p5": nearest_rank(ordered, 0.05),
        "p95": nearest_rank(ordered, 0.95),
        "min": float(ordered[0]),
        "max": float(ordered[-1]),
    }
    return {k: round(v, _STAT_DECIMALS) for k, v in stats.items()}


def _coerce_uncertainty(metric: str, raw: Any) -> Uncertainty:
    if isinstance(raw, Uncertainty):
        return raw
    if not isinstance(raw, Mapping):
        raise InvalidUncertaintyError(metric, f"expected a mapping, got {type(raw).__name__}")
    for key in ("mean", "std_dev", "stdDev"):
        if key in raw and not is_number(raw[key]):
            raise InvalidUncertaintyError(metric, f"{key} must be a number, got {raw[key]!r}")
    try:
        return Uncertainty.model_validate(dict(raw))
    except ValidationError as e:
        raise InvalidUncertaintyError(metric, str(e)) from e


def _validate_iterations(iterations: Any) -> int:
    if isinstance(iterations, bool) or not isinstance(iterations, (int, np.integer)):
        raise InvalidIterationCountError(iterations)
    if iterations <= 0:
        raise InvalidIterationCountError(iterations)
    return int(iterations)


def simulate_trials(
    baseline_data: Mapping[str, float],
    uncertainties: Mapping[str, Any],
    iterations: int = 1000,
    seed: int | None = None,
    rng: np.random.Generator | None = None,
) -> dict[str, np.ndarray]:
    """Generate the raw trial values per metric.

    Metrics without an uncertainty keep their baseline in every trial;
    uncertain metrics missing from the baseline start from 0.
    """
    iterations = _validate_iterations(iterations)
    for metric, value in baseline_data.items():
        if not is_number(value):
            raise InvalidScenarioError(f"Baseline value for '{metric}' must be a number, got {value!r}")
    rng = rng if rng is not None else np.random.default_rng(seed)

    trials: dict[str, np.ndarray] = {
        metric: np.full(iterations, float(value)) for metric, value in baseline_data.items()
    }
    for metric, raw in uncertainties.items():
        uncertainty = _coerce_uncertainty(metric, raw)
        base_value = float(baseline_data.get(metric, 0.0))
        factors = normal_sample(uncertainty.mean, uncertainty.std_dev, size=iterations, rng=rng)
        trials[metric] = base_value * (1.0 + factors)

    return trials


def run_monte_carlo_simulation(
    baseline_data: Mapping[str, float],
    uncertainties: Mapping[str, Any],
    iterations: int = 1000,
    seed: int | None = None,
    rng: np.random.Generator | None = None,
) -> dict[str, dict[str, float]]:
    """Run a Monte Carlo perturbation analysis over a baseline dataset.

    Parameters
    ----------
    baseline_data : mapping
        Metric name -> baseline value.
    uncertainties : mapping
        Metric name -> ``{"mean": float, "std_dev": float}`` (``stdDev`` is
        accepted as an alias). Missing keys default to mean 0 and std_dev 0.1.
    iterations : int
        Number of trials; must be positive.
    seed : int | None
        Seed for the numpy Generator (ignored when *rng* is given).
    rng : numpy.random.Generator | None
        Explicit random source, e.g. for tests.

    Returns
    -------
    dict mapping every baseline or uncertain metric to its mean, median,
    p5, p95, min and max across trials.

    Raises InvalidIterationCountError when *iterations* is not positive,
    InvalidUncertaintyError for a malformed uncertainty and
    InvalidScenarioError for a non-numeric baseline value.
    """
    trials = simulate_trials(baseline_data, uncertainties, iterations, seed=seed, rng=rng)
    analysis = {metric: summarize_trials(values) for metric, values in trials.items()}
    logger.info(
        "Monte Carlo simulation: %d trials over %d metrics (%d uncertain)",
        iterations, len(analysis), len(uncertainties),
    )
    return analysis
