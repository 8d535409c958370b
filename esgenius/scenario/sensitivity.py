"""One-at-a-time (OAT) sensitivity sweeps over scenario metrics.

Sweeps one metric across an evenly spaced range by setting it as a target
adjustment, holding every other metric at baseline, and records how far
the result moves from baseline at each step.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from esgenius.scenario.constants import HIGH_SENSITIVITY_SPREAD
from esgenius.scenario.engine import create_scenario
from esgenius.scenario.models import TargetAdjustment
from esgenius.utils import InvalidIterationCountError

logger = logging.getLogger(__name__)


def _insight(metric: str, spread: float) -> dict:
    if spread > HIGH_SENSITIVITY_SPREAD:
        return {
            "sensitivity": "high",
            "recommendation": f"{metric} is highly sensitive - small changes have large impacts",
        }
    return {
        "sensitivity": "moderate",
        "recommendation": f"{metric} shows moderate sensitivity - changes have proportional impacts",
    }


def run_sensitivity_analysis(
    baseline_data: Mapping[str, float],
    metric: str,
    minimum: float | None = None,
    maximum: float | None = None,
    steps: int = 10,
) -> dict:
    """Sweep *metric* from *minimum* to *maximum* in *steps* increments.

    Parameters
    ----------
    baseline_data : mapping
        Metric name -> baseline value.
    metric : str
        Metric to vary. A metric absent from the baseline starts from 0.
    minimum, maximum : float | None
        Sweep bounds; default to 50% and 150% of the baseline value.
    steps : int
        Number of intervals; the sweep visits ``steps + 1`` values.

    Returns
    -------
    dict with keys:
        metric, base_value, range: {min, max},
        results: list of {value, change_percent, results},
        spread: max minus min absolute change percent,
        insights: {sensitivity, recommendation}
    """
    if isinstance(steps, bool) or not isinstance(steps, int) or steps <= 0:
        raise InvalidIterationCountError(steps)

    base_value = float(baseline_data.get(metric, 0.0))
    low = base_value * 0.5 if minimum is None else float(minimum)
    high = base_value * 1.5 if maximum is None else float(maximum)
    step_size = (high - low) / steps

    points = []
    for i in range(steps + 1):
        test_value = low + step_size * i
        scenario = create_scenario(
            f"sensitivity:{metric}:{i}",
            baseline_data,
            {metric: TargetAdjustment(value=test_value)},
        )
        change = (test_value - base_value) / base_value * 100 if base_value else 0.0
        points.append({
            "value": test_value,
            "change_percent": change,
            "results": dict(scenario.results),
        })

    magnitudes = [abs(p["change_percent"]) for p in points]
    spread = max(magnitudes) - min(magnitudes)
    logger.debug("Sensitivity sweep for %s: %d points, spread %.2f", metric, len(points), spread)

    return {
        "metric": metric,
        "base_value": base_value,
        "range": {"min": low, "max": high},
        "results": points,
        "spread": spread,
        "insights": _insight(metric, spread),
    }


def run_multi_variable_sensitivity(
    baseline_data: Mapping[str, float],
    variables: Sequence[Mapping[str, Any]],
) -> dict:
    """Run one sweep per ``{"metric", "min", "max", "steps"}`` entry.

    Returns the per-metric sweeps plus tornado data ranked by spread.
    """
    sweeps: dict[str, dict] = {}
    for var in variables:
        name = var["metric"]
        sweeps[name] = run_sensitivity_analysis(
            baseline_data,
            name,
            minimum=var.get("min"),
            maximum=var.get("max"),
            steps=var.get("steps", 10),
        )

    ranked = sorted(sweeps.values(), key=lambda s: s["spread"], reverse=True)
    tornado = [
        {
            "metric": s["metric"],
            "low": s["range"]["min"],
            "high": s["range"]["max"],
            "base_value": s["base_value"],
            "spread": s["spread"],
            "sensitivity_rank": rank,
        }
        for rank, s in enumerate(ranked, 1)
    ]

    return {
        "variables": [v["metric"] for v in variables],
        "results": sweeps,
        "tornado_plot_data": tornado,
        "dominant_metric": tornado[0]["metric"] if tornado else "none",
    }
